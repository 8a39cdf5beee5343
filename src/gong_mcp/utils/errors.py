"""Error handling for the Gong MCP server.

This module provides standardized error codes and the single exception type
raised by the routing, validation, upstream and shaping layers. Errors are
translated into MCP protocol errors at the server boundary.
"""

from enum import Enum
from typing import Any, Optional

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, ErrorData

# MCP reserves -32002 for "resource not found"
RESOURCE_NOT_FOUND_CODE = -32002


class ErrorCode(Enum):
    """Standard error codes for the MCP server."""

    NOT_CONFIGURED = "NOT_CONFIGURED"
    INVALID_PARAMS = "INVALID_PARAMS"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


JSONRPC_CODES: dict[ErrorCode, int] = {
    ErrorCode.NOT_CONFIGURED: INVALID_REQUEST,
    ErrorCode.INVALID_PARAMS: INVALID_PARAMS,
    ErrorCode.RESOURCE_NOT_FOUND: RESOURCE_NOT_FOUND_CODE,
    ErrorCode.UPSTREAM_ERROR: INTERNAL_ERROR,
    ErrorCode.DECODE_ERROR: INTERNAL_ERROR,
    ErrorCode.INTERNAL_ERROR: INTERNAL_ERROR,
}


class MCPServerError(Exception):
    """Base exception for MCP server errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize MCP server error.

        Args:
            message: Human-readable error message
            error_code: Standard error code
            details: Additional error details
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }

    def to_error_data(self) -> ErrorData:
        """Convert error to MCP ErrorData for protocol-level error responses.

        Returns:
            ErrorData carrying the JSON-RPC code and the serialized error
        """
        return ErrorData(
            code=JSONRPC_CODES[self.error_code],
            message=self.message,
            data=self.to_dict(),
        )


def not_configured_error(target: str) -> MCPServerError:
    """Build the error returned for any authenticated operation without credentials.

    Args:
        target: URI or tool name that was requested

    Returns:
        MCPServerError with NOT_CONFIGURED code
    """
    return MCPServerError(
        error_code=ErrorCode.NOT_CONFIGURED,
        message=(
            "Gong API is not configured. Please set GONG_BASE_URL, "
            "GONG_ACCESS_KEY, and GONG_ACCESS_KEY_SECRET environment variables."
        ),
        details={"target": target},
    )
