"""Gong API integration for the Gong MCP server.

This module provides a thin async client over the Gong v2 REST API. Each
operation issues exactly one HTTP request with basic authentication and decodes
the JSON response into the typed models of ``gong_mcp.models.gong``. Failures
are reported as ``MCPServerError``; nothing is retried or cached.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from gong_mcp.models.gong import CallPage, TranscriptSet, UserPage
from gong_mcp.tools.query_builder import (
    ListCallsParams,
    build_transcript_request,
    build_users_params,
)
from gong_mcp.utils.config import GongConfig
from gong_mcp.utils.errors import ErrorCode, MCPServerError

logger = logging.getLogger(__name__)

CALLS_EXTENSIVE_ENDPOINT = "/v2/calls/extensive"
CALL_TRANSCRIPTS_ENDPOINT = "/v2/calls/transcript"
USERS_ENDPOINT = "/v2/users"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _upstream_message(response: httpx.Response) -> str:
    """Extract Gong's error message from an error response."""
    try:
        error_json = response.json()
    except ValueError:
        return response.text

    if isinstance(error_json, dict):
        errors = error_json.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(e) for e in errors)
        if error_json.get("message"):
            return str(error_json["message"])
    return response.text


class GongAPIClient:
    """Client for the Gong v2 API."""

    def __init__(
        self,
        config: GongConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Gong credentials and endpoint
            transport: Optional httpx transport, used to stub the network in tests
        """
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.endpoint,
            auth=(self.config.key_id, self.config.key_secret.get_secret_value()),
            timeout=self.config.timeout,
            transport=self._transport,
        )

    async def api_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make one authenticated API request to Gong.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint path (e.g., "/v2/calls/extensive")
            params: URL query parameters
            json_data: JSON request body

        Returns:
            JSON response from API

        Raises:
            MCPServerError: RESOURCE_NOT_FOUND on 404, UPSTREAM_ERROR on any other
                failure, DECODE_ERROR if the body is not a JSON object
        """
        logger.debug(
            "Gong API request",
            extra={"extra_fields": {"method": method, "endpoint": endpoint}},
        )

        try:
            async with self._client() as client:
                response = await client.request(
                    method=method,
                    url=endpoint,
                    params=params,
                    json=json_data,
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            upstream_message = _upstream_message(e.response)
            error_details = {
                "endpoint": endpoint,
                "status_code": status_code,
                "upstream_message": upstream_message,
            }

            logger.error(
                f"Gong API error {status_code}: {upstream_message}",
                extra={"extra_fields": error_details},
            )

            if status_code == 404:
                raise MCPServerError(
                    error_code=ErrorCode.RESOURCE_NOT_FOUND,
                    message=f"Gong API returned no matching records: {upstream_message}",
                    details=error_details,
                ) from e

            raise MCPServerError(
                error_code=ErrorCode.UPSTREAM_ERROR,
                message=f"Gong API error {status_code}: {upstream_message}",
                details=error_details,
            ) from e

        except httpx.HTTPError as e:
            logger.error(f"Gong API request failed: {e}")
            raise MCPServerError(
                error_code=ErrorCode.UPSTREAM_ERROR,
                message=f"Gong API request failed: {str(e)}",
                details={
                    "endpoint": endpoint,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise MCPServerError(
                error_code=ErrorCode.DECODE_ERROR,
                message="Gong API returned a response that is not valid JSON",
                details={"endpoint": endpoint, "error": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise MCPServerError(
                error_code=ErrorCode.DECODE_ERROR,
                message="Gong API returned an unexpected JSON document",
                details={"endpoint": endpoint, "type": type(data).__name__},
            )

        return data

    @staticmethod
    def decode(model: type[ModelT], payload: dict[str, Any], endpoint: str) -> ModelT:
        """Decode a JSON payload into a typed upstream model.

        Raises:
            MCPServerError: DECODE_ERROR if the payload does not match the model
        """
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.error(
                f"Failed to decode Gong response from {endpoint}",
                extra={"extra_fields": {"endpoint": endpoint, "errors": e.error_count()}},
            )
            raise MCPServerError(
                error_code=ErrorCode.DECODE_ERROR,
                message=f"Could not decode Gong response from {endpoint}",
                details={
                    "endpoint": endpoint,
                    "errors": [
                        {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                        for err in e.errors()
                    ],
                },
            ) from e

    async def list_calls(self, params: ListCallsParams) -> CallPage:
        """List calls with extensive data.

        Args:
            params: Filter, content selector and cursor

        Returns:
            One page of calls
        """
        payload = await self.api_request(
            method="POST",
            endpoint=CALLS_EXTENSIVE_ENDPOINT,
            json_data=params.to_request_body(),
        )
        page = self.decode(CallPage, payload, CALLS_EXTENSIVE_ENDPOINT)

        logger.info(
            f"Fetched {len(page.calls or [])} calls from Gong",
            extra={"extra_fields": {"has_more": page.next_cursor is not None}},
        )
        return page

    async def get_call_transcripts(self, call_ids: list[str]) -> TranscriptSet:
        """Fetch transcripts for the given calls.

        Args:
            call_ids: Gong call ids

        Returns:
            Transcript set
        """
        payload = await self.api_request(
            method="POST",
            endpoint=CALL_TRANSCRIPTS_ENDPOINT,
            json_data=build_transcript_request(call_ids),
        )
        return self.decode(TranscriptSet, payload, CALL_TRANSCRIPTS_ENDPOINT)

    async def list_users(self, cursor: str | None = None) -> UserPage:
        """List users of the Gong company.

        Args:
            cursor: Continuation cursor from a previous page

        Returns:
            One page of users
        """
        payload = await self.api_request(
            method="GET",
            endpoint=USERS_ENDPOINT,
            params=build_users_params(cursor),
        )
        return self.decode(UserPage, payload, USERS_ENDPOINT)
