"""MCP Server exposing Gong calls, transcripts, participants and users.

This module implements the Model Context Protocol (MCP) server:
- Resources: gong://status, gong://users, gong://calls/{id}[/participants|/transcript]
- Resource templates: the three gong://calls/{callId} shapes
- Tools: search_calls
- Logging: Structured logging throughout
"""

import argparse
import asyncio
import contextlib
import json
from collections.abc import AsyncIterator
from typing import Any

import uvicorn
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.shared.exceptions import McpError
from mcp.types import (
    CallToolResult,
    Resource,
    ResourceTemplate,
    TextContent,
    Tool,
    ToolAnnotations,
)
from pydantic import AnyUrl
from starlette.applications import Starlette
from starlette.routing import Mount
from starlette.types import Receive, Scope, Send

from gong_mcp.models.calls import CallFilter
from gong_mcp.models.gong import Call, CallPage, CallTranscript
from gong_mcp.models.users import StatusRecord
from gong_mcp.tools.arguments import (
    SEARCH_CALLS_INPUT_SCHEMA,
    SEARCH_CALLS_TOOL,
    validate_search_arguments,
)
from gong_mcp.tools.gong_api import GongAPIClient
from gong_mcp.tools.pagination import paginate_calls
from gong_mcp.tools.query_builder import build_list_calls_params
from gong_mcp.tools.shaping import (
    shape_call_detail,
    shape_call_summary,
    shape_participants_view,
    shape_transcript,
    shape_user_list,
)
from gong_mcp.tools.uri_router import STATUS_URI, USERS_URI, RouteKind, route_uri
from gong_mcp.utils.config import GongConfig, get_settings
from gong_mcp.utils.errors import ErrorCode, MCPServerError, not_configured_error
from gong_mcp.utils.logging_config import ContextLogger, setup_logging

JSON_MIME_TYPE = "application/json"

INSTRUCTIONS = (
    "Gong MCP Server - Access Gong calls, transcripts, participants and users via "
    "resources, and search calls with the search_calls tool. Configure using "
    "environment variables: GONG_BASE_URL, GONG_ACCESS_KEY, GONG_ACCESS_KEY_SECRET."
)


class GongMCPServer:
    """MCP Server for the Gong API."""

    def __init__(
        self,
        config: GongConfig | None,
        client: GongAPIClient | None = None,
        name: str = "gong-mcp",
        version: str = "0.1.0",
    ) -> None:
        """Initialize the MCP server.

        Args:
            config: Gong configuration, or None to run unconfigured
            client: Gong API client; built from ``config`` when omitted
            name: Server name reported to clients
            version: Server version reported to clients
        """
        self.server = Server(name, version=version, instructions=INSTRUCTIONS)
        self.config = config
        self.logger = ContextLogger("gong_mcp.server")

        if client is None and config is not None:
            client = GongAPIClient(config)
        self.client = client

        self._register_handlers()

        self.logger.info(
            "Gong MCP Server initialized",
            extra={"configured": self.is_configured},
        )

    @property
    def is_configured(self) -> bool:
        """Whether Gong credentials are available."""
        return self.config is not None and self.client is not None

    def _register_handlers(self) -> None:
        """Register all MCP primitive handlers."""
        # Resources primitive
        self.server.list_resources()(self._list_resources)
        self.server.list_resource_templates()(self._list_resource_templates)
        self.server.read_resource()(self._handle_read_resource)

        # Tools primitive
        # arguments are checked by validate_search_arguments, not the SDK
        self.server.list_tools()(self._list_tools)
        self.server.call_tool(validate_input=False)(self._handle_call_tool)

        self.logger.info("MCP handlers registered")

    def _require_client(self, target: str) -> GongAPIClient:
        """Return the API client, or fail before any upstream call is attempted."""
        if not self.is_configured or self.client is None:
            self.logger.warning("Rejected request: not configured", extra={"target": target})
            raise not_configured_error(target)
        return self.client

    def _internal_error(self, error: Exception, details: dict[str, Any]) -> MCPServerError:
        """Wrap an unexpected failure so it leaves the boundary as INTERNAL_ERROR."""
        self.logger.exception(
            f"Unexpected failure: {error}",
            extra={**details, "error_type": type(error).__name__},
        )
        return MCPServerError(
            error_code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {error}",
            details={**details, "error_type": type(error).__name__},
        )

    # ==================== Resources Primitive ====================

    async def _list_resources(self) -> list[Resource]:
        """List available resources.

        Returns:
            The status resource, plus the users resource when configured
        """
        resources = [
            Resource(
                uri=STATUS_URI,  # type: ignore[arg-type]
                name="Configuration Status",
                description="Check if the Gong API is configured correctly",
                mimeType=JSON_MIME_TYPE,
            )
        ]

        if self.is_configured:
            resources.append(
                Resource(
                    uri=USERS_URI,  # type: ignore[arg-type]
                    name="Gong Users",
                    description="List of users in your Gong workspace",
                    mimeType=JSON_MIME_TYPE,
                )
            )

        return resources

    async def _list_resource_templates(self) -> list[ResourceTemplate]:
        """List resource templates for per-call resources.

        Returns:
            Call templates when configured, otherwise nothing
        """
        if not self.is_configured:
            return []

        return [
            ResourceTemplate(
                uriTemplate="gong://calls/{callId}",
                name="Call Details",
                description="Full metadata for a specific Gong call by ID",
                mimeType=JSON_MIME_TYPE,
            ),
            ResourceTemplate(
                uriTemplate="gong://calls/{callId}/participants",
                name="Call Participants",
                description="Participants of a specific Gong call with affiliation and speaker summary",
                mimeType=JSON_MIME_TYPE,
            ),
            ResourceTemplate(
                uriTemplate="gong://calls/{callId}/transcript",
                name="Call Transcript",
                description="Retrieve the transcript for a specific Gong call by ID",
                mimeType=JSON_MIME_TYPE,
            ),
        ]

    async def _handle_read_resource(self, uri: AnyUrl) -> list[ReadResourceContents]:
        """Protocol adapter for resource reads.

        Raises:
            McpError: carrying the error kind and details of any failure
        """
        try:
            content = await self._read_resource(str(uri))
        except MCPServerError as e:
            self.logger.error(
                f"Resource read failed: {e.message}",
                extra={"uri": str(uri), "error": e.error_code.value},
            )
            raise McpError(e.to_error_data()) from e
        except Exception as e:
            error = self._internal_error(e, {"uri": str(uri)})
            raise McpError(error.to_error_data()) from e

        return [ReadResourceContents(content=content, mime_type=JSON_MIME_TYPE)]

    async def _read_resource(self, uri: str) -> str:
        """Read a resource by URI.

        Args:
            uri: Resource URI

        Returns:
            Resource content as pretty-printed JSON

        Raises:
            MCPServerError: If the resource cannot be served
        """
        self.logger.info("Reading resource", extra={"uri": uri})

        if uri == STATUS_URI:
            return self._read_status()

        self._require_client(uri)
        route = route_uri(uri)

        if route.kind is RouteKind.USER_LIST:
            return await self._read_users()
        elif route.kind is RouteKind.CALL_DETAIL:
            return await self._read_call_detail(route.call_id or "")
        elif route.kind is RouteKind.PARTICIPANTS:
            return await self._read_participants(route.call_id or "")
        elif route.kind is RouteKind.TRANSCRIPT:
            return await self._read_transcript(route.call_id or "")
        else:
            raise MCPServerError(
                error_code=ErrorCode.RESOURCE_NOT_FOUND,
                message=f"Unknown resource URI: {uri}",
                details={"uri": uri},
            )

    def _read_status(self) -> str:
        """Report whether the Gong API is configured."""
        if self.is_configured and self.config is not None:
            status = StatusRecord(
                configured=True,
                base_url=self.config.endpoint,
                message="Gong API is configured and ready to use",
            )
        else:
            status = StatusRecord(
                configured=False,
                message=(
                    "Gong API is not configured. Please set GONG_BASE_URL, "
                    "GONG_ACCESS_KEY, and GONG_ACCESS_KEY_SECRET environment variables."
                ),
            )
        return status.to_json()

    async def _read_users(self) -> str:
        """Read the first page of Gong users."""
        client = self._require_client(USERS_URI)
        page = await client.list_users()
        users = shape_user_list(page)

        self.logger.info(f"Retrieved {users.count} users", extra={"count": users.count})
        return users.to_json()

    async def _fetch_single_call(self, call_id: str, include_structure: bool) -> Call:
        """Fetch exactly one call through the list operation.

        Raises:
            MCPServerError: RESOURCE_NOT_FOUND unless Gong returns the call with this id
        """
        client = self._require_client(call_id)
        params = build_list_calls_params(
            CallFilter.for_call(call_id, include_structure=include_structure)
        )

        not_found = MCPServerError(
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            message=f"Call not found: {call_id}",
            details={"callId": call_id},
        )

        try:
            page = await client.list_calls(params)
        except MCPServerError as e:
            if e.error_code is ErrorCode.RESOURCE_NOT_FOUND:
                raise not_found from e
            raise

        call = next(
            (c for c in page.calls or [] if c.meta_data is not None and c.meta_data.id == call_id),
            None,
        )
        if call is None:
            raise not_found
        return call

    async def _read_call_detail(self, call_id: str) -> str:
        """Read full metadata of one call."""
        call = await self._fetch_single_call(call_id, include_structure=True)
        return shape_call_detail(call).to_json()

    async def _read_participants(self, call_id: str) -> str:
        """Read the participants of one call."""
        call = await self._fetch_single_call(call_id, include_structure=False)
        view = shape_participants_view(call_id, call)

        self.logger.info(
            "Retrieved call participants",
            extra={"call_id": call_id, "participants": view.summary.total},
        )
        return view.to_json()

    async def _read_transcript(self, call_id: str) -> str:
        """Read the transcript of one call."""
        client = self._require_client(call_id)

        not_found = MCPServerError(
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            message=f"No transcript found for call {call_id}",
            details={"callId": call_id},
        )

        try:
            transcript_set = await client.get_call_transcripts([call_id])
        except MCPServerError as e:
            if e.error_code is ErrorCode.RESOURCE_NOT_FOUND:
                raise not_found from e
            raise

        transcript: CallTranscript | None = next(
            (t for t in transcript_set.call_transcripts or [] if t.call_id == call_id),
            None,
        )
        if transcript is None:
            raise not_found
        record = shape_transcript(call_id, transcript)

        self.logger.info(
            "Retrieved call transcript",
            extra={
                "call_id": call_id,
                "sentences": record.sentence_count,
                "speakers": record.speaker_count,
            },
        )
        return record.to_json()

    # ==================== Tools Primitive ====================

    async def _list_tools(self) -> list[Tool]:
        """List available tools.

        Returns:
            List of available tools
        """
        return [
            Tool(
                name=SEARCH_CALLS_TOOL,
                title="Search Gong calls",
                description=(
                    "Search Gong calls by date range, workspace, call ids or primary user ids. "
                    "Returns call summaries with participants. Use 'limit' to cap the number "
                    "of calls returned and 'cursor' (from nextCursor) to fetch the next page. "
                    "Requires Gong API credentials to be configured."
                ),
                inputSchema=SEARCH_CALLS_INPUT_SCHEMA,
                annotations=ToolAnnotations(
                    title="Search Gong calls",
                    readOnlyHint=True,
                    openWorldHint=True,
                ),
            ),
        ]

    async def _handle_call_tool(
        self, name: str, arguments: dict[str, Any]
    ) -> list[TextContent] | CallToolResult:
        """Protocol adapter for tool calls.

        Failures are returned as an error result carrying the error kind and
        details rather than raised.
        """
        try:
            return await self._call_tool(name, arguments)
        except MCPServerError as e:
            self.logger.error(
                f"Tool call failed: {e.message}",
                extra={"tool": name, "error": e.error_code.value},
            )
            return self._error_result(e)
        except Exception as e:
            return self._error_result(self._internal_error(e, {"tool": name}))

    @staticmethod
    def _error_result(error: MCPServerError) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=json.dumps(error.to_dict(), indent=2))],
            isError=True,
        )

    async def _call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> list[TextContent]:
        """Execute a tool.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            Tool execution results
        """
        if name == SEARCH_CALLS_TOOL:
            return await self._search_calls(arguments or {})
        else:
            raise MCPServerError(
                error_code=ErrorCode.INVALID_PARAMS,
                message=f"Unknown tool: {name}",
                details={"tool_name": name},
            )

    async def _search_calls(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Search calls and apply the optional result limit.

        Args:
            arguments: Raw search_calls arguments

        Returns:
            SearchResult as pretty-printed JSON
        """
        client = self._require_client(SEARCH_CALLS_TOOL)
        search_args = validate_search_arguments(arguments)

        self.logger.info("Searching calls", extra={"filters": search_args.filters_echo()})

        params = build_list_calls_params(search_args.to_filter())
        try:
            page = await client.list_calls(params)
        except MCPServerError as e:
            # Gong answers 404 when no call matches the filters
            if e.error_code is not ErrorCode.RESOURCE_NOT_FOUND:
                raise
            self.logger.info("No calls matched the search filters")
            page = CallPage()

        summaries = [shape_call_summary(call) for call in page.calls or []]
        result = paginate_calls(
            summaries,
            limit=search_args.limit,
            next_cursor=page.next_cursor,
            filters_echo=search_args.filters_echo(),
        )

        self.logger.info(
            f"Found {result.total_available} calls",
            extra={
                "count": result.count,
                "truncated": result.truncated,
                "has_more": result.has_more,
            },
        )

        return [TextContent(type="text", text=result.to_json())]

    # ==================== Server Lifecycle ====================

    async def run_stdio(self) -> None:
        """Run the MCP server using stdio transport."""
        self.logger.info("Starting Gong MCP Server", extra={"transport": "stdio"})

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    def http_app(self) -> Starlette:
        """Build the Streamable HTTP application, served under /mcp."""
        session_manager = StreamableHTTPSessionManager(app=self.server)

        async def handle_mcp(scope: Scope, receive: Receive, send: Send) -> None:
            await session_manager.handle_request(scope, receive, send)

        @contextlib.asynccontextmanager
        async def lifespan(app: Starlette) -> AsyncIterator[None]:
            async with session_manager.run():
                yield

        return Starlette(routes=[Mount("/mcp", app=handle_mcp)], lifespan=lifespan)

    async def run_http(self, host: str, port: int) -> None:
        """Run the MCP server using Streamable HTTP transport."""
        self.logger.info(
            "Starting Gong MCP Server",
            extra={"transport": "http", "endpoint": f"http://{host}:{port}/mcp"},
        )

        config = uvicorn.Config(self.http_app(), host=host, port=port, log_level="info")
        await uvicorn.Server(config).serve()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments, defaulting to the configured settings."""
    server_settings = get_settings().server

    parser = argparse.ArgumentParser(
        prog="gong-mcp",
        description="Gong MCP Server - Access Gong calls and data via Model Context Protocol",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {server_settings.version}",
    )
    parser.add_argument(
        "--mode",
        choices=["stdio", "http"],
        default=server_settings.transport,
        help="Transport mode (default: %(default)s)",
    )
    parser.add_argument(
        "--host",
        default=server_settings.host,
        help="Host address to bind to, HTTP mode only (default: %(default)s)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=server_settings.port,
        help="Port to bind to, HTTP mode only (default: %(default)s)",
    )
    return parser.parse_args(argv)


async def async_main(args: argparse.Namespace) -> None:
    """Async main function for the MCP server."""
    settings = get_settings()
    server = GongMCPServer(
        config=settings.gong.to_config(),
        name=settings.server.server_name,
        version=settings.server.version,
    )

    if args.mode == "http":
        await server.run_http(args.host, args.port)
    else:
        await server.run_stdio()


def main(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the MCP server (called by script entry point)."""
    args = parse_args(argv)
    settings = get_settings()

    # Initialize logging
    setup_logging(
        level=settings.server.log_level,
        structured=settings.server.structured_logging,
    )

    asyncio.run(async_main(args))


if __name__ == "__main__":
    main()
