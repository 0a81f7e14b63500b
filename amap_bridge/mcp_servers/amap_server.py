"""
MCP server exposing the Amap tools.

Every tool is built from its registry definition: the input schema is the
params model's JSON schema and the body is ``ToolRegistry.invoke``. The
stdio server below and the HTTP gateway therefore advertise exactly the
schemas the registry validates against.

Usage:
    AMAP_MAPS_API_KEY=... python -m amap_bridge.mcp_servers.amap_server
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools import ToolResult as MCPToolResult
from pydantic.json_schema import SkipJsonSchema

from amap_bridge.amap.errors import ToolArgumentError, UnknownToolError
from amap_bridge.amap.registry import ToolDefinition, ToolRegistry
from amap_bridge.amap.results import ToolResult
from amap_bridge.amap.tools import REGISTRY
from amap_bridge.common.config import Settings
from amap_bridge.common.telemetry import TelemetryLogger


Dispatch = Callable[[str, Dict[str, Any]], Awaitable[ToolResult]]


class RegistryTool(Tool):
    """A FastMCP tool that forwards its arguments to the tool registry."""

    dispatch: SkipJsonSchema[Dispatch]

    @classmethod
    def from_definition(cls, definition: ToolDefinition, dispatch: Dispatch) -> "RegistryTool":
        return cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
            dispatch=dispatch,
        )

    async def run(self, arguments: Dict[str, Any]) -> MCPToolResult:
        try:
            result = await self.dispatch(self.name, arguments)
        except (ToolArgumentError, UnknownToolError) as exc:
            raise ToolError(str(exc)) from exc
        return MCPToolResult(content=result.text, is_error=result.is_error)


def build_server(
    registry: ToolRegistry = REGISTRY,
    *,
    environ: Optional[Mapping[str, str]] = None,
    telemetry: Optional[TelemetryLogger] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """
    Create a FastMCP server for ``registry``.

    ``environ`` replaces ``os.environ`` for settings lookup and
    ``http_transport`` replaces the network for outbound Amap calls.
    """
    telemetry = telemetry or TelemetryLogger(service_id="AmapStdio")

    async def dispatch(name: str, arguments: Dict[str, Any]) -> ToolResult:
        # Read per call so a missing or rotated key is seen immediately.
        settings = Settings.from_env(environ)
        async with httpx.AsyncClient(timeout=settings.timeout, transport=http_transport) as client:
            return await registry.invoke(name, arguments, settings=settings, client=client, telemetry=telemetry)

    server = FastMCP(registry.name, version=registry.version)
    for definition in registry.definitions():
        server.add_tool(RegistryTool.from_definition(definition, dispatch))

    @server.resource("resource://amap/manifest")
    def tool_manifest() -> dict:
        """Return the same tool manifest the HTTP gateway serves on GET /mcp."""
        return registry.manifest()

    return server


server = build_server()


if __name__ == "__main__":
    # Run as an MCP stdio server
    server.run()
