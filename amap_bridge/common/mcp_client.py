"""
Client side of the Amap stdio MCP server.

A small wrapper around the official MCP Python SDK used by the experiment
scripts to talk to ``amap_bridge.mcp_servers.amap_server`` the way an MCP host
would.
"""

from __future__ import annotations

import logging
import sys
from contextlib import AsyncExitStack
from typing import Any, Dict, Iterable, List, Optional

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client


logger = logging.getLogger(__name__)

SERVER_MODULE = "amap_bridge.mcp_servers.amap_server"


def content_text(content: Iterable[Any]) -> str:
    """Join the text blocks of a ``tools/call`` result."""
    return "".join(getattr(block, "text", "") or "" for block in content if getattr(block, "type", None) == "text")


class AmapStdioClient:
    """Own one stdio connection to the Amap MCP server."""

    def __init__(
        self,
        command: Optional[str] = None,
        args: Optional[List[str]] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> None:
        self._params = StdioServerParameters(
            command=command or sys.executable,
            args=args if args is not None else ["-m", SERVER_MODULE],
            env=env,
        )
        self._session: Optional[ClientSession] = None
        self._tools: List[Any] = []
        # Keeps the stdio transport and session open until close().
        self._exit_stack = AsyncExitStack()

    async def connect(self) -> None:
        if self._session is not None:
            return

        logger.info("Starting Amap MCP server: %s %s", self._params.command, self._params.args)
        read, write = await self._exit_stack.enter_async_context(stdio_client(self._params))
        session = await self._exit_stack.enter_async_context(ClientSession(read, write))
        await session.initialize()

        tools_result = await session.list_tools()
        self._session = session
        self._tools = list(tools_result.tools)
        logger.info("Connected to Amap MCP server with %d tools", len(self._tools))

    def list_tools(self) -> List[str]:
        """Names of the tools reported at connect time."""
        return [tool.name for tool in self._tools]

    async def call_tool(self, tool_name: str, arguments: Dict[str, Any]) -> str:
        if self._session is None:
            raise RuntimeError("Amap MCP server is not connected")

        try:
            result = await self._session.call_tool(tool_name, arguments)
        except Exception:
            logger.exception("Error calling Amap tool %s", tool_name)
            raise
        return content_text(result.content)

    async def close(self) -> None:
        self._session = None
        self._tools = []
        await self._exit_stack.aclose()

    async def __aenter__(self) -> "AmapStdioClient":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
