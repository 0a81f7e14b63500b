#!/usr/bin/env python3
"""
HTTP entry point exposing the Amap tools over MCP streamable HTTP.

Endpoints:
  - GET  /mcp      tool manifest (names, descriptions, input schemas)
  - POST /mcp      MCP JSON-RPC, answered with a JSON body
  - POST /sse      MCP JSON-RPC, answered as a text/event-stream
  - GET  /health   liveness check
  Anything else is a plain-text 404 "Not found".

Both MCP paths are stateless FastMCP transports built from the same tool
registry, so no session or ``initialize`` round trip is required.

Environment:
  - AMAP_MAPS_API_KEY (required for tool calls, read on every call)
  - AMAP_BASE_URL     (default: https://restapi.amap.com)
  - AMAP_TIMEOUT      (default: 10 seconds)
  - AMAP_GATEWAY_HOST (default: 0.0.0.0)
  - AMAP_GATEWAY_PORT (default: 8787)

Usage:
    python -m amap_bridge.gateway.server --port 8787
"""

from __future__ import annotations

import argparse
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Mapping, Optional

import httpx
import uvicorn
from opentelemetry import propagate
from opentelemetry.trace import SpanKind
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route
from starlette.types import ASGIApp, Receive, Scope, Send

from amap_bridge.amap.registry import ToolRegistry
from amap_bridge.amap.tools import REGISTRY
from amap_bridge.common.config import DEFAULT_HOST, DEFAULT_PORT
from amap_bridge.common.telemetry import TelemetryLogger
from amap_bridge.common.tracing import get_tracer
from amap_bridge.mcp_servers.amap_server import build_server


logger = logging.getLogger(__name__)
tracer = get_tracer("amap-gateway")

MCP_METHODS = ["POST", "DELETE"]


class TracedTransport:
    """Run an MCP transport app inside a SERVER span continued from the caller's trace headers."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        ctx = propagate.extract(dict(Request(scope).headers))
        with tracer.start_as_current_span(
            "amap_gateway.handle_rpc",
            context=ctx,
            kind=SpanKind.SERVER,
        ) as span:
            span.set_attribute("app.path", scope["path"])
            await self.app(scope, receive, send)


def create_app(
    registry: ToolRegistry = REGISTRY,
    *,
    environ: Optional[Mapping[str, str]] = None,
    telemetry: Optional[TelemetryLogger] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Starlette:
    server = build_server(
        registry,
        environ=environ,
        telemetry=telemetry or TelemetryLogger(service_id="AmapGateway"),
        http_transport=http_transport,
    )
    json_app = server.http_app(path="/mcp", stateless_http=True, json_response=True)
    sse_app = server.http_app(path="/sse", stateless_http=True, json_response=False)

    async def manifest(request: Request) -> Response:
        return JSONResponse(registry.manifest())

    async def health(request: Request) -> Response:
        return JSONResponse({"status": "ok"})

    async def not_found(request: Request, exc: Exception) -> Response:
        return PlainTextResponse("Not found", status_code=404)

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        # Each transport owns a session manager that must be running to serve requests.
        async with json_app.lifespan(json_app), sse_app.lifespan(sse_app):
            logger.info("Amap MCP gateway ready with %d tools", len(registry.definitions()))
            yield

    return Starlette(
        routes=[
            Route("/mcp", manifest, methods=["GET"]),
            Route("/mcp", TracedTransport(json_app), methods=MCP_METHODS),
            Route("/sse", TracedTransport(sse_app), methods=MCP_METHODS),
            Route("/health", health, methods=["GET"]),
        ],
        exception_handlers={404: not_found},
        lifespan=lifespan,
    )


def main(argv: Optional[List[str]] = None) -> None:
    host = os.environ.get("AMAP_GATEWAY_HOST", DEFAULT_HOST)
    port = int(os.environ.get("AMAP_GATEWAY_PORT", str(DEFAULT_PORT)))

    parser = argparse.ArgumentParser(description="Amap MCP gateway")
    parser.add_argument("--host", default=host, help=f"Bind host (default: {host})")
    parser.add_argument("--port", type=int, default=port, help=f"HTTP port (default: {port})")
    parser.add_argument("--log-level", default="INFO", help="Python logging level (default: INFO)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Amap MCP gateway listening on http://%s:%d/mcp", args.host, args.port)
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
