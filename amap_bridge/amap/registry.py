from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type

import httpx
from pydantic import ValidationError

from amap_bridge import __version__
from amap_bridge.amap.adapter import AmapContext
from amap_bridge.amap.errors import ToolArgumentError, UnknownToolError, error_to_result
from amap_bridge.amap.params import ToolParams
from amap_bridge.amap.results import ToolResult
from amap_bridge.common.config import Settings
from amap_bridge.common.telemetry import TelemetryLogger
from amap_bridge.common.tracing import get_tracer


tracer = get_tracer("amap-mcp")

Handler = Callable[[Any, AmapContext], Awaitable[str]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    params: Type[ToolParams]
    handler: Handler

    def input_schema(self) -> Dict[str, Any]:
        return self.params.model_json_schema()


class ToolRegistry:
    """Name -> tool lookup, argument validation and the error boundary."""

    def __init__(self, name: str, tools: List[ToolDefinition], version: str = __version__) -> None:
        self.name = name
        self.version = version
        self._tools: Dict[str, ToolDefinition] = {}
        for definition in tools:
            if definition.name in self._tools:
                raise ValueError(f"Duplicate tool name: {definition.name}")
            self._tools[definition.name] = definition

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(f"Unknown tool: {name}") from None

    def definitions(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    def list_tools(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": definition.name,
                "description": definition.description,
                "inputSchema": definition.input_schema(),
            }
            for definition in self.definitions()
        ]

    def manifest(self) -> Dict[str, Any]:
        return {"name": self.name, "version": self.version, "tools": self.list_tools()}

    def validate(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolParams:
        definition = self.get(name)
        try:
            return definition.params.model_validate(dict(arguments or {}))
        except ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
            )
            raise ToolArgumentError(name, details) from exc

    async def invoke(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]],
        *,
        settings: Settings,
        client: httpx.AsyncClient,
        telemetry: Optional[TelemetryLogger] = None,
        request_id: Optional[str] = None,
    ) -> ToolResult:
        """
        Run one tool call.

        Unknown names and bad arguments raise before any network traffic;
        everything the handler raises is folded into a text result.
        """
        params = self.validate(name, arguments)
        definition = self._tools[name]
        call = telemetry.tool_started(name, request_id) if telemetry else None

        with tracer.start_as_current_span(f"amap.tool.{name}") as span:
            span.set_attribute("app.tool", name)
            try:
                result = ToolResult(await definition.handler(params, AmapContext(settings=settings, client=client)))
            except Exception as exc:
                result = error_to_result(name, exc)
            span.set_attribute("app.tool.is_error", result.is_error)

        if call is not None:
            telemetry.tool_finished(call, result.text, result.is_error)
        return result
