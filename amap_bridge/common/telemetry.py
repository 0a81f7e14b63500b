"""
Tool-call telemetry as JSON lines.

Every tool invocation produces two records sharing a ``tool_call_id``: a
``tool_request`` when the call starts and a ``tool_response`` or
``tool_error`` when it finishes. Records never carry tool arguments, so the
API key cannot leak into the log.

The file defaults to ``$AMAP_TELEMETRY_LOG`` or ``logs/<node>_<service>.log``
and its directory is created on first write.
"""

from __future__ import annotations

import json
import os
import socket
import sys
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

LOG_ENV = "AMAP_TELEMETRY_LOG"
PREVIEW_CHARS = 200

TOOL_REQUEST = "tool_request"
TOOL_RESPONSE = "tool_response"
TOOL_ERROR = "tool_error"


@dataclass
class ToolCall:
    """An in-flight tool invocation, returned by ``TelemetryLogger.tool_started``."""

    request_id: str
    tool_name: str
    tool_call_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started) * 1000)


class TelemetryLogger:
    def __init__(self, service_id: str, log_file: Optional[str] = None) -> None:
        self.service_id = service_id
        self.node_id = os.environ.get("NODE_NAME") or socket.gethostname()
        self.log_file = log_file or os.environ.get(LOG_ENV) or os.path.join("logs", f"{self.node_id}_{service_id}.log")

    @staticmethod
    def new_request_id() -> str:
        return str(uuid.uuid4())

    def tool_started(self, tool_name: str, request_id: Optional[str] = None) -> ToolCall:
        call = ToolCall(request_id=request_id or self.new_request_id(), tool_name=tool_name)
        self.write(call, TOOL_REQUEST, f"Tool {tool_name} invoked")
        return call

    def tool_finished(self, call: ToolCall, text: str, is_error: bool) -> None:
        outcome = "failed" if is_error else "succeeded"
        self.write(
            call,
            TOOL_ERROR if is_error else TOOL_RESPONSE,
            f"Tool {call.tool_name} {outcome}",
            duration_ms=call.elapsed_ms(),
            output_preview=text[:PREVIEW_CHARS],
        )

    def write(self, call: ToolCall, event_type: str, message: str, **extra: Any) -> None:
        record: Dict[str, Any] = {
            "event_type": event_type,
            "extra": extra,
            "message": message,
            "node_id": self.node_id,
            "request_id": call.request_id,
            "service_id": self.service_id,
            "timestamp_ms": int(time.time() * 1000),
            "tool_call_id": call.tool_call_id,
            "tool_name": call.tool_name,
        }
        line = json.dumps(record, ensure_ascii=False)
        try:
            os.makedirs(os.path.dirname(self.log_file) or ".", exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as exc:
            print(f"[telemetry-error] {exc}: {line}", file=sys.stderr)
