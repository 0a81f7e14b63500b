from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ToolResult:
    """What a tool hands back to the MCP layer: exactly one text block."""

    text: str
    is_error: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"tool result text must be str, got {type(self.text).__name__}")
