"""
Error taxonomy for Amap tool calls.

Every failure a tool handler can hit ends up as a text ``ToolResult`` through
``error_to_result``; none of them is surfaced as a protocol-level fault.
"""

from __future__ import annotations

import logging
from typing import Optional

from amap_bridge.amap.results import ToolResult
from amap_bridge.common.config import API_KEY_ENV


logger = logging.getLogger(__name__)


class AmapError(Exception):
    """Base class for expected tool failures. ``str(exc)`` is user-facing."""


class ConfigurationError(AmapError):
    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or f"Error: {API_KEY_ENV} is not configured.")


class TransportError(AmapError):
    def __init__(self, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        detail = f" (HTTP {status_code})" if status_code else ""
        super().__init__(f"Error: request to the Amap API failed{detail}.")


class ProviderError(AmapError):
    def __init__(self, info: str, infocode: str = "") -> None:
        self.info = info
        self.infocode = infocode
        suffix = f" (infocode {infocode})" if infocode else ""
        super().__init__(f"Error: {info}{suffix}")


class EnvelopeError(AmapError):
    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint
        super().__init__(f"Error: could not parse the Amap response from {endpoint}.")


class NotFoundError(AmapError):
    pass


# Raised before a handler runs; these are protocol-level and never become text.


class UnknownToolError(LookupError):
    pass


class ToolArgumentError(ValueError):
    def __init__(self, tool_name: str, details: str) -> None:
        self.tool_name = tool_name
        self.details = details
        super().__init__(f"Invalid arguments for tool '{tool_name}': {details}")


def error_to_result(tool_name: str, exc: BaseException) -> ToolResult:
    """Map any handler failure onto a text result."""
    if isinstance(exc, AmapError):
        logger.warning("Tool %s failed: %s", tool_name, exc)
        return ToolResult(str(exc), is_error=True)

    logger.exception("Unexpected error in tool %s", tool_name, exc_info=exc)
    return ToolResult(
        f"Error: unexpected failure while running tool '{tool_name}'.",
        is_error=True,
    )
