"""
Runtime configuration read from the process environment.

Nothing here is cached: callers build a fresh ``Settings`` for every tool
invocation so a rotated ``AMAP_MAPS_API_KEY`` is picked up on the next call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


API_KEY_ENV = "AMAP_MAPS_API_KEY"
DEFAULT_BASE_URL = "https://restapi.amap.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8787


def _float_env(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        return cls(
            api_key=environ.get(API_KEY_ENV) or None,
            base_url=(environ.get("AMAP_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            timeout=_float_env(environ, "AMAP_TIMEOUT", DEFAULT_TIMEOUT),
        )
