from typing import Any, Dict, List, Tuple

import httpx
import pytest

from amap_bridge.common.config import Settings
from amap_bridge.common.telemetry import TelemetryLogger


class FakeAmap:
    """In-process stand-in for restapi.amap.com, keyed by request path."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def respond(self, path: str, payload: Any, status_code: int = 200) -> None:
        self.routes[path] = (status_code, payload)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, payload = self.routes.get(request.url.path, (404, {"error": "no route"}))
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status_code, content=payload)
        return httpx.Response(status_code, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def amap() -> FakeAmap:
    return FakeAmap()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def no_key_settings() -> Settings:
    return Settings(api_key=None)


@pytest.fixture
def telemetry(tmp_path) -> TelemetryLogger:
    return TelemetryLogger(service_id="TestService", log_file=str(tmp_path / "telemetry.log"))
