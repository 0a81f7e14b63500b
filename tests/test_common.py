import json

from amap_bridge.common.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings
from amap_bridge.common.telemetry import TelemetryLogger


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.api_key is None
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == DEFAULT_TIMEOUT

    def test_from_env(self):
        settings = Settings.from_env(
            {
                "AMAP_MAPS_API_KEY": "abc",
                "AMAP_BASE_URL": "http://localhost:9000/",
                "AMAP_TIMEOUT": "2.5",
            }
        )
        assert settings == Settings(api_key="abc", base_url="http://localhost:9000", timeout=2.5)

    def test_blank_key_is_missing(self):
        assert Settings.from_env({"AMAP_MAPS_API_KEY": ""}).api_key is None

    def test_bad_timeout_falls_back(self):
        assert Settings.from_env({"AMAP_TIMEOUT": "soon"}).timeout == DEFAULT_TIMEOUT

    def test_reads_process_env_each_time(self, monkeypatch):
        monkeypatch.setenv("AMAP_MAPS_API_KEY", "first")
        assert Settings.from_env().api_key == "first"
        monkeypatch.setenv("AMAP_MAPS_API_KEY", "second")
        assert Settings.from_env().api_key == "second"


class TestTelemetryLogger:

    def _events(self, logger):
        with open(logger.log_file, encoding="utf-8") as f:
            return [json.loads(line) for line in f]

    def test_started_and_finished_share_call_id(self, tmp_path):
        logger = TelemetryLogger(service_id="AmapGateway", log_file=str(tmp_path / "nested" / "events.log"))
        call = logger.tool_started("geocode", request_id="r1")
        logger.tool_finished(call, "x" * 500, is_error=False)

        request, response = self._events(logger)
        assert request["event_type"] == "tool_request"
        assert request["extra"] == {}
        assert response["event_type"] == "tool_response"
        assert request["tool_call_id"] == response["tool_call_id"] == call.tool_call_id
        assert response["request_id"] == "r1"
        assert response["service_id"] == "AmapGateway"
        assert len(response["extra"]["output_preview"]) == 200
        assert response["extra"]["duration_ms"] >= 0
        assert "node_id" in response

    def test_failure_is_tool_error(self, tmp_path):
        logger = TelemetryLogger(service_id="x", log_file=str(tmp_path / "events.log"))
        logger.tool_finished(logger.tool_started("weather_query"), "Error: city not found: x", is_error=True)

        request, error = self._events(logger)
        assert error["event_type"] == "tool_error"
        assert error["message"] == "Tool weather_query failed"
        assert request["request_id"] == error["request_id"] != ""

    def test_env_log_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AMAP_TELEMETRY_LOG", str(tmp_path / "env.log"))
        assert TelemetryLogger(service_id="x").log_file == str(tmp_path / "env.log")

    def test_unwritable_file_falls_back_to_stderr(self, tmp_path, capsys):
        logger = TelemetryLogger(service_id="x", log_file=str(tmp_path))
        logger.tool_started("geocode", request_id="r")
        assert "[telemetry-error]" in capsys.readouterr().err
