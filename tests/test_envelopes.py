import json

import pytest
from pydantic import ValidationError

from amap_bridge.amap.envelopes import (
    GeocodeEnvelope,
    PlaceEnvelope,
    RegeoEnvelope,
    WeatherEnvelope,
)
from amap_bridge.amap.errors import NotFoundError
from amap_bridge.amap.normalize import (
    extract_reverse_geocode,
    extract_weather,
    render,
)
from amap_bridge.amap.params import ReverseGeocodeParams, WeatherQueryParams
from tests import payloads


class TestEnvelopes:

    def test_empty_list_scalar_becomes_blank(self):
        env = RegeoEnvelope.model_validate(payloads.REGEO_OK)
        assert env.regeocode.address_component.city == ""
        assert env.regeocode.address_component.township == "望京街道"

    def test_string_list_joined(self):
        env = GeocodeEnvelope.model_validate(
            {
                "status": "1",
                "geocodes": [{"formatted_address": "a", "location": "1,2", "district": ["东城区", "西城区"]}],
            }
        )
        assert env.geocodes[0].district == "东城区,西城区"

    def test_numbers_become_strings(self):
        env = PlaceEnvelope.model_validate({"status": "1", "count": 3, "pois": []})
        assert env.count == "3"

    def test_unknown_fields_ignored(self):
        env = WeatherEnvelope.model_validate(payloads.WEATHER_LIVE_OK)
        assert not hasattr(env.lives[0], "temperature_float")

    def test_required_field_missing(self):
        broken = json.loads(json.dumps(payloads.WEATHER_LIVE_OK))
        del broken["lives"][0]["humidity"]
        with pytest.raises(ValidationError):
            WeatherEnvelope.model_validate(broken)

    def test_wrong_type(self):
        with pytest.raises(ValidationError):
            GeocodeEnvelope.model_validate({"status": "1", "geocodes": [{"formatted_address": {"x": 1}, "location": ""}]})

    def test_ok_flag(self):
        assert GeocodeEnvelope.model_validate(payloads.GEOCODE_OK).ok
        assert not GeocodeEnvelope.model_validate(payloads.FAILURE).ok


class TestNormalize:

    def test_render_keeps_unicode_and_order(self):
        assert render({"b": "北京", "a": 1}) == '{"b": "北京", "a": 1}'

    def test_regeo_without_payload(self):
        env = RegeoEnvelope.model_validate({"status": "1", "info": "OK"})
        with pytest.raises(NotFoundError):
            extract_reverse_geocode(env, ReverseGeocodeParams(longitude=1, latitude=2))

    def test_regeo_fewer_than_three_pois(self):
        data = json.loads(json.dumps(payloads.REGEO_OK))
        data["regeocode"]["pois"] = data["regeocode"]["pois"][:1]
        env = RegeoEnvelope.model_validate(data)
        out = extract_reverse_geocode(env, ReverseGeocodeParams(longitude=1, latitude=2))
        assert len(out["pois"]) == 1

    def test_weather_forecast_missing(self):
        env = WeatherEnvelope.model_validate(payloads.WEATHER_LIVE_OK)
        with pytest.raises(NotFoundError):
            extract_weather(env, WeatherQueryParams(city="330100", extensions="all"))

    def test_weather_live(self):
        env = WeatherEnvelope.model_validate(payloads.WEATHER_LIVE_OK)
        out = extract_weather(env, WeatherQueryParams(city="330100"))
        assert list(out) == [
            "province",
            "city",
            "adcode",
            "weather",
            "temperature",
            "winddirection",
            "windpower",
            "humidity",
            "reporttime",
        ]


class TestParams:

    def test_location_format(self):
        params = ReverseGeocodeParams(longitude=116.4814881, latitude=39.99)
        assert params.location == "116.481488,39.990000"

    def test_latitude_bounds(self):
        with pytest.raises(ValidationError):
            ReverseGeocodeParams(longitude=116.4, latitude=91)
