"""
Pydantic models for the Amap v3 response envelopes.

Only the fields the normalizers read are declared; everything else in the
payload is ignored. Amap renders empty scalars as ``[]`` (e.g. a township
with no name), so string fields go through ``AmapStr``.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _coerce_amap_str(value: Any) -> Any:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return ",".join(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


AmapStr = Annotated[str, BeforeValidator(_coerce_amap_str)]


class AmapModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Envelope(AmapModel):
    status: str
    info: AmapStr = ""
    infocode: AmapStr = ""

    @property
    def ok(self) -> bool:
        return self.status == "1"


# geocode/geo


class GeocodeMatch(AmapModel):
    formatted_address: AmapStr
    location: AmapStr
    adcode: AmapStr = ""
    country: AmapStr = ""
    province: AmapStr = ""
    city: AmapStr = ""
    district: AmapStr = ""
    level: AmapStr = ""


class GeocodeEnvelope(Envelope):
    count: AmapStr = ""
    geocodes: List[GeocodeMatch] = Field(default_factory=list)


# geocode/regeo


class AddressComponent(AmapModel):
    country: AmapStr = ""
    province: AmapStr = ""
    city: AmapStr = ""
    district: AmapStr = ""
    township: AmapStr = ""
    adcode: AmapStr = ""


class NearbyPoi(AmapModel):
    name: AmapStr = ""
    type: AmapStr = ""
    address: AmapStr = ""
    location: AmapStr = ""
    distance: AmapStr = ""


class Regeocode(AmapModel):
    formatted_address: AmapStr = ""
    address_component: AddressComponent = Field(default_factory=AddressComponent, alias="addressComponent")
    pois: List[NearbyPoi] = Field(default_factory=list)


class RegeoEnvelope(Envelope):
    regeocode: Optional[Regeocode] = None


# place/text


class SuggestionCity(AmapModel):
    name: AmapStr = ""
    num: AmapStr = ""
    adcode: AmapStr = ""


class Suggestion(AmapModel):
    keywords: List[str] = Field(default_factory=list)
    cities: List[SuggestionCity] = Field(default_factory=list)


class Poi(AmapModel):
    id: AmapStr = ""
    name: AmapStr = ""
    type: AmapStr = ""
    address: AmapStr = ""
    location: AmapStr = ""
    tel: AmapStr = ""
    distance: AmapStr = ""
    business_area: AmapStr = ""


class PlaceEnvelope(Envelope):
    count: AmapStr = "0"
    suggestion: Suggestion = Field(default_factory=Suggestion)
    pois: List[Poi] = Field(default_factory=list)


# direction/driving


class Step(AmapModel):
    instruction: AmapStr = ""
    road: AmapStr = ""
    distance: AmapStr = ""
    duration: AmapStr = ""
    action: AmapStr = ""


class Path(AmapModel):
    distance: AmapStr = ""
    duration: AmapStr = ""
    strategy: AmapStr = ""
    tolls: AmapStr = ""
    toll_distance: AmapStr = ""
    steps: List[Step] = Field(default_factory=list)


class Route(AmapModel):
    origin: AmapStr = ""
    destination: AmapStr = ""
    paths: List[Path] = Field(default_factory=list)


class DrivingEnvelope(Envelope):
    route: Optional[Route] = None


# weather/weatherInfo


class LiveWeather(AmapModel):
    province: AmapStr
    city: AmapStr
    adcode: AmapStr
    weather: AmapStr
    temperature: AmapStr
    winddirection: AmapStr
    windpower: AmapStr
    humidity: AmapStr
    reporttime: AmapStr


class Cast(AmapModel):
    date: AmapStr = ""
    week: AmapStr = ""
    dayweather: AmapStr = ""
    nightweather: AmapStr = ""
    daytemp: AmapStr = ""
    nighttemp: AmapStr = ""
    daywind: AmapStr = ""
    nightwind: AmapStr = ""
    daypower: AmapStr = ""
    nightpower: AmapStr = ""


class Forecast(AmapModel):
    province: AmapStr = ""
    city: AmapStr = ""
    adcode: AmapStr = ""
    reporttime: AmapStr = ""
    casts: List[Cast] = Field(default_factory=list)


class WeatherEnvelope(Envelope):
    lives: List[LiveWeather] = Field(default_factory=list)
    forecasts: List[Forecast] = Field(default_factory=list)
