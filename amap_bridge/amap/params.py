"""Argument schemas for the Amap tools. The manifest is generated from these."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


DrivingStrategy = Literal["0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "10"]
WeatherExtensions = Literal["base", "all"]

COORDINATE_PATTERN = r"^-?\d{1,3}(\.\d+)?,-?\d{1,2}(\.\d+)?$"


class ToolParams(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class GeocodeParams(ToolParams):
    address: str = Field(min_length=1, description="Structured address to geocode, e.g. 北京市朝阳区阜通东大街6号")
    city: Optional[str] = Field(default=None, description="City name, citycode or adcode used to narrow the search")


class ReverseGeocodeParams(ToolParams):
    longitude: float = Field(ge=-180, le=180, description="Longitude (GCJ-02)")
    latitude: float = Field(ge=-90, le=90, description="Latitude (GCJ-02)")
    radius: int = Field(default=1000, ge=0, le=3000, description="Search radius for nearby POIs, in metres")

    @property
    def location(self) -> str:
        return f"{self.longitude:.6f},{self.latitude:.6f}"


class PoiSearchParams(ToolParams):
    keywords: str = Field(min_length=1, description="Search keywords")
    city: Optional[str] = Field(default=None, description="City name, citycode or adcode")
    types: Optional[str] = Field(default=None, description="POI type codes or names, separated by |")
    citylimit: bool = Field(default=False, description="Only return results inside the given city")
    page: int = Field(default=1, ge=1, le=100, description="Page number, starting at 1")
    offset: int = Field(default=10, ge=1, le=25, description="Results per page")


class RoutePlanningParams(ToolParams):
    origin: str = Field(pattern=COORDINATE_PATTERN, description="Start point as 'longitude,latitude'")
    destination: str = Field(pattern=COORDINATE_PATTERN, description="End point as 'longitude,latitude'")
    strategy: DrivingStrategy = Field(default="1", description="Driving strategy code, '0' to '10'")


class WeatherQueryParams(ToolParams):
    city: str = Field(min_length=1, description="City name to look up")
    extensions: WeatherExtensions = Field(
        default="base",
        description="'base' for current conditions, 'all' for the forecast",
    )
