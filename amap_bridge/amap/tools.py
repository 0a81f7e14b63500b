"""
The five Amap tools: endpoint definitions, handlers and the registry.

Four tools are a single ``run_endpoint`` call. Weather needs the adcode of
the requested city first, so it geocodes before querying the weather endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Dict

from amap_bridge.amap.adapter import AmapContext, Endpoint, fetch, run_endpoint
from amap_bridge.amap.envelopes import (
    DrivingEnvelope,
    GeocodeEnvelope,
    PlaceEnvelope,
    RegeoEnvelope,
    WeatherEnvelope,
)
from amap_bridge.amap.errors import NotFoundError
from amap_bridge.amap.normalize import (
    extract_geocode,
    extract_poi_search,
    extract_reverse_geocode,
    extract_route,
    extract_weather,
)
from amap_bridge.amap.params import (
    GeocodeParams,
    PoiSearchParams,
    ReverseGeocodeParams,
    RoutePlanningParams,
    WeatherQueryParams,
)
from amap_bridge.amap.registry import ToolDefinition, ToolRegistry


SERVER_NAME = "amap-mcp"


def _geocode_query(params: GeocodeParams) -> Dict[str, Any]:
    return {"address": params.address, "city": params.city}


def _regeo_query(params: ReverseGeocodeParams) -> Dict[str, Any]:
    return {"location": params.location, "radius": params.radius, "extensions": "all"}


def _place_query(params: PoiSearchParams) -> Dict[str, Any]:
    return {
        "keywords": params.keywords,
        "city": params.city,
        "types": params.types,
        "citylimit": "true" if params.citylimit else "false",
        "page": params.page,
        "offset": params.offset,
        "extensions": "all",
    }


def _driving_query(params: RoutePlanningParams) -> Dict[str, Any]:
    return {
        "origin": params.origin,
        "destination": params.destination,
        "strategy": params.strategy,
        "extensions": "base",
    }


@dataclass(frozen=True)
class WeatherLookup:
    """The caller's weather params plus the adcode geocoded for ``params.city``."""

    params: WeatherQueryParams
    adcode: str


def _weather_query(lookup: WeatherLookup) -> Dict[str, Any]:
    return {"city": lookup.adcode, "extensions": lookup.params.extensions}


def _weather_extract(envelope: WeatherEnvelope, lookup: WeatherLookup) -> Dict[str, Any]:
    # Miss messages name the city the caller asked for.
    return extract_weather(envelope, lookup.params)


GEOCODE = Endpoint("/v3/geocode/geo", GeocodeEnvelope, _geocode_query, extract_geocode)
REVERSE_GEOCODE = Endpoint("/v3/geocode/regeo", RegeoEnvelope, _regeo_query, extract_reverse_geocode)
PLACE_TEXT = Endpoint("/v3/place/text", PlaceEnvelope, _place_query, extract_poi_search)
DRIVING = Endpoint("/v3/direction/driving", DrivingEnvelope, _driving_query, extract_route)
WEATHER = Endpoint("/v3/weather/weatherInfo", WeatherEnvelope, _weather_query, _weather_extract)


async def run_endpoint_for(endpoint: Endpoint, params: Any, ctx: AmapContext) -> str:
    return await run_endpoint(ctx, endpoint, params)


async def weather_query(params: WeatherQueryParams, ctx: AmapContext) -> str:
    geo = await fetch(ctx, GEOCODE, GeocodeParams(address=params.city))
    if not geo.geocodes or not geo.geocodes[0].adcode:
        raise NotFoundError(f"Error: city not found: {params.city}")

    adcode = geo.geocodes[0].adcode
    return await run_endpoint(ctx, WEATHER, WeatherLookup(params=params, adcode=adcode))


def build_registry() -> ToolRegistry:
    return ToolRegistry(
        SERVER_NAME,
        [
            ToolDefinition(
                name="geocode",
                description="Convert a structured address into coordinates and administrative divisions.",
                params=GeocodeParams,
                handler=partial(run_endpoint_for, GEOCODE),
            ),
            ToolDefinition(
                name="reverse_geocode",
                description="Convert a longitude/latitude pair into an address and nearby points of interest.",
                params=ReverseGeocodeParams,
                handler=partial(run_endpoint_for, REVERSE_GEOCODE),
            ),
            ToolDefinition(
                name="poi_search",
                description="Search points of interest by keyword, optionally limited to a city or POI type.",
                params=PoiSearchParams,
                handler=partial(run_endpoint_for, PLACE_TEXT),
            ),
            ToolDefinition(
                name="route_planning",
                description="Plan a driving route between two coordinates and list the turn-by-turn steps.",
                params=RoutePlanningParams,
                handler=partial(run_endpoint_for, DRIVING),
            ),
            ToolDefinition(
                name="weather_query",
                description="Look up current weather (or the forecast with extensions='all') for a city.",
                params=WeatherQueryParams,
                handler=weather_query,
            ),
        ],
    )


REGISTRY = build_registry()
