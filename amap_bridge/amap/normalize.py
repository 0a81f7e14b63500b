"""
Reshape validated Amap envelopes into the payload a tool returns.

Each ``extract_*`` function takes the parsed envelope plus the tool params and
returns a plain dict; ``render`` turns that dict into the text block.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from amap_bridge.amap.envelopes import (
    DrivingEnvelope,
    GeocodeEnvelope,
    GeocodeMatch,
    PlaceEnvelope,
    RegeoEnvelope,
    WeatherEnvelope,
)
from amap_bridge.amap.errors import NotFoundError
from amap_bridge.amap.params import (
    GeocodeParams,
    PoiSearchParams,
    ReverseGeocodeParams,
    RoutePlanningParams,
    WeatherQueryParams,
)


MAX_NEARBY_POIS = 3


def render(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False)


def first_geocode(envelope: GeocodeEnvelope, address: str) -> GeocodeMatch:
    if not envelope.geocodes:
        raise NotFoundError(f"Error: no geocoding match for '{address}'.")
    return envelope.geocodes[0]


def extract_geocode(envelope: GeocodeEnvelope, params: GeocodeParams) -> Dict[str, Any]:
    match = first_geocode(envelope, params.address)
    return {
        "formatted_address": match.formatted_address,
        "location": match.location,
        "level": match.level,
        "province": match.province,
        "city": match.city,
        "district": match.district,
        "adcode": match.adcode,
    }


def extract_reverse_geocode(envelope: RegeoEnvelope, params: ReverseGeocodeParams) -> Dict[str, Any]:
    regeo = envelope.regeocode
    if regeo is None:
        raise NotFoundError(f"Error: no address found at {params.location}.")

    component = regeo.address_component
    return {
        "formatted_address": regeo.formatted_address,
        "country": component.country,
        "province": component.province,
        "city": component.city,
        "district": component.district,
        "township": component.township,
        "adcode": component.adcode,
        "pois": [
            {
                "name": poi.name,
                "type": poi.type,
                "address": poi.address,
                "location": poi.location,
                "distance": poi.distance,
            }
            for poi in regeo.pois[:MAX_NEARBY_POIS]
        ],
    }


def extract_poi_search(envelope: PlaceEnvelope, params: PoiSearchParams) -> Dict[str, Any]:
    count = int(envelope.count) if envelope.count.isdigit() else len(envelope.pois)
    return {
        "count": count,
        "page": params.page,
        "suggestion": {
            "keywords": list(envelope.suggestion.keywords),
            "cities": [
                {"name": city.name, "num": city.num, "adcode": city.adcode}
                for city in envelope.suggestion.cities
            ],
        },
        "pois": [
            {
                "name": poi.name,
                "type": poi.type,
                "address": poi.address,
                "location": poi.location,
                "tel": poi.tel,
                "distance": poi.distance,
                "business_area": poi.business_area,
            }
            for poi in envelope.pois
        ],
    }


def extract_route(envelope: DrivingEnvelope, params: RoutePlanningParams) -> Dict[str, Any]:
    route = envelope.route
    if route is None or not route.paths:
        raise NotFoundError(f"Error: no driving route from {params.origin} to {params.destination}.")

    # Amap ranks paths; the first one is the recommended route for the strategy.
    path = route.paths[0]
    return {
        "origin": route.origin or params.origin,
        "destination": route.destination or params.destination,
        "strategy": params.strategy,
        "distance": path.distance,
        "duration": path.duration,
        "tolls": path.tolls,
        "toll_distance": path.toll_distance,
        "steps": [
            {
                "instruction": step.instruction,
                "road": step.road,
                "distance": step.distance,
                "duration": step.duration,
                "action": step.action,
            }
            for step in path.steps
        ],
    }


def extract_weather(envelope: WeatherEnvelope, params: WeatherQueryParams) -> Dict[str, Any]:
    if params.extensions == "all":
        if not envelope.forecasts:
            raise NotFoundError(f"Error: no weather forecast for '{params.city}'.")
        return envelope.forecasts[0].model_dump()

    if not envelope.lives:
        raise NotFoundError(f"Error: no current weather for '{params.city}'.")
    return envelope.lives[0].model_dump()
