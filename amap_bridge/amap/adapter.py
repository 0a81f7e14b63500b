"""
Generic request adapter for the Amap REST API.

An ``Endpoint`` bundles everything that differs between tools: the path, the
envelope model, how to build the query from the tool params and how to pull
the result out of the envelope. ``fetch`` and ``run_endpoint`` are the only
places that talk HTTP.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Type

import httpx
from opentelemetry.trace import SpanKind
from pydantic import ValidationError

from amap_bridge.amap.envelopes import Envelope
from amap_bridge.amap.errors import ConfigurationError, EnvelopeError, ProviderError, TransportError
from amap_bridge.amap.normalize import render
from amap_bridge.common.config import Settings
from amap_bridge.common.tracing import get_tracer


logger = logging.getLogger(__name__)
tracer = get_tracer("amap-mcp")


@dataclass(frozen=True)
class AmapContext:
    """Per-invocation collaborators handed to every tool handler."""

    settings: Settings
    client: httpx.AsyncClient


@dataclass(frozen=True)
class Endpoint:
    path: str
    envelope: Type[Envelope]
    build_query: Callable[[Any], Dict[str, Any]]
    extract: Callable[[Any, Any], Dict[str, Any]]


async def fetch(ctx: AmapContext, endpoint: Endpoint, params: Any) -> Envelope:
    """Issue one GET for ``endpoint`` and return the validated envelope."""
    api_key = ctx.settings.api_key
    if not api_key:
        raise ConfigurationError()

    query = {key: value for key, value in endpoint.build_query(params).items() if value is not None}
    url = f"{ctx.settings.base_url}{endpoint.path}"

    with tracer.start_as_current_span("amap.http.get", kind=SpanKind.CLIENT) as span:
        span.set_attribute("http.url", url)
        logger.debug("GET %s params=%s", endpoint.path, query)

        try:
            resp = await ctx.client.get(url, params={"key": api_key, **query})
            span.set_attribute("http.status_code", resp.status_code)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(exc.response.status_code) from exc
        except (httpx.HTTPError, json.JSONDecodeError) as exc:
            raise TransportError() from exc

        # Check the status sentinel before the payload shape so a provider
        # failure is always reported with the provider's own message.
        try:
            head = Envelope.model_validate(data)
        except ValidationError as exc:
            raise EnvelopeError(endpoint.path) from exc
        span.set_attribute("amap.status", head.status)
        if not head.ok:
            raise ProviderError(head.info, head.infocode)

        try:
            return endpoint.envelope.model_validate(data)
        except ValidationError as exc:
            raise EnvelopeError(endpoint.path) from exc


async def run_endpoint(ctx: AmapContext, endpoint: Endpoint, params: Any) -> str:
    envelope = await fetch(ctx, endpoint, params)
    return render(endpoint.extract(envelope, params))
