from __future__ import annotations

import os
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


_INITIALIZED = False


def init_tracer(service_name: str, endpoint: Optional[str] = None) -> None:
    """Install the global tracer provider once per process.

    Spans are only exported when an OTLP endpoint is configured; otherwise
    they are recorded and dropped.
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    endpoint = endpoint or os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "")
    resource = Resource(attributes={SERVICE_NAME: os.environ.get("OTEL_SERVICE_NAME", service_name)})

    provider = TracerProvider(resource=resource)
    if endpoint:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))

    trace.set_tracer_provider(provider)
    _INITIALIZED = True


def get_tracer(service_name: str):
    init_tracer(service_name)
    return trace.get_tracer(service_name)
