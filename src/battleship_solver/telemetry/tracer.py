"""Tracing helpers built on OpenTelemetry.

Each engine module asks for its own instrumentation scope; the tracers handed
out are cached per scope name and follow whichever provider is installed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.trace import Tracer

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import TelemetryConfig

DEFAULT_SCOPE = "battleship_solver"

_TRACERS: dict[str, Tracer] = {}
_TRACER_PROVIDER: TracerProvider | None = None


def get_tracer(name: str = DEFAULT_SCOPE) -> Tracer:
    """Return the tracer for instrumentation scope ``name``."""
    tracer = _TRACERS.get(name)
    if tracer is None:
        tracer = _TRACERS[name] = trace.get_tracer(name)
    return tracer


def init_tracing(config: TelemetryConfig) -> TracerProvider:
    """Install the solver's TracerProvider: OTLP when an endpoint is set, console otherwise."""
    global _TRACER_PROVIDER

    resource = Resource.create(
        {
            "service.name": config.service_name,
            "service.namespace": config.service_namespace,
            **config.resource_attributes,
        }
    )
    provider = TracerProvider(resource=resource)
    if config.otlp_traces_endpoint:
        exporter = OTLPSpanExporter(endpoint=config.otlp_traces_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    else:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    # Module-level tracers are API proxies and start delegating once this is set.
    trace.set_tracer_provider(provider)
    _TRACER_PROVIDER = provider
    return provider
