"""Metrics helpers: per-scope meters and lazily created run counters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from opentelemetry import metrics as otel_metrics
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.metrics import Counter, Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

if TYPE_CHECKING:  # pragma: no cover
    from .config import TelemetryConfig

DEFAULT_SCOPE = "battleship_solver"
EXPORT_INTERVAL_MILLIS = 5000

MetricAttributes = Mapping[str, str | bool | int | float]

_METERS: dict[str, Meter] = {}
_METER_PROVIDER: MeterProvider | None = None
_COUNTERS: dict[str, Counter] = {}


def get_meter(name: str = DEFAULT_SCOPE) -> Meter:
    """Return the meter for instrumentation scope ``name``."""
    meter = _METERS.get(name)
    if meter is None:
        meter = _METERS[name] = otel_metrics.get_meter(name)
    return meter


def init_metrics(config: TelemetryConfig) -> MeterProvider:
    """Install a MeterProvider, exporting over OTLP when an endpoint is configured."""
    global _METER_PROVIDER

    readers = []
    if config.otlp_metrics_endpoint:
        exporter = OTLPMetricExporter(endpoint=config.otlp_metrics_endpoint, insecure=True)
        readers.append(PeriodicExportingMetricReader(exporter, export_interval_millis=EXPORT_INTERVAL_MILLIS))

    resource = Resource.create(
        {
            "service.name": config.service_name,
            "service.namespace": config.service_namespace,
            **config.resource_attributes,
        }
    )
    provider = MeterProvider(resource=resource, metric_readers=readers)
    otel_metrics.set_meter_provider(provider)
    _METER_PROVIDER = provider
    return provider


def record_solver_metric(name: str, value: float, attrs: MetricAttributes | None = None) -> None:
    """Add ``value`` to the run-level counter ``name``, creating it on first use."""
    counter = _COUNTERS.get(name)
    if counter is None:
        counter = _COUNTERS[name] = get_meter().create_counter(name)
    counter.add(value, attributes=attrs or {})
