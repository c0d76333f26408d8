"""OpenTelemetry + Prometheus fallback wiring for powerlog."""
from __future__ import annotations

import logging
import socket
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI

from powerlog import config

logger = logging.getLogger("powerlog.observability")


_initialized = False
_enabled = False
_tracer: Any | None = None
_trace_provider: Any | None = None
_meter_provider: Any | None = None
_fastapi_instrumentor: Any | None = None

_retrieval_counter: Any | None = None
_retrieval_latency_hist: Any | None = None
_skipped_line_counter: Any | None = None
_sessions_counter: Any | None = None

_prom_enabled = False
_prom_retrieval_counter: Any | None = None
_prom_retrieval_latency_hist: Any | None = None
_prom_skipped_line_counter: Any | None = None
_prom_sessions_counter: Any | None = None


def _signal_endpoint(base_endpoint: str, signal_path: str) -> str | None:
    endpoint = (base_endpoint or "").strip().rstrip("/")
    if not endpoint:
        return None
    return endpoint if endpoint.endswith(signal_path) else f"{endpoint}{signal_path}"


def _host_label() -> str:
    return socket.gethostname() or "unknown"


def _prom_labels(**extra: str) -> dict[str, str]:
    labels = {"host": _host_label()}
    for key, value in extra.items():
        labels[key] = (value or "").strip() or "unknown"
    return labels


def initialize(app: FastAPI | None = None) -> None:
    global _initialized, _enabled, _tracer, _trace_provider, _meter_provider, _fastapi_instrumentor
    global _retrieval_counter, _retrieval_latency_hist, _skipped_line_counter, _sessions_counter
    global _prom_enabled
    global _prom_retrieval_counter, _prom_retrieval_latency_hist, _prom_skipped_line_counter, _prom_sessions_counter

    if _initialized:
        if _enabled and app and _fastapi_instrumentor:
            _fastapi_instrumentor.instrument_app(app)
        return

    _initialized = True

    if not config.OTEL_ENABLED:
        logger.info("OpenTelemetry disabled (POWERLOG_OTEL_ENABLED=false)")
        return

    try:
        from opentelemetry import metrics, trace
        from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
        from opentelemetry.sdk.metrics import MeterProvider
        from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
    except ImportError as exc:
        logger.warning("OpenTelemetry dependencies unavailable: %s", exc)
        return

    traces_endpoint = _signal_endpoint(config.OTEL_ENDPOINT, "/v1/traces")
    metrics_endpoint = _signal_endpoint(config.OTEL_ENDPOINT, "/v1/metrics")
    service_name = config.OTEL_SERVICE_NAME or "powerlog"

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.namespace": "powerlog",
            "host.name": _host_label(),
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=traces_endpoint)))
    trace.set_tracer_provider(trace_provider)
    tracer = trace.get_tracer("powerlog")

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=metrics_endpoint)
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])
    metrics.set_meter_provider(meter_provider)
    meter = metrics.get_meter("powerlog")

    _retrieval_counter = meter.create_counter(
        "powerlog_journal_retrievals_total",
        unit="1",
        description="Count of journal retrieval calls by source and outcome",
    )
    _retrieval_latency_hist = meter.create_histogram(
        "powerlog_journal_retrieval_latency_ms",
        unit="ms",
        description="Latency of journal retrieval calls",
    )
    _skipped_line_counter = meter.create_counter(
        "powerlog_skipped_lines_total",
        unit="1",
        description="Journal lines dropped as malformed",
    )
    _sessions_counter = meter.create_counter(
        "powerlog_sessions_total",
        unit="1",
        description="Reconstructed sessions by outcome",
    )

    _trace_provider = trace_provider
    _meter_provider = meter_provider
    _tracer = tracer
    _fastapi_instrumentor = FastAPIInstrumentor()
    _enabled = True

    if app:
        _fastapi_instrumentor.instrument_app(app)

    if config.PROM_PORT > 0:
        try:
            from prometheus_client import Counter, Histogram, start_http_server

            start_http_server(config.PROM_PORT)
            _prom_enabled = True
            _prom_retrieval_counter = Counter(
                "powerlog_journal_retrievals_total",
                "Count of journal retrieval calls by source and outcome",
                ["source", "result", "host"],
            )
            _prom_retrieval_latency_hist = Histogram(
                "powerlog_journal_retrieval_latency_ms",
                "Latency of journal retrieval calls",
                ["source", "result", "host"],
            )
            _prom_skipped_line_counter = Counter(
                "powerlog_skipped_lines_total",
                "Journal lines dropped as malformed",
                ["parser", "host"],
            )
            _prom_sessions_counter = Counter(
                "powerlog_sessions_total",
                "Reconstructed sessions by outcome",
                ["outcome", "host"],
            )
            logger.info("Prometheus fallback metrics server listening on port %s", config.PROM_PORT)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Prometheus fallback not started: %s", exc)
            _prom_enabled = False

    logger.info(
        "OpenTelemetry initialized (service=%s endpoint=%s)",
        service_name,
        config.OTEL_ENDPOINT,
    )


def shutdown(app: FastAPI | None = None) -> None:
    global _enabled
    if not _initialized:
        return
    if app and _fastapi_instrumentor:
        _fastapi_instrumentor.uninstrument_app(app)
    for provider in (_meter_provider, _trace_provider):
        if provider is not None:
            provider.shutdown()
    _enabled = False


@contextmanager
def start_span(name: str, attributes: dict[str, Any] | None = None):
    if not _enabled or _tracer is None:
        yield None
        return
    present = {key: value for key, value in (attributes or {}).items() if value is not None}
    with _tracer.start_as_current_span(name, attributes=present) as span:
        yield span


def record_retrieval(source: str, result: str, duration_ms: float) -> None:
    labels = {
        "source": source or "unknown",
        "result": result or "unknown",
    }
    if _enabled and _retrieval_counter is not None:
        _retrieval_counter.add(1, labels)
    if _enabled and _retrieval_latency_hist is not None:
        _retrieval_latency_hist.record(max(0.0, float(duration_ms)), labels)
    if _prom_enabled and _prom_retrieval_counter is not None:
        _prom_retrieval_counter.labels(**_prom_labels(source=source, result=result)).inc()
    if _prom_enabled and _prom_retrieval_latency_hist is not None:
        prom = _prom_labels(source=source, result=result)
        _prom_retrieval_latency_hist.labels(**prom).observe(max(0.0, float(duration_ms)))


def record_skipped_line(parser: str) -> None:
    labels = {"parser": parser or "unknown"}
    if _enabled and _skipped_line_counter is not None:
        _skipped_line_counter.add(1, labels)
    if _prom_enabled and _prom_skipped_line_counter is not None:
        _prom_skipped_line_counter.labels(**_prom_labels(parser=parser)).inc()


def record_sessions(outcome: str, count: int = 1) -> None:
    safe_count = max(0, int(count))
    if safe_count == 0:
        return
    labels = {"outcome": outcome or "unknown"}
    if _enabled and _sessions_counter is not None:
        _sessions_counter.add(safe_count, labels)
    if _prom_enabled and _prom_sessions_counter is not None:
        _prom_sessions_counter.labels(**_prom_labels(outcome=outcome)).inc(safe_count)
