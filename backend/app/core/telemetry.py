"""OpenTelemetry wiring and the portfolio valuation instruments."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes
from sqlalchemy.ext.asyncio import AsyncEngine

from app.config import AppSettings

logger = logging.getLogger(__name__)

_TELEMETRY_INITIALISED = False
_METRIC_EXPORT_INTERVAL_MS = 10000

# Bound to the real provider once setup_telemetry installs one; no-ops before that.
_meter = metrics.get_meter("portfolio_tracker")
_valuations = _meter.create_counter(
    "portfolio.valuations",
    unit="1",
    description="Portfolio valuations computed from the trade ledger",
)
_unmatched_sells = _meter.create_counter(
    "portfolio.unmatched_sell_quantity",
    unit="shares",
    description="Sold shares that found no open buy lot and were ignored",
)


def record_valuation(trade_count: int, holding_count: int, unmatched: Mapping[str, int]) -> None:
    """Count one valuation run and any oversold quantity per symbol."""

    _valuations.add(1, {"ledger.empty": trade_count == 0, "portfolio.has_holdings": holding_count > 0})
    for symbol, quantity in unmatched.items():
        if quantity:
            _unmatched_sells.add(quantity, {"symbol": symbol})


def setup_telemetry(
    app: FastAPI,
    settings: AppSettings,
    engine: AsyncEngine | None = None,
    *,
    metric_reader: MetricReader | None = None,
) -> bool:
    """Install OTLP pipelines and instrument FastAPI plus SQLAlchemy.

    ``metric_reader`` replaces the periodic OTLP reader. Returns ``True`` only
    for the call that actually installed the providers.
    """

    global _TELEMETRY_INITIALISED  # noqa: PLW0603 - single initialisation guard

    if _TELEMETRY_INITIALISED:
        return False

    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled via configuration")
        return False

    resource = Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: settings.telemetry_service_name or settings.app_name,
            ResourceAttributes.SERVICE_NAMESPACE: "portfolio-tracker",
        }
    )
    exporter_options: dict[str, Any] = {"insecure": settings.telemetry_otlp_insecure}
    if settings.telemetry_otlp_endpoint:
        exporter_options["endpoint"] = settings.telemetry_otlp_endpoint

    tracer_provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_ratio)),
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**exporter_options)))
    trace.set_tracer_provider(tracer_provider)

    reader = metric_reader or PeriodicExportingMetricReader(
        OTLPMetricExporter(**exporter_options),
        export_interval_millis=_METRIC_EXPORT_INTERVAL_MS,
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(meter_provider)

    _export_logs(resource, exporter_options)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=tracer_provider, meter_provider=meter_provider)
    if engine is not None:
        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine, tracer_provider=tracer_provider)

    _TELEMETRY_INITIALISED = True
    logger.info("Telemetry initialised for %s", settings.telemetry_service_name)
    return True


def _export_logs(resource: Resource, exporter_options: dict[str, Any]) -> None:
    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(OTLPLogExporter(**exporter_options)))
    set_logger_provider(logger_provider)
    # Trace ids on stdout records, and the same records shipped over OTLP.
    LoggingInstrumentor().instrument(set_logging_format=False)
    logging.getLogger().addHandler(LoggingHandler(level=logging.INFO, logger_provider=logger_provider))


__all__ = ["record_valuation", "setup_telemetry"]
