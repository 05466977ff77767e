import logging
import os

from opentelemetry import trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import start_http_server

from src.config import MembershipConfig
from src.shared.telemetry import Telemetry

telemetry = Telemetry("Observability")


def configure_observability(start_metrics_server: bool = True) -> bool:
    """
    Configures OpenTelemetry to export Traces and Logs via OTLP and,
    optionally, starts a background Prometheus server for Metrics.

    Returns True when OTLP export was configured.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    headers = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")

    if start_metrics_server:
        _start_metrics_server(MembershipConfig.METRICS_PORT)

    if not endpoint or not headers:
        telemetry.log_warning(
            "OTEL env vars not set. Traces and logs stay local.",
            service=MembershipConfig.SERVICE_NAME,
        )
        return False

    resource = Resource.create({"service.name": MembershipConfig.SERVICE_NAME})

    # --- A. TRACING ---
    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, headers=headers))
    )
    trace.set_tracer_provider(trace_provider)

    # --- B. LOGGING ---
    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(
        BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, headers=headers))
    )
    set_logger_provider(logger_provider)

    # Root handler so every component logger reaches the exporter
    handler = LoggingHandler(level=logging.INFO, logger_provider=logger_provider)
    logging.getLogger().addHandler(handler)

    telemetry.log_info("OTLP export configured", endpoint=endpoint)
    return True


def _start_metrics_server(port: int) -> None:
    try:
        start_http_server(port)
        telemetry.log_info("Prometheus metrics server started", port=port)
    except OSError:
        telemetry.log_warning("Prometheus port already in use. Skipping.", port=port)
