"""OpenTelemetry tracing initialization for backend calls."""
from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

from studyai.utils.logger import logger


def get_tracer() -> trace.Tracer:
    """Tracer used for spans around analysis and chat requests."""
    return trace.get_tracer("studyai")


def initialize_tracing(
    service_name: str = "studyai-client",
    service_version: str = "1.0.0",
    otlp_endpoint: Optional[str] = None,
    tracing_enabled: bool = True,
) -> Optional[TracerProvider]:
    """
    Initialize OpenTelemetry tracing for backend calls.

    Args:
        service_name: Name of the service for traces
        service_version: Version of the service
        otlp_endpoint: Optional OTLP endpoint URL (e.g., http://localhost:4318/v1/traces)
                      If None, uses console exporter
        tracing_enabled: Enable/disable tracing

    Returns:
        TracerProvider instance if tracing is enabled, None otherwise
    """
    if not tracing_enabled:
        logger.info("Tracing is disabled")
        return None

    try:
        resource = Resource.create(
            {
                "service.name": service_name,
                "service.version": service_version,
            }
        )

        tracer_provider = TracerProvider(resource=resource)
        trace.set_tracer_provider(tracer_provider)

        if otlp_endpoint:
            exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
            logger.info(f"Tracing initialized with OTLP exporter: {otlp_endpoint}")
        else:
            exporter = ConsoleSpanExporter()
            logger.info("Tracing initialized with console exporter")

        tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

        logger.info("OpenTelemetry tracing initialized successfully")
        return tracer_provider

    except Exception as e:
        logger.error(f"Failed to initialize tracing: {str(e)}", exc_info=True)
        return None


def shutdown_tracing(tracer_provider: Optional[TracerProvider]) -> None:
    """
    Shutdown tracing gracefully.

    Args:
        tracer_provider: TracerProvider instance to shutdown
    """
    if tracer_provider:
        try:
            tracer_provider.shutdown()
            logger.info("Tracing shutdown completed")
        except Exception as e:
            logger.warning(f"Error during tracing shutdown: {str(e)}")
