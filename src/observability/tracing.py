"""
Distributed tracing with OpenTelemetry.

Provides spans around heartbeat sweeps and auction finalization. Until
setup_tracing() is called, spans go to the OpenTelemetry API's no-op tracer.
"""

import logging
from typing import Dict, Any, Optional, ContextManager
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.trace import Status, StatusCode, Span

logger = logging.getLogger(__name__)

# Global tracer instance
_tracer: Optional[trace.Tracer] = None
_tracer_provider: Optional[TracerProvider] = None


def setup_tracing(
    service_name: str,
    otlp_endpoint: Optional[str] = None,
    console_export: bool = False,
    span_exporter: Optional[SpanExporter] = None,
) -> trace.Tracer:
    """
    Initialize OpenTelemetry tracing for the service.

    Args:
        service_name: Name of the service (e.g., "auction-market")
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: If True, also export spans to console for debugging
        span_exporter: Extra exporter, attached with a synchronous processor

    Returns:
        Configured tracer instance
    """
    global _tracer, _tracer_provider

    resource = Resource(attributes={SERVICE_NAME: service_name})
    _tracer_provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        try:
            otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
            _tracer_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
            logger.info(f"Configured OTLP exporter: {otlp_endpoint}")
        except Exception as e:
            logger.warning(f"Failed to configure OTLP exporter: {e}")

    if console_export:
        _tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("Configured console span exporter")

    if span_exporter is not None:
        _tracer_provider.add_span_processor(SimpleSpanProcessor(span_exporter))

    # Tracer comes from our provider so re-initialization takes effect even
    # though the global provider can only be set once per process.
    trace.set_tracer_provider(_tracer_provider)
    _tracer = _tracer_provider.get_tracer(__name__)

    logger.info(f"Initialized tracing for service: {service_name}")

    return _tracer


def get_tracer() -> trace.Tracer:
    """
    Get the configured tracer, or the API's default tracer before setup.

    Returns:
        Tracer instance
    """
    if _tracer is None:
        return trace.get_tracer(__name__)
    return _tracer


@contextmanager
def create_span(
    name: str,
    attributes: Optional[Dict[str, Any]] = None,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL,
) -> ContextManager[Span]:
    """
    Create a trace span with optional attributes.

    Usage:
        with create_span("auction.finalize", {"item": "item1"}):
            ...

    Args:
        name: Span name
        attributes: Optional span attributes, stringified
        kind: Span kind

    Yields:
        Active span
    """
    tracer = get_tracer()

    with tracer.start_as_current_span(name, kind=kind) as span:
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    span.set_attribute(key, str(value))

        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise


def shutdown_tracing():
    """
    Shutdown tracing and flush all pending spans.

    Should be called before application exit.
    """
    global _tracer, _tracer_provider

    if _tracer_provider:
        _tracer_provider.shutdown()
        logger.info("Tracing shutdown complete")
    _tracer = None
    _tracer_provider = None
