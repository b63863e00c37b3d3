"""
Observability module: Prometheus metrics and OpenTelemetry tracing.
"""

from .tracing import (
    setup_tracing,
    create_span,
    get_tracer,
    shutdown_tracing,
)
from .metrics import MetricsCollector, metrics_collector

__all__ = [
    'setup_tracing',
    'create_span',
    'get_tracer',
    'shutdown_tracing',
    'MetricsCollector',
    'metrics_collector',
]
