"""Prometheus metrics for the auction market.

Tracks listings, bid outcomes, finalizations, and heartbeat sweep latency.
"""

from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    generate_latest,
    REGISTRY,
)
import time
from functools import wraps


# ============================================================================
# CORE METRICS
# ============================================================================

auctions_listed_total = Counter(
    "auction_market_auctions_listed_total",
    "Total number of items listed for auction",
)

bids_total = Counter(
    "auction_market_bids_total",
    "Total number of bids submitted, by outcome",
    ["outcome"],
)

auctions_finalized_total = Counter(
    "auction_market_auctions_finalized_total",
    "Total number of auctions finalized, by status",
    ["status"],
)

active_auctions = Gauge(
    "auction_market_active_auctions",
    "Number of auctions currently open or awaiting finalization",
)

# Latency histograms
finalize_latency = Histogram(
    "auction_market_finalize_latency_seconds",
    "Time to finalize a single auction",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
)

sweep_latency = Histogram(
    "auction_market_sweep_latency_seconds",
    "Time to run a full heartbeat sweep",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)


# ============================================================================
# HELPER FUNCTIONS & DECORATORS
# ============================================================================


def track_time(histogram):
    """
    Decorator to automatically track execution time.

    Args:
        histogram: Prometheus Histogram to record time

    Example:
        @track_time(finalize_latency)
        def finalize(self):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                histogram.observe(time.perf_counter() - start_time)

        return wrapper

    return decorator


class MetricsContext:
    """
    Context manager for tracking latency.

    Example:
        with MetricsContext(sweep_latency):
            run_sweep()
    """

    def __init__(self, histogram):
        self.histogram = histogram
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.histogram.observe(time.perf_counter() - self.start_time)
        return False


# ============================================================================
# METRICS COLLECTOR
# ============================================================================


class MetricsCollector:
    """
    Centralized metrics recording and export.
    """

    def record_listing(self):
        """Record a new listing."""
        auctions_listed_total.inc()

    def record_bid(self, outcome: str):
        """
        Record a bid submission.

        Args:
            outcome: BidOutcome value, e.g. 'ACCEPTED' or 'LATE'
        """
        bids_total.labels(outcome=outcome).inc()

    def record_finalized(self, status: str):
        """Record a finalized auction ('SOLD' or 'UNSOLD')."""
        auctions_finalized_total.labels(status=status).inc()

    def set_active_auctions(self, count: int):
        """Set the number of active auctions."""
        active_auctions.set(count)

    def sweep_timer(self) -> MetricsContext:
        """Context manager timing one heartbeat sweep."""
        return MetricsContext(sweep_latency)

    def get_metrics(self) -> bytes:
        """
        Get metrics in Prometheus format.

        Returns:
            Metrics as bytes in Prometheus exposition format
        """
        return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()
