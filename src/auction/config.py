"""
Auction configuration.

Values can be set directly or loaded from environment variables:

    AUCTION_REJECT_RELISTING=true   reject listings for already-active items
    AUCTION_METRICS_ENABLED=false   disable Prometheus metrics
    AUCTION_TRACING_ENABLED=true    enable OpenTelemetry tracing
    AUCTION_SERVICE_NAME            service name for traces
    OTEL_EXPORTER_OTLP_ENDPOINT     OTLP collector endpoint
"""

import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = ("true", "1", "yes")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class AuctionConfig:
    """Configuration for auction behavior"""
    reject_active_relisting: bool = False
    metrics_enabled: bool = True
    tracing_enabled: bool = False
    service_name: str = "auction-market"
    otlp_endpoint: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AuctionConfig":
        """
        Build configuration from environment variables.

        Returns:
            AuctionConfig with defaults for unset variables
        """
        return cls(
            reject_active_relisting=_env_flag("AUCTION_REJECT_RELISTING", False),
            metrics_enabled=_env_flag("AUCTION_METRICS_ENABLED", True),
            tracing_enabled=_env_flag("AUCTION_TRACING_ENABLED", False),
            service_name=os.getenv("AUCTION_SERVICE_NAME", "auction-market"),
            otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
        )
