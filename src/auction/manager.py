"""
Auction Manager: registry of active auctions, bid routing, and heartbeat sweeps.
"""

import threading
import logging
from contextlib import nullcontext
from typing import Dict, List, Optional

from observability.metrics import MetricsCollector, metrics_collector
from observability.tracing import create_span
from .bidding import Auction
from .config import AuctionConfig
from .errors import AuctionAlreadyActiveError, AuctionAlreadyFinalizedError
from .models import AuctionResult, Bid, BidOutcome

logger = logging.getLogger(__name__)


class AuctionManager:
    """
    Manage many concurrently active auctions.

    Responsibilities:
    - List items (create auctions)
    - Route bids to the right auction
    - Finalize due auctions on heartbeat and archive their results

    The active registry and result archive are plain dicts, relying on
    atomic single-key get/set/pop. Listing and sweeping share one lock so
    a sweep always sees a consistent set of due auctions.
    """

    def __init__(
        self,
        config: Optional[AuctionConfig] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize auction manager.

        Args:
            config: Optional auction configuration
            metrics: Metrics collector (defaults to the global one when
                metrics are enabled)
        """
        self.config = config or AuctionConfig()
        if metrics is None and self.config.metrics_enabled:
            metrics = metrics_collector
        self._metrics = metrics
        self._auctions: Dict[str, Auction] = {}
        self._results: Dict[str, AuctionResult] = {}
        self._lock = threading.Lock()

    def create_auction(self, item: str, reserve_price: float, close_time: int) -> None:
        """
        List an item for auction.

        An existing active auction for the same item is replaced and its
        bids discarded, unless config.reject_active_relisting is set.
        Finalized items are never listed again.

        Args:
            item: Item identifier
            reserve_price: Minimum clearing price
            close_time: Logical close timestamp

        Raises:
            AuctionAlreadyActiveError: If the item is active and strict
                relisting is enabled
            AuctionAlreadyFinalizedError: If the item is finalized and strict
                relisting is enabled
        """
        with self._lock:
            if item in self._results:
                if self.config.reject_active_relisting:
                    raise AuctionAlreadyFinalizedError(item)
                logger.warning(f"[AUCTION] Item {item} already finalized, listing ignored")
                return

            if item in self._auctions:
                if self.config.reject_active_relisting:
                    raise AuctionAlreadyActiveError(item)
                logger.warning(
                    f"[AUCTION] Relisting active item {item}, discarding outstanding bids"
                )

            self._auctions[item] = Auction(item, reserve_price, close_time)
            if self._metrics:
                self._metrics.record_listing()
                self._metrics.set_active_auctions(len(self._auctions))

        logger.info(
            f"[AUCTION] Listed {item} (reserve: {reserve_price}, close: {close_time})"
        )

    def place_bid(self, item: str, bid: Bid) -> BidOutcome:
        """
        Route a bid to the active auction for an item.

        Args:
            item: Item identifier
            bid: Bid to place

        Returns:
            BidOutcome; UNKNOWN_ITEM if no auction is active for the item
        """
        auction = self._auctions.get(item)
        if auction is None:
            logger.debug(f"[AUCTION] Bid from {bid.bidder} for unknown item {item} ignored")
            outcome = BidOutcome.UNKNOWN_ITEM
        else:
            outcome = auction.place_bid(bid)

        if self._metrics:
            self._metrics.record_bid(outcome.value)
        return outcome

    def advance_time(self, timestamp: int) -> List[AuctionResult]:
        """
        Heartbeat: finalize every auction whose close time has passed.

        Args:
            timestamp: Current logical time

        Returns:
            Newly archived results, ordered by (close_time, item)
        """
        finalized: List[AuctionResult] = []

        with create_span("auction.advance_time", {"timestamp": timestamp}):
            timer = self._metrics.sweep_timer() if self._metrics else nullcontext()
            with self._lock, timer:
                due = [
                    auction for auction in self._auctions.values()
                    if auction.close_time <= timestamp
                ]
                for auction in due:
                    finalized.append(self._finalize(auction))
                if self._metrics:
                    self._metrics.set_active_auctions(len(self._auctions))

        if self._metrics:
            for result in finalized:
                self._metrics.record_finalized(result.status.value)

        if finalized:
            logger.info(f"[AUCTION] Heartbeat t={timestamp} finalized {len(finalized)} auction(s)")

        finalized.sort(key=lambda r: (r.close_time, r.item))
        return finalized

    def _finalize(self, auction: Auction) -> AuctionResult:
        """Finalize, archive, and retire one auction (caller holds the lock)."""
        with create_span("auction.finalize", {"item": auction.item}):
            result = auction.finalize()

        del self._auctions[auction.item]
        self._results[auction.item] = result
        return result

    def get_result(self, item: str) -> Optional[AuctionResult]:
        """
        Get the archived result for an item.

        Args:
            item: Item identifier

        Returns:
            AuctionResult, or None if the item has not been finalized
        """
        return self._results.get(item)

    def get_auction(self, item: str) -> Optional[Auction]:
        """Get the active auction for an item, if any."""
        return self._auctions.get(item)

    def active_items(self) -> List[str]:
        """Items with an active auction."""
        return list(self._auctions)

    def results(self) -> Dict[str, AuctionResult]:
        """Snapshot of all archived results."""
        return dict(self._results)
