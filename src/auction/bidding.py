"""
Auction Bidding: single-item auction state and second-price finalization.
"""

import bisect
import itertools
import threading
import logging
from typing import Dict, Hashable, List, Optional, Tuple

from observability.metrics import finalize_latency, track_time
from .models import AuctionResult, AuctionStatus, Bid, BidOutcome

logger = logging.getLogger(__name__)

# Ladder key: (-amount, insertion sequence). Sorting ascending puts the
# highest amount first and, among equal amounts, the earliest accepted bid.
_LadderKey = Tuple[float, int]


class Auction:
    """
    One item's auction.

    Responsibilities:
    - Accept bids up to and including the close time
    - Keep at most one live bid per bidder (bidders may only raise)
    - Finalize once under the second-price rule

    All state is guarded by a per-instance lock, so place_bid and finalize
    on the same auction are mutually exclusive while different auctions
    never contend.
    """

    def __init__(self, item: str, reserve_price: float, close_time: int):
        """
        Initialize auction.

        Args:
            item: Item identifier
            reserve_price: Minimum clearing price
            close_time: Last logical timestamp at which bids are accepted
        """
        self.item = item
        self.reserve_price = reserve_price
        self.close_time = close_time
        self.result: Optional[AuctionResult] = None
        self._closed = False
        self._ladder: List[_LadderKey] = []
        self._bids: Dict[int, Bid] = {}
        self._by_bidder: Dict[Hashable, _LadderKey] = {}
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def place_bid(self, bid: Bid) -> BidOutcome:
        """
        Place a bid in the auction.

        Args:
            bid: Bid to place

        Returns:
            BidOutcome.ACCEPTED, or the reason the bid was ignored
        """
        with self._lock:
            if self._closed:
                outcome = BidOutcome.CLOSED
            elif bid.submitted_at > self.close_time:
                outcome = BidOutcome.LATE
            else:
                previous = self._by_bidder.get(bid.bidder)
                if previous is not None and self._bids[previous[1]].amount >= bid.amount:
                    outcome = BidOutcome.NOT_IMPROVED
                else:
                    if previous is not None:
                        self._remove(previous)
                    key = (-bid.amount, next(self._sequence))
                    bisect.insort(self._ladder, key)
                    self._bids[key[1]] = bid
                    self._by_bidder[bid.bidder] = key
                    outcome = BidOutcome.ACCEPTED

        logger.debug(
            f"[AUCTION] {self.item}: bid {bid.amount} from {bid.bidder} "
            f"at t={bid.submitted_at} -> {outcome.value}"
        )
        return outcome

    def _remove(self, key: _LadderKey):
        """Drop a ladder entry (caller holds the lock)."""
        index = bisect.bisect_left(self._ladder, key)
        del self._ladder[index]
        del self._bids[key[1]]

    @track_time(finalize_latency)
    def finalize(self) -> AuctionResult:
        """
        Close the auction and compute its result.

        The first call produces the permanent result (also kept on
        self.result). Later calls return an empty UNSOLD result.

        Returns:
            AuctionResult for this auction
        """
        with self._lock:
            if self._closed:
                logger.warning(f"[AUCTION] {self.item} already finalized")
                return AuctionResult.unsold(self.item, self.close_time)

            self._closed = True
            self.result = self._compute_result()

        logger.info(
            f"[AUCTION] Finalized {self.item}: {self.result.status.value} "
            f"winner={self.result.winner} price={self.result.price_paid} "
            f"bids={self.result.total_bid_count}"
        )
        return self.result

    def _compute_result(self) -> AuctionResult:
        total_bid_count = len(self._ladder)
        if total_bid_count == 0:
            return AuctionResult.unsold(self.item, self.close_time)

        highest_bid = -self._ladder[0][0]
        lowest_bid = -self._ladder[-1][0]

        if highest_bid < self.reserve_price:
            return AuctionResult.unsold(
                self.item, self.close_time, total_bid_count, highest_bid, lowest_bid
            )

        winning_bid = self._bids[self._ladder[0][1]]
        # Second price: next entry on the ladder, else the reserve
        if total_bid_count > 1:
            price_paid = -self._ladder[1][0]
        else:
            price_paid = self.reserve_price

        return AuctionResult(
            item=self.item,
            close_time=self.close_time,
            winner=winning_bid.bidder,
            status=AuctionStatus.SOLD,
            price_paid=price_paid,
            total_bid_count=total_bid_count,
            highest_bid=highest_bid,
            lowest_bid=lowest_bid,
        )

    def get_bids(self) -> List[Bid]:
        """Accepted bids, highest first (ties in acceptance order)."""
        with self._lock:
            return [self._bids[seq] for _, seq in self._ladder]

    def bid_for(self, bidder: Hashable) -> Optional[Bid]:
        """Bidder's live bid, if any."""
        with self._lock:
            key = self._by_bidder.get(bidder)
            return self._bids[key[1]] if key is not None else None
