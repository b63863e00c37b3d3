"""
Auction value types: bids, results, and bid outcomes.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Hashable, Optional


class AuctionStatus(Enum):
    """Final status of an auction"""
    SOLD = "SOLD"
    UNSOLD = "UNSOLD"


class BidOutcome(Enum):
    """What happened to a submitted bid"""
    ACCEPTED = "ACCEPTED"
    LATE = "LATE"                   # Submitted after close time
    NOT_IMPROVED = "NOT_IMPROVED"   # Does not exceed bidder's own previous bid
    CLOSED = "CLOSED"               # Auction already finalized
    UNKNOWN_ITEM = "UNKNOWN_ITEM"   # No active auction for item


@dataclass(frozen=True)
class Bid:
    """Single bid on an item"""
    bidder: Hashable        # Bidder identity
    amount: float           # Positive bid amount
    submitted_at: int       # Logical timestamp


@dataclass(frozen=True)
class AuctionResult:
    """Outcome of a finalized auction"""
    item: str
    close_time: int
    winner: Optional[Hashable]  # None when unsold
    status: AuctionStatus
    price_paid: float
    total_bid_count: int
    highest_bid: float
    lowest_bid: float

    @classmethod
    def unsold(
        cls,
        item: str,
        close_time: int,
        total_bid_count: int = 0,
        highest_bid: float = 0.0,
        lowest_bid: float = 0.0,
    ) -> "AuctionResult":
        """Build an UNSOLD result (no winner, nothing paid)."""
        return cls(
            item=item,
            close_time=close_time,
            winner=None,
            status=AuctionStatus.UNSOLD,
            price_paid=0.0,
            total_bid_count=total_bid_count,
            highest_bid=highest_bid,
            lowest_bid=lowest_bid,
        )
