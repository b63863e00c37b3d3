"""
Auction module: time-driven second-price auctions.
"""

from .models import AuctionResult, AuctionStatus, Bid, BidOutcome
from .bidding import Auction
from .manager import AuctionManager
from .config import AuctionConfig
from .errors import (
    AuctionError,
    AuctionAlreadyActiveError,
    AuctionAlreadyFinalizedError,
    EventParseError,
)
from .events import ListItem, PlaceBid, AdvanceTime, parse_event, format_result, dispatch

__all__ = [
    "Auction",
    "AuctionManager",
    "AuctionConfig",
    "AuctionResult",
    "AuctionStatus",
    "Bid",
    "BidOutcome",
    "AuctionError",
    "AuctionAlreadyActiveError",
    "AuctionAlreadyFinalizedError",
    "EventParseError",
    "ListItem",
    "PlaceBid",
    "AdvanceTime",
    "parse_event",
    "format_result",
    "dispatch",
]
