"""
Auction events: structured event shapes, pipe-delimited line codec, and dispatch.

Line formats:
    timestamp|user_id|SELL|item|reserve_price|close_time
    timestamp|user_id|BID|item|amount
    timestamp

Result lines:
    close_time|item|winner|status|price_paid|total_bid_count|highest_bid|lowest_bid
"""

from dataclasses import dataclass
from typing import List, Union

from .errors import EventParseError
from .manager import AuctionManager
from .models import AuctionResult, Bid


@dataclass(frozen=True)
class ListItem:
    """List an item for auction"""
    item: str
    reserve_price: float
    close_time: int


@dataclass(frozen=True)
class PlaceBid:
    """Bid on a listed item"""
    item: str
    bidder: str
    amount: float
    timestamp: int


@dataclass(frozen=True)
class AdvanceTime:
    """Heartbeat advancing logical time"""
    timestamp: int


Event = Union[ListItem, PlaceBid, AdvanceTime]

SELL_FIELDS = 6
BID_FIELDS = 5


def _int_field(line: str, value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise EventParseError(line, f"{name} must be an integer, got {value!r}") from None


def _float_field(line: str, value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise EventParseError(line, f"{name} must be a number, got {value!r}") from None


def parse_event(line: str) -> Event:
    """
    Parse one pipe-delimited event line.

    Args:
        line: Raw line (surrounding whitespace ignored)

    Returns:
        ListItem, PlaceBid, or AdvanceTime

    Raises:
        EventParseError: If the line matches no known format
    """
    stripped = line.strip()
    parts = [part.strip() for part in stripped.split("|")]

    if len(parts) == 1:
        if not parts[0]:
            raise EventParseError(line, "empty line")
        return AdvanceTime(timestamp=_int_field(line, parts[0], "timestamp"))

    action = parts[2] if len(parts) > 2 else ""

    if action == "SELL":
        if len(parts) != SELL_FIELDS:
            raise EventParseError(line, f"SELL expects {SELL_FIELDS} fields, got {len(parts)}")
        return ListItem(
            item=parts[3],
            reserve_price=_float_field(line, parts[4], "reserve_price"),
            close_time=_int_field(line, parts[5], "close_time"),
        )

    if action == "BID":
        if len(parts) != BID_FIELDS:
            raise EventParseError(line, f"BID expects {BID_FIELDS} fields, got {len(parts)}")
        return PlaceBid(
            item=parts[3],
            bidder=parts[1],
            amount=_float_field(line, parts[4], "amount"),
            timestamp=_int_field(line, parts[0], "timestamp"),
        )

    raise EventParseError(line, f"unknown action {action!r}")


def format_result(result: AuctionResult) -> str:
    """
    Serialize a result as a pipe-delimited line.

    The winner field is empty when the item is unsold.
    """
    winner = "" if result.winner is None else str(result.winner)
    return "|".join([
        str(result.close_time),
        result.item,
        winner,
        result.status.value,
        f"{result.price_paid:.2f}",
        str(result.total_bid_count),
        f"{result.highest_bid:.2f}",
        f"{result.lowest_bid:.2f}",
    ])


def dispatch(manager: AuctionManager, event: Event) -> List[AuctionResult]:
    """
    Apply one event to a manager.

    Args:
        manager: Target manager
        event: Parsed event

    Returns:
        Results finalized by the event (only heartbeats produce any)
    """
    if isinstance(event, ListItem):
        manager.create_auction(event.item, event.reserve_price, event.close_time)
        return []
    if isinstance(event, PlaceBid):
        bid = Bid(bidder=event.bidder, amount=event.amount, submitted_at=event.timestamp)
        manager.place_bid(event.item, bid)
        return []
    if isinstance(event, AdvanceTime):
        return manager.advance_time(event.timestamp)
    raise TypeError(f"Unsupported event type: {type(event).__name__}")
