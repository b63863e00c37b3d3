"""
Auction exceptions.

Bid rejections are reported through BidOutcome, not exceptions. These cover
opt-in strict relisting and malformed event input.
"""


class AuctionError(Exception):
    """Base class for auction errors"""


class AuctionAlreadyActiveError(AuctionError):
    """Raised when listing an item that already has an active auction (strict mode only)"""

    def __init__(self, item: str):
        super().__init__(f"Auction already active for item: {item}")
        self.item = item


class EventParseError(AuctionError):
    """Raised when an event line cannot be parsed"""

    def __init__(self, line: str, reason: str):
        super().__init__(f"Cannot parse event line {line!r}: {reason}")
        self.line = line
        self.reason = reason


class AuctionAlreadyFinalizedError(AuctionError):
    """Raised when listing an item whose auction is already finalized (strict mode only)"""

    def __init__(self, item: str):
        super().__init__(f"Auction already finalized for item: {item}")
        self.item = item
