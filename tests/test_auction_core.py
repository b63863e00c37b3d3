"""
Unit tests for single-item auctions.

Tests:
- Bid acceptance window (inclusive close time)
- Per-bidder raise-only rule
- Second-price finalization and reserve handling
- Tie-breaking by acceptance order
- Double finalization
"""

import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest
from auction.bidding import Auction
from auction.models import AuctionResult, AuctionStatus, Bid, BidOutcome


def bid(bidder, amount, at=1):
    return Bid(bidder=bidder, amount=amount, submitted_at=at)


class TestPlaceBid:
    """Test bid acceptance rules"""

    def test_accept_bid(self):
        """Verify a bid within the window is accepted"""
        auction = Auction("item1", 10.0, 100)

        assert auction.place_bid(bid("alice", 15.0, at=2)) is BidOutcome.ACCEPTED
        assert auction.bid_for("alice") == bid("alice", 15.0, at=2)

    def test_bid_at_close_time_accepted(self):
        """Verify the close time itself is inside the window"""
        auction = Auction("item1", 10.0, 100)

        assert auction.place_bid(bid("alice", 15.0, at=100)) is BidOutcome.ACCEPTED

    def test_late_bid_rejected(self):
        """Verify bids after close time are dropped"""
        auction = Auction("item1", 10.0, 100)

        assert auction.place_bid(bid("alice", 15.0, at=101)) is BidOutcome.LATE
        assert auction.get_bids() == []

    def test_bidder_can_raise(self):
        """Verify a higher re-bid replaces the bidder's previous bid"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("alice", 12.0, at=1))

        assert auction.place_bid(bid("alice", 14.0, at=2)) is BidOutcome.ACCEPTED

        bids = auction.get_bids()
        assert len(bids) == 1
        assert bids[0].amount == 14.0

    @pytest.mark.parametrize("amount", [12.0, 11.0])
    def test_equal_or_lower_rebid_ignored(self, amount):
        """Verify a re-bid must strictly exceed the bidder's own bid"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("alice", 12.0, at=1))

        assert auction.place_bid(bid("alice", amount, at=2)) is BidOutcome.NOT_IMPROVED
        assert auction.bid_for("alice").amount == 12.0

    def test_bids_sorted_highest_first(self):
        """Verify the ladder orders by amount, then acceptance order"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("a", 12.0))
        auction.place_bid(bid("b", 20.0))
        auction.place_bid(bid("c", 12.0))

        assert [b.bidder for b in auction.get_bids()] == ["b", "a", "c"]

    def test_bid_after_finalize_rejected(self):
        """Verify a finalized auction accepts nothing"""
        auction = Auction("item1", 10.0, 100)
        auction.finalize()

        assert auction.place_bid(bid("alice", 50.0, at=50)) is BidOutcome.CLOSED
        assert auction.get_bids() == []


class TestFinalize:
    """Test finalization and the second-price rule"""

    def test_no_bids_unsold(self):
        """Verify an auction without bids is UNSOLD with zeroed statistics"""
        auction = Auction("item1", 10.0, 100)

        result = auction.finalize()

        assert result == AuctionResult(
            item="item1",
            close_time=100,
            winner=None,
            status=AuctionStatus.UNSOLD,
            price_paid=0.0,
            total_bid_count=0,
            highest_bid=0.0,
            lowest_bid=0.0,
        )

    def test_single_bid_pays_reserve(self):
        """Verify a lone bid above reserve pays the reserve"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("2", 15.0, at=2))

        result = auction.finalize()

        assert result.status is AuctionStatus.SOLD
        assert result.winner == "2"
        assert result.price_paid == 10.0
        assert result.total_bid_count == 1
        assert result.highest_bid == 15.0
        assert result.lowest_bid == 15.0

    def test_highest_bidder_pays_second_price(self):
        """Verify the winner pays the next-highest bid"""
        auction = Auction("item2", 10.0, 100)
        auction.place_bid(bid("2", 12.0, at=2))
        auction.place_bid(bid("3", 15.0, at=3))

        result = auction.finalize()

        assert result.winner == "3"
        assert result.status is AuctionStatus.SOLD
        assert result.price_paid == 12.0
        assert result.total_bid_count == 2
        assert result.highest_bid == 15.0
        assert result.lowest_bid == 12.0

    def test_bid_exactly_at_reserve_sells(self):
        """Verify reserve is a minimum, not an exclusive bound"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("a", 10.0))

        result = auction.finalize()

        assert result.status is AuctionStatus.SOLD
        assert result.price_paid == 10.0

    def test_all_bids_below_reserve(self):
        """Verify statistics still reflect real bids when unsold"""
        auction = Auction("item1", 20.0, 100)
        auction.place_bid(bid("a", 12.0))
        auction.place_bid(bid("b", 15.0))
        auction.place_bid(bid("c", 8.0))

        result = auction.finalize()

        assert result.status is AuctionStatus.UNSOLD
        assert result.winner is None
        assert result.price_paid == 0.0
        assert result.total_bid_count == 3
        assert result.highest_bid == 15.0
        assert result.lowest_bid == 8.0

    def test_raised_bid_counted_once(self):
        """Verify a superseded bid is not double counted"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("a", 12.0, at=1))
        auction.place_bid(bid("b", 13.0, at=2))
        auction.place_bid(bid("a", 18.0, at=3))

        result = auction.finalize()

        assert result.total_bid_count == 2
        assert result.winner == "a"
        assert result.price_paid == 13.0
        assert result.lowest_bid == 13.0

    def test_tie_goes_to_earliest_accepted(self):
        """Verify equal top amounts resolve to the first accepted bid"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("first", 20.0, at=5))
        auction.place_bid(bid("second", 20.0, at=3))

        result = auction.finalize()

        assert result.winner == "first"
        assert result.price_paid == 20.0
        assert result.total_bid_count == 2

    def test_tie_after_raise_uses_raise_order(self):
        """Verify a raise re-enters the ladder at its own acceptance position"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("a", 15.0))
        auction.place_bid(bid("b", 20.0))
        auction.place_bid(bid("a", 20.0))

        assert auction.finalize().winner == "b"

    def test_result_cached(self):
        """Verify the first result is kept on the auction"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("a", 15.0))

        result = auction.finalize()

        assert auction.closed is True
        assert auction.result is result

    def test_double_finalize_returns_unsold(self):
        """Verify re-finalization yields an empty UNSOLD result"""
        auction = Auction("item1", 10.0, 100)
        auction.place_bid(bid("a", 15.0))
        first = auction.finalize()

        second = auction.finalize()

        assert second == AuctionResult.unsold("item1", 100)
        assert auction.result is first
        assert first.status is AuctionStatus.SOLD
