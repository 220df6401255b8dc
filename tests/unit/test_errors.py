"""Tests for am_common.errors and am_common.response."""

from unittest.mock import MagicMock

from src.am_common.errors import (
    AlreadyInWatchlistError,
    AppError,
    AuctionNotActiveError,
    AuctionNotFoundError,
    BidTooLowError,
    CronUnauthorizedError,
    InternalError,
    InvalidRatingError,
    InvalidStatusTransitionError,
    NoPaymentMethodError,
    NotAuctionOwnerError,
    RateLimitError,
    SelfReviewError,
    WatchlistEntryNotFoundError,
)
from src.am_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=2001, message="gone", http_status=404)
        assert err.http_status == 404

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="x"), Exception)


class TestSpecificErrors:
    def test_cron_unauthorized(self) -> None:
        err = CronUnauthorizedError()
        assert err.code == 1002
        assert err.http_status == 401

    def test_auction_not_found(self) -> None:
        err = AuctionNotFoundError("a-1")
        assert err.code == 2001
        assert err.http_status == 404
        assert "a-1" in err.message

    def test_auction_not_active(self) -> None:
        err = AuctionNotActiveError("a-1")
        assert err.code == 2002
        assert err.http_status == 422

    def test_not_owner_is_forbidden(self) -> None:
        assert NotAuctionOwnerError().http_status == 403

    def test_invalid_transition_names_both_states(self) -> None:
        err = InvalidStatusTransitionError("active", "draft")
        assert err.http_status == 400
        assert "active" in err.message and "draft" in err.message

    def test_bid_too_low_mentions_minimum(self) -> None:
        err = BidTooLowError(1100)
        assert err.code == 3001
        assert "1100" in err.message

    def test_no_payment_method(self) -> None:
        err = NoPaymentMethodError()
        assert err.code == 4001
        assert err.http_status == 400

    def test_review_validation_errors_are_400(self) -> None:
        assert SelfReviewError().http_status == 400
        assert InvalidRatingError().http_status == 400

    def test_watchlist_errors(self) -> None:
        assert AlreadyInWatchlistError().http_status == 409
        assert AlreadyInWatchlistError().code == 6001
        assert WatchlistEntryNotFoundError("t-1").http_status == 404

    def test_rate_limit(self) -> None:
        err = RateLimitError()
        assert err.code == 9001
        assert err.http_status == 429

    def test_internal_error_default_message(self) -> None:
        err = InternalError()
        assert err.code == 9002
        assert err.message == "Internal server error"


class TestApiResponse:
    def test_success_response(self) -> None:
        resp = success_response({"id": 1})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"id": 1}
        assert resp.request_id.startswith("req_")

    def test_error_response(self) -> None:
        resp = error_response(2001, "Auction not found: x")
        assert resp.code == 2001
        assert resp.data is None

    def test_request_id_taken_from_request_state(self) -> None:
        request = MagicMock()
        request.state.request_id = "req_abc123"
        assert success_response(None, request).request_id == "req_abc123"
        assert error_response(1, "x", request).request_id == "req_abc123"

    def test_timestamp_is_iso(self) -> None:
        resp = ApiResponse()
        assert "T" in resp.timestamp
