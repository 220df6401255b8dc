"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: Auction
  3xxx: Bid
  4xxx: Payment
  5xxx: Review
  6xxx: Watchlist
  7xxx: Notification
  8xxx: AI
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class InvalidTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


class CronUnauthorizedError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Unauthorized", 401)


# --- 2xxx: Auction ---

class AuctionNotFoundError(AppError):
    def __init__(self, auction_id: str) -> None:
        super().__init__(2001, f"Auction not found: {auction_id}", 404)


class AuctionNotActiveError(AppError):
    def __init__(self, auction_id: str) -> None:
        super().__init__(2002, f"Auction is not currently active: {auction_id}", 422)


class NotAuctionOwnerError(AppError):
    def __init__(self) -> None:
        super().__init__(2003, "Only the seller can modify this auction", 403)


class InvalidStatusTransitionError(AppError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            2004, f"Cannot change auction status from {current} to {target}", 400
        )


class InvalidAuctionError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2005, detail, 400)


# --- 3xxx: Bid ---

class BidTooLowError(AppError):
    def __init__(self, min_bid: int) -> None:
        super().__init__(3001, f"Bid must be at least {min_bid} cents", 422)


# --- 4xxx: Payment ---

class NoPaymentMethodError(AppError):
    def __init__(self) -> None:
        super().__init__(4001, "No payment method on file", 400)


class NoProcessorCustomerError(AppError):
    def __init__(self) -> None:
        super().__init__(4002, "No payment customer on file", 400)


class PaymentProcessorError(AppError):
    def __init__(self, detail: str = "Payment processor request failed") -> None:
        super().__init__(4003, detail, 500)


class WebhookSignatureError(AppError):
    def __init__(self) -> None:
        super().__init__(4004, "Webhook signature verification failed", 400)


# --- 5xxx: Review ---

class SelfReviewError(AppError):
    def __init__(self) -> None:
        super().__init__(5001, "You cannot review yourself", 400)


class InvalidRatingError(AppError):
    def __init__(self) -> None:
        super().__init__(5002, "Rating must be between 1 and 5", 400)


class ReviewedUserNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(5003, f"User not found: {user_id}", 404)


# --- 6xxx: Watchlist ---

class AlreadyInWatchlistError(AppError):
    def __init__(self) -> None:
        super().__init__(6001, "Already in watchlist", 409)


class WatchlistEntryNotFoundError(AppError):
    def __init__(self, target_id: str) -> None:
        super().__init__(6002, f"Watchlist entry not found: {target_id}", 404)


class WatchlistWriteError(AppError):
    def __init__(self) -> None:
        super().__init__(6003, "Failed to update watchlist", 500)


# --- 7xxx: Notification ---

class NotificationNotFoundError(AppError):
    def __init__(self, notification_id: int) -> None:
        super().__init__(7001, f"Notification not found: {notification_id}", 404)


# --- 8xxx: AI ---

class MissingDescriptionInputError(AppError):
    def __init__(self) -> None:
        super().__init__(8001, "Provide an image or a title to generate a description", 400)


class DescriptionGenerationError(AppError):
    def __init__(self) -> None:
        super().__init__(8002, "Failed to generate description", 500)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
