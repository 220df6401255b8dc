"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class AuctionStatus(str, Enum):
    DRAFT = "draft"
    UPCOMING = "upcoming"
    ACTIVE = "active"
    ENDED = "ended"
    CANCELLED = "cancelled"


class CloseOutcome(str, Enum):
    ENDED = "ended"
    ENDED_NO_BIDS = "ended_no_bids"
    SKIPPED = "skipped"
    ERROR = "error"


class ChargeOutcome(str, Enum):
    """Per-auction result of a winner charge attempt."""
    CHARGED = "charged"
    NO_CUSTOMER = "no_customer"
    NO_PAYMENT_METHOD = "no_payment_method"
    CHARGE_FAILED = "charge_failed"
    SKIPPED = "skipped"
    ERROR = "error"


class NotificationType(str, Enum):
    AUCTION_WON = "auction_won"
    PAYMENT_FAILED = "payment_failed"
    PAYMENT_ACTION_REQUIRED = "payment_action_required"
    CONNECTION_ACCEPTED = "connection_accepted"
    CONNECTION_REJECTED = "connection_rejected"
