from enum import Enum


class SubscriptionStatus(str, Enum):
    """Lifecycle of a subscriber. Only ever moves from pending to confirmed."""

    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"
