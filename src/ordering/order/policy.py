"""Cancellation policy knobs, read from the environment."""

import os
from datetime import timedelta

DEFAULT_CANCELLATION_WINDOW_MINUTES = 30


def cancellation_window() -> timedelta:
    """How long after placement the owner may still cancel an order."""
    minutes = int(os.environ.get("ORDER_CANCELLATION_WINDOW_MINUTES", DEFAULT_CANCELLATION_WINDOW_MINUTES))
    return timedelta(minutes=minutes)


def admin_can_cancel_delivered() -> bool:
    """Whether an administrator may cancel an order that was already delivered."""
    return os.environ.get("ADMIN_CAN_CANCEL_DELIVERED", "false").lower() in ("1", "true", "yes")
