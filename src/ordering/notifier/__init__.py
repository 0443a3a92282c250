"""Notifier registry: optional hook fired after an order is placed.

Uses the fake notifier by default. Select another adapter with the
NOTIFIER_ADAPTER environment variable.
"""

import os

from ordering.notifier.port import NotifierPort

_notifier_instance: NotifierPort | None = None


def get_notifier() -> NotifierPort:
    """Return the configured notifier (singleton)."""
    global _notifier_instance
    if _notifier_instance is None:
        adapter = os.environ.get("NOTIFIER_ADAPTER", "fake")
        if adapter == "fake":
            from ordering.notifier.fake_adapter import FakeNotifier

            _notifier_instance = FakeNotifier()
        else:
            raise ValueError(f"Unknown notifier adapter: {adapter}")
    return _notifier_instance


def set_notifier(notifier: NotifierPort) -> None:
    """Override the active notifier (useful for tests)."""
    global _notifier_instance
    _notifier_instance = notifier


def reset_notifier() -> None:
    """Reset the notifier singleton (useful for testing)."""
    global _notifier_instance
    _notifier_instance = None
