"""Notifier port: abstract interface for post-checkout notifications."""

from abc import ABC, abstractmethod


class NotifierPort(ABC):
    """Abstract interface for notification adapters."""

    @abstractmethod
    def order_placed(self, to: str, order: dict) -> dict:
        """Tell the customer their order was placed.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
