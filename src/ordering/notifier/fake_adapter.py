"""Fake notifier: records order confirmations for testing."""

from uuid import uuid4

from ordering.notifier.port import NotifierPort


class FakeNotifier(NotifierPort):
    """Notifier that records messages in memory for test assertions."""

    def __init__(self):
        self.sent: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Notification delivery failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def order_placed(self, to: str, order: dict) -> dict:
        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)

        message_id = f"notify-{uuid4().hex[:12]}"
        self.sent.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": "Your order has been placed",
                "order_id": order.get("id"),
                "total": order.get("total"),
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
