"""Storefront error taxonomy layered over Protean's exceptions.

Domain code raises Protean's own ``ValidationError`` for malformed input and
``ObjectNotFoundError`` for missing records. The classes below name the rule
violations the storefront distinguishes beyond those two. Each carries a
``messages`` dict shaped like Protean's (``{"field": ["message", ...]}``) so the
HTTP layer can render every failure the same way.
"""

from protean.exceptions import InvalidStateError


class StateError(InvalidStateError):
    """The record exists but is not in a state that allows the operation."""

    def __init__(self, messages, **kwargs):
        super().__init__(messages, **kwargs)
        self.messages = messages


class LimitExceeded(StateError):
    """A bounded collection is already full."""


class TimeWindowExceeded(StateError):
    """The operation was allowed only within a window that has closed."""


class AlreadyTerminal(StateError):
    """The record has reached a terminal status and accepts no transitions."""
