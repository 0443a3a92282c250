"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap
implementations. FakeIdentityProvider is used for development and testing;
select another adapter with the IDENTITY_PROVIDER environment variable.
"""

import os

from identity.provider.port import IdentityProvider

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    """Return the configured identity provider (singleton)."""
    global _current_provider
    if _current_provider is None:
        adapter = os.environ.get("IDENTITY_PROVIDER", "fake")
        if adapter == "fake":
            from identity.provider.fake_adapter import FakeIdentityProvider

            _current_provider = FakeIdentityProvider()
        else:
            raise ValueError(f"Unknown identity provider: {adapter}")
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    """Reset to the default provider."""
    global _current_provider
    _current_provider = None
