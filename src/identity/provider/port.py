"""Identity provider port: abstract interface for resolving request principals.

Token issuance, OTP verification and password handling live in the external
identity service. The storefront only asks it who a bearer token belongs to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    user_id: str
    is_admin: bool = False
    is_verified: bool = False
    name: str | None = None
    email: str | None = None


class IdentityProvider(ABC):
    """Abstract interface for identity provider adapters."""

    @abstractmethod
    def resolve(self, token: str) -> Principal | None:
        """Return the principal the token was issued to.

        Returns:
            The principal, or None when the token is unknown, expired or malformed.
        """
        ...
