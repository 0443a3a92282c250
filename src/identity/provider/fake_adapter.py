"""Fake identity provider: in-memory token table for testing and development."""

from uuid import uuid4

from identity.provider.port import IdentityProvider, Principal


class FakeIdentityProvider(IdentityProvider):
    """Identity provider that knows only the tokens issued through it."""

    def __init__(self):
        self._tokens: dict[str, Principal] = {}

    def issue(
        self,
        user_id: str,
        is_admin: bool = False,
        is_verified: bool = True,
        name: str | None = None,
        email: str | None = None,
    ) -> str:
        """Register a principal and return a bearer token for it."""
        token = f"tok-{uuid4().hex}"
        self._tokens[token] = Principal(
            user_id=str(user_id),
            is_admin=is_admin,
            is_verified=is_verified,
            name=name,
            email=email,
        )
        return token

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)

    def resolve(self, token: str) -> Principal | None:
        return self._tokens.get(token)

    def reset(self):
        """Forget every issued token (useful between tests)."""
        self._tokens.clear()
