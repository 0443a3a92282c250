"""Request principal resolution for every storefront router.

The bearer token in the ``Authorization`` header is handed to the configured
identity provider. Missing or unknown tokens are rejected with 401; a known
principal lacking the required standing gets 403.
"""

from fastapi import Depends, Header, HTTPException

from identity.provider import get_identity_provider
from identity.provider.port import Principal


def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    token = authorization.removeprefix("Bearer ").strip()
    principal = get_identity_provider().resolve(token)
    if principal is None:
        raise HTTPException(status_code=401, detail="Not authorized, token failed")
    return principal


def verified_principal(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_verified:
        raise HTTPException(status_code=403, detail="Please verify your account first")
    return principal


def admin_principal(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized as an admin")
    return principal
