"""Bearer-token extraction for read-style endpoints."""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Tokens are read from the Authorization header only. A ?token= query
# parameter is never declared anywhere, so it can't reach a handler.
_bearer = HTTPBearer(auto_error=False)


def bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str | None:
    """Return the token from ``Authorization: Bearer <token>``, or None."""
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials
