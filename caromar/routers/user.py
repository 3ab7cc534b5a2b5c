# caromar/routers/user.py
from typing import Optional

import structlog
from fastapi import APIRouter, Depends

from caromar.core.config import settings
from caromar.core.errors import ValidationError
from caromar.core.security import bearer_token
from caromar.services.github import GitHubCredentials, GitHubError, gh_get, to_api_error
from caromar.utils.validation import is_valid_token

log = structlog.get_logger(__name__)

router = APIRouter()

@router.get("/api/user")
def current_user(token: Optional[str] = Depends(bearer_token)):
    """Profile of the token's owner plus their current rate-limit snapshot."""
    if not token or not is_valid_token(token):
        raise ValidationError("Valid token is required")

    creds = GitHubCredentials(token=token)
    try:
        user = gh_get("/user", creds).json()
        rate = gh_get("/rate_limit", creds).json()
    except GitHubError as exc:
        log.error("error fetching user info", status=exc.status, error=exc.message)
        raise to_api_error(
            exc,
            {401: "Invalid or expired token", 403: "Token lacks required permissions"},
            "Failed to fetch user information",
        )

    return {
        "username": user.get("login"),
        "name": user.get("name"),
        "email": user.get("email"),
        "avatar_url": user.get("avatar_url"),
        "bio": user.get("bio"),
        "company": user.get("company"),
        "location": user.get("location"),
        "public_repos": user.get("public_repos"),
        "public_gists": user.get("public_gists"),
        "followers": user.get("followers"),
        "following": user.get("following"),
        "created_at": user.get("created_at"),
        "type": user.get("type"),
        "plan": user.get("plan"),
        "rate_limit": rate.get("rate") if isinstance(rate, dict) else None,
    }

@router.get("/api/validate-token")
def validate_token(token: Optional[str] = Depends(bearer_token)):
    """
    Asks GitHub whether the token works and which scopes it carries.
    An invalid token is an answer, not a failure: 200 with valid=False.
    """
    if not token:
        raise ValidationError("Token is required")

    try:
        r = gh_get("/user", GitHubCredentials(token=token))
    except GitHubError as exc:
        log.info("token rejected by github", status=exc.status)
        return {"valid": False, "error": exc.message}

    header = r.headers.get("x-oauth-scopes") or ""
    scopes = [s.strip() for s in header.split(",") if s.strip()]
    user = r.json()
    return {
        "valid": True,
        "scopes": scopes,
        "required_scopes": settings.REQUIRED_SCOPES,
        "has_required_permissions": all(s in scopes for s in settings.REQUIRED_SCOPES),
        "user": {"login": user.get("login"), "type": user.get("type")},
    }
