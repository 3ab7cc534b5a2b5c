from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests
import structlog

from caromar.core.config import settings
from caromar.core.errors import ApiError

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GitHubCredentials:
    """Token (optional) plus the client identifier sent on every upstream call."""
    token: Optional[str] = None
    user_agent: str = settings.USER_AGENT

    def headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self.user_agent,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers


class GitHubError(Exception):
    """Non-2xx upstream response, or a network failure (status is None)."""

    def __init__(self, status: Optional[int], message: str, headers: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.headers = headers or {}


def _error_message(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.reason or f"GitHub responded with {r.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return r.reason or f"GitHub responded with {r.status_code}"


def gh_request(
    method: str,
    path: str,
    creds: GitHubCredentials,
    params: Optional[dict] = None,
    json: Optional[Any] = None,
) -> requests.Response:
    url = f"{settings.GITHUB_API}{path}"
    try:
        r = requests.request(
            method,
            url,
            headers=creds.headers(),
            params=params,
            json=json,
            timeout=settings.REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        log.error("github request failed", method=method, path=path, error=str(exc))
        raise GitHubError(None, str(exc)) from exc
    if r.status_code >= 400:
        raise GitHubError(r.status_code, _error_message(r), r.headers)
    return r


def gh_get(path: str, creds: GitHubCredentials, params: Optional[dict] = None) -> requests.Response:
    return gh_request("GET", path, creds, params=params)


def gh_post(path: str, creds: GitHubCredentials, json: Optional[Any] = None) -> requests.Response:
    return gh_request("POST", path, creds, json=json)


def resolve_owner_kind(name: str, creds: GitHubCredentials) -> str:
    """
    'organization' when GitHub reports that type for `name`, otherwise 'user'.
    A failed probe (404, rate limit, network) is not an error: it means 'user'.
    """
    url = f"{settings.GITHUB_API}/users/{name}"
    try:
        r = requests.request("GET", url, headers=creds.headers(), timeout=settings.REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        log.warning("owner probe failed", owner=name, error=str(exc))
        return "user"
    if r.status_code >= 400:
        log.warning("owner probe rejected", owner=name, status=r.status_code)
        return "user"
    try:
        body = r.json()
    except ValueError:
        return "user"
    if isinstance(body, dict) and body.get("type") == "Organization":
        return "organization"
    return "user"


def to_api_error(
    exc: GitHubError,
    messages: Dict[int, str],
    fallback: str,
    fallback_status: int = 500,
    extra: Optional[Dict[str, Any]] = None,
) -> ApiError:
    """Map an upstream failure to a stable summary; GitHub's own wording goes to `details`."""
    if exc.status in messages:
        return ApiError(messages[exc.status], details=exc.message, status_code=exc.status, extra=extra)
    return ApiError(fallback, details=exc.message, status_code=fallback_status)
