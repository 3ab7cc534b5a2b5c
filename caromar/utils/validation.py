"""
Input validation and sanitizing helpers.

Every function here is total: it never raises and always returns a boolean or a
normalized value. Handlers branch on the result and answer with a 400.
"""

import math
import re
from typing import Any, Optional, Sequence, Tuple
from urllib.parse import urlparse

# alphanumeric + hyphens, 1-39 chars, no leading/trailing hyphen
OWNER_RE = re.compile(r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,37}[a-zA-Z0-9])?")
REPO_NAME_RE = re.compile(r"[a-zA-Z0-9._-]{1,100}")
REPO_PATH_RE = re.compile(r"[a-zA-Z0-9._/-]{1,1000}")
# characters a clone URL may carry; no shell metacharacters or quotes
URL_CHARS_RE = re.compile(r"[a-zA-Z0-9._~:/@%+=-]+")
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")

TOKEN_MIN_LENGTH = 40
TOKEN_MAX_LENGTH = 255
SANITIZE_MAX_LENGTH = 1000
DEFAULT_PER_PAGE = 30
MAX_PER_PAGE = 100


def is_valid_owner_name(value: Any) -> bool:
    """Valid GitHub user or organization login."""
    return isinstance(value, str) and OWNER_RE.fullmatch(value) is not None


def is_valid_repository_name(value: Any) -> bool:
    # "." and ".." would be collapsed as path segments in the upstream URL
    if value in (".", ".."):
        return False
    return isinstance(value, str) and REPO_NAME_RE.fullmatch(value) is not None


def is_valid_token(value: Any) -> bool:
    """Format check only; whether the token is live is up to GitHub."""
    return isinstance(value, str) and TOKEN_MIN_LENGTH <= len(value) <= TOKEN_MAX_LENGTH


def sanitize(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.replace("<", "").replace(">", "").strip()[:SANITIZE_MAX_LENGTH]


def is_valid_repo_path(path: Any) -> bool:
    """Path inside a repository; empty means the root. Rejects traversal."""
    if path is None or path == "":
        return True
    if not isinstance(path, str):
        return False
    if path.startswith("/") or "\\" in path:
        return False
    if ".." in path.split("/"):
        return False
    return REPO_PATH_RE.fullmatch(path) is not None


def _parse_int(value: Any) -> Optional[int]:
    # leading-integer parse: "12abc" -> 12, "abc" -> None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        return int(m.group(1)) if m else None
    return None


def normalize_pagination(page: Any, per_page: Any) -> Tuple[int, int]:
    """(page >= 1, 1 <= per_page <= 100); garbage falls back to (1, 30)."""
    valid_page = max(1, _parse_int(page) or 1)
    valid_per_page = min(MAX_PER_PAGE, max(1, _parse_int(per_page) or DEFAULT_PER_PAGE))
    return valid_page, valid_per_page


def normalize_sort_key(key: Any, allowed: Sequence[str]) -> str:
    if key and key in allowed:
        return key
    return allowed[0] if allowed else "updated"


def is_valid_url(value: Any) -> bool:
    """http(s) URL with a host, built only from plain URL characters."""
    if not isinstance(value, str) or URL_CHARS_RE.fullmatch(value) is None:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
