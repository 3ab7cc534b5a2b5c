# caromar/utils/repos.py
"""Accessors over a repository record (a dict as returned by GitHub)."""
import math
from typing import Any, Dict, List, Optional

# field exposed upstream -> short metric name used in comparisons
COUNT_FIELDS = {
    "stars": "stargazers_count",
    "forks": "forks_count",
    "watchers": "watchers_count",
    "size": "size",
    "issues": "open_issues_count",
}

def count(repo: Dict[str, Any], field: str) -> int:
    """Numeric field of a record; missing/None/garbled values count as 0."""
    value = repo.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value

def license_name(repo: Dict[str, Any]) -> Optional[str]:
    lic = repo.get("license")
    if isinstance(lic, dict):
        return lic.get("name")
    return None

def topics(repo: Dict[str, Any]) -> List[str]:
    raw = repo.get("topics")
    if not isinstance(raw, list):
        return []
    return [t for t in raw if isinstance(t, str)]

def round_half_up(x: float) -> int:
    # 2.5 -> 3 (Python's round() would give 2)
    return int(math.floor(x + 0.5))

def summarize(repo: Dict[str, Any]) -> Dict[str, Any]:
    """Reshape an upstream repository payload into the record served by search."""
    return {
        "id": repo.get("id"),
        "name": repo.get("name"),
        "full_name": repo.get("full_name"),
        "description": repo.get("description"),
        "clone_url": repo.get("clone_url"),
        "ssh_url": repo.get("ssh_url"),
        "html_url": repo.get("html_url"),
        "private": repo.get("private"),
        "fork": repo.get("fork"),
        "archived": repo.get("archived"),
        "disabled": repo.get("disabled"),
        "updated_at": repo.get("updated_at"),
        "created_at": repo.get("created_at"),
        "pushed_at": repo.get("pushed_at"),
        "language": repo.get("language"),
        "size": repo.get("size"),
        "stargazers_count": repo.get("stargazers_count"),
        "watchers_count": repo.get("watchers_count"),
        "forks_count": repo.get("forks_count"),
        "open_issues_count": repo.get("open_issues_count"),
        "license": repo.get("license"),
        "topics": repo.get("topics"),
        "default_branch": repo.get("default_branch"),
        "permissions": repo.get("permissions"),
    }
