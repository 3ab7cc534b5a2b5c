# caromar/utils/analytics.py
"""
Descriptive statistics over a list of repository records supplied by the caller.

Everything here is a pure function of its input: records are never mutated and
sorting always works on a copy.

Buckets (activity_bucket):
- trending  -> stars > 10 and updated in the last 30 days, sorted by stars desc
- abandoned -> not updated in over a year
- active    -> updated in the last 7 days
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from caromar.utils.repos import count, round_half_up
from caromar.utils.time import now_utc, try_parse_iso_dt

Repo = Dict[str, Any]

TRENDING_MIN_STARS = 10
TRENDING_MAX_DAYS = 30
ABANDONED_MIN_DAYS = 365
ACTIVE_MAX_DAYS = 7


def totals(records: List[Repo]) -> Dict[str, int]:
    return {
        "total_repos": len(records),
        "total_stars": sum(count(r, "stargazers_count") for r in records),
        "total_forks": sum(count(r, "forks_count") for r in records),
        "total_watchers": sum(count(r, "watchers_count") for r in records),
        "total_size": sum(count(r, "size") for r in records),
        "total_issues": sum(count(r, "open_issues_count") for r in records),
        "private_repos": sum(1 for r in records if r.get("private")),
        "forked_repos": sum(1 for r in records if r.get("fork")),
        "archived_repos": sum(1 for r in records if r.get("archived")),
    }


def language_histogram(records: List[Repo]) -> Dict[str, int]:
    """Language -> number of repos, most used first (ties keep first-seen order)."""
    langs: Dict[str, int] = {}
    for r in records:
        lang = r.get("language")
        if isinstance(lang, str) and lang:
            langs[lang] = langs.get(lang, 0) + 1
    # sorted() is stable, so first-seen order survives ties
    return dict(sorted(langs.items(), key=lambda kv: kv[1], reverse=True))


def top_by_stars(records: List[Repo], n: int = 10) -> List[Repo]:
    return sorted(records, key=lambda r: count(r, "stargazers_count"), reverse=True)[:max(0, n)]


def most_recently_updated(records: List[Repo], n: int = 10) -> List[Repo]:
    def key(r: Repo):
        dt = try_parse_iso_dt(r.get("updated_at"))
        # unparseable timestamps go last
        return (dt is not None, dt.timestamp() if dt else 0.0)
    return sorted(records, key=key, reverse=True)[:max(0, n)]


def averages(records: List[Repo]) -> Optional[Dict[str, int]]:
    """Per-repo averages, or None when there is nothing to average."""
    n = len(records)
    if n == 0:
        return None
    t = totals(records)
    return {
        "avg_stars": round_half_up(t["total_stars"] / n),
        "avg_forks": round_half_up(t["total_forks"] / n),
        "avg_watchers": round_half_up(t["total_watchers"] / n),
        "avg_size": round_half_up(t["total_size"] / n),
        "avg_issues": round_half_up(t["total_issues"] / n),
    }


def _days_since_update(r: Repo, now: datetime) -> Optional[float]:
    dt = try_parse_iso_dt(r.get("updated_at"))
    if dt is None:
        return None
    return (now - dt).total_seconds() / 86400


def activity_bucket(records: List[Repo], bucket: str, now: Optional[datetime] = None) -> List[Repo]:
    now = now or now_utc()
    if bucket == "trending":
        hits = []
        for r in records:
            days = _days_since_update(r, now)
            if count(r, "stargazers_count") > TRENDING_MIN_STARS and days is not None and days < TRENDING_MAX_DAYS:
                hits.append(r)
        return sorted(hits, key=lambda r: count(r, "stargazers_count"), reverse=True)
    if bucket == "abandoned":
        out = []
        for r in records:
            days = _days_since_update(r, now)
            if days is not None and days > ABANDONED_MIN_DAYS:
                out.append(r)
        return out
    if bucket == "active":
        out = []
        for r in records:
            days = _days_since_update(r, now)
            if days is not None and days < ACTIVE_MAX_DAYS:
                out.append(r)
        return out
    return records


def creation_timeline(records: List[Repo]) -> Dict[str, int]:
    """'YYYY-MM' -> repos created that month (UTC)."""
    timeline: Dict[str, int] = {}
    for r in records:
        dt = try_parse_iso_dt(r.get("created_at"))
        if dt is None:
            continue
        dt = dt.astimezone(timezone.utc)
        key = f"{dt.year}-{dt.month:02d}"
        timeline[key] = timeline.get(key, 0) + 1
    return timeline


def created_between(records: List[Repo], start: datetime, end: datetime) -> List[Repo]:
    """Repos created in [start, end]; naive bounds are taken as UTC.

    Library helper for callers filtering a list themselves; no endpoint uses it.
    """
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    out = []
    for r in records:
        dt = try_parse_iso_dt(r.get("created_at"))
        if dt is not None and start <= dt <= end:
            out.append(r)
    return out


def report(records: List[Repo], now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or now_utc()
    return {
        "overview": totals(records),
        "languages": language_histogram(records),
        "top_repositories": top_by_stars(records, 5),
        "recent_activity": most_recently_updated(records, 5),
        "averages": averages(records),
        "timeline": creation_timeline(records),
        "trending": len(activity_bucket(records, "trending", now)),
        "abandoned": len(activity_bucket(records, "abandoned", now)),
        "active": len(activity_bucket(records, "active", now)),
    }
