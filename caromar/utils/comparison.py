# caromar/utils/comparison.py
"""
Relational statistics between repository records.

Similarity (0..100), symmetric in its two arguments:
  language match    20
  license match     10
  visibility match  10
  fork-status match 10
  topics            30 * |common| / |union|           (0 if no topics at all)
  size              20 * max(0, 1 - |sa - sb| / mean)   (0 if mean size is 0)
"""

from typing import Any, Dict, List, Optional

from caromar.utils.repos import COUNT_FIELDS, count, license_name, round_half_up, topics
from caromar.utils.time import days_between, try_parse_iso_dt

Repo = Dict[str, Any]

W_LANGUAGE = 20
W_LICENSE = 10
W_VISIBILITY = 10
W_FORK = 10
W_TOPICS = 30
W_SIZE = 20

RANK_CRITERIA = ("stars", "forks", "watchers", "size", "issues", "recent")


class ComparisonError(ValueError):
    """Wrong number of records for the requested comparison."""


def _require(records: List[Repo], minimum: int) -> None:
    if len(records) < minimum:
        raise ComparisonError(f"At least {minimum} repositories are required, got {len(records)}")


def _metric(a: Repo, b: Repo, field: str, label: str) -> Dict[str, Any]:
    va, vb = count(a, field), count(b, field)
    # ties name the second repo
    return {
        "repo1": va,
        "repo2": vb,
        "difference": va - vb,
        label: a.get("name") if va > vb else b.get("name"),
    }


def _attribute(va: Any, vb: Any, same: bool) -> Dict[str, Any]:
    return {"repo1": va, "repo2": vb, "same": same}


def _date(a: Repo, b: Repo, field: str, label: str, pick_later: bool) -> Dict[str, Any]:
    da, db = try_parse_iso_dt(a.get(field)), try_parse_iso_dt(b.get(field))
    winner: Optional[str] = None
    diff: Optional[float] = None
    if da is not None and db is not None:
        a_wins = da > db if pick_later else da < db
        winner = a.get("name") if a_wins else b.get("name")
        diff = days_between(da, db)
    return {"repo1": a.get(field), "repo2": b.get(field), label: winner, "days_difference": diff}


def compare_two(a: Repo, b: Repo) -> Dict[str, Any]:
    ta, tb = topics(a), topics(b)
    la, lb = license_name(a), license_name(b)
    return {
        "names": {"repo1": a.get("name"), "repo2": b.get("name")},
        "metrics": {
            "stars": _metric(a, b, "stargazers_count", "winner"),
            "forks": _metric(a, b, "forks_count", "winner"),
            "watchers": _metric(a, b, "watchers_count", "winner"),
            "size": _metric(a, b, "size", "larger"),
            "issues": _metric(a, b, "open_issues_count", "more"),
        },
        "attributes": {
            "languages": _attribute(a.get("language") or "None", b.get("language") or "None",
                                    a.get("language") == b.get("language")),
            "license": _attribute(la or "None", lb or "None", la == lb),
            "visibility": _attribute("Private" if a.get("private") else "Public",
                                     "Private" if b.get("private") else "Public",
                                     bool(a.get("private")) == bool(b.get("private"))),
            "archived": _attribute(a.get("archived"), b.get("archived"),
                                   bool(a.get("archived")) == bool(b.get("archived"))),
        },
        "dates": {
            "created": _date(a, b, "created_at", "older", pick_later=False),
            "updated": _date(a, b, "updated_at", "more_recent", pick_later=True),
        },
        "topics": {
            "repo1": ta,
            "repo2": tb,
            "common": [t for t in ta if t in tb],
            "unique_to_repo1": [t for t in ta if t not in tb],
            "unique_to_repo2": [t for t in tb if t not in ta],
        },
        "similarity": similarity_score(a, b),
    }


def similarity_score(a: Repo, b: Repo) -> int:
    score = 0.0

    if a.get("language") == b.get("language"):
        score += W_LANGUAGE
    if license_name(a) == license_name(b):
        score += W_LICENSE
    if bool(a.get("private")) == bool(b.get("private")):
        score += W_VISIBILITY
    if bool(a.get("fork")) == bool(b.get("fork")):
        score += W_FORK

    ta, tb = set(topics(a)), set(topics(b))
    union = ta | tb
    if union:
        score += W_TOPICS * len(ta & tb) / len(union)

    sa, sb = count(a, "size"), count(b, "size")
    mean = (sa + sb) / 2
    if mean > 0:
        score += W_SIZE * max(0.0, 1 - abs(sa - sb) / mean)

    return round_half_up(score)


def _metric_value(repo: Repo, criterion: str) -> Any:
    if criterion == "recent":
        return repo.get("updated_at")
    return count(repo, COUNT_FIELDS[criterion])


def _recency_key(repo: Repo):
    dt = try_parse_iso_dt(repo.get("updated_at"))
    return (dt is not None, dt.timestamp() if dt else 0.0)


def rank_best(records: List[Repo], criterion: str = "stars") -> Dict[str, Any]:
    """Best repo by `criterion`; fewer open issues ranks higher, unknown criteria mean stars."""
    _require(records, 2)
    if criterion == "recency":
        criterion = "recent"
    if criterion not in RANK_CRITERIA:
        criterion = "stars"

    if criterion == "recent":
        ranked = sorted(records, key=_recency_key, reverse=True)
    elif criterion == "issues":
        ranked = sorted(records, key=lambda r: count(r, "open_issues_count"))
    else:
        field = COUNT_FIELDS[criterion]
        ranked = sorted(records, key=lambda r: count(r, field), reverse=True)

    return {
        "best": ranked[0],
        "rankings": [
            {"rank": i + 1, "name": r.get("name"), "value": _metric_value(r, criterion)}
            for i, r in enumerate(ranked)
        ],
        "criteria": criterion,
    }


def compare_multiple(records: List[Repo]) -> Dict[str, List[Dict[str, Any]]]:
    """Per count metric, every repo ranked by raw value (highest first)."""
    _require(records, 2)
    matrix: Dict[str, List[Dict[str, Any]]] = {}
    for field in COUNT_FIELDS.values():
        rows = sorted(
            ({"name": r.get("name"), "value": count(r, field)} for r in records),
            key=lambda row: row["value"],
            reverse=True,
        )
        matrix[field] = [dict(row, rank=i + 1) for i, row in enumerate(rows)]
    return matrix
