from typing import Any, Dict, List

import structlog
from fastapi import APIRouter

from caromar.core.errors import ValidationError
from caromar.schemas import AnalyzeRequest, CompareRequest
from caromar.utils import analytics
from caromar.utils.comparison import ComparisonError, compare_multiple, compare_two, rank_best
from caromar.utils.time import iso_z, now_utc

log = structlog.get_logger(__name__)

router = APIRouter()

COMPARE_MODES = ("two", "multiple", "best")

def _records(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list) or not all(isinstance(r, dict) for r in value):
        raise ValidationError("Valid repositories array is required")
    return value

@router.post("/api/analyze-repos")
def analyze_repos(body: AnalyzeRequest):
    repos = _records(body.repositories)
    if not repos:
        raise ValidationError("Valid repositories array is required", details="The array is empty")
    now = now_utc()
    report = analytics.report(repos, now=now)
    log.info("repository analysis completed", count=len(repos))
    return {"success": True, "analysis": report, "timestamp": iso_z(now)}

@router.post("/api/compare-repos")
def compare_repos(body: CompareRequest):
    repos = _records(body.repositories)
    mode = body.mode if body.mode is not None else "two"

    if mode not in COMPARE_MODES:
        raise ValidationError("Invalid comparison mode", details="Mode must be one of: two, multiple, best")
    if mode == "two" and len(repos) != 2:
        raise ValidationError(
            "Invalid comparison mode or repository count",
            details='Mode "two" requires exactly 2 repositories',
        )

    try:
        if mode == "two":
            comparison = compare_two(repos[0], repos[1])
        elif mode == "multiple":
            comparison = compare_multiple(repos)
        else:
            comparison = rank_best(repos, body.criteria or "stars")
    except ComparisonError as exc:
        raise ValidationError("Invalid comparison mode or repository count", details=str(exc))

    log.info("repository comparison completed", mode=mode, count=len(repos))
    return {"success": True, "comparison": comparison, "mode": mode, "timestamp": iso_z(now_utc())}
