from datetime import datetime, timezone
from typing import Optional

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

def parse_iso_dt(s: str) -> datetime:
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)

def try_parse_iso_dt(s) -> Optional[datetime]:
    if not isinstance(s, str) or not s:
        return None
    try:
        return parse_iso_dt(s)
    except ValueError:
        return None

def days_between(a: datetime, b: datetime) -> float:
    return abs((a - b).total_seconds()) / 86400

def iso_z(dt: datetime) -> str:
    # same shape as JavaScript's Date.toISOString()
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"

def epoch_to_iso(value) -> Optional[str]:
    """Rate-limit reset header (epoch seconds) -> ISO timestamp, None if absent or garbled."""
    if value in (None, ""):
        return None
    try:
        return iso_z(datetime.fromtimestamp(int(value), tz=timezone.utc))
    except (TypeError, ValueError, OverflowError, OSError):
        return None
