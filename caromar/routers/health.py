import time

from fastapi import APIRouter

from caromar.core.config import settings
from caromar.utils.time import iso_z, now_utc

router = APIRouter()

_STARTED = time.monotonic()

@router.get("/api/health")
def health():
    return {
        "status": "healthy",
        "timestamp": iso_z(now_utc()),
        "uptime": round(time.monotonic() - _STARTED, 3),
        "version": settings.VERSION,
    }
