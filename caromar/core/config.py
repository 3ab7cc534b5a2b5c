import os
from typing import List

class Settings:
    GITHUB_API: str = os.getenv("GITHUB_API", "https://api.github.com").rstrip("/")
    USER_AGENT: str = os.getenv("CAROMAR_USER_AGENT", "CAROMAR-App")
    REQUEST_TIMEOUT: float = float(os.getenv("CAROMAR_REQUEST_TIMEOUT", "20"))
    CORS_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",")]
    LOG_LEVEL: str = os.getenv("CAROMAR_LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv("CAROMAR_LOG_FORMAT", "console").lower()
    VERSION: str = os.getenv("CAROMAR_VERSION", "1.0.0")

    # GitHub's documented limits for a single request
    MAX_PER_PAGE: int = 100
    MAX_MERGE_SOURCES: int = 50
    REQUIRED_SCOPES: List[str] = ["repo", "user"]

settings = Settings()
