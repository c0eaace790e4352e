"""
CMS admin configuration — all environment variables in one place.

Read from environment at import. The session cookie is opaque: it is passed
to the store as-is and never inspected.
"""

from __future__ import annotations

import os


def _float_or_none(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    return float(value)


class Settings:
    """Admin settings from environment variables."""

    # Section Store
    API_URL: str = os.environ.get("CMS_API_URL", "http://localhost:4202")
    SESSION_COOKIE: str = os.environ.get("CMS_SESSION_COOKIE", "")
    SESSION_COOKIE_NAME: str = os.environ.get("CMS_SESSION_COOKIE_NAME", "session")

    # Timeouts (seconds)
    REQUEST_TIMEOUT: float = float(os.environ.get("CMS_REQUEST_TIMEOUT", "30"))
    REORDER_TIMEOUT: float | None = _float_or_none(os.environ.get("CMS_REORDER_TIMEOUT"))

    # Re-fetch the page after a successful write instead of merging the response
    REFETCH_AFTER_WRITE: bool = os.environ.get("CMS_REFETCH_AFTER_WRITE", "true").lower() not in ("0", "false", "no")

    # Logging
    LOG_LEVEL: str = os.environ.get("CMS_LOG_LEVEL", "INFO").upper()

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(Settings, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def MEDIA_BASE_URL(self) -> str:
        """Relative media URLs from the store are served from the API origin."""
        return self.API_URL.rstrip("/")


# Singleton instance
settings = Settings()
