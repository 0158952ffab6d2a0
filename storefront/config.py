"""
Storefront configuration: all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


def _float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


class Settings:
    """Service settings from environment variables."""

    # Storefront API
    STOREFRONT_API_URL: str = os.environ.get("STOREFRONT_API_URL", "http://localhost:8080/api/v1")
    STOREFRONT_API_TOKEN: str = os.environ.get("STOREFRONT_API_TOKEN", "")
    HTTP_TIMEOUT_SECONDS: float = _float("HTTP_TIMEOUT_SECONDS", 10.0)

    # Application
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    def require_api(self) -> str:
        """Return the API base URL or raise when it is not configured."""
        if not self.STOREFRONT_API_URL:
            raise RuntimeError("STOREFRONT_API_URL environment variable is required")
        return self.STOREFRONT_API_URL.rstrip("/")


# Singleton instance
settings = Settings()
