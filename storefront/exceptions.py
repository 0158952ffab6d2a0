"""Exceptions raised by the storefront service layer."""

from __future__ import annotations

from composer.kernel.assembly import LayoutSaveError, PendingAssetError

__all__ = [
    "ApiError",
    "LayoutSaveError",
    "PendingAssetError",
]


class ApiError(Exception):
    """The storefront API failed, answered with a non-2xx status or sent a malformed body."""

    def __init__(self, message: str, status_code: int | None = None, path: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.path = path
