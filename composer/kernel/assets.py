"""
Storefront Composer Kernel: Media Assets

Two layers of defense against broken media:
1. is_valid_url pre-validates every src before it reaches markup.
2. placeholder_image supplies the inline SVG shown for invalid URLs and
   swapped in by onerror when a valid URL fails to load.

Uploads in the builder produce a PendingAsset (a local blob: handle) for
instant preview. Pending handles are never persisted: the upload must resolve
to a PersistedAsset before a layout save is accepted.
"""

from __future__ import annotations

import copy
import re
import uuid
from dataclasses import dataclass
from html import escape as _html_escape
from typing import Any, Union
from urllib.parse import quote, urlparse

from composer.kernel.types import PageComponent

_DATA_MEDIA = re.compile(r"^data:(image|video)/[a-z0-9.+-]+[;,]", re.IGNORECASE)
_SAFE_LINK_SCHEMES = {"http", "https", "mailto", "tel"}
BLOB_PREFIX = "blob:"


# ---------------------------------------------------------------------------
# URL checks
# ---------------------------------------------------------------------------


def is_valid_url(value: Any, allow_local: bool = False) -> bool:
    """
    Strict check for a media src. http(s) needs a host, data: must carry an
    image or video media type, blob: handles are accepted only for the
    builder's local preview.
    """
    if not isinstance(value, str):
        return False
    url = value.strip()
    if not url or any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    scheme = parsed.scheme.lower()
    if scheme in ("http", "https"):
        return bool(parsed.hostname)
    if scheme == "data":
        return bool(_DATA_MEDIA.match(url))
    if scheme == "blob":
        return allow_local and len(url) > len(BLOB_PREFIX)
    return False


def safe_href(value: Any, fallback: str = "#") -> str:
    """A link target safe to emit: absolute http(s)/mailto/tel, site-relative or fragment."""
    if not isinstance(value, str):
        return fallback
    url = value.strip()
    if not url:
        return fallback
    if url.startswith("#") or (url.startswith("/") and not url.startswith("//")):
        return url
    try:
        parsed = urlparse(url)
    except ValueError:
        return fallback
    if parsed.scheme.lower() in _SAFE_LINK_SCHEMES:
        return url
    return fallback


# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------


def placeholder_image(label: str = "Image", width: int = 400, height: int = 300) -> str:
    """Inline SVG data URI with a centered label. Generated, never fetched."""
    text = _html_escape(str(label), quote=True)
    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
        '<rect width="100%" height="100%" fill="#f3f4f6"/>'
        '<text x="50%" y="50%" dominant-baseline="middle" text-anchor="middle" '
        f'font-family="Inter, sans-serif" font-size="16" fill="#9ca3af">{text}</text>'
        "</svg>"
    )
    return "data:image/svg+xml;charset=utf-8," + quote(svg, safe="")


def media_src(value: Any, label: str, allow_local: bool = False, width: int = 400, height: int = 300) -> tuple[str, bool]:
    """
    Returns (src, is_placeholder). Invalid or empty URLs become a placeholder.
    """
    if is_valid_url(value, allow_local=allow_local):
        return value.strip(), False
    return placeholder_image(label, width, height), True


# ---------------------------------------------------------------------------
# Asset sum type
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PersistedAsset:
    """A URL the storage backend has accepted."""

    url: str


@dataclass(frozen=True)
class PendingAsset:
    """A local, ephemeral preview handle awaiting upload."""

    handle: str

    @property
    def url(self) -> str:
        return self.handle


Asset = Union[PersistedAsset, PendingAsset]


def new_pending_asset() -> PendingAsset:
    return PendingAsset(handle=f"{BLOB_PREFIX}local/{uuid.uuid4()}")


def is_pending(value: Any) -> bool:
    return isinstance(value, str) and value.strip().startswith(BLOB_PREFIX)


def parse_asset(value: Any) -> Asset | None:
    """Classify a prop value. Returns None when it is not a usable asset."""
    if is_pending(value):
        return PendingAsset(handle=value.strip())
    if is_valid_url(value):
        return PersistedAsset(url=value.strip())
    return None


@dataclass(frozen=True)
class PendingReference:
    """Where a pending handle sits inside a layout."""

    component_id: str
    path: str
    asset: PendingAsset


def _walk(value: Any, path: str, found: list[tuple[str, str]]) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _walk(item, f"{path}.{key}" if path else str(key), found)
    elif isinstance(value, list):
        for i, item in enumerate(value):
            _walk(item, f"{path}[{i}]", found)
    elif is_pending(value):
        found.append((path, value.strip()))


def find_pending_assets(components: list[PageComponent]) -> list[PendingReference]:
    """Every pending handle in the layout, in component order."""
    refs: list[PendingReference] = []
    for component in components:
        found: list[tuple[str, str]] = []
        _walk(component.props, "", found)
        refs.extend(
            PendingReference(component_id=component.id, path=path, asset=PendingAsset(handle))
            for path, handle in found
        )
    return refs


def _replace(value: Any, handle: str, url: str) -> Any:
    if isinstance(value, dict):
        return {k: _replace(v, handle, url) for k, v in value.items()}
    if isinstance(value, list):
        return [_replace(v, handle, url) for v in value]
    if isinstance(value, str) and value.strip() == handle:
        return url
    return value


def replace_pending(
    components: list[PageComponent],
    pending: PendingAsset,
    persisted: PersistedAsset,
) -> list[PageComponent]:
    """New components with every occurrence of the pending handle swapped for the persisted URL."""
    return [
        PageComponent(
            id=c.id,
            type=c.type,
            props=_replace(copy.deepcopy(c.props), pending.handle, persisted.url),
            order=c.order,
        )
        for c in components
    ]
