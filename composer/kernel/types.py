"""
Storefront Composer Kernel: Shared Types

Data classes used across the theme model, registry, renderer, builder and
assembly. These are the contracts that bind the kernel together.

Persisted wire shape, identical for store-level and page-level scopes:

    {"components": [{"id", "type", "props", "order"}], "theme": {"colors", "fonts", "layout"}}
"""

from __future__ import annotations

import copy
import math
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

EDIT_PREVIEW = "edit-preview"
PUBLIC = "public"
RENDER_MODES: set[str] = {EDIT_PREVIEW, PUBLIC}

PANELS: set[str] = {"components", "edit", "theme", "preview"}
PREVIEW_MODES: set[str] = {"desktop", "mobile"}
MOVE_DIRECTIONS: set[str] = {"up", "down"}

ACTION_TYPES: set[str] = {
    "component.add",
    "component.update",
    "component.remove",
    "component.move",
    "component.duplicate",
    "component.select",
    "component.edit",
    "panel.set",
    "preview.set",
}

THEME_SECTIONS: tuple[str, ...] = ("colors", "fonts", "layout")


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------


def _clean_section(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): v for k, v in value.items() if isinstance(v, str) and v.strip()}


@dataclass
class ThemeConfig:
    """
    A partial theme as stored. Any key may be missing; lookups go through
    theme.resolve_theme, which fills every gap with a hard default.
    """

    colors: dict[str, str] = field(default_factory=dict)
    fonts: dict[str, str] = field(default_factory=dict)
    layout: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "colors": dict(self.colors),
            "fonts": dict(self.fonts),
            "layout": dict(self.layout),
        }

    @classmethod
    def from_dict(cls, data: Any) -> ThemeConfig:
        """Tolerant parse: non-dict input and non-string values are dropped."""
        if not isinstance(data, dict):
            return cls()
        return cls(
            colors=_clean_section(data.get("colors")),
            fonts=_clean_section(data.get("fonts")),
            layout=_clean_section(data.get("layout")),
        )

    def is_empty(self) -> bool:
        return not (self.colors or self.fonts or self.layout)


@dataclass(frozen=True)
class ResolvedTheme:
    """Fully-populated theme for one block render. No field is ever empty."""

    primary: str
    secondary: str
    accent: str
    text: str
    background: str
    heading_font: str
    body_font: str
    layout: dict[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def new_component_id() -> str:
    return f"component-{uuid.uuid4().hex[:12]}"


def _coerce_order(value: Any, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return fallback
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return fallback


@dataclass
class PageComponent:
    """One configured block on a page: type + props + order."""

    id: str
    type: str
    props: dict[str, Any] = field(default_factory=dict)
    order: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "props": copy.deepcopy(self.props),
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], position: int = 0) -> PageComponent:
        """
        Parse a persisted component. Missing ids are generated, a non-dict
        props value becomes {}, and an unusable order falls back to position.
        """
        raw_id = data.get("id")
        props = data.get("props")
        return cls(
            id=str(raw_id) if raw_id not in (None, "") else new_component_id(),
            type=str(data.get("type") or ""),
            props=copy.deepcopy(props) if isinstance(props, dict) else {},
            order=_coerce_order(data.get("order"), position),
        )


@dataclass
class Layout:
    """
    Ordered block instances plus theme for one scope.

    inherited_theme is the store-level theme when this layout belongs to a
    page scope; it is never persisted with the page.
    """

    components: list[PageComponent] = field(default_factory=list)
    theme: ThemeConfig | None = None
    inherited_theme: ThemeConfig | None = None
    loaded_from: str = "empty"  # "page" | "store" | "template" | "empty" | "memory"

    def to_dict(self) -> dict[str, Any]:
        return {
            "components": [c.to_dict() for c in self.components],
            "theme": self.theme.to_dict() if self.theme else ThemeConfig().to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Layout:
        if not isinstance(data, dict):
            return cls()
        raw = data.get("components")
        items = raw if isinstance(raw, list) else []
        components = [
            PageComponent.from_dict(item, position=i)
            for i, item in enumerate(items)
            if isinstance(item, dict)
        ]
        theme = data.get("theme")
        return cls(
            components=components,
            theme=ThemeConfig.from_dict(theme) if isinstance(theme, dict) else None,
        )


@dataclass(frozen=True)
class LayoutScope:
    """Persistence key: the store layout (home page) or one page's layout."""

    store_id: str
    page_id: str | None = None

    def __post_init__(self) -> None:
        # An empty page id names the store layout.
        if self.page_id is not None and not str(self.page_id).strip():
            object.__setattr__(self, "page_id", None)

    @property
    def is_page(self) -> bool:
        return self.page_id is not None

    @property
    def store_scope(self) -> LayoutScope:
        return LayoutScope(store_id=self.store_id)

    @property
    def key(self) -> str:
        if self.page_id is None:
            return f"store:{self.store_id}"
        return f"store:{self.store_id}/page:{self.page_id}"


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


def _coerce_price(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


@dataclass
class Product:
    """Catalog entry, read-only to the kernel."""

    id: str
    name: str
    price: float = 0.0
    compare_price: float | None = None
    images: list[str] = field(default_factory=list)
    slug: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "compare_price": self.compare_price,
            "images": list(self.images),
            "slug": self.slug,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Product:
        images = data.get("images")
        compare = data.get("compare_price")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or "Product"),
            price=_coerce_price(data.get("price")),
            compare_price=_coerce_price(compare) if compare is not None else None,
            images=[i for i in images if isinstance(i, str) and i] if isinstance(images, list) else [],
            slug=str(data.get("slug") or ""),
            description=str(data.get("description") or ""),
        )

    @property
    def image(self) -> str:
        return self.images[0] if self.images else ""

    @property
    def on_sale(self) -> bool:
        return self.compare_price is not None and self.compare_price > self.price


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@dataclass
class SlotCallbacks:
    """
    Interactive hooks supplied by the host shell in public mode.
    Each callback maps a product to a URL; None means a static button.
    """

    product_url: Callable[[Product], str] | None = None
    add_to_cart_url: Callable[[Product], str] | None = None
    newsletter_action: str | None = None


@dataclass
class RenderContext:
    mode: str = PUBLIC
    page_theme: ThemeConfig | None = None
    store_theme: ThemeConfig | None = None
    products: list[Product] = field(default_factory=list)
    slots: SlotCallbacks = field(default_factory=SlotCallbacks)
    selected_id: str | None = None
    store_name: str = "Our Store"
    store_description: str = ""

    @property
    def is_preview(self) -> bool:
        return self.mode == EDIT_PREVIEW


@dataclass
class RenderOptions:
    """Options for rendering a complete HTML document."""

    title: str | None = None
    description: str | None = None
    footer: str | None = None
    lang: str = "en"
    include_fonts: bool = True


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


@dataclass
class BuilderState:
    """The editing session. components is always ordered by position."""

    components: list[PageComponent] = field(default_factory=list)
    selected_id: str | None = None
    editing_id: str | None = None
    active_panel: str = "components"
    preview_mode: str = "desktop"

    def to_dict(self) -> dict[str, Any]:
        return {
            "components": [c.to_dict() for c in self.components],
            "selected_id": self.selected_id,
            "editing_id": self.editing_id,
            "active_panel": self.active_panel,
            "preview_mode": self.preview_mode,
        }

    def find(self, component_id: str) -> PageComponent | None:
        for component in self.components:
            if component.id == component_id:
                return component
        return None


@dataclass
class Action:
    """One user interaction fed to the builder reducer."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict)
    sequence: int = 0
    timestamp: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "payload": copy.deepcopy(self.payload),
            "sequence": self.sequence,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Action:
        payload = data.get("payload")
        return cls(
            type=str(data.get("type", "")),
            payload=payload if isinstance(payload, dict) else {},
            sequence=int(data.get("sequence") or 0),
            timestamp=str(data.get("timestamp") or ""),
        )


@dataclass
class Warning:
    """A non-fatal issue encountered during reduction."""

    code: str
    message: str
    details: dict[str, Any] | None = None


@dataclass
class ReduceResult:
    """
    Result of applying one action to a builder state.
    The reducer never throws; it always returns one of these.
    """

    state: BuilderState
    applied: bool
    warnings: list[Warning] = field(default_factory=list)
    error: str | None = None


def now_iso() -> str:
    return datetime.now(UTC).isoformat()
