"""
Storefront Composer Kernel: Layout Assembly

Sits between the pure functions (builder, renderer) and the outside world
(the storefront API, Postgres). Loads and saves one layout per scope.

Two independent namespaces:
    store scope  → the store layout, used for the home page
    page scope   → one layout per (store, page) pair

Load fallback chain, each step attempted independently and logged:
    page layout → store layout → template config → empty layout + default theme

A page scope never copies store components; the store layout only
contributes the inherited theme. The read path never raises.

Save is a whole-layout overwrite, last write wins.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any

from composer.kernel.assets import PendingReference, find_pending_assets
from composer.kernel.theme import DEFAULT_THEME
from composer.kernel.types import Layout, LayoutScope, PageComponent, ThemeConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class LayoutSaveError(Exception):
    """The backing store rejected or failed a layout write."""

    pass


class PendingAssetError(Exception):
    """A layout still references local preview handles that were never uploaded."""

    def __init__(self, references: list[PendingReference]):
        self.references = references
        where = ", ".join(f"{r.component_id}.{r.path}" for r in references)
        super().__init__(f"layout has {len(references)} pending upload(s): {where}")


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class LayoutStorage:
    """
    Abstract storage interface.
    Implement with the storefront API or Postgres for production,
    or in-memory for tests.
    """

    async def get_layout(self, scope: LayoutScope) -> dict[str, Any] | None:
        """Fetch the raw layout for a scope. Returns None if not found."""
        raise NotImplementedError

    async def put_layout(self, scope: LayoutScope, data: dict[str, Any]) -> None:
        """Overwrite the layout for a scope."""
        raise NotImplementedError

    async def get_template_config(self, template_id: str) -> Any:
        """Fetch a template's stored config (dict or JSON string). None if not found."""
        raise NotImplementedError


class MemoryStorage(LayoutStorage):
    """In-memory storage for testing."""

    def __init__(self) -> None:
        self.layouts: dict[str, dict[str, Any]] = {}
        self.templates: dict[str, Any] = {}

    async def get_layout(self, scope: LayoutScope) -> dict[str, Any] | None:
        data = self.layouts.get(scope.key)
        return copy.deepcopy(data) if data is not None else None

    async def put_layout(self, scope: LayoutScope, data: dict[str, Any]) -> None:
        self.layouts[scope.key] = copy.deepcopy(data)

    async def get_template_config(self, template_id: str) -> Any:
        return copy.deepcopy(self.templates.get(template_id))


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def normalize_components(components: list[PageComponent]) -> list[PageComponent]:
    """Sort by order, then re-stamp order 0..n-1 from position."""
    ordered = sorted(components, key=lambda c: c.order)
    for i, component in enumerate(ordered):
        component.order = i
    return ordered


def parse_layout(data: Any) -> Layout | None:
    """
    Parse a raw layout payload. Accepts a dict or a JSON string.
    Returns None when the payload is unusable.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError:
            return None
    if not isinstance(data, dict):
        return None
    layout = Layout.from_dict(data)
    layout.components = normalize_components(layout.components)
    return layout


# ---------------------------------------------------------------------------
# Assembly class
# ---------------------------------------------------------------------------


class LayoutAssembly:
    """
    Loads and saves layouts for a storage backend.
    """

    def __init__(self, storage: LayoutStorage):
        self._storage = storage

    # -- load --

    async def load_layout(self, scope: LayoutScope, template_id: str | None = None) -> Layout:
        """
        Resolve the layout for a scope through the fallback chain.
        Never raises. loaded_from records which step produced the layout.
        """
        if scope.is_page:
            page = await self._fetch(scope)
            store = await self._fetch(scope.store_scope)
            inherited = store.theme if store and store.theme else None
            if inherited is None:
                inherited = await self._template_theme(template_id)

            if page is not None:
                page.inherited_theme = inherited
                page.loaded_from = "page"
                logger.debug("assembly: loaded page layout %s (%d components)", scope.key, len(page.components))
                return page

            logger.info("assembly: no page layout for %s, rendering with inherited theme", scope.key)
            return Layout(
                theme=None,
                inherited_theme=inherited or copy.deepcopy(DEFAULT_THEME),
                loaded_from="store" if store is not None else "empty",
            )

        store = await self._fetch(scope)
        if store is not None:
            store.loaded_from = "store"
            logger.debug("assembly: loaded store layout %s (%d components)", scope.key, len(store.components))
            return store

        template = await self._fetch_template(template_id)
        if template is not None:
            template.loaded_from = "template"
            logger.info("assembly: no store layout for %s, using template %s", scope.key, template_id)
            return template

        logger.info("assembly: no layout for %s, using empty layout", scope.key)
        return Layout(theme=copy.deepcopy(DEFAULT_THEME), loaded_from="empty")

    async def _fetch(self, scope: LayoutScope) -> Layout | None:
        try:
            raw = await self._storage.get_layout(scope)
        except Exception as e:
            logger.warning("assembly: failed to fetch layout %s: %s", scope.key, e)
            return None
        if raw is None:
            return None
        layout = parse_layout(raw)
        if layout is None:
            logger.warning("assembly: unparseable layout for %s", scope.key)
        return layout

    async def _fetch_template(self, template_id: str | None) -> Layout | None:
        if not template_id:
            return None
        try:
            raw = await self._storage.get_template_config(template_id)
        except Exception as e:
            logger.warning("assembly: failed to fetch template %s: %s", template_id, e)
            return None
        if raw is None:
            return None
        layout = parse_layout(raw)
        if layout is None:
            logger.warning("assembly: unparseable config for template %s", template_id)
        return layout

    async def _template_theme(self, template_id: str | None) -> ThemeConfig | None:
        template = await self._fetch_template(template_id)
        if template is None or template.theme is None or template.theme.is_empty():
            return None
        return template.theme

    # -- save --

    async def save_layout(self, scope: LayoutScope, layout: Layout) -> Layout:
        """
        Overwrite the layout for a scope. Returns the layout as persisted.

        Raises PendingAssetError if any prop still holds a local preview handle.
        Raises LayoutSaveError if the backing store fails.
        """
        pending = find_pending_assets(layout.components)
        if pending:
            raise PendingAssetError(pending)

        components = copy.deepcopy(layout.components)
        for i, component in enumerate(components):
            component.order = i

        saved = Layout(
            components=components,
            theme=copy.deepcopy(layout.theme),
            inherited_theme=layout.inherited_theme,
            loaded_from=layout.loaded_from,
        )
        try:
            await self._storage.put_layout(scope, saved.to_dict())
        except Exception as e:
            logger.error("assembly: failed to save layout %s: %s", scope.key, e)
            raise LayoutSaveError(f"failed to save layout for {scope.key}: {e}") from e

        logger.info("assembly: saved layout %s (%d components)", scope.key, len(components))
        return saved
