"""
BuilderSession: one merchant editing one layout scope.

Wraps the pure builder reducer with the IO around it:
  load()            layout + catalog through the fallback chain
  add/update/...    validated actions fed to the reducer, history recorded
  attach/upload     local preview handles and their real uploads
  save()            whole-layout overwrite; failures notify and keep state
  preview_html()    the canvas, rendered in edit-preview mode

Usage:
    session = BuilderSession.for_api(api, store_id="12", notifier=notifier)
    await session.load()
    session.add_component("hero-banner")
    session.update_prop(session.state.selected_id, "title", "Summer Sale")
    await session.save()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from composer.kernel.actions import make_action, validate_action
from composer.kernel.assembly import LayoutAssembly, LayoutSaveError, LayoutStorage, PendingAssetError
from composer.kernel.assets import (
    PendingAsset,
    PersistedAsset,
    is_valid_url,
    new_pending_asset,
    replace_pending,
)
from composer.kernel.builder import empty_builder_state, from_components, ordered_components, reduce
from composer.kernel.renderer import render_components, render_page
from composer.kernel.theme import apply_preset, validate_theme
from composer.kernel.types import (
    EDIT_PREVIEW,
    Action,
    BuilderState,
    Layout,
    LayoutScope,
    Product,
    ReduceResult,
    RenderContext,
    RenderOptions,
    ThemeConfig,
)
from storefront.exceptions import ApiError
from storefront.services.api_client import StorefrontApi
from storefront.services.http_storage import ApiLayoutStorage
from storefront.services.notifier import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)

# Actions that change what gets persisted; selection and panels do not.
_CONTENT_ACTIONS = {
    "component.add",
    "component.update",
    "component.remove",
    "component.move",
    "component.duplicate",
}


@dataclass
class LocalUpload:
    """A file picked in the editor, shown through a pending handle until uploaded."""

    asset: PendingAsset
    component_id: str
    key: str
    filename: str
    content: bytes
    content_type: str


class BuilderSession:
    """Editing session for one store layout or one page layout."""

    def __init__(
        self,
        scope: LayoutScope,
        storage: LayoutStorage,
        api: StorefrontApi | None = None,
        notifier: Notifier | None = None,
        template_id: str | None = None,
        store_name: str = "Our Store",
    ) -> None:
        self.scope = scope
        self.assembly = LayoutAssembly(storage)
        self.api = api
        self.notifier = notifier or LoggingNotifier()
        self.template_id = template_id
        self.store_name = store_name

        self.state: BuilderState = empty_builder_state()
        self.theme = ThemeConfig()
        self.inherited_theme: ThemeConfig | None = None
        self.products: list[Product] = []
        self.history: list[Action] = []
        self.uploads: dict[str, LocalUpload] = {}
        self.loaded_from = "empty"
        self.dirty = False

    @classmethod
    def for_api(
        cls,
        api: StorefrontApi,
        store_id: str,
        page_id: str | None = None,
        notifier: Notifier | None = None,
    ) -> BuilderSession:
        notifier = notifier or LoggingNotifier()
        storage = ApiLayoutStorage(api, notifier=notifier)
        return cls(LayoutScope(store_id=store_id, page_id=page_id), storage, api=api, notifier=notifier)

    # -- loading --

    async def load(self) -> Layout:
        """Load the layout and catalog. Never raises; failures degrade to defaults."""
        if self.api is not None:
            await self._load_store()
            self.products = await self._load_products()

        layout = await self.assembly.load_layout(self.scope, template_id=self.template_id)
        self.state = from_components(layout.components)
        self.theme = layout.theme or ThemeConfig()
        self.inherited_theme = layout.inherited_theme
        self.loaded_from = layout.loaded_from
        self.history = []
        self.uploads = {}
        self.dirty = False
        logger.info(
            "editor: loaded %s from %s (%d components)", self.scope.key, layout.loaded_from, len(layout.components)
        )
        return layout

    async def _load_store(self) -> None:
        try:
            store = await self.api.get_store(self.scope.store_id)
        except ApiError as e:
            logger.warning("editor: failed to load store %s: %s", self.scope.store_id, e)
            self.notifier.error("Failed to load store")
            return
        if store is None:
            self.notifier.error("Store not found")
            return
        self.store_name = store.name
        if self.template_id is None:
            self.template_id = store.template_id

    async def _load_products(self) -> list[Product]:
        try:
            return await self.api.get_products(self.scope.store_id)
        except ApiError as e:
            logger.warning("editor: failed to load products for %s: %s", self.scope.store_id, e)
            self.notifier.error("Failed to load products")
            return []

    # -- actions --

    def dispatch(self, type: str, payload: dict[str, Any] | None = None) -> ReduceResult:
        """Validate, reduce and record one action. Rejections leave state untouched."""
        errors = validate_action(type, payload if payload is not None else {})
        if errors:
            logger.info("editor: invalid %s: %s", type, "; ".join(errors))
            return ReduceResult(state=self.state, applied=False, error="INVALID_ACTION: " + "; ".join(errors))

        action = make_action(type, payload, sequence=len(self.history) + 1)
        result = reduce(self.state, action)
        if not result.applied:
            logger.info("editor: rejected %s: %s", type, result.error)
            return result

        for warning in result.warnings:
            logger.debug("editor: %s: %s", warning.code, warning.message)
        self.state = result.state
        self.history.append(action)
        if type in _CONTENT_ACTIONS and not result.warnings:
            self.dirty = True
        return result

    def add_component(self, type: str, props: dict[str, Any] | None = None) -> ReduceResult:
        payload: dict[str, Any] = {"type": type}
        if props is not None:
            payload["props"] = props
        return self.dispatch("component.add", payload)

    def update_component(self, component_id: str, props: dict[str, Any]) -> ReduceResult:
        """Replace the component's props wholesale."""
        return self.dispatch("component.update", {"id": component_id, "props": props})

    def update_prop(self, component_id: str, key: str, value: Any) -> ReduceResult:
        """Edit one field: merge it over the current props, then replace."""
        component = self.state.find(component_id)
        current = component.props if component is not None else {}
        return self.update_component(component_id, {**current, key: value})

    def remove_component(self, component_id: str) -> ReduceResult:
        result = self.dispatch("component.remove", {"id": component_id})
        if result.applied:
            self.uploads = {h: u for h, u in self.uploads.items() if u.component_id != component_id}
        return result

    def move_component(self, component_id: str, direction: str) -> ReduceResult:
        return self.dispatch("component.move", {"id": component_id, "direction": direction})

    def duplicate_component(self, component_id: str) -> ReduceResult:
        return self.dispatch("component.duplicate", {"id": component_id})

    def select(self, component_id: str | None) -> ReduceResult:
        return self.dispatch("component.select", {"id": component_id})

    def edit(self, component_id: str | None) -> ReduceResult:
        return self.dispatch("component.edit", {"id": component_id})

    def set_panel(self, panel: str) -> ReduceResult:
        return self.dispatch("panel.set", {"panel": panel})

    def set_preview_mode(self, mode: str) -> ReduceResult:
        return self.dispatch("preview.set", {"mode": mode})

    # -- theme --

    def set_theme(self, theme: ThemeConfig | dict[str, Any] | None = None, preset: str | None = None) -> list[str]:
        """
        Replace the scope's theme, optionally applying a named color preset
        on top. Returns error strings; the theme is unchanged on error.
        """
        if isinstance(theme, ThemeConfig):
            new_theme = ThemeConfig.from_dict(theme.to_dict())
        elif theme is None:
            new_theme = ThemeConfig.from_dict(self.theme.to_dict())
        else:
            errors = validate_theme(theme)
            if errors:
                return errors
            new_theme = ThemeConfig.from_dict(theme)

        if preset:
            try:
                new_theme = apply_preset(new_theme, preset)
            except ValueError as e:
                return [str(e)]

        self.theme = new_theme
        self.dirty = True
        return []

    # -- assets --

    def attach_local_asset(
        self,
        component_id: str,
        key: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> PendingAsset | None:
        """
        Point a media prop at a local preview handle. The file is kept until
        upload_asset() swaps the handle for the persisted URL.
        """
        if self.state.find(component_id) is None:
            logger.info("editor: cannot attach %s, no component %s", filename, component_id)
            return None
        asset = new_pending_asset()
        result = self.update_prop(component_id, key, asset.handle)
        if not result.applied:
            return None
        self.uploads[asset.handle] = LocalUpload(asset, component_id, key, filename, content, content_type)
        return asset

    async def upload_asset(self, handle: str) -> PersistedAsset | None:
        """Upload one pending file and replace its handle everywhere. None on failure."""
        upload = self.uploads.get(handle)
        if upload is None:
            return None
        if self.api is None:
            self.notifier.error("Uploads are not available offline")
            return None
        try:
            response = await self.api.upload_media(
                self.scope.store_id, upload.filename, upload.content, upload.content_type
            )
        except ApiError as e:
            logger.warning("editor: upload of %s failed: %s", upload.filename, e)
            self.notifier.error(f"Failed to upload {upload.filename}")
            return None
        if not is_valid_url(response.url):
            self.notifier.error(f"Failed to upload {upload.filename}")
            return None

        persisted = PersistedAsset(url=response.url)
        self.state.components = replace_pending(self.state.components, upload.asset, persisted)
        del self.uploads[handle]
        self.dirty = True
        return persisted

    async def upload_pending(self) -> bool:
        """Upload every attached file. True when no pending handle is left."""
        for handle in list(self.uploads):
            await self.upload_asset(handle)
        return not self.uploads

    # -- persistence --

    def to_layout(self) -> Layout:
        return Layout(
            components=ordered_components(self.state),
            theme=ThemeConfig.from_dict(self.theme.to_dict()),
            inherited_theme=self.inherited_theme,
            loaded_from=self.loaded_from,
        )

    async def save(self) -> bool:
        """
        Persist the whole layout. On failure the in-memory state is kept so
        the merchant can retry.
        """
        try:
            await self.assembly.save_layout(self.scope, self.to_layout())
        except PendingAssetError as e:
            logger.info("editor: save blocked for %s: %s", self.scope.key, e)
            self.notifier.error("Finish uploading images before saving")
            return False
        except LayoutSaveError as e:
            logger.warning("editor: save failed for %s: %s", self.scope.key, e)
            self.notifier.error("Failed to save layout")
            return False

        self.state.components = ordered_components(self.state)
        self.dirty = False
        self.notifier.success("Layout saved successfully!")
        return True

    # -- preview --

    def render_context(self) -> RenderContext:
        if self.scope.is_page:
            page_theme, store_theme = self.theme, self.inherited_theme
        else:
            page_theme, store_theme = None, self.theme
        return RenderContext(
            mode=EDIT_PREVIEW,
            page_theme=page_theme,
            store_theme=store_theme,
            products=list(self.products),
            selected_id=self.state.selected_id,
            store_name=self.store_name,
        )

    def preview_html(self) -> str:
        """The canvas as a full document, sized for the current preview mode."""
        ctx = self.render_context()
        components = ordered_components(self.state)
        body = (
            f'<div class="sf-preview sf-preview-{self.state.preview_mode}">\n'
            f"{render_components(components, ctx)}\n</div>"
        )
        return render_page(components, ctx, RenderOptions(title=f"Preview | {self.store_name}"), body_html=body)
