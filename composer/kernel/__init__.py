"""
Storefront Composer Kernel, the pure engine.

Four components:
  registry:  the fixed palette of block types and their default props
  renderer:  (component, context) → HTML  (pure, deterministic)
  builder:   (state, action) → state  (pure, never raises)
  assembly:  load/save layouts through a storage backend (IO)

Helpers:
  resolve_theme, resolve_products, validate_action, make_action
"""

from composer.kernel.actions import make_action, validate_action
from composer.kernel.assembly import LayoutAssembly, LayoutSaveError, PendingAssetError
from composer.kernel.builder import empty_builder_state, reduce, replay
from composer.kernel.products import resolve_featured_product, resolve_products
from composer.kernel.renderer import render, render_components, render_layout, render_page
from composer.kernel.theme import resolve_theme

__all__ = [
    "render",
    "render_components",
    "render_layout",
    "render_page",
    "resolve_theme",
    "resolve_products",
    "resolve_featured_product",
    "reduce",
    "replay",
    "empty_builder_state",
    "validate_action",
    "make_action",
    "LayoutAssembly",
    "LayoutSaveError",
    "PendingAssetError",
]
