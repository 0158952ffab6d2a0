"""
Public storefront pages.

Renders the shopper-facing home page and content pages for a store slug.
Every fetch failure degrades the affected section and is reported through
the notifier; a page is always produced.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from composer.kernel.assembly import LayoutAssembly
from composer.kernel.renderer import render_page, render_page_content
from composer.kernel.types import (
    PUBLIC,
    LayoutScope,
    Product,
    RenderContext,
    RenderOptions,
    SlotCallbacks,
)
from storefront.exceptions import ApiError
from storefront.models import Page, Store
from storefront.services.api_client import StorefrontApi
from storefront.services.http_storage import ApiLayoutStorage
from storefront.services.notifier import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)

STORE_NOT_FOUND_HTML = "<p>The store you are looking for does not exist or is no longer available.</p>"
PAGE_NOT_FOUND_HTML = "<p>Page content not found.</p>"


def store_slots(store: Store, api_url: str) -> SlotCallbacks:
    """Links for product cards, add-to-cart and the newsletter form of one store."""
    slug = quote(store.slug, safe="")

    def product_url(product: Product) -> str:
        return f"/stores/{slug}/products/{quote(product.slug or str(product.id), safe='')}"

    def add_to_cart_url(product: Product) -> str:
        return f"/stores/{slug}/cart/add/{quote(str(product.id), safe='')}"

    return SlotCallbacks(
        product_url=product_url,
        add_to_cart_url=add_to_cart_url,
        newsletter_action=f"{api_url}/stores/{slug}/newsletter/subscribe",
    )


class StorefrontPages:
    """Public page service: slug in, HTML document out."""

    def __init__(self, api: StorefrontApi, notifier: Notifier | None = None):
        self.api = api
        self.notifier = notifier or LoggingNotifier()
        self.assembly = LayoutAssembly(ApiLayoutStorage(api, public=True, notifier=self.notifier))

    async def render_home(self, slug: str) -> str:
        """Home page: the store layout, or the default hero, features and CTA."""
        store = await self._load_store(slug)
        if store is None:
            return self._not_found(slug)

        products = await self._load_products(slug)
        layout = await self.assembly.load_layout(LayoutScope(store_id=slug), template_id=store.template_id)
        logger.info(
            "pages: rendering home for %s from %s (%d components)", slug, layout.loaded_from, len(layout.components)
        )

        ctx = self._context(store, products)
        ctx.store_theme = layout.theme
        return render_page(layout.components, ctx, RenderOptions(title=store.name, description=store.description))

    async def render_page(self, slug: str, page_slug: str) -> str:
        """
        A content page. A page with a saved layout renders its components on
        top of the store theme; otherwise the page's own content is shown.
        """
        store = await self._load_store(slug)
        if store is None:
            return self._not_found(slug)

        page = await self._load_page(slug, page_slug)
        products = await self._load_products(slug)
        layout = await self.assembly.load_layout(
            LayoutScope(store_id=slug, page_id=page_slug), template_id=store.template_id
        )

        ctx = self._context(store, products)
        ctx.page_theme = layout.theme
        ctx.store_theme = layout.inherited_theme

        title = (page.seo_title or page.title) if page else page_slug
        description = page.seo_description if page else None
        options = RenderOptions(title=f"{title} | {store.name}", description=description or store.description)

        if layout.components:
            logger.info("pages: rendering layout for %s/%s (%d components)", slug, page_slug, len(layout.components))
            return render_page(layout.components, ctx, options)

        body = render_page_content(
            page.title if page else page_slug,
            page.content if page and page.content else PAGE_NOT_FOUND_HTML,
            ctx,
        )
        return render_page([], ctx, options, body_html=body)

    # -- fetch helpers; each failure degrades one section --

    async def _load_store(self, slug: str) -> Store | None:
        try:
            store = await self.api.get_store_by_slug(slug)
        except ApiError as e:
            logger.warning("pages: failed to load store %s: %s", slug, e)
            self.notifier.error("Could not load store")
            return None
        if store is None:
            logger.info("pages: store %s not found", slug)
            self.notifier.error("Store not found")
        return store

    async def _load_products(self, slug: str) -> list[Product]:
        try:
            return await self.api.get_store_products(slug)
        except ApiError as e:
            logger.warning("pages: failed to load products for %s: %s", slug, e)
            self.notifier.error("Could not load products")
            return []

    async def _load_page(self, slug: str, page_slug: str) -> Page | None:
        try:
            page = await self.api.get_store_page(slug, page_slug)
        except ApiError as e:
            logger.warning("pages: failed to load page %s/%s: %s", slug, page_slug, e)
            self.notifier.error("Could not load page")
            return None
        if page is None:
            self.notifier.error("Page not found")
        return page

    def _context(self, store: Store, products: list[Product]) -> RenderContext:
        return RenderContext(
            mode=PUBLIC,
            products=products,
            slots=store_slots(store, self.api.api_url),
            store_name=store.name,
            store_description=store.description or "",
        )

    def _not_found(self, slug: str) -> str:
        ctx = RenderContext(mode=PUBLIC, store_name="Store not found")
        body = render_page_content("Store not found", STORE_NOT_FOUND_HTML, ctx)
        return render_page([], ctx, RenderOptions(title="Store not found"), body_html=body)
