"""
Storefront Composer Kernel: Product Binding

Resolves a block's product reference against the store catalog.

    selectedProducts non-empty → catalog entries with those ids, catalog order
    selection matched nothing  → whole catalog (stale ids never blank a block)
    no selection               → whole catalog
    empty catalog              → SAMPLE_PRODUCTS in edit-preview, [] in public

The public empty state and the builder's sample products are deliberately
different behaviors selected by the render mode.
"""

from __future__ import annotations

from typing import Any

from composer.kernel.types import EDIT_PREVIEW, PageComponent, Product

_SAMPLE_IMAGE = "https://images.unsplash.com/photo-{}?w=400&h=400&fit=crop"

SAMPLE_PRODUCTS: tuple[Product, ...] = (
    Product(
        id="sample-1",
        name="Sample Product 1",
        price=29.99,
        compare_price=39.99,
        images=[_SAMPLE_IMAGE.format("1523275335684-37898b6baf30")],
        slug="sample-product-1",
        description="A sample product shown while your catalog is empty.",
    ),
    Product(
        id="sample-2",
        name="Sample Product 2",
        price=49.99,
        images=[_SAMPLE_IMAGE.format("1505740420928-5e560c06d30e")],
        slug="sample-product-2",
        description="A sample product shown while your catalog is empty.",
    ),
    Product(
        id="sample-3",
        name="Sample Product 3",
        price=79.99,
        compare_price=99.99,
        images=[_SAMPLE_IMAGE.format("1542291026-7eec264c27ff")],
        slug="sample-product-3",
        description="A sample product shown while your catalog is empty.",
    ),
    Product(
        id="sample-4",
        name="Sample Product 4",
        price=24.99,
        images=[_SAMPLE_IMAGE.format("1572635196237-14b3f281503f")],
        slug="sample-product-4",
        description="A sample product shown while your catalog is empty.",
    ),
    Product(
        id="sample-5",
        name="Sample Product 5",
        price=89.99,
        images=[_SAMPLE_IMAGE.format("1560343090-f0409e92791a")],
        slug="sample-product-5",
        description="A sample product shown while your catalog is empty.",
    ),
)


def _selected_ids(props: dict[str, Any]) -> list[str]:
    raw = props.get("selectedProducts")
    if not isinstance(raw, list):
        return []
    return [
        str(item) for item in raw
        if (isinstance(item, str) and item) or (isinstance(item, int) and not isinstance(item, bool))
    ]


def resolve_products(
    component: PageComponent,
    catalog: list[Product],
    mode: str = EDIT_PREVIEW,
) -> list[Product]:
    """Products a multi-product block should display. Never raises."""
    if not catalog:
        return list(SAMPLE_PRODUCTS) if mode == EDIT_PREVIEW else []

    wanted = set(_selected_ids(component.props))
    if not wanted:
        return list(catalog)

    selected = [p for p in catalog if str(p.id) in wanted]
    return selected or list(catalog)


def resolve_featured_product(
    component: PageComponent,
    catalog: list[Product],
) -> Product | None:
    """Single-product binding: the featured id, else the first product, else None."""
    if not catalog:
        return None
    featured = component.props.get("featuredProduct")
    if featured not in (None, "") and not isinstance(featured, bool):
        for product in catalog:
            if str(product.id) == str(featured):
                return product
    return catalog[0]


def parse_catalog(items: Any) -> list[Product]:
    """Build a catalog from a JSON list, skipping entries that are not objects."""
    if not isinstance(items, list):
        return []
    return [Product.from_dict(item) for item in items if isinstance(item, dict)]


def format_price(amount: float) -> str:
    return f"${amount:,.2f}"
