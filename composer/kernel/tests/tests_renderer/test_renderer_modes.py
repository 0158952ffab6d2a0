"""
Composer Renderer -- Render Mode Tests

One renderer serves the builder canvas and the public storefront. The mode
controls only the behavioral deltas:

  edit-preview: sample products for an empty catalog, static buttons,
                selection wrappers, blob: preview handles
  public:       "No products available", live links, add-to-cart
"""

from composer.kernel.renderer import render, render_components
from composer.kernel.types import EDIT_PREVIEW, PUBLIC, PageComponent, RenderContext, SlotCallbacks


def block(block_type, props=None, block_id="block_1", order=0):
    return PageComponent(id=block_id, type=block_type, props=props or {}, order=order)


def assert_contains(html, *fragments):
    for fragment in fragments:
        assert fragment in html, (
            f"Expected to find {fragment!r} in rendered HTML.\nGot (first 2000 chars):\n{html[:2000]}"
        )


def assert_not_contains(html, *fragments):
    for fragment in fragments:
        assert fragment not in html, f"Did NOT expect to find {fragment!r} in rendered HTML."


# ============================================================================
# Product empty states
# ============================================================================


class TestEmptyCatalog:
    def test_preview_shows_sample_products(self):
        html = render(block("product-grid"), RenderContext(mode=EDIT_PREVIEW))
        assert_contains(html, "Sample Product 1", "Sample Product 5", "$29.99")
        assert_not_contains(html, "No products available")

    def test_public_shows_empty_state(self):
        html = render(block("product-grid"), RenderContext(mode=PUBLIC))
        assert_contains(html, "No products available")
        assert_not_contains(html, "Sample Product")

    def test_carousel_follows_the_same_rule(self):
        assert_contains(render(block("product-carousel"), RenderContext(mode=EDIT_PREVIEW)), "Sample Product 3")
        assert_contains(render(block("product-carousel"), RenderContext(mode=PUBLIC)), "No products available")

    def test_showcase_follows_the_same_rule(self):
        assert_contains(render(block("product-showcase"), RenderContext(mode=EDIT_PREVIEW)), "Sample Product 1")
        assert_contains(render(block("product-showcase"), RenderContext(mode=PUBLIC)), "No products available")

    def test_real_catalog_wins_in_preview(self, catalog):
        html = render(block("product-grid"), RenderContext(mode=EDIT_PREVIEW, products=catalog))
        assert_contains(html, "Linen Shirt")
        assert_not_contains(html, "Sample Product")


# ============================================================================
# Buttons and links
# ============================================================================


class TestInteractivity:
    def test_preview_buttons_are_static(self):
        html = render(block("hero-banner", {"buttonUrl": "/sale"}), RenderContext(mode=EDIT_PREVIEW))
        assert_contains(html, '<span class="sf-button sf-button-light"')
        assert_not_contains(html, 'href="/sale"')

    def test_public_buttons_link(self):
        html = render(block("hero-banner", {"buttonUrl": "/sale"}), RenderContext(mode=PUBLIC))
        assert_contains(html, '<a class="sf-button sf-button-light" href="/sale"')

    def test_preview_cart_button_disabled(self, catalog):
        html = render(block("product-grid"), RenderContext(mode=EDIT_PREVIEW, products=catalog))
        assert_contains(html, " disabled>Add to Cart</button>")

    def test_public_cart_button_enabled(self, catalog):
        html = render(block("product-grid"), RenderContext(mode=PUBLIC, products=catalog))
        assert_contains(html, '<button type="button" class="sf-button sf-add-to-cart" data-product-id="p1"')
        assert_not_contains(html, " disabled")

    def test_public_cart_slot(self, catalog):
        slots = SlotCallbacks(add_to_cart_url=lambda p: f"/cart/add/{p.id}")
        html = render(block("product-grid"), RenderContext(mode=PUBLIC, products=catalog, slots=slots))
        assert_contains(html, '<a class="sf-button sf-add-to-cart" href="/cart/add/p1"')

    def test_cart_slot_ignored_in_preview(self, catalog):
        slots = SlotCallbacks(add_to_cart_url=lambda p: f"/cart/add/{p.id}")
        html = render(block("product-grid"), RenderContext(mode=EDIT_PREVIEW, products=catalog, slots=slots))
        assert_not_contains(html, "/cart/add/")

    def test_preview_product_links_are_inert(self, catalog):
        html = render(block("product-grid"), RenderContext(mode=EDIT_PREVIEW, products=catalog))
        assert_not_contains(html, "/products/")

    def test_preview_newsletter_does_not_submit(self):
        html = render(block("newsletter"), RenderContext(mode=EDIT_PREVIEW))
        assert_contains(html, 'onsubmit="return false"')

    def test_gallery_empty_hint_only_in_preview(self):
        assert_contains(render(block("image-gallery"), RenderContext(mode=EDIT_PREVIEW)), "Add images to build your gallery")
        assert_not_contains(render(block("image-gallery"), RenderContext(mode=PUBLIC)), "Add images")


# ============================================================================
# Selection wrappers
# ============================================================================


class TestEditableWrapper:
    def test_preview_wraps_each_block(self):
        html = render_components(
            [block("spacer", block_id="a", order=0), block("divider", block_id="b", order=1)],
            RenderContext(mode=EDIT_PREVIEW),
        )
        assert_contains(
            html,
            'class="sf-editable" data-component-id="a" data-component-type="spacer"',
            'class="sf-editable" data-component-id="b" data-component-type="divider"',
        )

    def test_selected_block_marked(self):
        html = render(block("spacer", block_id="a"), RenderContext(mode=EDIT_PREVIEW, selected_id="a"))
        assert_contains(html, 'class="sf-editable sf-selected"')

    def test_public_has_no_wrappers(self):
        html = render(block("spacer", block_id="a"), RenderContext(mode=PUBLIC, selected_id="a"))
        assert_not_contains(html, "sf-editable", "data-component-id")

    def test_unsupported_block_still_selectable(self):
        html = render(block("mega-menu", block_id="m"), RenderContext(mode=EDIT_PREVIEW))
        assert_contains(html, 'data-component-id="m"', "sf-unsupported")


# ============================================================================
# Determinism
# ============================================================================


class TestDeterminism:
    def test_same_input_same_output(self, catalog):
        components = [
            block("hero-banner", {"title": "A"}, block_id="h", order=0),
            block("product-grid", block_id="g", order=1),
            block("testimonials", {"testimonials": [{"name": "Z"}]}, block_id="t", order=2),
        ]
        ctx = RenderContext(mode=PUBLIC, products=catalog)
        assert render_components(components, ctx) == render_components(components, ctx)

    def test_render_does_not_mutate_props(self):
        props = {"images": "oops", "columns": "4"}
        component = block("image-gallery", props)
        render(component, RenderContext())
        assert component.props == {"images": "oops", "columns": "4"}
