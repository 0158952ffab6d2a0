"""
Composer Renderer -- Block Type Rendering Tests

One class per block type. Feed a single component, verify the HTML fragment.

This matters because:
  - The renderer is the only thing between merchant JSON and the shopper
  - Each block type has a specific HTML structure and CSS classes
  - Merchant content must be HTML-escaped
  - Product-bound blocks must read the catalog, not the props
"""

from composer.kernel.renderer import render
from composer.kernel.types import PUBLIC, PageComponent, RenderContext, SlotCallbacks

# ============================================================================
# Helpers
# ============================================================================


def block(block_type, props=None, block_id="block_1"):
    return PageComponent(id=block_id, type=block_type, props=props or {}, order=0)


def public_ctx(products=None, **kwargs):
    return RenderContext(mode=PUBLIC, products=products or [], **kwargs)


def assert_contains(html, *fragments):
    """Assert that the HTML output contains all given fragments."""
    for fragment in fragments:
        assert fragment in html, (
            f"Expected to find {fragment!r} in rendered HTML.\nGot (first 2000 chars):\n{html[:2000]}"
        )


def assert_not_contains(html, *fragments):
    """Assert that the HTML output does NOT contain any of the given fragments."""
    for fragment in fragments:
        assert fragment not in html, f"Did NOT expect to find {fragment!r} in rendered HTML."


# ============================================================================
# Hero blocks
# ============================================================================


class TestHeroBanner:
    def test_full_props(self):
        html = render(
            block(
                "hero-banner",
                {
                    "title": "Summer Sale",
                    "subtitle": "Up to 50% off",
                    "buttonText": "Shop",
                    "buttonUrl": "/collections/summer",
                    "backgroundImage": "https://cdn.example.com/hero.jpg",
                    "overlay": True,
                },
            ),
            public_ctx(),
        )
        assert_contains(
            html,
            'class="sf-block sf-hero sf-hero-banner"',
            "Summer Sale",
            "Up to 50% off",
            'href="/collections/summer"',
            'class="sf-img sf-hero-bg"',
            'src="https://cdn.example.com/hero.jpg"',
            'class="sf-overlay"',
        )

    def test_no_image_uses_gradient(self):
        html = render(block("hero-banner", {"title": "Hi"}), public_ctx())
        assert_contains(html, "linear-gradient(135deg, #3b82f6 0%, #10b981 100%)")
        assert_not_contains(html, "sf-hero-bg")

    def test_secondary_button_only_when_enabled(self):
        props = {"title": "Hi", "secondaryButtonText": "More", "secondaryButtonUrl": "#about"}
        assert_not_contains(render(block("hero-banner", props), public_ctx()), "More")

        props["secondaryButton"] = True
        html = render(block("hero-banner", props), public_ctx())
        assert_contains(html, 'class="sf-button sf-button-outline" href="#about"', "More")

    def test_title_is_escaped(self):
        html = render(block("hero-banner", {"title": '<script>alert("x")</script>'}), public_ctx())
        assert_not_contains(html, "<script>")
        assert_contains(html, "&lt;script&gt;")

    def test_unsafe_button_url_becomes_fragment(self):
        html = render(block("hero-banner", {"buttonText": "Go", "buttonUrl": "javascript:alert(1)"}), public_ctx())
        assert_not_contains(html, "javascript:")
        assert_contains(html, 'href="#"')


class TestHeroSplit:
    def test_image_position_and_content(self):
        html = render(
            block(
                "hero-split",
                {"title": "New In", "subtitle": "Fresh picks", "image": "https://cdn.example.com/s.jpg", "imagePosition": "left"},
            ),
            public_ctx(),
        )
        assert_contains(html, "sf-hero-split sf-image-left", "New In", "Fresh picks", 'src="https://cdn.example.com/s.jpg"')

    def test_unknown_position_falls_back_to_right(self):
        html = render(block("hero-split", {"imagePosition": "diagonal"}), public_ctx())
        assert_contains(html, "sf-image-right")


class TestHeroVideo:
    def test_video_attributes(self):
        html = render(
            block("hero-video", {"videoUrl": "https://cdn.example.com/v.mp4", "title": "Motion"}),
            public_ctx(),
        )
        assert_contains(html, '<video class="sf-video', 'src="https://cdn.example.com/v.mp4"', " autoplay", " muted", "Motion")

    def test_missing_video_shows_placeholder_in_preview(self):
        html = render(block("hero-video", {"videoUrl": ""}), RenderContext(mode="edit-preview"))
        assert_contains(html, "Add Video URL")
        assert_not_contains(html, "<video")


class TestHeroMinimal:
    def test_alignment_and_optional_button(self):
        html = render(block("hero-minimal", {"title": "Less", "alignment": "left"}), public_ctx())
        assert_contains(html, "sf-align-left", "Less")
        assert_not_contains(html, "sf-button")

        html = render(block("hero-minimal", {"showButton": True, "buttonText": "Browse"}), public_ctx())
        assert_contains(html, "sf-button", "Browse")


# ============================================================================
# Product blocks
# ============================================================================


class TestProductGrid:
    def test_selected_products_in_catalog_order(self, catalog):
        html = render(block("product-grid", {"selectedProducts": ["p2", "p1"]}), public_ctx(catalog))
        assert_contains(html, "Linen Shirt", "Wool Socks", "sf-cols-3")
        assert_not_contains(html, "Canvas Tote")
        # catalog order: p1 before p2
        assert html.index("Linen Shirt") < html.index("Wool Socks")

    def test_price_and_compare_price(self, catalog):
        html = render(block("product-grid", {"selectedProducts": ["p1"]}), public_ctx(catalog))
        assert_contains(html, "$59.50", '<s class="sf-price-compare">$79.00</s>')

    def test_hidden_price(self, catalog):
        html = render(block("product-grid", {"showPrice": False}), public_ctx(catalog))
        assert_not_contains(html, "sf-price")

    def test_max_products(self, catalog):
        html = render(block("product-grid", {"maxProducts": 1}), public_ctx(catalog))
        assert html.count('<article class="sf-product-card"') == 1

    def test_product_without_image_gets_placeholder(self, catalog):
        html = render(block("product-grid", {"selectedProducts": ["p2"]}), public_ctx(catalog))
        assert_contains(html, "data:image/svg+xml")

    def test_product_links(self, catalog):
        html = render(block("product-grid"), public_ctx(catalog))
        assert_contains(html, 'href="/products/linen-shirt"')

    def test_product_url_slot(self, catalog):
        slots = SlotCallbacks(product_url=lambda p: f"/shop/acme/products/{p.slug}")
        html = render(block("product-grid"), public_ctx(catalog, slots=slots))
        assert_contains(html, 'href="/shop/acme/products/linen-shirt"')


class TestProductCarousel:
    def test_slides_and_dots(self, catalog):
        html = render(block("product-carousel", {"slidesToShow": 2}), public_ctx(catalog))
        assert_contains(html, "--sf-slides:2", 'data-autoplay="true"', 'data-index="0"', 'data-index="1"')
        assert_not_contains(html, 'data-index="2"')
        assert html.count('class="sf-slide"') == 3

    def test_no_dots_when_one_page(self, catalog):
        html = render(block("product-carousel", {"slidesToShow": 4}), public_ctx(catalog))
        assert_not_contains(html, "sf-dots")


class TestProductShowcase:
    def test_featured_product(self, catalog):
        html = render(block("product-showcase", {"featuredProduct": "p1"}), public_ctx(catalog))
        assert_contains(html, "Linen Shirt", "Breathable linen for warm days.", "Add to Cart")
        assert_not_contains(html, "Canvas Tote")

    def test_stale_featured_id_uses_first_product(self, catalog):
        html = render(block("product-showcase", {"featuredProduct": "gone"}), public_ctx(catalog))
        assert_contains(html, "Canvas Tote")

    def test_description_toggle(self, catalog):
        html = render(
            block("product-showcase", {"featuredProduct": "p1", "showDescription": False}),
            public_ctx(catalog),
        )
        assert_not_contains(html, "Breathable linen")


class TestProductCategories:
    def test_categories(self):
        html = render(
            block(
                "product-categories",
                {"categories": [{"name": "Shoes", "count": 12, "image": "https://cdn.example.com/shoes.jpg"}, {"name": "Hats"}]},
            ),
            public_ctx(),
        )
        assert_contains(html, "Shoes", "12 products", 'href="#category-shoes"', "Hats")
        assert html.count("products</p>") == 1


# ============================================================================
# Media blocks
# ============================================================================


class TestImageGallery:
    def test_valid_and_invalid_images(self):
        html = render(
            block("image-gallery", {"images": ["https://cdn.example.com/a.jpg", "not a url"]}),
            public_ctx(),
        )
        assert_contains(html, 'src="https://cdn.example.com/a.jpg"', 'class="sf-lightbox" href="https://cdn.example.com/a.jpg"')
        assert html.count("sf-gallery-item") == 2
        assert html.count("sf-lightbox") == 1

    def test_columns_and_spacing(self):
        html = render(block("image-gallery", {"columns": 4, "spacing": "large", "images": ["https://x.example.com/1.jpg"]}), public_ctx())
        assert_contains(html, "sf-cols-4 sf-gap-large")


class TestVideoEmbed:
    def test_controls(self):
        html = render(block("video-embed", {"videoUrl": "https://cdn.example.com/v.mp4"}), public_ctx())
        assert_contains(html, " controls", "Video Player")
        assert_not_contains(html, " autoplay")

    def test_invalid_url_placeholder(self):
        html = render(block("video-embed", {"videoUrl": "ftp://nope"}), public_ctx())
        assert_contains(html, "Video Preview")
        assert_not_contains(html, "<video")


class TestImageText:
    def test_content_and_button(self):
        html = render(
            block("image-text", {"title": "Our Roots", "content": "Since 1999.", "buttonText": "More", "buttonUrl": "/about"}),
            public_ctx(),
        )
        assert_contains(html, "Our Roots", "Since 1999.", 'href="/about"', "sf-image-left")

    def test_button_hidden(self):
        html = render(block("image-text", {"showButton": False}), public_ctx())
        assert_not_contains(html, "sf-button")


class TestBeforeAfter:
    def test_labels(self):
        html = render(block("before-after", {"beforeLabel": "Old", "afterLabel": "New"}), public_ctx())
        assert_contains(html, "<figcaption>Old</figcaption>", "<figcaption>New</figcaption>")
        assert html.count("data:image/svg+xml") >= 2


# ============================================================================
# Feature and social blocks
# ============================================================================


class TestFeatureList:
    def test_features(self):
        html = render(
            block(
                "feature-list",
                {"title": "Perks", "features": [{"icon": "shipping", "title": "Free Shipping", "description": "On orders over $50"}]},
            ),
            public_ctx(),
        )
        assert_contains(html, "Perks", "Free Shipping", "On orders over $50", "sf-feature-icon")

    def test_item_defaults(self):
        html = render(block("feature-list", {"features": [{}]}), public_ctx())
        assert_contains(html, "<h3>Feature</h3>", "Feature description")


class TestIconGrid:
    def test_columns(self):
        html = render(block("icon-grid", {"columns": 2, "features": [{"title": "Secure"}]}), public_ctx())
        assert_contains(html, "sf-cols-2", "Secure")


class TestStatsCounter:
    def test_stats(self):
        html = render(
            block("stats-counter", {"stats": [{"number": "10K+", "label": "Happy Customers"}, {"number": 50, "label": "Countries"}]}),
            public_ctx(),
        )
        assert_contains(html, "10K+", "Happy Customers", ">50<", "Countries")


class TestTestimonials:
    def test_rating_and_initial(self):
        html = render(
            block("testimonials", {"testimonials": [{"name": "jane", "rating": 3, "comment": "Lovely"}]}),
            public_ctx(),
        )
        assert_contains(html, "★★★☆☆", "Rated 3 out of 5", ">J<", "Lovely", "jane")

    def test_avatar_image(self):
        html = render(
            block("testimonials", {"testimonials": [{"name": "Ann", "avatar": "https://cdn.example.com/ann.jpg"}]}),
            public_ctx(),
        )
        assert_contains(html, 'src="https://cdn.example.com/ann.jpg"')
        assert_not_contains(html, 'class="sf-avatar"')


class TestReviewsGrid:
    def test_review_date(self):
        html = render(
            block("reviews-grid", {"reviews": [{"name": "Sam", "rating": 9, "comment": "Wow", "date": "2024-01-02"}]}),
            public_ctx(),
        )
        assert_contains(html, "★★★★★", "Rated 5 out of 5", "<time", "2024-01-02", "Sam")


class TestSocialProof:
    def test_logo_name_without_image(self):
        html = render(block("social-proof", {"logos": [{"name": "Vogue"}]}), public_ctx())
        assert_contains(html, '<span class="sf-logo-name">Vogue</span>')

    def test_logo_image(self):
        html = render(
            block("social-proof", {"logos": [{"name": "Elle", "image": "https://cdn.example.com/elle.png"}]}),
            public_ctx(),
        )
        assert_contains(html, 'src="https://cdn.example.com/elle.png"', 'alt="Elle"')


# ============================================================================
# Call-to-action and info blocks
# ============================================================================


class TestCtaBanner:
    def test_custom_colors(self):
        html = render(block("cta-banner", {"backgroundColor": "#111111", "buttonText": "Go"}), public_ctx())
        assert_contains(
            html,
            "background-color:#111111;color:#ffffff",
            "background-color:#ffffff;color:#111111;border-color:#ffffff",
        )

    def test_background_defaults_to_primary(self):
        html = render(block("cta-banner"), public_ctx())
        assert_contains(html, "background-color:#3b82f6;color:#ffffff")


class TestNewsletter:
    def test_form(self):
        html = render(block("newsletter", {"placeholder": "you@example.com", "buttonText": "Join"}), public_ctx())
        assert_contains(html, 'placeholder="you@example.com"', ">Join</button>", 'action="#"')
        assert_not_contains(html, "onsubmit")

    def test_action_slot(self):
        ctx = public_ctx(slots=SlotCallbacks(newsletter_action="/subscribe"))
        assert_contains(render(block("newsletter"), ctx), 'action="/subscribe"')


class TestContactInfo:
    def test_links(self):
        html = render(block("contact-info", {"phone": "(555) 123-4567", "email": "hi@shop.example"}), public_ctx())
        assert_contains(html, 'href="tel:5551234567"', 'href="mailto:hi@shop.example"', "(555) 123-4567")

    def test_defaults(self):
        html = render(block("contact-info"), public_ctx())
        assert_contains(html, "Visit Our Store", "123 Main Street, City, State 12345", "Mon-Fri: 9AM-6PM")


class TestAboutSection:
    def test_about(self):
        html = render(block("about-section", {"title": "Who We Are", "imagePosition": "right"}), public_ctx())
        assert_contains(html, "Who We Are", "sf-image-right", "passionate about providing quality products")


# ============================================================================
# Layout blocks
# ============================================================================


class TestSpacer:
    def test_height(self):
        html = render(block("spacer", {"height": 120}), public_ctx())
        assert_contains(html, "height:120px;background-color:transparent")

    def test_default_height(self):
        assert_contains(render(block("spacer", {"height": "abc"}), public_ctx()), "height:60px")


class TestDivider:
    def test_style(self):
        html = render(block("divider", {"style": "dashed", "thickness": 2, "width": "50%"}), public_ctx())
        assert_contains(html, "width:50%", "border-top:2px dashed #e5e7eb")

    def test_bad_width_and_style(self):
        html = render(block("divider", {"style": "wavy", "width": "calc(1px)"}), public_ctx())
        assert_contains(html, "width:100%", "1px solid")
