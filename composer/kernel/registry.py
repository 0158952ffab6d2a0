"""
Storefront Composer Kernel: Component Registry

The static catalog of block types a merchant can add in the builder.
Pure data, no IO. Used by the builder only; public rendering never consults it.

A template's default_props is the block's typed defaults overlaid with the
seed content shown when the block is first dropped onto a page. Its key set
is the schema a property editor introspects (see prop_kinds).
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from composer.kernel.props import parse_props
from composer.kernel.props import prop_kinds as _prop_kinds

ALL_CATEGORY = "all"

CATEGORIES: tuple[str, ...] = (
    "hero",
    "products",
    "media",
    "features",
    "social",
    "cta",
    "info",
    "layout",
)

_UNSPLASH = "https://images.unsplash.com"
_SAMPLE_VIDEO = "https://sample-videos.com/zip/10/mp4/SampleVideo_1280x720_1mb.mp4"


@dataclass(frozen=True)
class ComponentTemplate:
    """Registry entry. id doubles as the block type."""

    id: str
    name: str
    category: str
    description: str
    default_props: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "defaultProps": copy.deepcopy(self.default_props),
        }

    def new_props(self) -> dict[str, Any]:
        """A fresh copy of the default props for a newly added block."""
        return copy.deepcopy(self.default_props)


# (id, name, category, description, seed props)
_SEEDS: list[tuple[str, str, str, str, dict[str, Any]]] = [
    (
        "hero-banner",
        "Hero Banner",
        "hero",
        "Large banner with title, subtitle and call-to-action button",
        {
            "title": "Welcome to Our Store",
            "subtitle": "Discover amazing products at great prices",
            "buttonText": "Shop Now",
            "backgroundImage": f"{_UNSPLASH}/photo-1441986300917-64674bd600d8?w=1200&h=600&fit=crop",
            "overlay": True,
            "secondaryButton": False,
            "secondaryButtonText": "Learn More",
        },
    ),
    (
        "hero-split",
        "Split Hero",
        "hero",
        "Hero section with text on one side and an image on the other",
        {
            "title": "New Collection",
            "subtitle": "Explore our latest arrivals",
            "buttonText": "View Collection",
            "image": f"{_UNSPLASH}/photo-1441984904996-e0b6ba687e04?w=800&h=600&fit=crop",
            "imagePosition": "right",
        },
    ),
    (
        "hero-video",
        "Video Hero",
        "hero",
        "Full-width hero with a background video",
        {
            "title": "Experience Excellence",
            "subtitle": "Watch our story unfold",
            "buttonText": "Learn More",
            "videoUrl": _SAMPLE_VIDEO,
            "autoplay": True,
            "muted": True,
        },
    ),
    (
        "hero-minimal",
        "Minimal Hero",
        "hero",
        "Clean, text-focused hero section",
        {
            "title": "Simple. Beautiful. Effective.",
            "subtitle": "Discover what matters most",
            "alignment": "center",
            "showButton": False,
        },
    ),
    (
        "product-grid",
        "Product Grid",
        "products",
        "Display products in a responsive grid layout",
        {
            "title": "Featured Products",
            "columns": 3,
            "showPrice": True,
            "showRating": True,
            "maxProducts": 6,
            "selectedProducts": [],
        },
    ),
    (
        "product-carousel",
        "Product Carousel",
        "products",
        "Scrollable carousel of products",
        {
            "title": "Trending Now",
            "autoplay": True,
            "showDots": True,
            "slidesToShow": 4,
            "selectedProducts": [],
        },
    ),
    (
        "product-showcase",
        "Product Showcase",
        "products",
        "Highlight a single featured product",
        {
            "title": "Featured Product",
            "featuredProduct": None,
            "showPrice": True,
            "showDescription": True,
            "buttonText": "Add to Cart",
        },
    ),
    (
        "product-categories",
        "Product Categories",
        "products",
        "Browse products by category",
        {
            "title": "Shop by Category",
            "categories": [
                {"name": "Electronics", "image": "", "count": 45},
                {"name": "Clothing", "image": "", "count": 78},
                {"name": "Home & Garden", "image": "", "count": 32},
                {"name": "Sports", "image": "", "count": 21},
            ],
        },
    ),
    (
        "image-gallery",
        "Image Gallery",
        "media",
        "Grid of images with optional lightbox",
        {
            "title": "Gallery",
            "columns": 3,
            "spacing": "medium",
            "lightbox": True,
            "images": [
                f"{_UNSPLASH}/photo-1441986300917-64674bd600d8?w=400&h=400&fit=crop",
                f"{_UNSPLASH}/photo-1441984904996-e0b6ba687e04?w=400&h=400&fit=crop",
                f"{_UNSPLASH}/photo-1472851294608-062f824d29cc?w=400&h=400&fit=crop",
                f"{_UNSPLASH}/photo-1483985988355-763728e1935b?w=400&h=400&fit=crop",
                f"{_UNSPLASH}/photo-1490481651871-ab68de25d43d?w=400&h=400&fit=crop",
                f"{_UNSPLASH}/photo-1445205170230-053b83016050?w=400&h=400&fit=crop",
            ],
        },
    ),
    (
        "video-embed",
        "Video Player",
        "media",
        "Embedded video with playback controls",
        {
            "title": "Watch Our Story",
            "videoUrl": _SAMPLE_VIDEO,
            "autoplay": False,
            "controls": True,
            "muted": False,
        },
    ),
    (
        "image-text",
        "Image + Text",
        "media",
        "Image alongside a block of text",
        {
            "title": "Our Story",
            "content": (
                "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
                "Sed do eiusmod tempor incididunt ut labore et dolore magna aliqua."
            ),
            "image": "",
            "imagePosition": "left",
            "buttonText": "Read More",
            "showButton": True,
        },
    ),
    (
        "before-after",
        "Before & After",
        "media",
        "Side-by-side before and after comparison",
        {
            "title": "See the Difference",
            "beforeImage": "",
            "afterImage": "",
            "beforeLabel": "Before",
            "afterLabel": "After",
        },
    ),
    (
        "feature-list",
        "Feature List",
        "features",
        "Highlight key features or benefits",
        {
            "title": "Why Choose Us",
            "features": [
                {"icon": "shipping", "title": "Free Shipping", "description": "On orders over $50"},
                {"icon": "support", "title": "24/7 Support", "description": "Always here to help"},
                {"icon": "returns", "title": "Easy Returns", "description": "30-day return policy"},
            ],
        },
    ),
    (
        "stats-counter",
        "Stats Counter",
        "features",
        "Showcase key numbers and achievements",
        {
            "title": "Our Numbers Speak",
            "stats": [
                {"number": 10000, "label": "Happy Customers"},
                {"number": 500, "label": "Products Sold"},
                {"number": 50, "label": "Countries Served"},
                {"number": 5, "label": "Years Experience"},
            ],
        },
    ),
    (
        "icon-grid",
        "Icon Grid",
        "features",
        "Grid of icons with short descriptions",
        {
            "title": "Why Choose Us",
            "columns": 4,
            "features": [
                {"icon": "truck", "title": "Fast Delivery", "description": "Quick and reliable shipping"},
                {"icon": "shield", "title": "Secure Payment", "description": "Your data is protected"},
                {"icon": "return", "title": "Easy Returns", "description": "Hassle-free return policy"},
                {"icon": "support", "title": "24/7 Support", "description": "We are here to help"},
            ],
        },
    ),
    (
        "testimonials",
        "Testimonials",
        "social",
        "Customer reviews and testimonials",
        {
            "title": "What Our Customers Say",
            "testimonials": [
                {
                    "name": "Sarah Johnson",
                    "rating": 5,
                    "comment": "Amazing products and fast shipping!",
                    "avatar": "",
                },
            ],
        },
    ),
    (
        "reviews-grid",
        "Reviews Grid",
        "social",
        "Grid of customer reviews with ratings",
        {
            "title": "Customer Reviews",
            "reviews": [
                {"name": "John Doe", "rating": 5, "comment": "Excellent quality and fast delivery!", "date": "2024-01-15"},
                {"name": "Jane Smith", "rating": 4, "comment": "Great products, will buy again.", "date": "2024-01-10"},
                {"name": "Mike Johnson", "rating": 5, "comment": "Outstanding customer service!", "date": "2024-01-05"},
            ],
        },
    ),
    (
        "social-proof",
        "Social Proof",
        "social",
        "Logos of publications or partners",
        {
            "title": "As Featured In",
            "logos": [],
            "subtitle": "Trusted by thousands of customers worldwide",
        },
    ),
    (
        "cta-banner",
        "Call to Action",
        "cta",
        "Promotional banner with a call-to-action",
        {
            "title": "Special Offer",
            "subtitle": "Get 20% off your first order",
            "buttonText": "Shop Now",
            "backgroundColor": "#3b82f6",
            "textColor": "#ffffff",
        },
    ),
    (
        "newsletter",
        "Newsletter Signup",
        "cta",
        "Email subscription form",
        {
            "title": "Stay Updated",
            "subtitle": "Subscribe to get special offers and updates",
            "placeholder": "Enter your email",
            "buttonText": "Subscribe",
        },
    ),
    (
        "contact-info",
        "Contact Information",
        "info",
        "Store address, phone, email and hours",
        {
            "title": "Visit Our Store",
            "address": "123 Main Street, City, State 12345",
            "phone": "(555) 123-4567",
            "email": "info@store.com",
            "hours": "Mon-Fri: 9AM-6PM",
        },
    ),
    (
        "about-section",
        "About Section",
        "info",
        "Tell your store's story",
        {
            "title": "About Our Store",
            "content": (
                "We are passionate about providing quality products and exceptional "
                "customer service. Our team works hard to curate the best selection "
                "for our customers."
            ),
            "image": "",
            "imagePosition": "left",
        },
    ),
    (
        "spacer",
        "Spacer",
        "layout",
        "Vertical whitespace between sections",
        {"height": 60, "backgroundColor": "transparent"},
    ),
    (
        "divider",
        "Divider",
        "layout",
        "Horizontal line separating sections",
        {"style": "solid", "color": "#e5e7eb", "thickness": 1, "width": "100%"},
    ),
]


def _build_template(
    block_type: str, name: str, category: str, description: str, seed: dict[str, Any]
) -> ComponentTemplate:
    props = parse_props(block_type, seed)
    return ComponentTemplate(
        id=block_type,
        name=name,
        category=category,
        description=description,
        default_props=props.to_props() if props is not None else dict(seed),
    )


_TEMPLATES: tuple[ComponentTemplate, ...] = tuple(_build_template(*seed) for seed in _SEEDS)
_BY_ID: dict[str, ComponentTemplate] = {t.id: t for t in _TEMPLATES}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def list_templates() -> list[ComponentTemplate]:
    return list(_TEMPLATES)


def find_by_category(category: str) -> list[ComponentTemplate]:
    """Filter by category. The virtual "all" category matches everything."""
    if category == ALL_CATEGORY:
        return list(_TEMPLATES)
    return [t for t in _TEMPLATES if t.category == category]


def search(term: str, category: str = ALL_CATEGORY) -> list[ComponentTemplate]:
    """Case-insensitive substring match on name or description."""
    needle = (term or "").strip().lower()
    candidates = find_by_category(category)
    if not needle:
        return candidates
    return [
        t for t in candidates
        if needle in t.name.lower() or needle in t.description.lower()
    ]


def get_template(block_type: str) -> ComponentTemplate | None:
    return _BY_ID.get(block_type)


def is_registered(block_type: str) -> bool:
    return block_type in _BY_ID


def category_counts() -> dict[str, int]:
    """Template count per category, plus the virtual "all"."""
    counts = {ALL_CATEGORY: len(_TEMPLATES)}
    for category in CATEGORIES:
        counts[category] = sum(1 for t in _TEMPLATES if t.category == category)
    return counts


def prop_kinds(block_type: str) -> dict[str, str]:
    """Value kind per default-prop key for a registered block type."""
    if block_type not in _BY_ID:
        return {}
    return _prop_kinds(block_type)


def registered_types() -> list[str]:
    return [t.id for t in _TEMPLATES]


