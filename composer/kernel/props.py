"""
Storefront Composer Kernel: Typed Block Props

One pydantic model per block type. Persisted props are an open JSON map that
may come from an older schema version; the shared before-validator on
BlockProps coerces every value into its field's type and drops anything it
cannot use, so the field default is substituted instead. Render code reads
typed attributes and never re-checks shapes.

Keys on the wire are camelCase (buttonText, selectedProducts); attributes are
snake_case.
"""

from __future__ import annotations

import logging
import math
import types
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

_MISSING = object()
_FALSE_STRINGS = {"false", "0", "no", "off", ""}


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite(value: Any) -> float | None:
    """float(value) when it is a finite number, else None."""
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _as_string(raw: Any) -> Any:
    if isinstance(raw, str):
        return raw if raw else _MISSING
    if _is_number(raw) and raw and _finite(raw) is not None:
        return str(raw)
    return _MISSING


def _as_bool(raw: Any) -> Any:
    if raw is None:
        return _MISSING
    if isinstance(raw, str):
        return raw.strip().lower() not in _FALSE_STRINGS
    return bool(raw)


def _as_number(raw: Any, target: type) -> Any:
    if isinstance(raw, bool) or raw is None:
        return _MISSING
    if not isinstance(raw, str) and not _is_number(raw):
        return _MISSING
    number = _finite(raw.strip() if isinstance(raw, str) else raw)
    if number is None or number == 0:
        return _MISSING
    return int(number) if target is int else number


def _as_list(item_type: Any, raw: Any) -> Any:
    if raw is None:
        return _MISSING
    if not isinstance(raw, list):
        return []
    if _is_model(item_type):
        return [item for item in raw if isinstance(item, dict)]
    out = []
    for item in raw:
        if isinstance(item, str) and item.strip():
            out.append(item)
        elif _is_number(item):
            out.append(str(item))
    return out


def _coerce(annotation: Any, raw: Any) -> Any:
    target = _unwrap_optional(annotation)
    if target is str:
        return _as_string(raw)
    if target is bool:
        return _as_bool(raw)
    if target in (int, float):
        return _as_number(raw, target)
    if get_origin(target) is list:
        args = get_args(target)
        return _as_list(args[0] if args else str, raw)
    if _is_model(target):
        return raw if isinstance(raw, dict) else _MISSING
    return _MISSING if raw is None else raw


def _kind(annotation: Any) -> str:
    target = _unwrap_optional(annotation)
    if target is bool:
        return "boolean"
    if target in (int, float):
        return "number"
    if get_origin(target) is list:
        return "array"
    if _is_model(target):
        return "object"
    return "string"


# ---------------------------------------------------------------------------
# Base model
# ---------------------------------------------------------------------------


class BlockProps(BaseModel):
    """Base for every props model and nested item model."""

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def coerce_raw(cls, data: Any) -> dict[str, Any]:
        if not isinstance(data, dict):
            return {}
        cleaned: dict[str, Any] = {}
        for name, info in cls.model_fields.items():
            alias = info.alias or name
            if alias in data:
                raw = data[alias]
            elif name in data:
                raw = data[name]
            else:
                continue
            value = _coerce(info.annotation, raw)
            if value is not _MISSING:
                cleaned[alias] = value
        return cleaned

    def to_props(self) -> dict[str, Any]:
        """Wire form, camelCase keys."""
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Nested items
# ---------------------------------------------------------------------------


class FeatureItem(BlockProps):
    icon: str = "star"
    title: str = "Feature"
    description: str = "Feature description"


class Testimonial(BlockProps):
    name: str = "Customer"
    rating: int = 5
    comment: str = "Great product and excellent service!"
    avatar: str = ""


class Review(BlockProps):
    name: str = "Customer"
    rating: int = 5
    comment: str = "Great product and excellent service!"
    date: str = ""


class LogoItem(BlockProps):
    name: str = "Partner"
    image: str = ""
    url: str = ""


class CategoryItem(BlockProps):
    name: str = "Category"
    image: str = ""
    count: int = 0
    url: str = ""


class StatItem(BlockProps):
    number: str = "0"
    label: str = "Statistic"


# ---------------------------------------------------------------------------
# Block props
# ---------------------------------------------------------------------------


class HeroBannerProps(BlockProps):
    title: str = "Welcome"
    subtitle: str = ""
    button_text: str = "Shop Now"
    button_url: str = ""
    background_image: str = ""
    overlay: bool = False
    secondary_button: bool = False
    secondary_button_text: str = "Learn More"
    secondary_button_url: str = ""
    text_color: str = "#ffffff"


class HeroSplitProps(BlockProps):
    title: str = "New Collection"
    subtitle: str = "Explore our latest arrivals"
    button_text: str = "View Collection"
    button_url: str = ""
    image: str = ""
    image_position: str = "right"


class HeroVideoProps(BlockProps):
    title: str = "Welcome"
    subtitle: str = ""
    button_text: str = ""
    button_url: str = ""
    video_url: str = ""
    poster_image: str = ""
    autoplay: bool = True
    muted: bool = True
    overlay: bool = True


class HeroMinimalProps(BlockProps):
    title: str = "Simple. Beautiful. Effective."
    subtitle: str = "Discover what matters most"
    alignment: str = "center"
    show_button: bool = False
    button_text: str = "Shop Now"
    button_url: str = ""


class ProductGridProps(BlockProps):
    title: str = "Featured Products"
    subtitle: str = ""
    columns: int = 3
    show_price: bool = True
    show_rating: bool = True
    max_products: int = 6
    selected_products: list[str] = []


class ProductCarouselProps(BlockProps):
    title: str = "Trending Now"
    autoplay: bool = True
    show_dots: bool = True
    slides_to_show: int = 4
    selected_products: list[str] = []


class ProductShowcaseProps(BlockProps):
    title: str = "Featured Product"
    featured_product: str | None = None
    show_price: bool = True
    show_description: bool = True
    button_text: str = "Add to Cart"


class ImageGalleryProps(BlockProps):
    title: str = "Image Gallery"
    columns: int = 3
    spacing: str = "medium"
    lightbox: bool = True
    images: list[str] = []


class VideoEmbedProps(BlockProps):
    title: str = "Video Player"
    video_url: str = ""
    poster_image: str = ""
    autoplay: bool = False
    controls: bool = True
    muted: bool = False


class FeatureListProps(BlockProps):
    title: str = "Features"
    subtitle: str = ""
    features: list[FeatureItem] = []


class TestimonialsProps(BlockProps):
    title: str = "What Our Customers Say"
    testimonials: list[Testimonial] = []


class ReviewsGridProps(BlockProps):
    title: str = "Customer Reviews"
    reviews: list[Review] = []


class SocialProofProps(BlockProps):
    title: str = "As Featured In"
    subtitle: str = ""
    logos: list[LogoItem] = []


class IconGridProps(BlockProps):
    title: str = "Why Choose Us"
    columns: int = 4
    features: list[FeatureItem] = []


class BeforeAfterProps(BlockProps):
    title: str = "See the Difference"
    before_image: str = ""
    after_image: str = ""
    before_label: str = "Before"
    after_label: str = "After"


class ProductCategoriesProps(BlockProps):
    title: str = "Shop by Category"
    categories: list[CategoryItem] = []


class ImageTextProps(BlockProps):
    title: str = "Our Story"
    content: str = (
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
        "Sed do eiusmod tempor incididunt ut labore et dolore magna aliqua."
    )
    image: str = ""
    image_position: str = "left"
    show_button: bool = True
    button_text: str = "Read More"
    button_url: str = ""


class AboutSectionProps(BlockProps):
    title: str = "About Our Store"
    content: str = (
        "We are passionate about providing quality products and exceptional "
        "customer service. Our team works hard to curate the best selection "
        "for our customers."
    )
    image: str = ""
    image_position: str = "left"


class ContactInfoProps(BlockProps):
    title: str = "Visit Our Store"
    address: str = "123 Main Street, City, State 12345"
    phone: str = "(555) 123-4567"
    email: str = "info@store.com"
    hours: str = "Mon-Fri: 9AM-6PM"


class NewsletterProps(BlockProps):
    title: str = "Stay Updated"
    subtitle: str = "Subscribe to get special offers and updates"
    placeholder: str = "Enter your email"
    button_text: str = "Subscribe"


class CtaBannerProps(BlockProps):
    title: str = "Ready to Get Started?"
    subtitle: str = "Browse our products and find exactly what you're looking for."
    button_text: str = "Shop Now"
    button_url: str = ""
    background_color: str = ""
    text_color: str = "#ffffff"


class StatsCounterProps(BlockProps):
    title: str = "Our Numbers Speak"
    stats: list[StatItem] = []


class SpacerProps(BlockProps):
    height: int = 60
    background_color: str = "transparent"


class DividerProps(BlockProps):
    style: str = "solid"
    color: str = "#e5e7eb"
    thickness: int = 1
    width: str = "100%"


# ---------------------------------------------------------------------------
# Tagged union
# ---------------------------------------------------------------------------

PROPS_BY_TYPE: dict[str, type[BlockProps]] = {
    "hero-banner": HeroBannerProps,
    "hero-split": HeroSplitProps,
    "hero-video": HeroVideoProps,
    "hero-minimal": HeroMinimalProps,
    "product-grid": ProductGridProps,
    "product-carousel": ProductCarouselProps,
    "product-showcase": ProductShowcaseProps,
    "image-gallery": ImageGalleryProps,
    "video-embed": VideoEmbedProps,
    "feature-list": FeatureListProps,
    "testimonials": TestimonialsProps,
    "reviews-grid": ReviewsGridProps,
    "social-proof": SocialProofProps,
    "icon-grid": IconGridProps,
    "before-after": BeforeAfterProps,
    "product-categories": ProductCategoriesProps,
    "image-text": ImageTextProps,
    "about-section": AboutSectionProps,
    "contact-info": ContactInfoProps,
    "newsletter": NewsletterProps,
    "cta-banner": CtaBannerProps,
    "stats-counter": StatsCounterProps,
    "spacer": SpacerProps,
    "divider": DividerProps,
}


def parse_props(block_type: str, raw: Any) -> BlockProps | None:
    """
    Parse raw persisted props into the block's typed model.
    Returns None for unregistered types. Never raises.
    """
    model = PROPS_BY_TYPE.get(block_type)
    if model is None:
        return None
    try:
        return model.model_validate(raw if isinstance(raw, dict) else {})
    except ValidationError as exc:
        logger.warning(
            "props: %s failed validation (%d errors), using defaults",
            block_type,
            exc.error_count(),
        )
        return model()


def default_props(block_type: str) -> dict[str, Any]:
    """The renderer's literal defaults for a block type, in wire form."""
    model = PROPS_BY_TYPE.get(block_type)
    return model().to_props() if model is not None else {}


def prop_kinds(block_type: str) -> dict[str, str]:
    """
    Value kind per prop key (string, number, boolean, array, object).
    Used to auto-generate property editors.
    """
    model = PROPS_BY_TYPE.get(block_type)
    if model is None:
        return {}
    return {
        (info.alias or name): _kind(info.annotation)
        for name, info in model.model_fields.items()
    }
