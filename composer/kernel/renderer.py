"""
Storefront Composer Kernel: Renderer

Pure function: (component, RenderContext) → HTML string
No IO. Deterministic: same input → same output, always.

One renderer serves the builder canvas and the public storefront. The render
mode controls only the behavioral deltas:
- edit-preview: sample products for an empty catalog, static buttons,
  blob: preview handles accepted, blocks wrapped for selection
- public: "No products available" empty state, live links and add-to-cart

Dispatch is a closed table with one context builder per block type. Unknown
types render a labelled "Unsupported component type" placeholder. render()
never raises: a failing block degrades to a render-error notice.
"""

from __future__ import annotations

import logging
import re
from html import escape as _html_escape
from typing import Any
from urllib.parse import quote_plus

import chevron

from composer.kernel import markup
from composer.kernel.assets import is_valid_url, placeholder_image, safe_href
from composer.kernel.products import (
    SAMPLE_PRODUCTS,
    format_price,
    resolve_featured_product,
    resolve_products,
)
from composer.kernel.props import BlockProps, parse_props
from composer.kernel.theme import css_value, font_stack, resolve_theme, theme_css_variables
from composer.kernel.types import (
    PageComponent,
    Product,
    RenderContext,
    RenderOptions,
    ResolvedTheme,
    ThemeConfig,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(component: PageComponent, ctx: RenderContext | None = None) -> str:
    """
    Render one block. Returns an HTML fragment.
    In edit-preview mode the fragment is wrapped for selection.
    """
    ctx = ctx or RenderContext()
    html = _render_block(component, ctx)
    if ctx.is_preview:
        return _wrap_editable(component, html, ctx)
    return html


def render_components(
    components: list[PageComponent] | list[dict[str, Any]],
    ctx: RenderContext | None = None,
) -> str:
    """
    Render blocks in ascending order. Persisted order is not trusted, so the
    list is sorted here. An empty list renders the default store content.
    """
    ctx = ctx or RenderContext()
    blocks = _coerce_components(components)
    if not blocks:
        return render_default_content(ctx)
    ordered = sorted(blocks, key=lambda c: c.order)
    return "\n".join(render(c, ctx) for c in ordered)


def render_page(
    components: list[PageComponent] | list[dict[str, Any]],
    ctx: RenderContext | None = None,
    options: RenderOptions | None = None,
    body_html: str | None = None,
) -> str:
    """
    Render a complete HTML document. body_html, when given, replaces the
    rendered components (used for static page content).
    """
    ctx = ctx or RenderContext()
    opts = options or RenderOptions()
    theme = resolve_theme({}, ctx.page_theme, ctx.store_theme)
    return _render_html(components, ctx, opts, theme, body_html)


def render_layout(
    components: list[PageComponent] | list[dict[str, Any]],
    theme: Any = None,
    products: list[Product] | None = None,
    mode: str = "public",
) -> str:
    """Convenience entry point: components + theme + products → markup."""
    store_theme = theme if isinstance(theme, ThemeConfig) else ThemeConfig.from_dict(theme)
    ctx = RenderContext(mode=mode, store_theme=store_theme, products=list(products or []))
    return render_components(components, ctx)


def render_default_content(ctx: RenderContext) -> str:
    """The hero, features and call-to-action shown for an empty layout."""
    blocks = default_components(ctx.store_name, ctx.store_description)
    parts = ['<div class="sf-default-content">']
    parts.extend(_render_block(c, ctx) for c in blocks)
    parts.append("</div>")
    return "\n".join(parts)


def render_page_content(title: str, content_html: str, ctx: RenderContext) -> str:
    """
    Static page body used when a page has no layout. content_html is
    merchant-authored markup and is emitted as-is.
    """
    theme = resolve_theme({}, ctx.page_theme, ctx.store_theme)
    data = _base_context(PageComponent(id="page-content", type="page-content"), theme, ctx)
    data["title"] = title or "Page"
    data["content"] = content_html or "<p>Page content not found.</p>"
    return chevron.render(markup.PAGE_CONTENT, data)


def default_components(store_name: str, description: str = "") -> list[PageComponent]:
    name = store_name or "Our Store"
    return [
        PageComponent(
            id="default-hero",
            type="hero-banner",
            order=0,
            props={
                "title": f"Welcome to {name}",
                "subtitle": description or "Discover amazing products at great prices",
                "buttonText": "Shop Now",
                "buttonUrl": "#products",
                "secondaryButton": True,
                "secondaryButtonText": "Learn More",
                "secondaryButtonUrl": "#about",
            },
        ),
        PageComponent(
            id="default-features",
            type="feature-list",
            order=1,
            props={
                "title": f"Why Choose {name}?",
                "features": [
                    {
                        "icon": "quality",
                        "title": "Quality Products",
                        "description": "Carefully selected items that meet our high standards.",
                    },
                    {
                        "icon": "shipping",
                        "title": "Fast Shipping",
                        "description": "Quick and reliable delivery right to your door.",
                    },
                    {
                        "icon": "support",
                        "title": "Great Support",
                        "description": "Friendly help whenever you need it.",
                    },
                ],
            },
        ),
        PageComponent(
            id="default-cta",
            type="cta-banner",
            order=2,
            props={
                "title": "Ready to Get Started?",
                "subtitle": "Browse our products and find exactly what you're looking for.",
                "buttonText": "View Products",
                "buttonUrl": "#products",
            },
        ),
    ]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

BASE_CSS = """
*, *::before, *::after { box-sizing: border-box; }
body { margin: 0; background: var(--sf-background); color: var(--sf-text);
  font-family: var(--sf-font-body); line-height: 1.6; }
img, video { max-width: 100%; display: block; }
a { color: inherit; }
.sf-block { position: relative; padding: 4rem 1.5rem; }
.sf-container { max-width: 72rem; margin: 0 auto; }
.sf-narrow { max-width: 48rem; text-align: center; }
.sf-heading { font-size: 2rem; font-weight: 700; margin: 0 0 1.5rem; text-align: center; }
.sf-subheading, .sf-lead { font-size: 1.125rem; opacity: 0.85; margin: 0 0 2rem; }
.sf-subheading { text-align: center; }
.sf-muted { opacity: 0.7; }
.sf-grid { display: grid; gap: 1.5rem; }
.sf-cols-1 { grid-template-columns: 1fr; }
.sf-cols-2 { grid-template-columns: repeat(2, 1fr); }
.sf-cols-3 { grid-template-columns: repeat(3, 1fr); }
.sf-cols-4 { grid-template-columns: repeat(4, 1fr); }
.sf-cols-5 { grid-template-columns: repeat(5, 1fr); }
.sf-cols-6 { grid-template-columns: repeat(6, 1fr); }
.sf-gap-small { gap: 0.5rem; }
.sf-gap-large { gap: 2.5rem; }
.sf-split { display: grid; grid-template-columns: 1fr 1fr; gap: 3rem; align-items: center; text-align: left; }
.sf-image-left .sf-split-media { order: 0; }
.sf-image-right .sf-split-media { order: 1; }
.sf-hero { min-height: 32rem; display: flex; align-items: center; justify-content: center;
  text-align: center; overflow: hidden; color: #ffffff; }
.sf-hero-bg, .sf-hero-video .sf-video { position: absolute; inset: 0; width: 100%; height: 100%; object-fit: cover; }
.sf-overlay { position: absolute; inset: 0; background: #000000; opacity: 0.5; }
.sf-hero-content { position: relative; z-index: 1; max-width: 56rem; }
.sf-hero-title { font-size: 3rem; font-weight: 700; margin: 0 0 1rem; }
.sf-hero-subtitle { font-size: 1.5rem; opacity: 0.9; margin: 0 0 2rem; }
.sf-align-left { text-align: left; }
.sf-align-center { text-align: center; }
.sf-align-right { text-align: right; }
.sf-actions { display: flex; gap: 1rem; justify-content: center; flex-wrap: wrap; }
.sf-button { display: inline-block; padding: 0.75rem 2rem; border-radius: 0.5rem; border: 2px solid transparent;
  font-weight: 600; text-decoration: none; cursor: pointer; }
.sf-button-primary { background: var(--sf-primary); color: #ffffff; }
.sf-button-light { background: #ffffff; color: #111827; }
.sf-button-outline { background: transparent; color: #ffffff; border-color: #ffffff; }
.sf-product-card { border-radius: 0.75rem; overflow: hidden; background: #ffffff; color: #111827;
  box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1); }
.sf-product-card .sf-img { aspect-ratio: 1; object-fit: cover; width: 100%; }
.sf-product-body { padding: 1rem; }
.sf-product-name { font-size: 1.125rem; margin: 0 0 0.5rem; }
.sf-product-name a { text-decoration: none; }
.sf-price { font-weight: 700; margin: 0 0 0.75rem; }
.sf-price-compare { opacity: 0.6; font-weight: 400; }
.sf-add-to-cart { width: 100%; background: var(--sf-primary); color: #ffffff; text-align: center; }
.sf-stars { color: #facc15; letter-spacing: 0.1em; }
.sf-carousel { display: grid; grid-auto-flow: column;
  grid-auto-columns: calc((100% - (var(--sf-slides) - 1) * 1.5rem) / var(--sf-slides));
  gap: 1.5rem; overflow-x: auto; scroll-snap-type: x mandatory; }
.sf-slide { scroll-snap-align: start; }
.sf-dots { display: flex; gap: 0.5rem; justify-content: center; margin-top: 1rem; }
.sf-dot { width: 0.5rem; height: 0.5rem; border-radius: 50%; background: currentColor; opacity: 0.3; }
.sf-gallery-item { margin: 0; }
.sf-gallery-item .sf-img { aspect-ratio: 1; object-fit: cover; width: 100%; border-radius: 0.5rem; }
.sf-video-frame { aspect-ratio: 16 / 9; background: #111827; border-radius: 0.75rem; overflow: hidden; }
.sf-video-frame .sf-video { width: 100%; height: 100%; }
.sf-media-placeholder { display: flex; align-items: center; justify-content: center; min-height: 12rem;
  height: 100%; background: #f3f4f6; color: #6b7280; }
.sf-media-placeholder[hidden] { display: none; }
.sf-feature { text-align: center; }
.sf-feature-icon { width: 4rem; height: 4rem; margin: 0 auto 1rem; border-radius: 50%;
  display: flex; align-items: center; justify-content: center; font-size: 1.5rem; }
.sf-testimonial, .sf-review { margin: 0; padding: 1.5rem; border-radius: 0.75rem; background: var(--sf-secondary); }
.sf-testimonial blockquote { margin: 0.75rem 0; font-style: italic; }
.sf-avatar { display: inline-flex; width: 2.5rem; height: 2.5rem; border-radius: 50%; color: #ffffff;
  align-items: center; justify-content: center; font-weight: 600; margin-right: 0.75rem; }
.sf-testimonial .sf-img { width: 2.5rem; height: 2.5rem; border-radius: 50%; display: inline-block; }
.sf-logos { display: flex; flex-wrap: wrap; gap: 2rem; justify-content: center; align-items: center; }
.sf-logo .sf-img { max-height: 3rem; width: auto; }
.sf-compare { margin: 0; text-align: center; }
.sf-category { display: block; text-align: center; text-decoration: none; }
.sf-category .sf-img { aspect-ratio: 1; object-fit: cover; width: 100%; border-radius: 0.75rem; }
.sf-stat { text-align: center; }
.sf-stat-number { font-size: 2.75rem; font-weight: 700; }
.sf-newsletter-form { display: flex; gap: 0.5rem; justify-content: center; }
.sf-newsletter-form input { flex: 1; max-width: 24rem; padding: 0.75rem 1rem; border-radius: 0.5rem; border: 0; }
.sf-contact dt { font-weight: 600; }
.sf-contact dd { margin: 0; }
.sf-spacer, .sf-divider { padding: 0; }
.sf-divider { padding: 1rem 1.5rem; }
.sf-empty { text-align: center; opacity: 0.7; padding: 2rem 0; }
.sf-notice { max-width: 40rem; margin: 0 auto; padding: 1.5rem; border: 2px dashed #f59e0b;
  border-radius: 0.75rem; background: #fffbeb; color: #92400e; text-align: center; }
.sf-render-error .sf-notice { border-color: #ef4444; background: #fef2f2; color: #991b1b; }
.sf-editable { position: relative; outline: 2px solid transparent; cursor: pointer; }
.sf-editable:hover { outline-color: #93c5fd; }
.sf-selected { outline-color: var(--sf-primary); }
.sf-preview-mobile { max-width: 390px; margin: 0 auto; box-shadow: 0 0 0 1px #e5e7eb; }
.sf-footer { padding: 2rem 1.5rem; text-align: center; background: var(--sf-secondary); }
@media (max-width: 768px) {
  .sf-cols-3, .sf-cols-4, .sf-cols-5, .sf-cols-6 { grid-template-columns: repeat(2, 1fr); }
  .sf-split { grid-template-columns: 1fr; }
  .sf-hero-title { font-size: 2.25rem; }
}
"""


def _render_html(
    components: list[PageComponent] | list[dict[str, Any]],
    ctx: RenderContext,
    opts: RenderOptions,
    theme: ResolvedTheme,
    body_html: str | None,
) -> str:
    parts: list[str] = []

    parts.append("<!DOCTYPE html>")
    parts.append(f'<html lang="{escape(opts.lang)}">')
    parts.append("<head>")
    parts.append('  <meta charset="utf-8">')
    parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1">')

    title = escape(opts.title or ctx.store_name)
    parts.append(f"  <title>{title}</title>")
    description = opts.description or ctx.store_description
    if description:
        parts.append(f'  <meta name="description" content="{escape(description)}">')

    # Fonts
    if opts.include_fonts:
        families = list(dict.fromkeys([theme.heading_font, theme.body_font]))
        query = "&".join(f"family={quote_plus(f)}:wght@400;600;700" for f in families)
        parts.append('  <link rel="preconnect" href="https://fonts.googleapis.com">')
        parts.append(f'  <link href="https://fonts.googleapis.com/css2?{escape(query)}&amp;display=swap" rel="stylesheet">')

    # CSS
    parts.append("  <style>")
    parts.append(theme_css_variables(theme))
    parts.append(BASE_CSS)
    parts.append("  </style>")

    parts.append("</head>")
    parts.append("<body>")
    parts.append(f'  <main class="sf-page sf-mode-{escape(ctx.mode)}">')

    if body_html is not None:
        parts.append(body_html)
    else:
        parts.append(render_components(components, ctx))

    parts.append("  </main>")

    if opts.footer:
        parts.append(f'  <footer class="sf-footer">{escape(opts.footer)}</footer>')

    parts.append("</body>")
    parts.append("</html>")

    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Block dispatch
# ---------------------------------------------------------------------------


def _render_block(component: PageComponent, ctx: RenderContext) -> str:
    builder = _CONTEXT_BUILDERS.get(component.type)
    template = markup.TEMPLATES.get(component.type)
    if builder is None or template is None:
        return _render_notice(markup.UNSUPPORTED, component)

    try:
        props = parse_props(component.type, component.props)
        theme = resolve_theme(component.props, ctx.page_theme, ctx.store_theme)
        data = _base_context(component, theme, ctx)
        data.update(builder(props, theme, ctx, component))
        return chevron.render(template, data, partials_dict=markup.PARTIALS)
    except Exception:
        logger.exception("renderer: failed to render %s block %s", component.type, component.id)
        return _render_notice(markup.RENDER_ERROR, component)


def _render_notice(template: str, component: PageComponent) -> str:
    return chevron.render(template, {"type": component.type or "(none)"})


def _wrap_editable(component: PageComponent, html: str, ctx: RenderContext) -> str:
    selected = " sf-selected" if component.id == ctx.selected_id else ""
    return (
        f'<div class="sf-editable{selected}" data-component-id="{escape(component.id)}" '
        f'data-component-type="{escape(component.type)}">\n{html}\n</div>'
    )


def _coerce_components(components: Any) -> list[PageComponent]:
    if not isinstance(components, list):
        return []
    out: list[PageComponent] = []
    for i, item in enumerate(components):
        if isinstance(item, PageComponent):
            out.append(item)
        elif isinstance(item, dict):
            out.append(PageComponent.from_dict(item, position=i))
    return out


# ---------------------------------------------------------------------------
# Context helpers
# ---------------------------------------------------------------------------


def _base_context(component: PageComponent, theme: ResolvedTheme, ctx: RenderContext) -> dict[str, Any]:
    colors = {
        "primary": css_value(theme.primary),
        "secondary": css_value(theme.secondary),
        "accent": css_value(theme.accent),
        "text": css_value(theme.text),
        "background": css_value(theme.background),
        "heading_font": css_value(font_stack(theme.heading_font)),
        "body_font": css_value(font_stack(theme.body_font)),
    }
    return {
        "id": component.id,
        "type": component.type,
        "preview": ctx.is_preview,
        "theme": colors,
        "section_style": (
            f"background-color:{colors['background']};color:{colors['text']};"
            f"font-family:{colors['body_font']}"
        ),
        "heading_style": f"color:{colors['primary']};font-family:{colors['heading_font']}",
    }


def _image(
    value: Any,
    label: str,
    ctx: RenderContext,
    alt: str = "",
    css_class: str = "",
    width: int = 400,
    height: int = 300,
) -> dict[str, Any]:
    fallback = placeholder_image(label, width, height)
    valid = is_valid_url(value, allow_local=ctx.is_preview)
    return {
        "src": value.strip() if valid else fallback,
        "alt": alt or label,
        "fallback": fallback,
        "css_class": css_class,
        "is_placeholder": not valid,
    }


def _video(
    value: Any,
    ctx: RenderContext,
    autoplay: bool = False,
    muted: bool = False,
    controls: bool = True,
    poster: Any = "",
    css_class: str = "",
) -> dict[str, Any] | None:
    if not is_valid_url(value, allow_local=ctx.is_preview):
        return None
    has_poster = is_valid_url(poster, allow_local=ctx.is_preview)
    return {
        "src": value.strip(),
        "has_poster": has_poster,
        "poster": poster.strip() if has_poster else "",
        # Browsers only autoplay muted video.
        "autoplay": autoplay and not ctx.is_preview,
        "muted": muted or autoplay,
        "controls": controls,
        "css_class": css_class,
        "error_label": "Video Preview",
    }


def _button(
    label: str,
    url: Any,
    ctx: RenderContext,
    variant: str = "primary",
    style: str = "",
) -> dict[str, Any] | None:
    if not label:
        return None
    return {
        "label": label,
        "href": safe_href(url, "#"),
        "static": ctx.is_preview,
        "variant": variant,
        "style": style,
    }


def _choice(value: str, allowed: tuple[str, ...], default: str) -> str:
    return value if value in allowed else default


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _stars(rating: int) -> str:
    filled = _clamp(rating, 1, 5)
    return "★" * filled + "☆" * (5 - filled)


def _initial(name: str) -> str:
    return (name.strip()[:1] or "C").upper()


_GLYPHS: dict[str, str] = {
    "shipping": "\U0001f69a",
    "truck": "\U0001f69a",
    "support": "\U0001f4ac",
    "returns": "↩",
    "return": "↩",
    "shield": "\U0001f6e1",
    "quality": "✓",
    "star": "★",
}


def _glyph(icon: str) -> str:
    return _GLYPHS.get(icon.lower(), "✨")


def _slot(callback: Any, product: Product) -> str | None:
    if callback is None:
        return None
    return safe_href(callback(product), "")


def _product_card(
    product: Product,
    ctx: RenderContext,
    image_label: str = "Product Image",
) -> dict[str, Any]:
    url = _slot(ctx.slots.product_url, product)
    if not url:
        url = f"/products/{quote_plus(product.slug or str(product.id))}"
    cart_url = None if ctx.is_preview else _slot(ctx.slots.add_to_cart_url, product)
    return {
        "id": product.id,
        "name": product.name,
        "url": "#" if ctx.is_preview else url,
        "image": _image(product.image, image_label, ctx, alt=product.name, width=400, height=400),
        "price": format_price(product.price),
        "on_sale": product.on_sale,
        "compare_price": format_price(product.compare_price) if product.on_sale else "",
        "description": product.description,
        "has_cart_url": bool(cart_url),
        "cart_url": cart_url or "",
    }


_CSS_LENGTH = re.compile(r"^\d+(\.\d+)?(px|%|rem|em|vw)?$")


# ---------------------------------------------------------------------------
# Context builders, one per block type
# ---------------------------------------------------------------------------


def _hero_banner(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    has_image = is_valid_url(p.background_image, allow_local=ctx.is_preview)
    if has_image:
        hero_style = f"background-color:{css_value(theme.primary)}"
    else:
        hero_style = (
            f"background-image:linear-gradient(135deg, {css_value(theme.primary)} 0%, "
            f"{css_value(theme.accent)} 100%)"
        )
    return {
        "hero_style": hero_style,
        "background": _image(p.background_image, "Hero Image", ctx, alt="", css_class="sf-hero-bg", width=1200, height=600)
        if has_image else None,
        "overlay": p.overlay,
        "text_color": css_value(p.text_color),
        "title": p.title,
        "has_subtitle": bool(p.subtitle),
        "subtitle": p.subtitle,
        "primary_button": _button(p.button_text, p.button_url, ctx, variant="light"),
        "secondary_button": _button(p.secondary_button_text, p.secondary_button_url, ctx, variant="outline")
        if p.secondary_button else None,
    }


def _hero_split(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "subtitle": p.subtitle,
        "image_position": _choice(p.image_position, ("left", "right"), "right"),
        "image": _image(p.image, "Hero Image", ctx, alt=p.title, width=800, height=600),
        "primary_button": _button(p.button_text, p.button_url, ctx),
    }


def _hero_video(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    video = _video(p.video_url, ctx, autoplay=p.autoplay, muted=p.muted, controls=False, poster=p.poster_image)
    return {
        "hero_style": f"background-color:{css_value(theme.primary)}",
        "video": video,
        "has_video": video is not None,
        "video_placeholder": "Add Video URL" if ctx.is_preview else "",
        "overlay": p.overlay,
        "title": p.title,
        "has_subtitle": bool(p.subtitle),
        "subtitle": p.subtitle,
        "primary_button": _button(p.button_text, p.button_url, ctx, variant="light"),
    }


def _hero_minimal(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "subtitle": p.subtitle,
        "alignment": _choice(p.alignment, ("left", "center", "right"), "center"),
        "primary_button": _button(p.button_text, p.button_url, ctx) if p.show_button else None,
    }


def _product_grid(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    products = resolve_products(c, ctx.products, ctx.mode)[: _clamp(p.max_products, 1, 48)]
    return {
        "title": p.title,
        "has_subtitle": bool(p.subtitle),
        "subtitle": p.subtitle,
        "columns": _clamp(p.columns, 1, 6),
        "show_price": p.show_price,
        "show_rating": p.show_rating,
        "button_label": "Add to Cart",
        "button_style": "",
        "has_products": bool(products),
        "products": [_product_card(prod, ctx) for prod in products],
    }


def _product_carousel(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    products = resolve_products(c, ctx.products, ctx.mode)
    slides = _clamp(p.slides_to_show, 1, 6)
    pages = max(1, -(-len(products) // slides))
    return {
        "title": p.title,
        "autoplay": "true" if p.autoplay else "false",
        "slides_to_show": slides,
        "show_dots": p.show_dots and pages > 1,
        "dots": [{"index": i} for i in range(pages)],
        "show_price": True,
        "show_rating": False,
        "button_label": "Add to Cart",
        "button_style": "",
        "has_products": bool(products),
        "products": [_product_card(prod, ctx) for prod in products],
    }


def _product_showcase(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    catalog = ctx.products or (list(SAMPLE_PRODUCTS) if ctx.is_preview else [])
    product = resolve_featured_product(c, catalog)
    card = None
    if product is not None:
        card = _product_card(product, ctx)
        card["image"] = _image(product.image, "Product Image", ctx, alt=product.name, width=800, height=800)
        card["show_description"] = p.show_description and bool(product.description)
    return {
        "title": p.title,
        "show_price": p.show_price,
        "button_label": p.button_text,
        "button_style": "",
        "product": card,
    }


def _product_categories(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    categories = []
    for item in p.categories[:8]:
        categories.append({
            "name": item.name,
            "href": safe_href(item.url, f"#category-{quote_plus(item.name.lower())}"),
            "image": _image(item.image, item.name, ctx, alt=item.name, width=300, height=300),
            "has_count": item.count > 0,
            "count": item.count,
        })
    return {"title": p.title, "categories": categories}


def _image_gallery(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    images = []
    for i, url in enumerate(p.images[:6]):
        image = _image(url, f"Image #{i + 1}", ctx, alt=f"{p.title} {i + 1}", width=400, height=400)
        image["has_lightbox"] = p.lightbox and not image["is_placeholder"]
        images.append(image)
    return {
        "title": p.title,
        "columns": _clamp(p.columns, 1, 6),
        "spacing": _choice(p.spacing, ("small", "medium", "large"), "medium"),
        "has_images": bool(images),
        "images": images,
    }


def _video_embed(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    video = _video(p.video_url, ctx, autoplay=p.autoplay, muted=p.muted, controls=p.controls, poster=p.poster_image)
    return {
        "title": p.title,
        "video": video,
        "has_video": video is not None,
        "video_placeholder": "Add Video URL" if ctx.is_preview else "Video Preview",
    }


def _image_text(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "content": p.content,
        "image_position": _choice(p.image_position, ("left", "right"), "left"),
        "image": _image(p.image, "Story Image", ctx, alt=p.title, width=600, height=400),
        "primary_button": _button(p.button_text, p.button_url, ctx) if p.show_button else None,
    }


def _before_after(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "before": _image(p.before_image, p.before_label, ctx, alt=p.before_label, width=600, height=400),
        "after": _image(p.after_image, p.after_label, ctx, alt=p.after_label, width=600, height=400),
        "before_label": p.before_label,
        "after_label": p.after_label,
    }


def _features(items: list[Any], limit: int) -> list[dict[str, Any]]:
    return [
        {"glyph": _glyph(f.icon), "title": f.title, "description": f.description}
        for f in items[:limit]
    ]


def _feature_list(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "has_subtitle": bool(p.subtitle),
        "subtitle": p.subtitle,
        "features": _features(p.features, 6),
    }


def _icon_grid(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "columns": _clamp(p.columns, 1, 6),
        "features": _features(p.features, 8),
    }


def _stats_counter(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "stats": [{"number": s.number, "label": s.label} for s in p.stats[:4]],
    }


def _testimonials(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    items = []
    for t in p.testimonials[:6]:
        has_avatar = is_valid_url(t.avatar, allow_local=ctx.is_preview)
        items.append({
            "name": t.name,
            "rating": _clamp(t.rating, 1, 5),
            "stars": _stars(t.rating),
            "comment": t.comment,
            "initial": _initial(t.name),
            "avatar": _image(t.avatar, _initial(t.name), ctx, alt=t.name, width=80, height=80) if has_avatar else None,
        })
    return {"title": p.title, "testimonials": items}


def _reviews_grid(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    items = [
        {
            "name": r.name,
            "rating": _clamp(r.rating, 1, 5),
            "stars": _stars(r.rating),
            "comment": r.comment,
            "initial": _initial(r.name),
            "has_date": bool(r.date),
            "date": r.date,
        }
        for r in p.reviews[:6]
    ]
    return {"title": p.title, "reviews": items}


def _social_proof(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    logos = []
    for logo in p.logos[:6]:
        has_image = is_valid_url(logo.image, allow_local=ctx.is_preview)
        logos.append({
            "name": logo.name,
            "logo_image": _image(logo.image, logo.name, ctx, alt=logo.name, width=160, height=60) if has_image else None,
        })
    return {
        "title": p.title,
        "has_subtitle": bool(p.subtitle),
        "subtitle": p.subtitle,
        "logos": logos,
    }


def _cta_banner(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    bg = css_value(p.background_color) or css_value(theme.primary)
    fg = css_value(p.text_color) or "#ffffff"
    return {
        "bg": bg,
        "fg": fg,
        "title": p.title,
        "subtitle": p.subtitle,
        "primary_button": _button(
            p.button_text,
            p.button_url,
            ctx,
            style=f"background-color:{fg};color:{bg};border-color:{fg}",
        ),
    }


def _newsletter(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "subtitle": p.subtitle,
        "placeholder": p.placeholder,
        "button_text": p.button_text,
        "action": safe_href(ctx.slots.newsletter_action, "#"),
    }


def _contact_info(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    digits = re.sub(r"[^0-9+]", "", p.phone)
    return {
        "title": p.title,
        "address": p.address,
        "phone": p.phone,
        "phone_href": f"tel:{digits}" if digits else "#",
        "email": p.email,
        "email_href": f"mailto:{p.email}" if "@" in p.email else "#",
        "hours": p.hours,
    }


def _about_section(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "title": p.title,
        "content": p.content,
        "image_position": _choice(p.image_position, ("left", "right"), "left"),
        "image": _image(p.image, "About Us Image", ctx, alt=p.title, width=600, height=400),
    }


def _spacer(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    return {
        "height": _clamp(p.height, 1, 400),
        "bg": css_value(p.background_color) or "transparent",
    }


def _divider(p: BlockProps, theme: ResolvedTheme, ctx: RenderContext, c: PageComponent) -> dict[str, Any]:
    width = p.width.strip()
    return {
        "width": width if _CSS_LENGTH.match(width) else "100%",
        "thickness": _clamp(p.thickness, 1, 20),
        "line_style": _choice(p.style, ("solid", "dashed", "dotted", "double"), "solid"),
        "color": css_value(p.color) or "#e5e7eb",
    }


_CONTEXT_BUILDERS = {
    "hero-banner": _hero_banner,
    "hero-split": _hero_split,
    "hero-video": _hero_video,
    "hero-minimal": _hero_minimal,
    "product-grid": _product_grid,
    "product-carousel": _product_carousel,
    "product-showcase": _product_showcase,
    "product-categories": _product_categories,
    "image-gallery": _image_gallery,
    "video-embed": _video_embed,
    "image-text": _image_text,
    "before-after": _before_after,
    "feature-list": _feature_list,
    "icon-grid": _icon_grid,
    "stats-counter": _stats_counter,
    "testimonials": _testimonials,
    "reviews-grid": _reviews_grid,
    "social-proof": _social_proof,
    "cta-banner": _cta_banner,
    "newsletter": _newsletter,
    "contact-info": _contact_info,
    "about-section": _about_section,
    "spacer": _spacer,
    "divider": _divider,
}


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def escape(text: str) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)
