"""
Storefront Composer Kernel: Theme Model

Defaults, shallow merge, and the style cascade:

    component prop override → page theme → store theme → hard default

resolve_theme is called once per block render and returns a ResolvedTheme
with every field populated, so render code never null-checks a color.
"""

from __future__ import annotations

import re
from typing import Any

from composer.kernel.types import THEME_SECTIONS, ResolvedTheme, ThemeConfig

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_COLORS: dict[str, str] = {
    "primary": "#3b82f6",
    "secondary": "#f8fafc",
    "accent": "#10b981",
    "text": "#1f2937",
    "background": "#ffffff",
}

DEFAULT_FONTS: dict[str, str] = {
    "heading": "Inter",
    "body": "Inter",
}

DEFAULT_LAYOUT: dict[str, str] = {
    "header": "modern",
    "hero": "full-width",
    "product_grid": "3-column",
    "footer": "minimal",
}

DEFAULT_THEME = ThemeConfig(
    colors=dict(DEFAULT_COLORS),
    fonts=dict(DEFAULT_FONTS),
    layout=dict(DEFAULT_LAYOUT),
)

# Component props that override a theme value for that block only.
OVERRIDE_KEYS: dict[str, tuple[str, str]] = {
    "primaryColor": ("colors", "primary"),
    "secondaryColor": ("colors", "secondary"),
    "accentColor": ("colors", "accent"),
    "textColor": ("colors", "text"),
    "backgroundColor": ("colors", "background"),
    "headingFont": ("fonts", "heading"),
    "bodyFont": ("fonts", "body"),
}

# ---------------------------------------------------------------------------
# Customizer options
# ---------------------------------------------------------------------------

COLOR_PRESETS: list[dict[str, Any]] = [
    {
        "name": "Blue Ocean",
        "colors": {
            "primary": "#3b82f6",
            "secondary": "#f1f5f9",
            "accent": "#0ea5e9",
            "text": "#1e293b",
            "background": "#ffffff",
        },
    },
    {
        "name": "Green Nature",
        "colors": {
            "primary": "#10b981",
            "secondary": "#f0fdf4",
            "accent": "#22c55e",
            "text": "#0f172a",
            "background": "#ffffff",
        },
    },
    {
        "name": "Purple Luxury",
        "colors": {
            "primary": "#8b5cf6",
            "secondary": "#faf5ff",
            "accent": "#a855f7",
            "text": "#1f2937",
            "background": "#ffffff",
        },
    },
    {
        "name": "Dark Modern",
        "colors": {
            "primary": "#06b6d4",
            "secondary": "#1f2937",
            "accent": "#0891b2",
            "text": "#f9fafb",
            "background": "#111827",
        },
    },
    {
        "name": "Warm Orange",
        "colors": {
            "primary": "#ea580c",
            "secondary": "#fff7ed",
            "accent": "#fb923c",
            "text": "#1c1917",
            "background": "#ffffff",
        },
    },
    {
        "name": "Rose Gold",
        "colors": {
            "primary": "#e11d48",
            "secondary": "#fff1f2",
            "accent": "#f43f5e",
            "text": "#1f2937",
            "background": "#ffffff",
        },
    },
]

FONT_OPTIONS: dict[str, str] = {
    "Inter": "Inter, sans-serif",
    "Poppins": "Poppins, sans-serif",
    "Playfair Display": "Playfair Display, serif",
    "Merriweather": "Merriweather, serif",
    "Open Sans": "Open Sans, sans-serif",
    "Source Sans Pro": "Source Sans Pro, sans-serif",
    "Nunito Sans": "Nunito Sans, sans-serif",
    "Roboto": "Roboto, sans-serif",
    "Lato": "Lato, sans-serif",
    "Montserrat": "Montserrat, sans-serif",
}

LAYOUT_OPTIONS: dict[str, list[str]] = {
    "header": ["modern", "clean", "minimal"],
    "hero": ["full-width", "split-layout", "minimal-hero"],
    "product_grid": ["2-column", "3-column", "4-column"],
    "footer": ["minimal", "detailed"],
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def merge_theme(base: ThemeConfig | None, override: ThemeConfig | None) -> ThemeConfig:
    """
    Shallow per-section merge. Keys in override win; keys only in base survive.
    Neither input is modified.
    """
    base = base or ThemeConfig()
    override = override or ThemeConfig()
    return ThemeConfig(
        colors={**base.colors, **override.colors},
        fonts={**base.fonts, **override.fonts},
        layout={**base.layout, **override.layout},
    )


def resolve_theme(
    overrides: dict[str, Any] | None,
    page_theme: ThemeConfig | None,
    store_theme: ThemeConfig | None,
    base: ThemeConfig | None = None,
) -> ResolvedTheme:
    """
    Resolve every style value through the cascade. The first non-empty string
    wins; when every layer is absent the hard default is used exactly.
    """
    overrides = overrides if isinstance(overrides, dict) else {}
    layers = [t for t in (page_theme, store_theme, base or DEFAULT_THEME) if t is not None]

    def pick(prop_key: str) -> str:
        section, key = OVERRIDE_KEYS[prop_key]
        value = overrides.get(prop_key)
        if isinstance(value, str) and value.strip():
            return value
        for layer in layers:
            candidate = getattr(layer, section).get(key)
            if candidate:
                return candidate
        return DEFAULT_COLORS[key] if section == "colors" else DEFAULT_FONTS[key]

    layout: dict[str, str] = dict(DEFAULT_LAYOUT)
    for layer in reversed(layers):
        layout.update(layer.layout)

    return ResolvedTheme(
        primary=pick("primaryColor"),
        secondary=pick("secondaryColor"),
        accent=pick("accentColor"),
        text=pick("textColor"),
        background=pick("backgroundColor"),
        heading_font=pick("headingFont"),
        body_font=pick("bodyFont"),
        layout=layout,
    )


def apply_preset(theme: ThemeConfig | None, name: str) -> ThemeConfig:
    """Replace the palette with a named preset, keeping fonts and layout."""
    for preset in COLOR_PRESETS:
        if preset["name"] == name:
            return merge_theme(theme, ThemeConfig(colors=dict(preset["colors"])))
    raise ValueError(f"Unknown color preset: {name}")


def font_stack(name: str) -> str:
    """CSS font-family value for a font name."""
    return FONT_OPTIONS.get(name) or f"{name}, sans-serif"


_CSS_UNSAFE = re.compile(r"[<>{};\"\\]")


def css_value(value: str) -> str:
    """Strip characters that could end a declaration or the style element."""
    return _CSS_UNSAFE.sub("", value).strip()


def theme_css_variables(theme: ResolvedTheme) -> str:
    """Render a :root block of CSS custom properties for a resolved theme."""
    lines = [
        ":root {",
        f"  --sf-primary: {css_value(theme.primary)};",
        f"  --sf-secondary: {css_value(theme.secondary)};",
        f"  --sf-accent: {css_value(theme.accent)};",
        f"  --sf-text: {css_value(theme.text)};",
        f"  --sf-background: {css_value(theme.background)};",
        f"  --sf-font-heading: {css_value(font_stack(theme.heading_font))};",
        f"  --sf-font-body: {css_value(font_stack(theme.body_font))};",
        "}",
    ]
    return "\n".join(lines)


def validate_theme(data: Any) -> list[str]:
    """Structural check for a theme payload. Returns error strings, empty if valid."""
    if data is None:
        return []
    if not isinstance(data, dict):
        return ["theme must be an object"]
    errors: list[str] = []
    for section in THEME_SECTIONS:
        value = data.get(section)
        if value is not None and not isinstance(value, dict):
            errors.append(f"theme.{section} must be an object")
    return errors
