"""
Composer Renderer -- Full Document Tests

render_page produces a complete HTML document: head with fonts and the
theme's CSS custom properties, the rendered blocks inside <main>, and an
optional footer.
"""

from composer.kernel.renderer import render_layout, render_page, render_page_content
from composer.kernel.types import PUBLIC, PageComponent, RenderContext, RenderOptions, ThemeConfig


def assert_contains(html, *fragments):
    for fragment in fragments:
        assert fragment in html, (
            f"Expected to find {fragment!r} in rendered HTML.\nGot (first 2000 chars):\n{html[:2000]}"
        )


def assert_not_contains(html, *fragments):
    for fragment in fragments:
        assert fragment not in html, f"Did NOT expect to find {fragment!r} in rendered HTML."


class TestDocumentStructure:
    def test_skeleton(self):
        html = render_page([PageComponent(id="a", type="spacer")], RenderContext(store_name="Acme"))
        assert html.startswith("<!DOCTYPE html>")
        assert_contains(
            html,
            '<html lang="en">',
            '<meta charset="utf-8">',
            "<title>Acme</title>",
            '<main class="sf-page sf-mode-public">',
            "sf-spacer",
            "</html>",
        )

    def test_title_and_description_escaped(self):
        html = render_page(
            [],
            RenderContext(),
            RenderOptions(title="Tom & Jerry's <Shop>", description='Say "hi"'),
        )
        assert_contains(html, "<title>Tom &amp; Jerry&#x27;s &lt;Shop&gt;</title>", 'content="Say &quot;hi&quot;"')

    def test_footer(self):
        html = render_page([], RenderContext(), RenderOptions(footer="© 2024 Acme"))
        assert_contains(html, '<footer class="sf-footer">© 2024 Acme</footer>')

    def test_fonts_optional(self):
        theme = ThemeConfig(fonts={"heading": "Playfair Display", "body": "Lato"})
        html = render_page([], RenderContext(store_theme=theme))
        assert_contains(html, "family=Playfair+Display", "family=Lato")

        html = render_page([], RenderContext(store_theme=theme), RenderOptions(include_fonts=False))
        assert_not_contains(html, "fonts.googleapis.com")


class TestThemeVariables:
    def test_default_variables(self):
        html = render_page([], RenderContext())
        assert_contains(html, "--sf-primary: #3b82f6;", "--sf-font-body: Inter, sans-serif;")

    def test_page_theme_beats_store_theme(self):
        ctx = RenderContext(
            page_theme=ThemeConfig(colors={"primary": "#111111"}),
            store_theme=ThemeConfig(colors={"primary": "#222222", "accent": "#333333"}),
        )
        html = render_page([], ctx)
        assert_contains(html, "--sf-primary: #111111;", "--sf-accent: #333333;")

    def test_css_injection_stripped(self):
        ctx = RenderContext(store_theme=ThemeConfig(colors={"primary": "red;}</style><script>x</script>"}))
        html = render_page([], ctx)
        assert_not_contains(html, "<script>")


class TestConvenience:
    def test_render_layout_accepts_theme_dict(self):
        html = render_layout(
            [{"id": "c", "type": "cta-banner", "props": {}, "order": 0}],
            theme={"colors": {"primary": "#654321"}},
        )
        assert_contains(html, "background-color:#654321")

    def test_page_content_is_trusted_html(self):
        html = render_page_content("Shipping", "<p>We ship <strong>fast</strong>.</p>", RenderContext(mode=PUBLIC))
        assert_contains(html, "<h1", "Shipping", "<p>We ship <strong>fast</strong>.</p>")

    def test_page_content_placeholder(self):
        html = render_page_content("", "", RenderContext())
        assert_contains(html, "Page content not found.")
