"""
Tests for media assets.

Two layers of defense against broken media: strict URL validation before a
src reaches markup, and generated placeholders for anything that fails.
Pending (local blob:) uploads must never be persisted.
"""

from urllib.parse import unquote

import pytest

from composer.kernel.assets import (
    PendingAsset,
    PersistedAsset,
    find_pending_assets,
    is_pending,
    is_valid_url,
    media_src,
    new_pending_asset,
    parse_asset,
    placeholder_image,
    replace_pending,
    safe_href,
)
from composer.kernel.types import PageComponent


class TestIsValidUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://cdn.example.com/a.jpg",
            "http://localhost:8000/a.png",
            "  https://cdn.example.com/padded.jpg  ",
            "data:image/png;base64,iVBORw0KGgo=",
            "data:video/mp4;base64,AAAA",
        ],
    )
    def test_valid(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            None,
            42,
            "",
            "   ",
            "cdn.example.com/a.jpg",
            "/relative/a.jpg",
            "http://",
            "https://cdn.example.com/a b.jpg",
            "javascript:alert(1)",
            "data:text/html,<script>",
            "ftp://files.example.com/a.jpg",
            "blob:local/abc",
        ],
    )
    def test_invalid(self, url):
        assert not is_valid_url(url)

    def test_blob_only_when_local_allowed(self):
        assert is_valid_url("blob:local/abc", allow_local=True)
        assert not is_valid_url("blob:", allow_local=True)


class TestSafeHref:
    @pytest.mark.parametrize(
        "url",
        ["#top", "/collections/all", "https://example.com", "mailto:a@b.example", "tel:+15551234"],
    )
    def test_allowed(self, url):
        assert safe_href(url) == url

    @pytest.mark.parametrize("url", ["javascript:alert(1)", "//evil.example.com", "", None, "data:text/html,x"])
    def test_fallback(self, url):
        assert safe_href(url) == "#"

    def test_custom_fallback(self):
        assert safe_href("", "/") == "/"


class TestPlaceholder:
    def test_is_svg_data_uri(self):
        uri = placeholder_image("Hero Image", 1200, 600)
        assert uri.startswith("data:image/svg+xml;charset=utf-8,")
        svg = unquote(uri.split(",", 1)[1])
        assert 'width="1200"' in svg
        assert ">Hero Image</text>" in svg

    def test_label_escaped(self):
        svg = unquote(placeholder_image("<b>"))
        assert "&lt;b&gt;" in svg

    def test_placeholder_is_a_valid_media_url(self):
        assert is_valid_url(placeholder_image())

    def test_media_src(self):
        assert media_src("https://x.example.com/a.jpg", "A") == ("https://x.example.com/a.jpg", False)
        src, is_placeholder = media_src("nope", "A")
        assert is_placeholder
        assert src.startswith("data:image/svg+xml")


class TestAssetSumType:
    def test_parse_asset(self):
        assert parse_asset("https://x.example.com/a.jpg") == PersistedAsset("https://x.example.com/a.jpg")
        assert parse_asset("blob:local/1") == PendingAsset("blob:local/1")
        assert parse_asset("nope") is None

    def test_new_pending_asset(self):
        asset = new_pending_asset()
        assert is_pending(asset.url)
        assert asset.handle.startswith("blob:local/")
        assert new_pending_asset() != asset


class TestPendingReferences:
    def components(self):
        return [
            PageComponent(id="hero", type="hero-banner", props={"backgroundImage": "blob:local/1", "title": "x"}),
            PageComponent(
                id="gallery",
                type="image-gallery",
                props={"images": ["https://x.example.com/a.jpg", "blob:local/2"]},
            ),
            PageComponent(
                id="proof",
                type="social-proof",
                props={"logos": [{"name": "A", "image": "blob:local/1"}]},
            ),
        ]

    def test_find(self):
        refs = find_pending_assets(self.components())
        assert [(r.component_id, r.path, r.asset.handle) for r in refs] == [
            ("hero", "backgroundImage", "blob:local/1"),
            ("gallery", "images[1]", "blob:local/2"),
            ("proof", "logos[0].image", "blob:local/1"),
        ]

    def test_none_pending(self):
        assert find_pending_assets([PageComponent(id="a", type="spacer")]) == []

    def test_replace_every_occurrence(self):
        original = self.components()
        updated = replace_pending(original, PendingAsset("blob:local/1"), PersistedAsset("https://cdn.example.com/1.jpg"))

        assert updated[0].props["backgroundImage"] == "https://cdn.example.com/1.jpg"
        assert updated[2].props["logos"][0]["image"] == "https://cdn.example.com/1.jpg"
        assert updated[1].props["images"][1] == "blob:local/2"
        # input untouched
        assert original[0].props["backgroundImage"] == "blob:local/1"
