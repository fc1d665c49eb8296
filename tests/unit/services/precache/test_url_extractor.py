"""
Tests for image URL extraction from article markup.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from feedcache.services.precache.url_extractor import find_all_image_urls_in_html


class TestFindAllImageUrlsInHtml:
    """Tests for find_all_image_urls_in_html."""

    def test_single_img(self) -> None:
        html = '<p>hi</p><img src="https://a.example/1.png">'
        assert find_all_image_urls_in_html(html) == ["https://a.example/1.png"]

    def test_multiple_imgs_in_document_order(self) -> None:
        html = (
            '<img src="https://a.example/1.png">'
            "<div><p>text</p>"
            '<img src="https://b.example/2.jpg" alt="two"></div>'
        )
        assert find_all_image_urls_in_html(html) == [
            "https://a.example/1.png",
            "https://b.example/2.jpg",
        ]

    @pytest.mark.parametrize("html", ["", None, "<p>no images here</p>"])
    def test_no_images(self, html: str | None) -> None:
        assert find_all_image_urls_in_html(html) == []

    def test_duplicates_collapsed(self) -> None:
        html = '<img src="https://a.example/1.png"><img src="https://a.example/1.png">'
        assert find_all_image_urls_in_html(html) == ["https://a.example/1.png"]

    def test_relative_urls_returned_verbatim(self) -> None:
        html = '<img src="/media/pic.gif">'
        assert find_all_image_urls_in_html(html) == ["/media/pic.gif"]

    def test_srcset_candidates(self) -> None:
        html = (
            '<img src="https://a.example/s.jpg" '
            'srcset="https://a.example/m.jpg 2x, https://a.example/l.jpg 800w">'
        )
        assert find_all_image_urls_in_html(html) == [
            "https://a.example/s.jpg",
            "https://a.example/m.jpg",
            "https://a.example/l.jpg",
        ]

    def test_picture_source_srcset(self) -> None:
        html = (
            "<picture>"
            '<source srcset="https://a.example/p.webp" type="image/webp">'
            '<img src="https://a.example/p.jpg">'
            "</picture>"
        )
        assert find_all_image_urls_in_html(html) == [
            "https://a.example/p.webp",
            "https://a.example/p.jpg",
        ]

    def test_media_source_outside_picture_ignored(self) -> None:
        html = '<video><source src="https://a.example/v.mp4" srcset="x.jpg"></video>'
        assert find_all_image_urls_in_html(html) == []

    def test_data_uri_skipped(self) -> None:
        html = '<img src="data:image/png;base64,AAAA"><img src="https://a.example/1.png">'
        assert find_all_image_urls_in_html(html) == ["https://a.example/1.png"]

    def test_img_without_src(self) -> None:
        assert find_all_image_urls_in_html("<img alt='x'>") == []

    def test_whitespace_trimmed(self) -> None:
        html = '<img src="  https://a.example/1.png \n">'
        assert find_all_image_urls_in_html(html) == ["https://a.example/1.png"]

    def test_malformed_markup_does_not_raise(self) -> None:
        html = '<div><img src="https://a.example/1.png"<p>unclosed <b><img src='
        result = find_all_image_urls_in_html(html)
        assert isinstance(result, list)

    def test_uppercase_tags(self) -> None:
        html = '<IMG SRC="https://a.example/1.png">'
        assert find_all_image_urls_in_html(html) == ["https://a.example/1.png"]


_url_chars = st.characters(categories=("Ll", "Lu", "Nd"), include_characters="/._-~")
_urls = st.text(alphabet=_url_chars, min_size=1, max_size=40).map(
    lambda path: f"https://img.example/{path}"
)
_separators = st.sampled_from(["", " ", "\n", "<br>", "<p>caption</p>", "</div><div>"])


class TestHypothesisProperties:
    """Property-based tests for extraction invariants."""

    @given(st.text(max_size=300))
    @settings(max_examples=300)
    def test_idempotent_on_arbitrary_text(self, text: str) -> None:
        first = find_all_image_urls_in_html(text)

        assert find_all_image_urls_in_html(text) == first
        assert len(first) == len(set(first))

    @given(st.lists(_urls, max_size=10), _separators)
    @settings(max_examples=300)
    def test_img_fragments_recovered_in_order(
        self, urls: list[str], separator: str
    ) -> None:
        html = separator.join(f'<img src="{url}">' for url in urls)

        result = find_all_image_urls_in_html(html)

        assert result == list(dict.fromkeys(urls))
        assert find_all_image_urls_in_html(html) == result
