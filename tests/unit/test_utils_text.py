"""Unit tests for text helpers."""

import pytest

from newsfeed.utils.text import extract_keywords, source_link, text_to_html, truncate


class TestTruncate:
    """Test truncate function."""

    def test_long_text_truncated_with_ellipsis(self) -> None:
        """Test that a 2100 character summary is cut to 2000 including the ellipsis."""
        summary = "a" * 2100

        result = truncate(summary, 2000)

        assert len(result) == 2000
        assert result.endswith("...")
        assert result[:-3] == "a" * 1997

    def test_text_at_limit_untouched(self) -> None:
        """Test text exactly at the limit."""
        text = "b" * 500
        assert truncate(text, 500) == text

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values(self, value: str | None) -> None:
        """Test that missing text becomes an empty string."""
        assert truncate(value, 10) == ""


class TestExtractKeywords:
    """Test extract_keywords function."""

    def test_splits_on_separators(self) -> None:
        """Test splitting on space, comma, dash, colon and pipe."""
        assert extract_keywords("OpenAI: new GPT-5 model | launch date") == [
            "OpenAI",
            "model",
            "launch",
            "date",
        ]

    def test_keeps_tokens_longer_than_three(self) -> None:
        """Test that short tokens are dropped."""
        assert extract_keywords("AI is big, and odd") == []

    def test_caps_at_five(self) -> None:
        """Test that at most five keywords are returned."""
        title = "Yapay zeka modelleri yazılım geliştirme süreçlerini hızla değiştiriyor"
        assert extract_keywords(title) == [
            "Yapay",
            "zeka",
            "modelleri",
            "yazılım",
            "geliştirme",
        ]

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank(self, value: str | None) -> None:
        """Test that blank titles give no keywords."""
        assert extract_keywords(value) == []


class TestSourceLink:
    """Test source attribution markup."""

    def test_link_markup(self) -> None:
        """Test the attribution paragraph."""
        link = source_link("https://example.com/a", "Example News")

        assert link == (
            '\n\n<p>Kaynak: <a href="https://example.com/a" target="_blank" '
            'rel="noopener noreferrer">Example News</a></p>'
        )

    def test_default_name(self) -> None:
        """Test fallback label when the source has no name."""
        assert "Haber Kaynağı</a>" in source_link("https://example.com/a", None)

    def test_escapes_html(self) -> None:
        """Test that names and URLs are escaped."""
        link = source_link('https://example.com/?a=1&b="2"', "<b>Bad</b>")

        assert "&lt;b&gt;Bad&lt;/b&gt;" in link
        assert "&amp;b=&quot;2&quot;" in link


class TestTextToHtml:
    """Test plain text to HTML conversion."""

    def test_paragraphs(self) -> None:
        """Test that blank lines split paragraphs and single newlines become breaks."""
        html = text_to_html("First line\nsecond line\n\nNext <block>")

        assert html == "<p>First line<br>second line</p>\n<p>Next &lt;block&gt;</p>"

    def test_empty(self) -> None:
        """Test empty body."""
        assert text_to_html("") == ""
        assert text_to_html(None) == ""
