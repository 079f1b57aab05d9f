"""Text helpers shared by the fetch paths."""

import html
import re

from newsfeed.constants import (
    DEFAULT_SOURCE_NAME,
    ELLIPSIS,
    KEYWORD_MAX_COUNT,
    KEYWORD_MIN_LENGTH,
    KEYWORD_SEPARATORS,
)

_SEPARATOR_RE = re.compile("[" + re.escape(KEYWORD_SEPARATORS) + "]+")


def truncate(text: str | None, max_length: int) -> str:
    """Cut ``text`` to ``max_length`` characters, ellipsis included.

    Examples:
        >>> truncate("abcdef", 5)
        'ab...'
        >>> truncate("abc", 5)
        'abc'
    """
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def extract_keywords(text: str | None) -> list[str]:
    """Split a title into up to five keyword tokens longer than three characters.

    Examples:
        >>> extract_keywords("OpenAI: new GPT-5 model | launch date")
        ['OpenAI', 'model', 'launch', 'date']
    """
    if not text or not text.strip():
        return []
    tokens = [t for t in _SEPARATOR_RE.split(text) if len(t) >= KEYWORD_MIN_LENGTH]
    return tokens[:KEYWORD_MAX_COUNT]


def source_link(url: str | None, name: str | None) -> str:
    """HTML attribution paragraph pointing at the original item."""
    label = html.escape(name or DEFAULT_SOURCE_NAME)
    href = html.escape(url or "", quote=True)
    return (
        f'\n\n<p>Kaynak: <a href="{href}" target="_blank" '
        f'rel="noopener noreferrer">{label}</a></p>'
    )


def text_to_html(text: str | None) -> str:
    """Escape plain/markdown text and wrap each blank-line separated block in <p>."""
    if not text or not text.strip():
        return ""
    blocks = [b.strip() for b in re.split(r"\n\s*\n", text) if b.strip()]
    return "\n".join(
        "<p>" + html.escape(block).replace("\n", "<br>") + "</p>" for block in blocks
    )
