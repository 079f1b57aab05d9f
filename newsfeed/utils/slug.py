"""URL slug generation utilities."""

from slugify import slugify

from newsfeed.constants import SLUG_MAX_LENGTH


def generate_slug(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Generate a URL-safe slug from text.

    Turkish letters are transliterated (``ğ`` -> ``g``, ``ı`` -> ``i``).

    Args:
        text: Input text (e.g., article title)
        max_length: Maximum slug length

    Returns:
        URL-safe slug

    Examples:
        >>> generate_slug("OpenAI Releases GPT-5")
        'openai-releases-gpt-5'
        >>> generate_slug("Yapay Zekâ Gelişiyor")
        'yapay-zeka-gelisiyor'
    """
    slug = slugify(text, max_length=max_length, word_boundary=True, separator="-")
    return slug or "untitled"
