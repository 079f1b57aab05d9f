"""Hashing utilities for deduplication."""

import hashlib
from typing import Any


def generate_content_hash(*fields: Any) -> str:
    """
    Generate a hash from multiple fields for deduplication.

    Args:
        *fields: Variable number of fields to hash (title, url, content, etc.)

    Returns:
        SHA256 hash as hex string
    """
    combined = "|".join(str(field).strip().lower() for field in fields if field)

    hash_obj = hashlib.sha256(combined.encode("utf-8"))
    return hash_obj.hexdigest()


def normalize_url(url: str) -> str:
    """
    Normalize URL for comparison.

    Removes common variations:
    - Protocol (http/https)
    - www prefix
    - Trailing slashes
    - Query parameters
    - Fragment identifiers (#)

    Args:
        url: URL to normalize

    Returns:
        Normalized URL

    Examples:
        >>> normalize_url("https://www.example.com/page/")
        'example.com/page'
        >>> normalize_url("http://example.com/article?utm_source=feed#section")
        'example.com/article'
    """
    normalized = url.lower().strip()

    for protocol in ["https://", "http://"]:
        if normalized.startswith(protocol):
            normalized = normalized[len(protocol) :]
            break

    if normalized.startswith("www."):
        normalized = normalized[4:]

    if "#" in normalized:
        normalized = normalized.split("#")[0]

    if "?" in normalized:
        normalized = normalized.split("?")[0]

    return normalized.rstrip("/")


def url_external_id(source: str, url: str, length: int = 16) -> str:
    """
    Build a stable external id for sources that have no id of their own.

    Examples:
        >>> url_external_id("newsapi", "https://www.example.com/a?utm=x").startswith("newsapi:")
        True
    """
    return f"{source}:{generate_content_hash(normalize_url(url))[:length]}"
