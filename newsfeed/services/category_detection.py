"""Category detection from title, body, source and engagement.

Weighted keyword matching: every keyword phrase of a category that appears as a
whole word in the combined text adds that category's weight to its score. The
highest score wins; ties go to the category listed first in ``CATEGORY_PATTERNS``.
"""

import re
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from loguru import logger

from newsfeed.constants import ENGAGEMENT_BOOST_THRESHOLD, SOURCE_BOOST
from newsfeed.models.articles import CandidateArticle, Category


class CategoryPattern(NamedTuple):
    """Keyword phrases and weight for one category."""

    category: Category
    keywords: tuple[str, ...]
    weight: int


# Order matters: it is the tie-break order.
CATEGORY_PATTERNS: tuple[CategoryPattern, ...] = (
    CategoryPattern(
        Category.OPENAI,
        (
            "openai", "chatgpt", "gpt-4", "gpt-5", "gpt", "sam altman",
            "dall-e", "whisper", "sora", "o1",
        ),
        100,
    ),
    CategoryPattern(
        Category.CLAUDE_AI,
        (
            "claude", "anthropic", "claude ai", "claude 3", "claude sonnet",
            "claude opus", "dario amodei",
        ),
        100,
    ),
    CategoryPattern(
        Category.GITHUB_COPILOT,
        (
            "github copilot", "copilot", "copilot x", "copilot chat",
            "github ai", "code completion", "ai pair programming",
        ),
        100,
    ),
    # General AI/ML, when no specific vendor is mentioned
    CategoryPattern(
        Category.ARTIFICIAL_INTELLIGENCE,
        (
            "artificial intelligence", "ai", "machine learning", "ml", "deep learning",
            "neural network", "llm", "large language model", "generative ai",
            "transformer", "bert", "nlp", "computer vision", "ai model",
        ),
        90,
    ),
    CategoryPattern(
        Category.ROBOTICS,
        (
            "robot", "robotics", "automation", "autonomous", "drone",
            "tesla bot", "boston dynamics", "humanoid", "industrial robot",
        ),
        95,
    ),
    CategoryPattern(
        Category.DEEPSEEK,
        (
            "deepseek", "deep seek", "deepseek ai", "deepseek coder",
            "deepseek v2", "chinese ai",
        ),
        100,
    ),
    CategoryPattern(
        Category.DOTNET,
        (
            ".net", "dotnet", "c#", "csharp", "asp.net", "blazor",
            "entity framework", "maui", ".net core", "visual studio",
        ),
        95,
    ),
    CategoryPattern(
        Category.MCP,
        (
            "mcp", "model context protocol", "context protocol",
            "llm context", "ai context",
        ),
        100,
    ),
)

# Substring hints in the lowercased source label, checked in order.
SOURCE_HINTS: tuple[tuple[tuple[str, ...], Category], ...] = (
    (("r/artificial", "r/machinelearning"), Category.ARTIFICIAL_INTELLIGENCE),
    (("r/openai",), Category.OPENAI),
    (("r/claudeai",), Category.CLAUDE_AI),
    (("r/github", "github trending"), Category.GITHUB_COPILOT),
    (("r/dotnet", "r/csharp"), Category.DOTNET),
    (("r/robotics",), Category.ROBOTICS),
)

# Fallbacks when nothing scored, checked in order; "popular" otherwise.
SOURCE_DEFAULTS: tuple[tuple[tuple[str, ...], Category], ...] = (
    (("openai", "chatgpt"), Category.OPENAI),
    (("anthropic", "claude"), Category.CLAUDE_AI),
    (("github copilot", "copilot"), Category.GITHUB_COPILOT),
)

# Legacy boost keyed by labels from an older category scheme. None of them is
# a Category, so the boost never applies.
ENGAGEMENT_BOOSTS: dict[str, int] = {"Technology": 30, "World": 20}


def _keyword_regex(keyword: str) -> re.Pattern[str]:
    # Lookarounds instead of \b so ".net" and "c#" match as whole words too
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)


_COMPILED_PATTERNS: tuple[tuple[Category, tuple[re.Pattern[str], ...], int], ...] = tuple(
    (p.category, tuple(_keyword_regex(k) for k in p.keywords), p.weight)
    for p in CATEGORY_PATTERNS
)


def _first_hint(
    source: str, hints: tuple[tuple[tuple[str, ...], Category], ...]
) -> Category | None:
    lower_source = source.lower()
    for needles, category in hints:
        if any(needle in lower_source for needle in needles):
            return category
    return None


def get_category_from_source(source: str) -> Category | None:
    """Category hinted by a known community in the source label, if any."""
    return _first_hint(source, SOURCE_HINTS)


def get_default_category(source: str) -> Category:
    """Category to use when no keyword matched."""
    return _first_hint(source, SOURCE_DEFAULTS) or Category.POPULAR


def score_categories(
    title: str,
    content: str = "",
    source: str = "",
    tags: Sequence[str] = (),
    score: int = 0,
) -> dict[Category, int]:
    """
    Score every category with keyword evidence.

    Args:
        title: Item title
        content: Item body, may be empty
        source: Source label, e.g. "Reddit - r/OpenAI"
        tags: Tags attached to the item
        score: Engagement score (upvotes, likes)

    Returns:
        Category -> score, in ``CATEGORY_PATTERNS`` order. Only categories with
        at least one keyword match appear.
    """
    combined_text = f"{title or ''} {content or ''} {source or ''} {' '.join(tags or ())}".lower()
    scores: dict[Category, int] = {}

    for category, regexes, weight in _COMPILED_PATTERNS:
        matches = sum(1 for regex in regexes if regex.search(combined_text))
        if matches > 0:
            scores[category] = scores.get(category, 0) + matches * weight

    source_category = get_category_from_source(source or "")
    if source_category is not None and source_category in scores:
        scores[source_category] += SOURCE_BOOST

    if score > ENGAGEMENT_BOOST_THRESHOLD:
        for label, boost in ENGAGEMENT_BOOSTS.items():
            if label in scores:
                scores[label] += boost  # type: ignore[index]

    return scores


def detect_category(
    title: str,
    content: str = "",
    source: str = "",
    tags: Sequence[str] = (),
    score: int = 0,
) -> Category:
    """
    Detect the most appropriate category for an item.

    Args:
        title: Item title
        content: Item body, may be empty
        source: Source label
        tags: Tags attached to the item
        score: Engagement score

    Returns:
        Highest scoring category, or the source-based default
    """
    scores = score_categories(title, content, source, tags, score)

    if scores:
        # max() keeps the first of equal scores, which is table order
        detected = max(scores.items(), key=lambda item: item[1])[0]
        short_title = title[:50] + "..." if len(title) > 50 else title
        logger.debug(
            "Detected category",
            category=detected.value,
            title=short_title,
            scores={c.value: s for c, s in scores.items()},
        )
        return detected

    default = get_default_category(source or "")
    logger.debug("Using default category", category=default.value, source=source)
    return default


def detect_candidate_category(candidate: CandidateArticle) -> Category:
    """Shortcut for :func:`detect_category` on a fetched candidate."""
    return detect_category(
        candidate.title, candidate.content, candidate.source, candidate.tags, candidate.score
    )


def get_trending_categories(items: Iterable[CandidateArticle]) -> dict[Category, int]:
    """
    Sum engagement per detected category.

    Args:
        items: Candidates to aggregate

    Returns:
        Category -> total engagement, highest total first
    """
    engagement: dict[Category, int] = {}
    for item in items:
        category = detect_candidate_category(item)
        engagement[category] = engagement.get(category, 0) + item.score

    return dict(sorted(engagement.items(), key=lambda kv: kv[1], reverse=True))
