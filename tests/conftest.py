"""Shared pytest fixtures and configuration."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from newsfeed.errors import TranslationError
from newsfeed.models.articles import CandidateArticle, Category, NewArticle
from newsfeed.storage.article_store import JsonArticleStore

TURKISH_MARKER = "[tr] "


class FakeTranslator:
    """In-memory translation gateway.

    Text counts as Turkish when it starts with ``[tr] `` or is listed in
    ``turkish``. ``translate`` prefixes the marker unless a canned translation
    exists; texts listed in ``broken`` come back untranslated.
    """

    target_language = "tr"

    def __init__(self) -> None:
        self.turkish: set[str] = set()
        self.translations: dict[str, str] = {}
        self.broken: set[str] = set()
        self.failing: set[str] = set()
        self.calls: list[str] = []

    def detect_language(self, text: str) -> str:
        return "tr" if self.is_target_language(text) else "en"

    def is_target_language(self, text: str) -> bool:
        return text.startswith(TURKISH_MARKER) or text in self.turkish

    async def translate(self, text: str, source_language: str | None = None) -> str:
        self.calls.append(text)
        if text in self.failing:
            raise TranslationError(f"service unavailable for {text!r}")
        if text in self.broken:
            return text
        return self.translations.get(text, TURKISH_MARKER + text)


@pytest.fixture
def fake_translator() -> FakeTranslator:
    """Translation gateway that never touches the network."""
    return FakeTranslator()


@pytest.fixture
def article_store(tmp_path: Path) -> JsonArticleStore:
    """Empty JSON article store in a temporary directory."""
    return JsonArticleStore(tmp_path / "data" / "articles.json")


@pytest.fixture
def sample_candidate() -> CandidateArticle:
    """A Reddit post in English."""
    return CandidateArticle(
        external_id="reddit:abc123",
        title="OpenAI announces GPT-5 for ChatGPT users",
        content="Sam Altman said the rollout starts today.",
        source="Reddit - r/OpenAI",
        tags=["News"],
        score=420,
        published_at=datetime(2025, 1, 15, 10, 30, tzinfo=UTC),
        url="https://www.reddit.com/r/OpenAI/comments/abc123/openai_announces_gpt5/",
        author="someone",
    )


@pytest.fixture
def sample_new_article() -> NewArticle:
    """Store payload with an external id."""
    return NewArticle(
        category=Category.OPENAI,
        kind="Sosyal Medya",
        title="OpenAI GPT-5'i duyurdu",
        summary="Sam Altman dağıtımın bugün başladığını söyledi.",
        content="<p>Sam Altman dağıtımın bugün başladığını söyledi.</p>",
        keywords=["OpenAI", "GPT-5'i", "duyurdu"],
        authors=["someone"],
        published_at=datetime(2025, 1, 15, 10, 30, tzinfo=UTC),
        language="tr",
        external_id="reddit:abc123",
        source="Reddit - r/OpenAI",
    )


class FakeRedditClient:
    """Reddit adapter serving canned posts per community."""

    def __init__(self, posts: dict[str, list[CandidateArticle]] | None = None) -> None:
        self.posts = posts or {}
        self.failing: set[str] = set()
        self.requests: list[tuple[str, str | None]] = []

    async def get_top_posts(self, subreddit: str, time_window=None, limit=None) -> list[CandidateArticle]:
        self.requests.append((subreddit, None))
        return self._serve(subreddit)

    async def search_posts(
        self, subreddit: str, query: str, sort=None, time_window=None, limit=None
    ) -> list[CandidateArticle]:
        self.requests.append((subreddit, query))
        return self._serve(subreddit)

    def _serve(self, subreddit: str) -> list[CandidateArticle]:
        if subreddit in self.failing:
            raise RuntimeError(f"r/{subreddit} unavailable")
        return list(self.posts.get(subreddit, []))


@pytest.fixture
def fake_reddit() -> FakeRedditClient:
    """Reddit adapter without network access."""
    return FakeRedditClient()
