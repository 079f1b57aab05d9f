"""Article persistence with duplicate detection."""

import asyncio
import json
import os
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from newsfeed.errors import ArticleStoreError, DuplicateArticleError
from newsfeed.models.articles import Article, Category, NewArticle
from newsfeed.utils.logging import get_logger
from newsfeed.utils.slug import generate_slug

logger = get_logger(__name__)


class ArticleStore(Protocol):
    """Operations the pipeline and the CLI use."""

    async def create(self, article: NewArticle) -> Article: ...

    async def get_by_slug(self, slug: str) -> Article | None: ...

    async def get_by_external_id(self, external_id: str) -> Article | None: ...

    async def list_by_category(self, category: Category, limit: int = 20) -> list[Article]: ...

    async def list_trending(self, limit: int = 10) -> list[Article]: ...

    async def count(self) -> int: ...


class JsonArticleStore:
    """Stores articles in a single JSON file.

    Slug and external id are unique. Creates are serialised by a lock and the
    file is replaced atomically, so a cancelled task never leaves a partial
    record behind.
    """

    def __init__(self, path: Path | str = "data/articles.json") -> None:
        """
        Initialize the store, loading existing articles.

        Args:
            path: JSON file holding all articles

        Raises:
            ArticleStoreError: Existing file cannot be parsed
        """
        self.path = Path(path)
        self._lock = asyncio.Lock()
        self._pending_write: asyncio.Future[None] | None = None
        self._articles: dict[str, Article] = {}
        self._by_slug: dict[str, str] = {}
        self._by_external_id: dict[str, str] = {}
        self._load()
        logger.info("Article store initialized", path=str(self.path), count=len(self._articles))

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            content = json.loads(self.path.read_text(encoding="utf-8"))
            articles = [Article.model_validate(item) for item in content["data"]]
        except Exception as e:
            logger.error("Failed to load article store", path=str(self.path), error=str(e))
            raise ArticleStoreError(f"Cannot read article store {self.path}: {e}") from e

        for article in articles:
            self._index(article)

    def _index(self, article: Article) -> None:
        self._articles[article.id] = article
        self._by_slug[article.slug] = article.id
        if article.external_id:
            self._by_external_id[article.external_id] = article.id

    def _write_file(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, self.path)

    async def _flush(self) -> None:
        # Snapshot on the loop, write on a worker thread. A write outlives a
        # cancelled caller and the next flush waits for it, so writes never overlap.
        payload = {
            "data": [a.model_dump(mode="json") for a in self._articles.values()],
            "saved_at": datetime.now(UTC).isoformat(),
        }
        text = json.dumps(payload, indent=2, ensure_ascii=False)

        if self._pending_write is not None:
            await asyncio.wait([self._pending_write])
        self._pending_write = asyncio.ensure_future(asyncio.to_thread(self._write_file, text))
        await asyncio.shield(self._pending_write)

    async def create(self, article: NewArticle) -> Article:
        """
        Persist a new article.

        Args:
            article: Article payload

        Returns:
            Stored article with id, slug and timestamps

        Raises:
            DuplicateArticleError: External id or slug already stored
            ArticleStoreError: Write failed
        """
        slug = generate_slug(article.title)

        async with self._lock:
            if article.external_id and article.external_id in self._by_external_id:
                raise DuplicateArticleError(
                    f"Article with external id '{article.external_id}' already exists",
                    external_id=article.external_id,
                )
            if slug in self._by_slug:
                raise DuplicateArticleError(
                    f"Article with slug '{slug}' already exists", slug=slug
                )

            now = datetime.now(UTC)
            stored = Article(
                **article.model_dump(),
                id=uuid.uuid4().hex,
                slug=slug,
                created_at=now,
                updated_at=now,
            )
            self._index(stored)
            try:
                await self._flush()
            except OSError as e:
                self._unindex(stored)
                raise ArticleStoreError(f"Failed to write article store: {e}") from e

        logger.debug("Article stored", slug=slug, category=stored.category.value)
        return stored

    def _unindex(self, article: Article) -> None:
        self._articles.pop(article.id, None)
        self._by_slug.pop(article.slug, None)
        if article.external_id:
            self._by_external_id.pop(article.external_id, None)

    async def get_by_slug(self, slug: str) -> Article | None:
        article_id = self._by_slug.get(slug)
        return self._articles.get(article_id) if article_id else None

    async def get_by_external_id(self, external_id: str) -> Article | None:
        article_id = self._by_external_id.get(external_id)
        return self._articles.get(article_id) if article_id else None

    async def list_by_category(self, category: Category, limit: int = 20) -> list[Article]:
        """Active articles of a category, newest first."""
        matches = [a for a in self._articles.values() if a.is_active and a.category == category]
        matches.sort(key=lambda a: a.published_at, reverse=True)
        return matches[:limit]

    async def list_trending(self, limit: int = 10) -> list[Article]:
        """Active articles by view count, then recency."""
        active = [a for a in self._articles.values() if a.is_active]
        active.sort(key=lambda a: (a.view_count, a.published_at), reverse=True)
        return active[:limit]

    async def count(self) -> int:
        return len(self._articles)
