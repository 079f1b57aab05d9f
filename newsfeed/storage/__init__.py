"""Article persistence."""

from newsfeed.storage.article_store import ArticleStore, JsonArticleStore

__all__ = ["ArticleStore", "JsonArticleStore"]
