"""Exception hierarchy for the ingestion core."""


class NewsfeedError(Exception):
    """Base exception for ingestion errors."""

    def __init__(self, message: str, recoverable: bool = True):
        self.recoverable = recoverable
        super().__init__(message)


class ConfigurationError(NewsfeedError):
    """Required setting (usually a credential) is missing or invalid."""

    def __init__(self, message: str):
        super().__init__(message, recoverable=False)


class TranslationError(NewsfeedError):
    """The translation service failed or returned an unusable answer."""


class ArticleStoreError(NewsfeedError):
    """The article store rejected a read or write."""


class DuplicateArticleError(ArticleStoreError):
    """An article with the same external id or slug already exists."""

    def __init__(self, message: str, external_id: str | None = None, slug: str | None = None):
        self.external_id = external_id
        self.slug = slug
        super().__init__(message)
