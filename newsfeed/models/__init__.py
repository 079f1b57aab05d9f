"""Pydantic data models for the ingestion core."""

from newsfeed.models.articles import (
    Article,
    CandidateArticle,
    Category,
    NewArticle,
)
from newsfeed.models.config import (
    CommunityConfig,
    ForumConfig,
    LoggingConfig,
    NewsApiConfig,
    PipelineConfig,
    PipelineMetadata,
    ScheduleConfig,
    StorageConfig,
    TranslationConfig,
)
from newsfeed.models.results import CycleResult, IngestResult

__all__ = [
    # Articles
    "Category",
    "CandidateArticle",
    "NewArticle",
    "Article",
    # Results
    "IngestResult",
    "CycleResult",
    # Config
    "CommunityConfig",
    "ForumConfig",
    "NewsApiConfig",
    "TranslationConfig",
    "ScheduleConfig",
    "StorageConfig",
    "LoggingConfig",
    "PipelineMetadata",
    "PipelineConfig",
]
