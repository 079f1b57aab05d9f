"""Configuration models for the ingestion worker."""

from typing import Literal

from pydantic import BaseModel, Field

from newsfeed.constants import (
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_MAX_ITEMS,
    DEFAULT_REQUEST_DELAY_SECONDS,
    DEFAULT_STARTUP_DELAY_SECONDS,
    DEFAULT_TARGET_LANGUAGE,
    DEFAULT_TIME_WINDOW,
)


class CommunityConfig(BaseModel):
    """A subreddit to pull from, optionally narrowed by a search query."""

    name: str = Field(description="Subreddit name without the r/ prefix")
    query: str | None = Field(default=None, description="Search query; top posts when empty")
    label: str = Field(default="", description="Human readable description")


def _default_communities() -> list[CommunityConfig]:
    tuples = [
        # GitHub Copilot
        ("github", "copilot", "GitHub Copilot discussions"),
        ("programming", 'copilot OR "github copilot"', "Programming community"),
        ("webdev", "copilot", "Web development"),
        # Artificial Intelligence
        ("artificial", None, "AI general discussions"),
        ("MachineLearning", None, "Machine Learning community"),
        ("ArtificialInteligence", None, "AI specific community"),
        ("singularity", None, "AI singularity discussions"),
        # OpenAI
        ("OpenAI", None, "OpenAI official community"),
        ("ChatGPT", None, "ChatGPT discussions"),
        ("ChatGPTCoding", None, "ChatGPT for coding"),
        # Claude AI
        ("ClaudeAI", None, "Claude AI discussions"),
        ("Anthropic", None, "Anthropic/Claude community"),
        # General AI/LLM
        ("LocalLLaMA", None, "Local LLM discussions"),
        ("Oobabooga", None, "LLM tools and models"),
    ]
    return [CommunityConfig(name=n, query=q, label=label) for n, q, label in tuples]


class ScheduleConfig(BaseModel):
    """Timer settings for the background worker."""

    startup_delay_seconds: float = Field(default=DEFAULT_STARTUP_DELAY_SECONDS, ge=0)
    interval_seconds: float = Field(default=DEFAULT_INTERVAL_SECONDS, gt=0)


class ForumConfig(BaseModel):
    """Reddit fetch settings."""

    enabled: bool = Field(default=True)
    base_url: str = Field(default="https://www.reddit.com")
    user_agent: str = Field(default="newsfeed-bot/1.0 (tech news aggregator)")
    time_window: Literal["hour", "day", "week", "month", "year", "all"] = Field(
        default=DEFAULT_TIME_WINDOW
    )
    max_items: int = Field(default=DEFAULT_MAX_ITEMS, ge=1, le=100)
    search_sort: Literal["relevance", "hot", "top", "new", "comments"] = Field(default="top")
    timeout_seconds: int = Field(default=30)
    translate_foreign_posts: bool = Field(
        default=True,
        description="Translate posts with no target-language text instead of filtering them",
    )
    communities: list[CommunityConfig] = Field(default_factory=_default_communities)


class NewsApiConfig(BaseModel):
    """NewsAPI.org fetch settings."""

    enabled: bool = Field(default=True)
    base_url: str = Field(default="https://newsapi.org/v2")
    api_key: str | None = Field(default=None, description="Falls back to NEWSAPI_API_KEY")
    countries: list[str] = Field(default_factory=lambda: ["tr"])
    categories: list[str] = Field(
        default_factory=lambda: ["technology", "science", "business"]
    )
    max_articles_per_category: int = Field(default=20, ge=1, le=100)
    request_delay_seconds: float = Field(default=DEFAULT_REQUEST_DELAY_SECONDS, ge=0)
    timeout_seconds: int = Field(default=30)


class TranslationConfig(BaseModel):
    """Translation service settings."""

    provider: Literal["google"] = Field(default="google")
    base_url: str = Field(default="https://translation.googleapis.com/language/translate/v2")
    api_key: str | None = Field(default=None, description="Falls back to GOOGLE_TRANSLATE_API_KEY")
    timeout_seconds: int = Field(default=15)


class StorageConfig(BaseModel):
    """Article store settings."""

    path: str = Field(default="data/articles.json")


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    serialize: bool = Field(default=True, description="Serialize logs to JSON")
    colorize: bool = Field(default=True, description="Colorize console output")
    file_path: str = Field(default="logs/newsfeed.log")
    rotation: str = Field(default="500 MB", description="Log rotation size/time")
    retention: str = Field(default="30 days", description="Log retention period")
    compression: str = Field(default="zip", description="Compression format for rotated logs")


class PipelineMetadata(BaseModel):
    """Pipeline metadata."""

    name: str = Field(default="newsfeed")
    version: str = Field(default="1.0.0")


class PipelineConfig(BaseModel):
    """Complete worker configuration."""

    pipeline: PipelineMetadata = Field(default_factory=PipelineMetadata)
    target_language: str = Field(default=DEFAULT_TARGET_LANGUAGE, min_length=2)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    forum: ForumConfig = Field(default_factory=ForumConfig)
    news_api: NewsApiConfig = Field(default_factory=NewsApiConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
