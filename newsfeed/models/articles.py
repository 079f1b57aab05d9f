"""Article data models for the ingestion pipeline."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

from newsfeed.constants import DEFAULT_ARTICLE_PRIORITY


class Category(str, Enum):
    """Closed set of categories the frontend knows about."""

    POPULAR = "popular"
    ARTIFICIAL_INTELLIGENCE = "artificial-intelligence"
    GITHUB_COPILOT = "github-copilot"
    MCP = "mcp"
    OPENAI = "openai"
    ROBOTICS = "robotics"
    DEEPSEEK = "deepseek"
    DOTNET = "dotnet"
    CLAUDE_AI = "claude-ai"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CandidateArticle(BaseModel):
    """Item produced by a source fetcher, not yet translated or stored."""

    external_id: str = Field(description="Source-qualified id, e.g. 'reddit:1abc2d'")
    title: str = Field(description="Item title")
    content: str = Field(default="", description="Body text, may be empty")
    source: str = Field(description="Source label, e.g. 'Reddit - r/OpenAI'")
    tags: list[str] = Field(default_factory=list, description="Flair or topic tags")
    score: int = Field(default=0, ge=0, description="Engagement score (upvotes)")
    published_at: datetime = Field(default_factory=_utcnow, description="Publication date")
    url: str | None = Field(default=None, description="Link to the original item")
    author: str | None = Field(default=None, description="Author handle")
    image_url: str | None = Field(default=None, description="Preview image")
    language: str | None = Field(default=None, description="Language tag once known")


class NewArticle(BaseModel):
    """Payload handed to the article store's create operation."""

    category: Category = Field(description="Detected category")
    kind: str = Field(default="Genel", description="Section/type label")
    title: str = Field(min_length=1, description="Article title (caption)")
    summary: str = Field(default="", description="Short summary")
    content: str = Field(default="", description="HTML body")
    image_url: str = Field(default="")
    thumbnail_url: str = Field(default="")
    image_alt: str = Field(default="")
    keywords: list[str] = Field(default_factory=list)
    authors: list[str] = Field(default_factory=list)
    priority: int = Field(default=DEFAULT_ARTICLE_PRIORITY, ge=0, description="Lower is more prominent")
    is_active: bool = Field(default=True)
    published_at: datetime = Field(default_factory=_utcnow)
    language: str | None = Field(default=None, description="Language tag of the stored text")
    external_id: str | None = Field(default=None, description="Upstream id used for dedupe")
    source: str = Field(default="", description="Source label")
    source_url: str | None = Field(default=None, description="Link to the original item")


class Article(NewArticle):
    """Persisted article."""

    id: str = Field(description="Store-assigned id")
    slug: str = Field(description="Unique URL slug derived from the title")
    view_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
