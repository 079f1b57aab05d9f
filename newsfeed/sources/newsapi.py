"""NewsAPI.org adapter for top headlines."""

from datetime import datetime

import aiohttp
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from newsfeed.models.config import NewsApiConfig


class NewsApiSource(BaseModel):
    """Publisher block of a NewsAPI article."""

    id: str | None = None
    name: str | None = None


class NewsApiArticle(BaseModel):
    """Article as returned by NewsAPI."""

    model_config = ConfigDict(populate_by_name=True)

    source: NewsApiSource | None = None
    author: str | None = None
    title: str | None = None
    description: str | None = None
    url: str | None = None
    url_to_image: str | None = Field(default=None, alias="urlToImage")
    published_at: datetime | None = Field(default=None, alias="publishedAt")
    content: str | None = None


class NewsApiResponse(BaseModel):
    """Top-level NewsAPI response."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = ""
    total_results: int = Field(default=0, alias="totalResults")
    articles: list[NewsApiArticle] = Field(default_factory=list)


class NewsApiClient:
    """Fetches top headlines per category."""

    def __init__(self, session: aiohttp.ClientSession, config: NewsApiConfig) -> None:
        self.session = session
        self.config = config

    async def get_top_headlines(
        self, category: str, country: str | None = None, page_size: int | None = None
    ) -> list[NewsApiArticle]:
        """
        Top headlines for one NewsAPI category.

        Args:
            category: NewsAPI category (technology, business, ...)
            country: Country code; first configured country when omitted
            page_size: Number of articles; configured maximum when omitted

        Returns:
            Parsed articles, empty on any HTTP or payload problem
        """
        country = country or (self.config.countries[0] if self.config.countries else "tr")
        params = {
            "country": country,
            "category": category,
            "pageSize": str(page_size or self.config.max_articles_per_category),
            "apiKey": self.config.api_key or "",
        }
        url = f"{self.config.base_url.rstrip('/')}/top-headlines"
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        try:
            async with self.session.get(url, params=params, timeout=timeout) as response:
                if response.status != 200:
                    logger.warning(
                        f"NewsAPI returned status {response.status} for category {category}"
                    )
                    return []
                body = await response.text()
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error(f"HTTP error fetching news for category {category}: {e}")
            return []

        try:
            result = NewsApiResponse.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"JSON parsing error for category {category}: {e.error_count()} errors")
            return []

        if not result.articles:
            logger.info(f"No articles found for category {category}")
        return result.articles
