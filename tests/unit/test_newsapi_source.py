"""Unit tests for the NewsAPI adapter."""

import re

import aiohttp
import pytest
from aioresponses import aioresponses

from newsfeed.models.config import NewsApiConfig
from newsfeed.sources.newsapi import NewsApiClient

HEADLINES_URL = re.compile(r"^https://newsapi\.org/v2/top-headlines.*$")

PAYLOAD = {
    "status": "ok",
    "totalResults": 2,
    "articles": [
        {
            "source": {"id": None, "name": "Webtekno"},
            "author": "Ali Veli",
            "title": "Yerli yapay zeka modeli tanıtıldı",
            "description": "Model açık kaynak olacak.",
            "url": "https://www.webtekno.com/haber/1",
            "urlToImage": "https://www.webtekno.com/img/1.jpg",
            "publishedAt": "2025-01-15T08:00:00Z",
            "content": "Detaylar...",
        },
        {
            "source": {"id": None, "name": "[Removed]"},
            "author": None,
            "title": "[Removed]",
            "description": "[Removed]",
            "url": "https://removed.com",
            "urlToImage": None,
            "publishedAt": "1970-01-01T00:00:00Z",
            "content": "[Removed]",
        },
    ],
}


@pytest.fixture
def config() -> NewsApiConfig:
    """NewsAPI settings with a dummy key."""
    return NewsApiConfig(api_key="secret", max_articles_per_category=5)


class TestNewsApiClient:
    """Test top-headlines requests."""

    @pytest.mark.asyncio
    async def test_parses_articles(self, config: NewsApiConfig) -> None:
        """Test camelCase fields and request parameters."""
        with aioresponses() as m:
            m.get(HEADLINES_URL, status=200, payload=PAYLOAD)

            async with aiohttp.ClientSession() as session:
                articles = await NewsApiClient(session, config).get_top_headlines("technology")

            (_method, url), _calls = next(iter(m.requests.items()))

        assert url.query["country"] == "tr"
        assert url.query["category"] == "technology"
        assert url.query["pageSize"] == "5"
        assert url.query["apiKey"] == "secret"

        assert len(articles) == 2
        first = articles[0]
        assert first.source is not None and first.source.name == "Webtekno"
        assert first.url_to_image == "https://www.webtekno.com/img/1.jpg"
        assert first.published_at is not None and first.published_at.year == 2025
        assert articles[1].title == "[Removed]"

    @pytest.mark.asyncio
    async def test_explicit_country_and_size(self, config: NewsApiConfig) -> None:
        """Test parameter overrides."""
        with aioresponses() as m:
            m.get(HEADLINES_URL, status=200, payload={"status": "ok", "articles": []})

            async with aiohttp.ClientSession() as session:
                articles = await NewsApiClient(session, config).get_top_headlines(
                    "science", country="us", page_size=3
                )

            (_method, url), _calls = next(iter(m.requests.items()))

        assert articles == []
        assert url.query["country"] == "us"
        assert url.query["pageSize"] == "3"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 429, 500])
    async def test_http_error_returns_empty(self, config: NewsApiConfig, status: int) -> None:
        """Test that error statuses yield no articles."""
        with aioresponses() as m:
            m.get(HEADLINES_URL, status=status, payload={"status": "error"})

            async with aiohttp.ClientSession() as session:
                articles = await NewsApiClient(session, config).get_top_headlines("technology")

        assert articles == []

    @pytest.mark.asyncio
    async def test_invalid_json_returns_empty(self, config: NewsApiConfig) -> None:
        """Test that a garbage body yields no articles."""
        with aioresponses() as m:
            m.get(HEADLINES_URL, status=200, body="not json")

            async with aiohttp.ClientSession() as session:
                articles = await NewsApiClient(session, config).get_top_headlines("technology")

        assert articles == []

    @pytest.mark.asyncio
    async def test_timeout_returns_empty(self, config: NewsApiConfig) -> None:
        """Test that timeouts yield no articles."""
        with aioresponses() as m:
            m.get(HEADLINES_URL, exception=TimeoutError())

            async with aiohttp.ClientSession() as session:
                articles = await NewsApiClient(session, config).get_top_headlines("technology")

        assert articles == []
