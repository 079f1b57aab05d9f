"""News-API ingestion: NewsAPI.org top headlines -> Turkish articles."""

import asyncio
from datetime import UTC, datetime

from loguru import logger

from newsfeed.constants import (
    AUTHOR_MAX_LENGTH,
    IMAGE_ALT_MAX_LENGTH,
    NEWS_API_DEFAULT_AUTHOR,
    NEWS_API_REMOVED_TITLE,
    SUMMARY_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from newsfeed.errors import DuplicateArticleError
from newsfeed.models.articles import NewArticle
from newsfeed.models.config import NewsApiConfig
from newsfeed.models.results import IngestResult
from newsfeed.services.category_detection import detect_category
from newsfeed.services.translation import TranslationGateway
from newsfeed.sources.newsapi import NewsApiArticle, NewsApiClient
from newsfeed.storage.article_store import ArticleStore
from newsfeed.utils.hash import url_external_id
from newsfeed.utils.text import extract_keywords, source_link, truncate
from newsfeed.utils.timing import wait_or_stop

SOURCE_NAME = "newsapi"

# NewsAPI category -> section label shown by the frontend
SECTION_LABELS: dict[str, str] = {
    "technology": "Teknoloji",
    "business": "Ekonomi",
    "sports": "Spor",
    "science": "Bilim",
    "health": "Sağlık",
    "entertainment": "Magazin",
    "general": "Genel",
}
DEFAULT_SECTION_LABEL = "Genel"


def map_section(news_api_category: str) -> str:
    """Section label for a NewsAPI category, ``Genel`` when unmapped."""
    return SECTION_LABELS.get(news_api_category.lower(), DEFAULT_SECTION_LABEL)


async def map_article(
    article: NewsApiArticle,
    category: str,
    translator: TranslationGateway,
) -> NewArticle | None:
    """
    Convert a NewsAPI article to a target-language article.

    Args:
        article: Raw NewsAPI article
        category: NewsAPI category it was fetched under
        translator: Translation gateway

    Returns:
        Article payload, or None when the item is unusable or translation fails
    """
    if (
        not article.title
        or not article.title.strip()
        or not article.description
        or not article.description.strip()
        or article.title == NEWS_API_REMOVED_TITLE
    ):
        return None

    source_language = translator.detect_language(article.title)
    title = article.title
    description = article.description
    content = article.content or article.description
    language = source_language

    if source_language != translator.target_language:
        try:
            logger.info(f"Translating article to {translator.target_language}: {article.title}")
            title = await translator.translate(article.title, source_language)
            description = await translator.translate(article.description, source_language)
            if article.content:
                content = await translator.translate(article.content, source_language)

            if not translator.is_target_language(title):
                logger.warning(f"Translation failed to produce target language for: {article.title}")
                return None
        except Exception as e:
            logger.error(f"Translation failed for article: {article.title}: {e}")
            return None
        language = translator.target_language

    source_name = article.source.name if article.source else None

    return NewArticle(
        # The keyword table is English, so score the original text
        category=detect_category(
            article.title, article.description, f"NewsAPI - {source_name or ''}", [], 0
        ),
        kind=map_section(category),
        title=truncate(title, TITLE_MAX_LENGTH),
        summary=truncate(description, SUMMARY_MAX_LENGTH),
        content=content + source_link(article.url, source_name),
        image_url=article.url_to_image or "",
        thumbnail_url=article.url_to_image or "",
        image_alt=truncate(title, IMAGE_ALT_MAX_LENGTH),
        keywords=extract_keywords(title),
        authors=(
            [truncate(article.author, AUTHOR_MAX_LENGTH)]
            if article.author and article.author.strip()
            else [NEWS_API_DEFAULT_AUTHOR]
        ),
        published_at=article.published_at or datetime.now(UTC),
        language=language,
        external_id=url_external_id(SOURCE_NAME, article.url) if article.url else None,
        source=f"NewsAPI - {source_name}" if source_name else "NewsAPI",
        source_url=article.url,
    )


async def fetch_category(
    client: NewsApiClient,
    category: str,
    translator: TranslationGateway,
    stop_event: asyncio.Event | None = None,
) -> list[NewArticle]:
    """Fetch and map one category; unusable items are dropped."""
    raw_articles = await client.get_top_headlines(category)
    articles: list[NewArticle] = []

    for raw in raw_articles:
        if stop_event is not None and stop_event.is_set():
            break
        try:
            mapped = await map_article(raw, category, translator)
        except Exception as e:
            logger.warning(f"Failed to map article: {raw.title}: {e}")
            continue
        if mapped is not None:
            articles.append(mapped)

    return articles


async def fetch_latest_news(
    client: NewsApiClient,
    translator: TranslationGateway,
    config: NewsApiConfig,
    stop_event: asyncio.Event | None = None,
    result: IngestResult | None = None,
) -> list[NewArticle]:
    """
    Fetch all configured categories, pausing between calls.

    Args:
        client: NewsAPI adapter
        translator: Translation gateway
        config: NewsAPI settings
        stop_event: Checked between categories and items
        result: Optional counters updated with attempts and failures

    Returns:
        Article payloads ready to be stored
    """
    all_articles: list[NewArticle] = []

    if not config.api_key or not config.api_key.strip():
        logger.warning("NewsAPI api key is not configured. Skipping news fetch.")
        if result is not None:
            result.skipped_reason = "missing api key"
        return all_articles

    for index, category in enumerate(config.categories):
        if stop_event is not None and stop_event.is_set():
            if result is not None:
                result.cancelled = True
            break

        if index > 0 and await wait_or_stop(stop_event, config.request_delay_seconds):
            if result is not None:
                result.cancelled = True
            break

        if result is not None:
            result.sources_attempted += 1
        try:
            logger.info(f"Fetching {category} news from NewsAPI.org")
            articles = await fetch_category(client, category, translator, stop_event)
            all_articles.extend(articles)
            logger.info(f"Fetched {len(articles)} articles for {category}")
        except Exception as e:
            logger.error(f"Error fetching news for category {category}: {e}")
            if result is not None:
                result.sources_failed += 1
                result.errors.append(f"{category}: {e}")

    return all_articles


async def run_news_data_ingest(
    client: NewsApiClient,
    store: ArticleStore,
    translator: TranslationGateway,
    config: NewsApiConfig,
    stop_event: asyncio.Event | None = None,
) -> IngestResult:
    """
    Fetch the latest headlines and store the new ones.

    Returns:
        IngestResult; ``skipped_reason`` is set when the path did not run
    """
    result = IngestResult(source=SOURCE_NAME)

    if not config.enabled:
        logger.info("NewsAPI ingestion is disabled, skipping")
        result.skipped_reason = "disabled"
        return result

    articles = await fetch_latest_news(client, translator, config, stop_event, result)
    result.fetched = len(articles)

    for article in articles:
        if stop_event is not None and stop_event.is_set():
            result.cancelled = True
            break
        try:
            await store.create(article)
        except DuplicateArticleError:
            result.skipped += 1
            logger.debug(f"Skipped duplicate article: {article.external_id or article.title}")
        except Exception as e:
            result.failed += 1
            logger.warning(f"Failed to store article {article.external_id or article.title}: {e}")
        else:
            result.imported += 1

    logger.info(
        f"News fetch completed: {result.imported} articles imported, "
        f"{result.skipped} skipped, {result.failed} failed"
    )
    return result
