"""One complete ingestion cycle across every fetch path."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

import aiohttp
from loguru import logger

from newsfeed.jobs.news_data import SOURCE_NAME as NEWS_SOURCE
from newsfeed.jobs.news_data import run_news_data_ingest
from newsfeed.jobs.social_media import SOURCE_NAME as FORUM_SOURCE
from newsfeed.jobs.social_media import run_social_media_ingest
from newsfeed.models.config import PipelineConfig
from newsfeed.models.results import CycleResult, IngestResult
from newsfeed.services.translation import GoogleTranslationGateway, TranslationGateway
from newsfeed.sources.newsapi import NewsApiClient
from newsfeed.sources.reddit import RedditClient
from newsfeed.storage.article_store import ArticleStore
from newsfeed.utils.logging import cycle_context


async def _run_path(
    name: str,
    cycle: CycleResult,
    runner: Callable[[], Awaitable[IngestResult]],
) -> None:
    try:
        result = await runner()
    except Exception as e:
        logger.exception(f"Fetch path {name} failed")
        cycle.errors.append(f"{name}: {e}")
        result = IngestResult(source=name, errors=[str(e)])
    cycle.results.append(result)
    if result.cancelled:
        cycle.cancelled = True


async def run_cycle(
    config: PipelineConfig,
    store: ArticleStore,
    translator: TranslationGateway | None = None,
    stop_event: asyncio.Event | None = None,
    session: aiohttp.ClientSession | None = None,
) -> CycleResult:
    """
    Run the forum path, then the news-API path.

    A failure in one path is logged and does not prevent the other.

    Args:
        config: Pipeline configuration
        store: Article store
        translator: Translation gateway; a Google gateway on the shared session
            is built when omitted
        stop_event: Cooperative cancellation signal
        session: HTTP session; one is opened for the cycle when omitted

    Returns:
        CycleResult with per-path counters
    """
    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await run_cycle(config, store, translator, stop_event, own_session)

    if translator is None:
        if not config.translation.api_key:
            logger.warning("Translation API key is not configured; foreign-language items will fail")
        translator = GoogleTranslationGateway(
            config.translation, target_language=config.target_language, session=session
        )

    cycle = CycleResult()

    with cycle_context(cycle.cycle_id):
        logger.info(f"Ingestion cycle started at {cycle.started_at.isoformat()}")

        reddit = RedditClient(session, config.forum)
        await _run_path(
            FORUM_SOURCE,
            cycle,
            lambda: run_social_media_ingest(reddit, store, translator, config.forum, stop_event),
        )

        if stop_event is not None and stop_event.is_set():
            cycle.cancelled = True
        else:
            news_client = NewsApiClient(session, config.news_api)
            await _run_path(
                NEWS_SOURCE,
                cycle,
                lambda: run_news_data_ingest(news_client, store, translator, config.news_api, stop_event),
            )

        cycle.finished_at = datetime.now(UTC)
        logger.info(
            "Ingestion cycle finished",
            imported=cycle.imported,
            skipped=cycle.skipped,
            filtered=cycle.filtered,
            failed=cycle.failed,
            cancelled=cycle.cancelled,
            elapsed_seconds=round(cycle.elapsed_seconds, 2),
        )
    return cycle
