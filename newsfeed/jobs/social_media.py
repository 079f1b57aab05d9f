"""Forum ingestion: Reddit communities -> translated, categorised articles.

For every configured community the top posts (or search hits) of the recent
time window are fetched. Each post is brought into the target language, given
a category and created in the article store. Duplicates reported by the store
are counted as skipped; any other per-post error drops that post only.
"""

import asyncio

from loguru import logger

from newsfeed.constants import (
    AUTHOR_MAX_LENGTH,
    IMAGE_ALT_MAX_LENGTH,
    SOCIAL_MEDIA_KIND,
    SUMMARY_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from newsfeed.errors import DuplicateArticleError, TranslationError
from newsfeed.models.articles import CandidateArticle, Category, NewArticle
from newsfeed.models.config import CommunityConfig, ForumConfig
from newsfeed.models.results import IngestResult
from newsfeed.services.category_detection import detect_candidate_category
from newsfeed.services.translation import TranslationGateway
from newsfeed.sources.reddit import RedditClient
from newsfeed.storage.article_store import ArticleStore
from newsfeed.utils.text import extract_keywords, source_link, text_to_html, truncate

SOURCE_NAME = "reddit"


class PostFiltered(Exception):
    """Post has no target-language text and translation is disabled."""


async def localize_candidate(
    candidate: CandidateArticle,
    translator: TranslationGateway,
    translate_foreign: bool = True,
) -> CandidateArticle:
    """
    Bring a candidate's title and body into the target language.

    Only the fields that are not already in the target language are translated;
    the language tag is set to the target language whenever something was
    translated and left untouched otherwise.

    Args:
        candidate: Fetched post
        translator: Translation gateway
        translate_foreign: Translate posts with no target-language text at all

    Returns:
        Copy of the candidate with translated fields

    Raises:
        PostFiltered: Nothing is in the target language and translate_foreign is off
        TranslationError: Translation failed or did not produce the target language
    """
    title_ok = translator.is_target_language(candidate.title)
    content_ok = not candidate.content or translator.is_target_language(candidate.content)

    if not title_ok and not content_ok and not translate_foreign:
        raise PostFiltered(candidate.external_id)

    updates: dict[str, str] = {}

    if not title_ok:
        title = await translator.translate(candidate.title)
        if not translator.is_target_language(title):
            raise TranslationError(
                f"Translation did not produce {translator.target_language} for {candidate.external_id}"
            )
        updates["title"] = title

    if not content_ok:
        updates["content"] = await translator.translate(candidate.content)

    if updates:
        updates["language"] = translator.target_language
    return candidate.model_copy(update=updates)


def build_article(candidate: CandidateArticle, category: Category) -> NewArticle:
    """Turn a localized post into the store's create payload."""
    community = candidate.source.split(" - ", 1)[-1]
    return NewArticle(
        category=category,
        kind=SOCIAL_MEDIA_KIND,
        title=truncate(candidate.title, TITLE_MAX_LENGTH),
        summary=truncate(candidate.content or candidate.title, SUMMARY_MAX_LENGTH),
        content=text_to_html(candidate.content) + source_link(candidate.url, community),
        image_url=candidate.image_url or "",
        thumbnail_url=candidate.image_url or "",
        image_alt=truncate(candidate.title, IMAGE_ALT_MAX_LENGTH),
        keywords=extract_keywords(candidate.title),
        authors=[truncate(candidate.author, AUTHOR_MAX_LENGTH)] if candidate.author else ["Reddit"],
        published_at=candidate.published_at,
        language=candidate.language,
        external_id=candidate.external_id,
        source=candidate.source,
        source_url=candidate.url,
    )


async def fetch_community(reddit: RedditClient, community: CommunityConfig) -> list[CandidateArticle]:
    """Top posts, or search hits when the community has a query."""
    if community.query:
        logger.info(f"Fetching posts from r/{community.name} about '{community.query}'")
        return await reddit.search_posts(community.name, community.query)

    logger.info(f"Fetching top posts from r/{community.name}")
    return await reddit.get_top_posts(community.name)


async def import_post(
    candidate: CandidateArticle,
    store: ArticleStore,
    translator: TranslationGateway,
    result: IngestResult,
    translate_foreign: bool = True,
) -> None:
    """Localize, categorise and store one post, updating ``result`` counters."""
    try:
        # The keyword table is English, so score before translating
        category = detect_candidate_category(candidate)
        localized = await localize_candidate(candidate, translator, translate_foreign)
        await store.create(build_article(localized, category))
    except PostFiltered:
        result.filtered += 1
        logger.debug(f"Filtered foreign-language post: {candidate.external_id}")
    except DuplicateArticleError:
        result.skipped += 1
        logger.debug(f"Skipped duplicate post: {candidate.external_id}")
    except Exception as e:
        result.failed += 1
        logger.warning(f"Failed to import post {candidate.external_id} from {candidate.source}: {e}")
    else:
        result.imported += 1
        logger.debug(f"Imported post {candidate.external_id} as {category.value}")


async def run_social_media_ingest(
    reddit: RedditClient,
    store: ArticleStore,
    translator: TranslationGateway,
    config: ForumConfig,
    stop_event: asyncio.Event | None = None,
) -> IngestResult:
    """
    Run one pass over all configured communities.

    Args:
        reddit: Reddit adapter
        store: Article store
        translator: Translation gateway
        config: Forum settings (communities, window, limits)
        stop_event: Checked between communities and between posts

    Returns:
        IngestResult with imported/skipped/filtered/failed counters
    """
    result = IngestResult(source=SOURCE_NAME)

    if not config.enabled:
        logger.info("Forum ingestion is disabled, skipping")
        result.skipped_reason = "disabled"
        return result

    def stopped() -> bool:
        return stop_event is not None and stop_event.is_set()

    for community in config.communities:
        if stopped():
            result.cancelled = True
            break

        result.sources_attempted += 1
        try:
            posts = await fetch_community(reddit, community)
        except Exception as e:
            result.sources_failed += 1
            result.errors.append(f"r/{community.name}: {e}")
            logger.error(f"Error fetching posts from r/{community.name}: {e}")
            continue

        result.fetched += len(posts)
        logger.info(f"Fetched {len(posts)} posts from r/{community.name}")

        for post in posts:
            if stopped():
                result.cancelled = True
                break
            await import_post(post, store, translator, result, config.translate_foreign_posts)

    logger.info(
        f"Social media fetch completed: {result.imported} posts imported, "
        f"{result.skipped} skipped, {result.filtered} filtered, {result.failed} failed"
    )
    return result
