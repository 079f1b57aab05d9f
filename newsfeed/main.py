#!/usr/bin/env python3
"""Entry point for the news ingestion worker.

Usage:
    python -m newsfeed.main run
    python -m newsfeed.main run-once --config config/pipeline.yaml
    python -m newsfeed.main articles --category openai
    python -m newsfeed.main trending-categories
"""

import asyncio
import signal
import sys
from pathlib import Path
from typing import Annotated, Any

import aiohttp
import typer
from loguru import logger

from newsfeed.constants import MAX_ERROR_DISPLAY
from newsfeed.jobs.cycle import run_cycle
from newsfeed.jobs.scheduler import IngestionWorker
from newsfeed.jobs.social_media import fetch_community
from newsfeed.models.articles import CandidateArticle, Category
from newsfeed.models.config import PipelineConfig
from newsfeed.models.results import CycleResult
from newsfeed.services.category_detection import get_trending_categories
from newsfeed.sources.reddit import RedditClient
from newsfeed.storage.article_store import JsonArticleStore
from newsfeed.utils.config_loader import load_pipeline_config
from newsfeed.utils.logging import setup_logging

app = typer.Typer(help="Fetch, translate and categorise tech news.")

ConfigOption = Annotated[
    Path, typer.Option("--config", "-c", help="Pipeline configuration file")
]
LogLevelOption = Annotated[
    str | None, typer.Option("--log-level", "-l", help="Override the configured log level")
]


def print_header(title: str) -> None:
    """Print a formatted header."""
    print("\n" + "=" * 80)
    print(f"  {title}")
    print("=" * 80 + "\n")


def print_stats(label: str, value: Any) -> None:
    """Print a formatted stat line."""
    print(f"  • {label}: {value}")


def print_summary(result: CycleResult) -> None:
    """Print per-path and total counters of a cycle."""
    print_header("📈 Cycle Summary")

    for path in result.results:
        print(f"{path.source}:")
        if path.skipped_reason:
            print_stats("Skipped", path.skipped_reason)
            continue
        print_stats("Sources", f"{path.sources_attempted - path.sources_failed}/{path.sources_attempted}")
        print_stats("Fetched", path.fetched)
        print_stats("Imported", path.imported)
        print_stats("Duplicates skipped", path.skipped)
        print_stats("Filtered", path.filtered)
        if path.failed:
            print_stats("⚠️  Failed", path.failed)

    print()
    print_stats("Total imported", result.imported)
    if result.cancelled:
        print_stats("⚠️  Cancelled", "Yes")
    for error in result.errors[:MAX_ERROR_DISPLAY]:
        print(f"  ❌ {error}")
    if len(result.errors) > MAX_ERROR_DISPLAY:
        print(f"  ... and {len(result.errors) - MAX_ERROR_DISPLAY} more")
    print(f"\n⏱️  Elapsed: {result.elapsed_seconds:.2f}s")


def _load(config_file: Path, log_level: str | None) -> PipelineConfig:
    config = load_pipeline_config(config_file)
    if log_level:
        config.logging.level = log_level.upper()  # type: ignore[assignment]
    setup_logging(config.logging)
    return config


async def _serve(config: PipelineConfig) -> None:
    store = JsonArticleStore(config.storage.path)
    worker = IngestionWorker(
        lambda stop: run_cycle(config, store, stop_event=stop),
        startup_delay_seconds=config.schedule.startup_delay_seconds,
        interval_seconds=config.schedule.interval_seconds,
    )

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, worker.stop)
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C still raises
            pass

    await worker.run()


@app.command()
def run(config_file: ConfigOption = Path("config/pipeline.yaml"), log_level: LogLevelOption = None) -> None:
    """Run the ingestion worker until SIGINT/SIGTERM."""
    config = _load(config_file, log_level)
    print_header("🚀 News Ingestion Worker")
    print_stats("Config", config_file)
    print_stats("Store", config.storage.path)
    print_stats("Startup delay", f"{config.schedule.startup_delay_seconds:g}s")
    print_stats("Interval", f"{config.schedule.interval_seconds:g}s")

    try:
        asyncio.run(_serve(config))
    except KeyboardInterrupt:
        logger.warning("Worker interrupted by user")
        sys.exit(130)


@app.command("run-once")
def run_once(config_file: ConfigOption = Path("config/pipeline.yaml"), log_level: LogLevelOption = None) -> None:
    """Run a single ingestion cycle now and print its summary."""
    config = _load(config_file, log_level)

    try:
        store = JsonArticleStore(config.storage.path)
        result = asyncio.run(run_cycle(config, store))
    except KeyboardInterrupt:
        logger.warning("Cycle interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("Cycle failed")
        print(f"\n❌ Cycle failed: {e}")
        sys.exit(1)

    print_summary(result)


@app.command()
def articles(
    config_file: ConfigOption = Path("config/pipeline.yaml"),
    category: Annotated[
        Category | None, typer.Option("--category", help="Category; trending when omitted")
    ] = None,
    limit: Annotated[int, typer.Option("--limit", "-n")] = 10,
    log_level: LogLevelOption = None,
) -> None:
    """List stored articles by category, or the trending ones."""
    config = _load(config_file, log_level)
    store = JsonArticleStore(config.storage.path)

    if category is None:
        found = asyncio.run(store.list_trending(limit))
        print_header("🔥 Trending articles")
    else:
        found = asyncio.run(store.list_by_category(category, limit))
        print_header(f"📰 {category.value}")

    for article in found:
        print(f"  [{article.published_at:%Y-%m-%d}] {article.title}  ({article.slug})")
    if not found:
        print("  (none)")


async def _fetch_all_posts(config: PipelineConfig) -> list[CandidateArticle]:
    posts: list[CandidateArticle] = []
    async with aiohttp.ClientSession() as session:
        reddit = RedditClient(session, config.forum)
        for community in config.forum.communities:
            posts.extend(await fetch_community(reddit, community))
    return posts


@app.command("trending-categories")
def trending_categories(
    config_file: ConfigOption = Path("config/pipeline.yaml"), log_level: LogLevelOption = None
) -> None:
    """Score live posts of the configured communities and total engagement per category."""
    config = _load(config_file, log_level)
    posts = asyncio.run(_fetch_all_posts(config))
    totals = get_trending_categories(posts)

    print_header(f"📊 Engagement by category ({len(posts)} posts)")
    for category, total in totals.items():
        print_stats(category.value, total)


if __name__ == "__main__":
    app()
