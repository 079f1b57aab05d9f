"""Ingestion jobs and the worker that schedules them."""

from newsfeed.jobs.cycle import run_cycle
from newsfeed.jobs.news_data import fetch_latest_news, run_news_data_ingest
from newsfeed.jobs.scheduler import IngestionWorker
from newsfeed.jobs.social_media import run_social_media_ingest

__all__ = [
    "run_cycle",
    "run_social_media_ingest",
    "fetch_latest_news",
    "run_news_data_ingest",
    "IngestionWorker",
]
