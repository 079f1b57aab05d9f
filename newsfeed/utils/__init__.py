"""Utility functions and helpers."""

from newsfeed.utils.config_loader import apply_env_secrets, load_pipeline_config, load_yaml_config
from newsfeed.utils.hash import generate_content_hash, normalize_url, url_external_id
from newsfeed.utils.logging import cycle_context, get_logger, setup_logging
from newsfeed.utils.slug import generate_slug
from newsfeed.utils.text import extract_keywords, source_link, text_to_html, truncate
from newsfeed.utils.timing import wait_or_stop

__all__ = [
    "setup_logging",
    "get_logger",
    "cycle_context",
    "generate_slug",
    "load_yaml_config",
    "load_pipeline_config",
    "apply_env_secrets",
    "generate_content_hash",
    "normalize_url",
    "url_external_id",
    "truncate",
    "extract_keywords",
    "source_link",
    "text_to_html",
    "wait_or_stop",
]
