"""Category detection and translation services."""

from newsfeed.services.category_detection import (
    detect_candidate_category,
    detect_category,
    get_trending_categories,
    score_categories,
)
from newsfeed.services.translation import GoogleTranslationGateway, TranslationGateway

__all__ = [
    "detect_category",
    "detect_candidate_category",
    "score_categories",
    "get_trending_categories",
    "TranslationGateway",
    "GoogleTranslationGateway",
]
