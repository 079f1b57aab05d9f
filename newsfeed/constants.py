"""Application-wide constants.

Contains configuration constants used across the codebase to avoid magic numbers
and maintain consistency.
"""

# Language
DEFAULT_TARGET_LANGUAGE = "tr"  # All stored article text ends up in this language
UNKNOWN_LANGUAGE = "unknown"  # Returned when detection is impossible

# Field limits (ellipsis included)
TITLE_MAX_LENGTH = 500
SUMMARY_MAX_LENGTH = 2000
IMAGE_ALT_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
ELLIPSIS = "..."

# Keyword extraction
KEYWORD_MIN_LENGTH = 4  # Tokens must be longer than 3 characters
KEYWORD_MAX_COUNT = 5
KEYWORD_SEPARATORS = " ,-:|"

# Category scoring
SOURCE_BOOST = 50  # Added when the source hints at a category with keyword evidence
ENGAGEMENT_BOOST_THRESHOLD = 1000  # Engagement above which the legacy boost applies

# Article defaults
DEFAULT_ARTICLE_PRIORITY = 5
NEWS_API_DEFAULT_AUTHOR = "NewsAPI"
NEWS_API_REMOVED_TITLE = "[Removed]"
DEFAULT_SOURCE_NAME = "Haber Kaynağı"
SOCIAL_MEDIA_KIND = "Sosyal Medya"
SLUG_MAX_LENGTH = 80

# Scheduling
DEFAULT_STARTUP_DELAY_SECONDS = 120  # Grace period after process start
DEFAULT_INTERVAL_SECONDS = 24 * 60 * 60  # One cycle per day
DEFAULT_REQUEST_DELAY_SECONDS = 1.0  # Pause between NewsAPI calls

# Forum fetching
DEFAULT_TIME_WINDOW = "day"
DEFAULT_MAX_ITEMS = 25

# Translation
TRANSLATION_CHUNK_LENGTH = 4800  # Google v2 accepts ~5k characters per query

# Feed Processing
MAX_ERROR_DISPLAY = 5  # Maximum number of errors to display in summaries
