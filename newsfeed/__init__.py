"""Turkish tech-news ingestion: fetch, translate, categorise and store."""

__version__ = "1.0.0"
