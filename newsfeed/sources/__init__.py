"""Adapters that turn external APIs into candidate articles."""

from newsfeed.sources.newsapi import NewsApiArticle, NewsApiClient
from newsfeed.sources.reddit import RedditClient

__all__ = ["RedditClient", "NewsApiClient", "NewsApiArticle"]
