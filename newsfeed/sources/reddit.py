"""Reddit adapter: top posts and in-community search as candidate articles."""

import html
from datetime import UTC, datetime
from typing import Any

import aiohttp
from loguru import logger

from newsfeed.models.articles import CandidateArticle
from newsfeed.models.config import ForumConfig


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _image_url(post: dict[str, Any]) -> str | None:
    images = _as_dict(post.get("preview")).get("images")
    if isinstance(images, list) and images:
        source_url = _as_dict(_as_dict(images[0]).get("source")).get("url")
        if isinstance(source_url, str) and source_url:
            return html.unescape(source_url)
    thumbnail = post.get("thumbnail")
    return thumbnail if isinstance(thumbnail, str) and thumbnail.startswith("http") else None


def parse_post(post: dict[str, Any], base_url: str = "https://www.reddit.com") -> CandidateArticle:
    """
    Map one ``data.children[].data`` object to a candidate.

    Raises:
        KeyError: Post has no id or title
        TypeError: Post is not an object
        ValueError: Field values fail validation
    """
    if not isinstance(post, dict):
        raise TypeError(f"Post is {type(post).__name__}, not an object")

    subreddit = post.get("subreddit") or ""
    flair = post.get("link_flair_text")
    permalink = post.get("permalink")
    created = post.get("created_utc")

    return CandidateArticle(
        external_id=f"reddit:{post['id']}",
        title=html.unescape(post["title"]).strip(),
        content=html.unescape(post.get("selftext") or "").strip(),
        source=f"Reddit - r/{subreddit}",
        tags=[flair] if flair else [],
        score=max(int(post.get("score") or 0), 0),
        published_at=(
            datetime.fromtimestamp(float(created), tz=UTC) if created else datetime.now(UTC)
        ),
        url=f"{base_url}{permalink}" if permalink else post.get("url"),
        author=post.get("author"),
        image_url=_image_url(post),
    )


def parse_listing(payload: Any, base_url: str = "https://www.reddit.com") -> list[CandidateArticle]:
    """Parse a listing payload; malformed children are skipped."""
    if not isinstance(payload, dict):
        raise ValueError("Listing payload is not an object")
    children = _as_dict(payload.get("data")).get("children")
    if not isinstance(children, list):
        raise ValueError("Listing payload has no children")

    posts = []
    for child in children:
        try:
            posts.append(parse_post(_as_dict(child).get("data"), base_url))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.debug(f"Skipping malformed Reddit post: {e}")
    return posts


class RedditClient:
    """Reads public Reddit listings."""

    def __init__(self, session: aiohttp.ClientSession, config: ForumConfig) -> None:
        self.session = session
        self.config = config

    async def get_top_posts(
        self, subreddit: str, time_window: str | None = None, limit: int | None = None
    ) -> list[CandidateArticle]:
        """Top posts of a community over the time window."""
        params = {
            "t": time_window or self.config.time_window,
            "limit": str(limit or self.config.max_items),
        }
        return await self._get_listing(f"/r/{subreddit}/top.json", params)

    async def search_posts(
        self,
        subreddit: str,
        query: str,
        sort: str | None = None,
        time_window: str | None = None,
        limit: int | None = None,
    ) -> list[CandidateArticle]:
        """Posts matching ``query`` inside one community."""
        params = {
            "q": query,
            "restrict_sr": "1",
            "sort": sort or self.config.search_sort,
            "t": time_window or self.config.time_window,
            "limit": str(limit or self.config.max_items),
        }
        return await self._get_listing(f"/r/{subreddit}/search.json", params)

    async def _get_listing(self, path: str, params: dict[str, str]) -> list[CandidateArticle]:
        url = f"{self.config.base_url.rstrip('/')}{path}"
        headers = {"User-Agent": self.config.user_agent}
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        try:
            async with self.session.get(
                url, params=params, headers=headers, timeout=timeout
            ) as response:
                if response.status != 200:
                    logger.warning(f"Reddit returned status {response.status} for {path}")
                    return []
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.warning(f"Reddit request failed for {path}: {e}")
            return []
        except ValueError as e:
            logger.warning(f"Reddit returned invalid JSON for {path}: {e}")
            return []

        try:
            return parse_listing(payload, self.config.base_url.rstrip("/"))
        except ValueError as e:
            logger.warning(f"Malformed Reddit listing for {path}: {e}")
            return []
