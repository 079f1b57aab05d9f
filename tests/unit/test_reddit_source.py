"""Unit tests for the Reddit adapter."""

import re
from datetime import UTC, datetime

import aiohttp
import pytest
from aioresponses import aioresponses

from newsfeed.models.config import ForumConfig
from newsfeed.sources.reddit import RedditClient, parse_listing, parse_post

TOP_URL = re.compile(r"^https://www\.reddit\.com/r/OpenAI/top\.json.*$")
SEARCH_URL = re.compile(r"^https://www\.reddit\.com/r/github/search\.json.*$")


def _post(**overrides) -> dict:
    post = {
        "id": "1abc",
        "title": "GPT-5 &amp; friends",
        "selftext": "Body text",
        "subreddit": "OpenAI",
        "link_flair_text": "News",
        "score": 1234,
        "created_utc": 1736937000.0,
        "permalink": "/r/OpenAI/comments/1abc/gpt5/",
        "author": "alice",
        "preview": {"images": [{"source": {"url": "https://i.redd.it/x.png?a=1&amp;b=2"}}]},
    }
    post.update(overrides)
    return post


def _listing(*posts: dict) -> dict:
    return {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": p} for p in posts]}}


class TestParsePost:
    """Test mapping of Reddit posts."""

    def test_fields_mapped(self) -> None:
        """Test the candidate fields."""
        candidate = parse_post(_post())

        assert candidate.external_id == "reddit:1abc"
        assert candidate.title == "GPT-5 & friends"
        assert candidate.content == "Body text"
        assert candidate.source == "Reddit - r/OpenAI"
        assert candidate.tags == ["News"]
        assert candidate.score == 1234
        assert candidate.published_at == datetime.fromtimestamp(1736937000.0, tz=UTC)
        assert candidate.url == "https://www.reddit.com/r/OpenAI/comments/1abc/gpt5/"
        assert candidate.author == "alice"
        assert candidate.image_url == "https://i.redd.it/x.png?a=1&b=2"
        assert candidate.language is None

    def test_thumbnail_fallback(self) -> None:
        """Test that a thumbnail URL is used without a preview."""
        candidate = parse_post(_post(preview=None, thumbnail="https://b.thumbs.redditmedia.com/t.jpg"))
        assert candidate.image_url == "https://b.thumbs.redditmedia.com/t.jpg"

    def test_placeholder_thumbnail_ignored(self) -> None:
        """Test that 'self' thumbnails are not images."""
        candidate = parse_post(_post(preview=None, thumbnail="self"))
        assert candidate.image_url is None

    def test_negative_score_clamped(self) -> None:
        """Test that downvoted posts have zero engagement."""
        assert parse_post(_post(score=-5)).score == 0

    def test_no_flair_no_tags(self) -> None:
        """Test empty tags."""
        assert parse_post(_post(link_flair_text=None)).tags == []


class TestParseListing:
    """Test listing parsing."""

    def test_malformed_children_skipped(self) -> None:
        """Test that a child without title is dropped."""
        bad = _post(id="2bad")
        del bad["title"]

        posts = parse_listing(_listing(_post(), bad))

        assert [p.external_id for p in posts] == ["reddit:1abc"]

    @pytest.mark.parametrize("child", [{"data": []}, {"data": "x"}, {"data": None}, "t3", None])
    def test_non_object_children_skipped(self, child) -> None:
        """Test that children whose data is not an object are dropped."""
        payload = _listing(_post())
        payload["data"]["children"].append(child)

        posts = parse_listing(payload)

        assert [p.external_id for p in posts] == ["reddit:1abc"]

    @pytest.mark.parametrize(
        "preview",
        [{"images": ["bad"]}, {"images": [{"source": "bad"}]}, {"images": "bad"}, "bad"],
    )
    def test_malformed_preview_ignored(self, preview) -> None:
        """Test that a broken preview block only loses the image."""
        candidate = parse_post(_post(preview=preview, thumbnail=None))

        assert candidate.external_id == "reddit:1abc"
        assert candidate.image_url is None

    @pytest.mark.parametrize("payload", [[], {"data": {}}, {"data": []}, {"data": "x"}, "nope"])
    def test_malformed_payload_raises(self, payload) -> None:
        """Test that a payload without children is rejected."""
        with pytest.raises(ValueError):
            parse_listing(payload)


class TestRedditClient:
    """Test HTTP behaviour."""

    @pytest.mark.asyncio
    async def test_get_top_posts(self) -> None:
        """Test a successful top listing."""
        with aioresponses() as m:
            m.get(TOP_URL, status=200, payload=_listing(_post(), _post(id="2def")))

            async with aiohttp.ClientSession() as session:
                posts = await RedditClient(session, ForumConfig()).get_top_posts("OpenAI")

        assert [p.external_id for p in posts] == ["reddit:1abc", "reddit:2def"]

    @pytest.mark.asyncio
    async def test_search_posts_query_params(self) -> None:
        """Test that search is restricted to the community."""
        with aioresponses() as m:
            m.get(SEARCH_URL, status=200, payload=_listing(_post(subreddit="github")))

            async with aiohttp.ClientSession() as session:
                posts = await RedditClient(session, ForumConfig()).search_posts("github", "copilot")

            (method, url), _calls = next(iter(m.requests.items()))

        assert method == "GET"
        assert url.query["q"] == "copilot"
        assert url.query["restrict_sr"] == "1"
        assert url.query["sort"] == "top"
        assert url.query["t"] == "day"
        assert url.query["limit"] == "25"
        assert posts[0].source == "Reddit - r/github"

    @pytest.mark.asyncio
    async def test_http_error_returns_empty(self) -> None:
        """Test that non-200 responses yield no posts."""
        with aioresponses() as m:
            m.get(TOP_URL, status=429)

            async with aiohttp.ClientSession() as session:
                posts = await RedditClient(session, ForumConfig()).get_top_posts("OpenAI")

        assert posts == []

    @pytest.mark.asyncio
    async def test_malformed_body_returns_empty(self) -> None:
        """Test that a non-JSON body yields no posts."""
        with aioresponses() as m:
            m.get(TOP_URL, status=200, body="<html>down</html>")

            async with aiohttp.ClientSession() as session:
                posts = await RedditClient(session, ForumConfig()).get_top_posts("OpenAI")

        assert posts == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"data": {"children": [{"data": []}]}},
            {"data": []},
            {"data": {"children": "none"}},
        ],
    )
    async def test_malformed_listing_returns_empty(self, payload) -> None:
        """Test that listings with the wrong shape yield no posts."""
        with aioresponses() as m:
            m.get(TOP_URL, status=200, payload=payload)

            async with aiohttp.ClientSession() as session:
                posts = await RedditClient(session, ForumConfig()).get_top_posts("OpenAI")

        assert posts == []

    @pytest.mark.asyncio
    async def test_bad_preview_keeps_post(self) -> None:
        """Test that a post with a broken preview is still returned."""
        post = {"id": "x", "title": "t", "subreddit": "OpenAI", "preview": {"images": ["bad"]}}

        with aioresponses() as m:
            m.get(TOP_URL, status=200, payload=_listing(post))

            async with aiohttp.ClientSession() as session:
                posts = await RedditClient(session, ForumConfig()).get_top_posts("OpenAI")

        assert [p.external_id for p in posts] == ["reddit:x"]
        assert posts[0].image_url is None

    @pytest.mark.asyncio
    async def test_network_error_returns_empty(self) -> None:
        """Test that connection errors yield no posts."""
        with aioresponses() as m:
            m.get(TOP_URL, exception=aiohttp.ClientConnectionError("boom"))

            async with aiohttp.ClientSession() as session:
                posts = await RedditClient(session, ForumConfig()).get_top_posts("OpenAI")

        assert posts == []
