"""Tests for FeedFetcher and PageScraper."""

from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest

from fetchers.feed import FeedFetcher, parse_feed
from fetchers.html import MalformedHTMLError, visible_text
from fetchers.page import PageScraper
from models.errors import FetchError, FetchErrorKind

FEED_URL = "https://status.acme.test/history.rss"
PAGE_URL = "https://status.acme.test/"

RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Acme Status - Incident History</title>
    <link>https://status.acme.test</link>
    <description>Statuspage</description>
    <item>
      <title>Major Outage: API down</title>
      <description>&lt;p&gt;&lt;strong&gt;Investigating&lt;/strong&gt; - API requests fail.&lt;/p&gt;</description>
      <pubDate>Wed, 03 Jan 2024 12:00:00 +0000</pubDate>
      <link>https://status.acme.test/incidents/abc</link>
    </item>
    <item>
      <title>minor issue</title>
      <pubDate>Tue, 02 Jan 2024 09:30:00 +0000</pubDate>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Acme Status</title>
  <id>tag:status.acme.test,2005:/history</id>
  <updated>2024-01-03T12:00:00Z</updated>
  <entry>
    <id>tag:status.acme.test,2005:Incident/1</id>
    <title>Degraded performance</title>
    <updated>2024-01-03T11:00:00Z</updated>
    <content type="html">&lt;p&gt;Latency is elevated.&lt;/p&gt;</content>
  </entry>
</feed>
"""

EMPTY_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Quiet</title><link>https://q.test</link>
<description>none</description></channel></rss>
"""

STATUS_PAGE = b"""<html>
  <head>
    <title>Acme Status</title>
    <style>.banner { color: red; }</style>
    <script>var state = "major outage";</script>
  </head>
  <body>
    <h1>Current Status</h1>
    <p>Some Systems Are   DEGRADED</p>
    <noscript>Enable JavaScript for a fully down experience</noscript>
  </body>
</html>
"""

MALFORMED_PAGE = b"<html><body><![bogus[ x ]]> degraded</body></html>"


def client_for(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def respond(body: bytes, status_code: int = 200, content_type: str = "application/rss+xml"):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=body, headers={"content-type": content_type})

    return handler


class TestParseFeed:
    """Tests for RSS/Atom payload parsing."""

    def test_rss_items_in_feed_order(self) -> None:
        items = parse_feed(FEED_URL, RSS_FEED)

        assert [i.title for i in items] == ["Major Outage: API down", "minor issue"]
        first = items[0]
        assert first.body_text is not None
        assert "<strong>" in first.body_text
        assert first.snippet == "Investigating - API requests fail."
        assert first.published_at == datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)

    def test_item_without_body(self) -> None:
        items = parse_feed(FEED_URL, RSS_FEED)

        assert items[1].body_text is None
        assert items[1].snippet is None

    def test_atom_content_and_updated_timestamp(self) -> None:
        items = parse_feed(FEED_URL, ATOM_FEED)

        assert len(items) == 1
        assert items[0].title == "Degraded performance"
        assert items[0].snippet == "Latency is elevated."
        assert items[0].published_at == datetime(2024, 1, 3, 11, 0, tzinfo=timezone.utc)

    def test_well_formed_empty_feed_yields_no_items(self) -> None:
        assert parse_feed(FEED_URL, EMPTY_RSS) == []

    @pytest.mark.parametrize(
        "payload",
        [b"", b"<html><body>Not a feed</body></html>", b"{\"status\": \"ok\"}"],
    )
    def test_non_feed_payload_is_parse_error(self, payload: bytes) -> None:
        with pytest.raises(FetchError) as exc_info:
            parse_feed(FEED_URL, payload)

        assert exc_info.value.kind is FetchErrorKind.PARSE
        assert exc_info.value.url == FEED_URL


class TestFeedFetcher:
    """Tests for FeedFetcher over HTTP."""

    @pytest.mark.asyncio
    async def test_fetch_returns_items(self) -> None:
        async with client_for(respond(RSS_FEED)) as client:
            items = await FeedFetcher(client).fetch(FEED_URL)

        assert len(items) == 2

    @pytest.mark.asyncio
    async def test_http_error_status_is_network_error(self) -> None:
        async with client_for(respond(b"gone", status_code=503)) as client:
            with pytest.raises(FetchError) as exc_info:
                await FeedFetcher(client).fetch(FEED_URL)

        assert exc_info.value.kind is FetchErrorKind.NETWORK
        assert "503" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with client_for(handler) as client:
            with pytest.raises(FetchError) as exc_info:
                await FeedFetcher(client).fetch(FEED_URL)

        assert exc_info.value.kind is FetchErrorKind.NETWORK

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        async with client_for(handler) as client:
            with pytest.raises(FetchError) as exc_info:
                await FeedFetcher(client, timeout=0.1).fetch(FEED_URL)

        assert exc_info.value.kind is FetchErrorKind.NETWORK
        assert "timed out" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_html_served_as_feed_is_parse_error(self) -> None:
        async with client_for(respond(STATUS_PAGE, content_type="text/html")) as client:
            with pytest.raises(FetchError) as exc_info:
                await FeedFetcher(client).fetch(FEED_URL)

        assert exc_info.value.kind is FetchErrorKind.PARSE


class TestVisibleText:
    """Tests for HTML text extraction."""

    def test_excludes_script_and_style(self) -> None:
        text = visible_text(STATUS_PAGE.decode())

        assert "major outage" not in text.lower()
        assert "color: red" not in text
        assert "fully down" not in text
        assert "Some Systems Are DEGRADED" in text

    def test_decodes_entities(self) -> None:
        assert visible_text("<p>API &amp; Dashboard</p>") == "API & Dashboard"

    def test_unknown_marked_section_raises(self) -> None:
        with pytest.raises(MalformedHTMLError):
            visible_text(MALFORMED_PAGE.decode())


class TestPageScraper:
    """Tests for PageScraper over HTTP."""

    @pytest.mark.asyncio
    async def test_fetch_returns_lowercased_visible_text(self) -> None:
        async with client_for(respond(STATUS_PAGE, content_type="text/html; charset=utf-8")) as client:
            text = await PageScraper(client).fetch(PAGE_URL)

        assert text == "acme status current status some systems are degraded"

    @pytest.mark.asyncio
    async def test_malformed_markup_is_parse_error(self) -> None:
        async with client_for(respond(MALFORMED_PAGE, content_type="text/html")) as client:
            with pytest.raises(FetchError) as exc_info:
                await PageScraper(client).fetch(PAGE_URL)

        assert exc_info.value.kind is FetchErrorKind.PARSE
        assert "malformed HTML" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_binary_content_is_parse_error(self) -> None:
        async with client_for(respond(b"\x89PNG", content_type="image/png")) as client:
            with pytest.raises(FetchError) as exc_info:
                await PageScraper(client).fetch(PAGE_URL)

        assert exc_info.value.kind is FetchErrorKind.PARSE

    @pytest.mark.asyncio
    async def test_not_found_is_network_error(self) -> None:
        async with client_for(respond(b"missing", status_code=404, content_type="text/html")) as client:
            with pytest.raises(FetchError) as exc_info:
                await PageScraper(client).fetch(PAGE_URL)

        assert exc_info.value.kind is FetchErrorKind.NETWORK
