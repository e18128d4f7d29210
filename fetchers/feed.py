from __future__ import annotations

import logging
from calendar import timegm
from datetime import datetime, timezone
from typing import Any

import feedparser

from fetchers.base import StatusSource
from fetchers.html import MalformedHTMLError, visible_text
from models.classification import FeedItem
from models.company import CheckMethod
from models.errors import FetchError, FetchErrorKind

log = logging.getLogger(__name__)


def _parse_timestamp(raw: str) -> datetime:
    """Parse ISO 8601 timestamps that may include fractional seconds."""
    cleaned = raw.replace("Z", "+00:00")
    return datetime.fromisoformat(cleaned).astimezone(timezone.utc)


def _entry_published(entry: Any) -> datetime | None:
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            return datetime.fromtimestamp(timegm(parsed), tz=timezone.utc)

    for key in ("published", "updated"):
        raw = entry.get(key)
        if not raw:
            continue
        try:
            return _parse_timestamp(raw)
        except (ValueError, TypeError):
            continue
    return None


def _entry_body(entry: Any) -> str | None:
    """Prefer full ``content`` over the ``summary`` teaser."""
    for block in entry.get("content") or []:
        value = block.get("value")
        if value:
            return value
    return entry.get("summary") or None


def _entry_snippet(url: str, body: str | None) -> str | None:
    if not body:
        return None
    try:
        return visible_text(body)
    except MalformedHTMLError as exc:
        log.warning("Feed %s has an entry body with unparseable markup: %s", url, exc)
        return None


def parse_feed(url: str, payload: bytes | str) -> list[FeedItem]:
    """Turn a raw RSS/Atom payload into feed items in native order."""
    feed = feedparser.parse(payload)

    if not feed.entries and (feed.bozo or not feed.version):
        reason = feed.get("bozo_exception") or "not a recognized RSS/Atom document"
        raise FetchError(FetchErrorKind.PARSE, url, str(reason))

    if feed.bozo:
        log.warning("Feed %s is malformed, using %d recovered entries: %s",
                    url, len(feed.entries), feed.get("bozo_exception"))

    items: list[FeedItem] = []
    for entry in feed.entries:
        body = _entry_body(entry)
        items.append(FeedItem(
            title=entry.get("title") or None,
            body_text=body,
            snippet=_entry_snippet(url, body),
            published_at=_entry_published(entry),
        ))
    return items


class FeedFetcher(StatusSource):
    """Fetcher for status pages that publish an RSS or Atom feed."""

    @property
    def method(self) -> CheckMethod:
        return CheckMethod.FEED

    async def fetch(self, url: str) -> list[FeedItem]:
        resp = await self._get(url)
        items = parse_feed(url, resp.content)
        log.debug("Fetched %d feed item(s) from %s", len(items), url)
        return items
