from __future__ import annotations

import logging

from fetchers.base import StatusSource
from fetchers.html import MalformedHTMLError, visible_text
from models.company import CheckMethod
from models.errors import FetchError, FetchErrorKind

log = logging.getLogger(__name__)

_TEXTUAL_TYPES = ("text/", "application/xhtml", "application/xml")


class PageScraper(StatusSource):
    """Fetcher for plain HTML status pages.

    Only the lower-cased visible text is returned. Scraping yields a
    classification signal, never a displayable incident record.
    """

    @property
    def method(self) -> CheckMethod:
        return CheckMethod.SCRAPE

    async def fetch(self, url: str) -> str:
        resp = await self._get(url)

        content_type = resp.headers.get("content-type", "text/html").lower()
        if not content_type.startswith(_TEXTUAL_TYPES):
            raise FetchError(
                FetchErrorKind.PARSE,
                url,
                f"unsupported content type {content_type!r}",
            )

        try:
            text = visible_text(resp.text).lower()
        except MalformedHTMLError as exc:
            raise FetchError(FetchErrorKind.PARSE, url, f"malformed HTML: {exc}") from exc

        log.debug("Scraped %d characters of text from %s", len(text), url)
        return text
