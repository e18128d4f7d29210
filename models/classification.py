from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from models.errors import FetchError
from models.company import CompanyStatus, Incident


@dataclass(frozen=True)
class FeedItem:
    """A single entry extracted from a status-page feed.

    Fields:
        title:         Entry title, if any.
        body_text:     Raw entry content; may contain markup.
        snippet:       ``body_text`` with markup stripped.
        published_at:  Publication (or last update) time in UTC.
    """

    title: str | None = None
    body_text: str | None = None
    snippet: str | None = None
    published_at: datetime | None = None


@dataclass(frozen=True)
class FeedInput:
    items: tuple[FeedItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PageInput:
    text: str


@dataclass(frozen=True)
class FailedInput:
    error: FetchError


ClassificationInput = Union[FeedInput, PageInput, FailedInput]


@dataclass(frozen=True)
class Classification:
    """Result of classifying one fetch.

    ``extracted`` is true only when the input was a successfully parsed feed,
    in which case ``incident`` (possibly ``None``) replaces the company's
    latest incident.
    """

    status: CompanyStatus
    checked_at: datetime
    incident: Incident | None = None
    extracted: bool = False
