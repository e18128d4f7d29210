"""Keyword heuristics that turn fetched status data into a company status.

Everything here is pure: the same input and ``checked_at`` always produce
the same ``Classification``, and nothing raises.
"""
from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Iterable

from models.classification import (
    Classification,
    ClassificationInput,
    FeedInput,
    FeedItem,
    PageInput,
)
from models.company import SUMMARY_MAX_LENGTH, CompanyStatus, Incident

MAJOR_KEYWORDS = ("fully down", "major outage")
PARTIAL_KEYWORDS = ("partial", "degraded", "incident")


class Severity(IntEnum):
    NONE = 0
    PARTIAL = 1
    MAJOR = 2


_STATUS_BY_SEVERITY = {
    Severity.NONE: CompanyStatus.UP,
    Severity.PARTIAL: CompanyStatus.PARTIALLY_DOWN,
    Severity.MAJOR: CompanyStatus.FULLY_DOWN,
}


def severity(text: str) -> Severity:
    """Return the strongest keyword severity found in ``text``."""
    lowered = text.lower()
    if any(k in lowered for k in MAJOR_KEYWORDS):
        return Severity.MAJOR
    if any(k in lowered for k in PARTIAL_KEYWORDS):
        return Severity.PARTIAL
    return Severity.NONE


def scan(corpus: Iterable[str]) -> Severity:
    """Scan texts in order, stopping at the first MAJOR match."""
    strongest = Severity.NONE
    for text in corpus:
        found = severity(text)
        if found is Severity.MAJOR:
            return found
        strongest = max(strongest, found)
    return strongest


def _item_text(item: FeedItem) -> str:
    return " ".join(part for part in (item.title, item.body_text) if part)


def _first_non_empty(*values: str | None) -> str | None:
    for value in values:
        if value and value.strip():
            return value.strip()
    return None


def incident_from(item: FeedItem) -> Incident | None:
    """Build the incident descriptor shown for a feed's first entry."""
    if not item.title and not item.body_text:
        return None
    summary = _first_non_empty(item.snippet, item.body_text)
    return Incident(
        title=item.title,
        summary=summary[:SUMMARY_MAX_LENGTH] if summary else None,
        occurred_at=item.published_at,
    )


def classify(source: ClassificationInput, checked_at: datetime) -> Classification:
    """Derive the aggregate status (and incident, for feeds) of one fetch.

    Feed input scans every item's title and body; a MAJOR keyword anywhere
    yields ``fully_down``, otherwise any PARTIAL keyword yields
    ``partially_down``. A feed that stays ``up`` carries no incident;
    otherwise the incident always comes from the first item, whichever
    item decided the severity. Page input gets the same scan but
    never an incident. A failed fetch degrades to ``partially_down``.
    """
    if isinstance(source, FeedInput):
        level = scan(_item_text(item) for item in source.items)
        if level is Severity.NONE:
            return Classification(CompanyStatus.UP, checked_at, extracted=True)
        return Classification(
            status=_STATUS_BY_SEVERITY[level],
            checked_at=checked_at,
            incident=incident_from(source.items[0]),
            extracted=True,
        )

    if isinstance(source, PageInput):
        level = severity(source.text)
        return Classification(_STATUS_BY_SEVERITY[level], checked_at)

    # FailedInput, or anything unrecognized, degrades.
    return Classification(CompanyStatus.PARTIALLY_DOWN, checked_at)
