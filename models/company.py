from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlparse

from models.errors import ValidationError

SUMMARY_MAX_LENGTH = 200


class CompanyStatus(str, Enum):
    """Aggregate health of a monitored company."""

    UP = "up"
    PARTIALLY_DOWN = "partially_down"
    FULLY_DOWN = "fully_down"


class CheckMethod(str, Enum):
    """How a company's status page is read."""

    FEED = "feed"
    SCRAPE = "scrape"

    @classmethod
    def parse(cls, value: str | CheckMethod) -> CheckMethod:
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        if normalized == "rss":
            return cls.FEED
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(f"unknown check method: {value!r}") from None


@dataclass(frozen=True)
class Incident:
    """Summary of the most recent incident surfaced by a status feed.

    Fields:
        title:        Title of the first feed entry, if it had one.
        summary:      Plain-text excerpt, at most 200 characters.
        occurred_at:  Publication time of the entry (UTC), when known.
    """

    title: str | None = None
    summary: str | None = None
    occurred_at: datetime | None = None


@dataclass
class Company:
    """A monitored company owned by a single user.

    ``status``, ``last_checked_at`` and ``latest_incident`` are rewritten by
    every refresh cycle; the identity fields never change after creation.
    """

    id: str
    owner_id: str
    name: str
    status_page_url: str
    check_method: CheckMethod
    status: CompanyStatus = CompanyStatus.UP
    last_checked_at: datetime | None = None
    latest_incident: Incident | None = None

    def to_dict(self) -> dict[str, Any]:
        incident = self.latest_incident
        return {
            "id": self.id,
            "userId": self.owner_id,
            "name": self.name,
            "statusPageUrl": self.status_page_url,
            "checkMethod": self.check_method.value,
            "status": self.status.value,
            "lastChecked": _isoformat(self.last_checked_at),
            "latestIncidentTitle": incident.title if incident else None,
            "latestIncidentSummary": incident.summary if incident else None,
            "latestIncidentAt": _isoformat(incident.occurred_at) if incident else None,
        }


@dataclass(frozen=True)
class CompanyHistory:
    """One append-only entry in a company's status log."""

    id: str
    company_id: str
    status: CompanyStatus
    created_at: datetime
    incident: Incident | None = None

    def to_dict(self) -> dict[str, Any]:
        incident = self.incident
        return {
            "id": self.id,
            "companyId": self.company_id,
            "status": self.status.value,
            "incidentTitle": incident.title if incident else None,
            "incidentSummary": incident.summary if incident else None,
            "incidentAt": _isoformat(incident.occurred_at) if incident else None,
            "createdAt": _isoformat(self.created_at),
        }


def new_company(
    owner_id: str,
    name: str,
    status_page_url: str,
    check_method: str | CheckMethod,
) -> Company:
    """Validate user input and build a fresh company in the ``up`` state."""
    owner_id = (owner_id or "").strip()
    name = (name or "").strip()
    status_page_url = (status_page_url or "").strip()

    if not owner_id:
        raise ValidationError("owner id is required")
    if not name:
        raise ValidationError("company name is required")

    parsed = urlparse(status_page_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"status page URL must be absolute http(s): {status_page_url!r}")

    return Company(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        name=name,
        status_page_url=status_page_url,
        check_method=CheckMethod.parse(check_method),
    )


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
