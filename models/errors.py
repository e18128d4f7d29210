from __future__ import annotations

from enum import Enum


class ValidationError(ValueError):
    """Raised when a company record is missing or carries invalid fields."""


class CompanyNotFoundError(LookupError):
    """Raised when a repository lookup targets an unknown company id."""

    def __init__(self, company_id: str) -> None:
        super().__init__(f"company {company_id!r} not found")
        self.company_id = company_id


class FetchErrorKind(str, Enum):
    NETWORK = "network"
    PARSE = "parse"


class FetchError(Exception):
    """A status source could not be retrieved or understood.

    ``NETWORK`` covers unreachable hosts, timeouts and non-2xx responses;
    ``PARSE`` covers payloads that are not a usable feed or page.
    """

    def __init__(self, kind: FetchErrorKind, url: str, message: str) -> None:
        super().__init__(f"{kind.value} error fetching {url}: {message}")
        self.kind = kind
        self.url = url
        self.message = message
