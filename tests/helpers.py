"""Fakes and builders shared across tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from fetchers.base import StatusSource
from models.company import CheckMethod, Company, new_company
from models.errors import FetchError, FetchErrorKind

TEST_TIMESTAMP = datetime(2024, 1, 3, 18, 0, 0, tzinfo=timezone.utc)


class FakeSource(StatusSource):
    """Fetcher that serves canned payloads or errors per URL."""

    def __init__(self, method: CheckMethod, responses: dict[str, Any] | None = None) -> None:
        super().__init__(client=None)  # type: ignore[arg-type]
        self._method = method
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[str] = []

    @property
    def method(self) -> CheckMethod:
        return self._method

    async def fetch(self, url: str) -> Any:
        self.calls.append(url)
        response = self.responses.get(url)
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise FetchError(FetchErrorKind.NETWORK, url, "no canned response")
        return response


class StepClock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self, start: datetime = TEST_TIMESTAMP) -> None:
        self._next = start

    def __call__(self) -> datetime:
        now = self._next
        self._next = now + timedelta(minutes=1)
        return now


def make_company(
    name: str = "Acme",
    url: str = "https://status.acme.test/feed.xml",
    method: str = "feed",
    owner_id: str = "user-1",
) -> Company:
    return new_company(owner_id=owner_id, name=name, status_page_url=url, check_method=method)


