from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from models.company import CheckMethod
from models.errors import FetchError, FetchErrorKind

DEFAULT_FETCH_TIMEOUT = 15.0


class StatusSource(ABC):
    """Abstract base for status-page fetchers.

    Each concrete fetcher retrieves one kind of source (structured feed or
    raw HTML page) and normalizes it into classifier input, raising
    ``FetchError`` for anything it cannot deliver.

    A shared ``httpx.AsyncClient`` is injected at construction time so
    that all fetchers reuse one connection pool.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
    ) -> None:
        self._client = client
        self._timeout = timeout

    @property
    @abstractmethod
    def method(self) -> CheckMethod:
        """The company check method this fetcher serves."""

    @abstractmethod
    async def fetch(self, url: str) -> Any:
        """Fetch ``url`` and return the normalized payload.

        Implementations raise ``FetchError`` on any network or parse
        failure; they never return partial results.
        """

    async def _get(self, url: str) -> httpx.Response:
        """GET ``url``, mapping transport failures and non-2xx to NETWORK."""
        try:
            resp = await self._client.get(url, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            raise FetchError(FetchErrorKind.NETWORK, url, f"timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(FetchErrorKind.NETWORK, url, str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            raise FetchError(
                FetchErrorKind.NETWORK,
                url,
                f"unexpected status {resp.status_code}",
            )
        return resp
