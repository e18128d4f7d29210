from __future__ import annotations

from fetchers.base import StatusSource
from models.company import CheckMethod


class FetcherRegistry:
    """Maps each company check method to the fetcher that serves it.

    Supporting a new kind of status source requires only instantiating a
    fetcher and calling ``register()``.
    """

    def __init__(self) -> None:
        self._fetchers: dict[CheckMethod, StatusSource] = {}

    def register(self, fetcher: StatusSource) -> None:
        self._fetchers[fetcher.method] = fetcher

    def get(self, method: CheckMethod) -> StatusSource:
        try:
            return self._fetchers[method]
        except KeyError:
            raise LookupError(f"no fetcher registered for {method.value!r}") from None

    @property
    def methods(self) -> list[CheckMethod]:
        return list(self._fetchers)
