from __future__ import annotations

import asyncio

from models.event import RefreshOutcome


class EventBus:
    """Broadcasts refresh outcomes to any number of subscribers.

    The refresh service publishes one ``RefreshOutcome`` per company
    refresh. Every subscriber owns a private ``asyncio.Queue``; publishing
    copies the outcome into each of them, so reporting never runs inside
    the refresh path.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queues: list[asyncio.Queue[RefreshOutcome]] = []
        self._maxsize = maxsize

    def subscribe(self) -> asyncio.Queue[RefreshOutcome]:
        """Register a new subscriber and return its queue."""
        queue: asyncio.Queue[RefreshOutcome] = asyncio.Queue(maxsize=self._maxsize)
        self._queues.append(queue)
        return queue

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)

    async def put(self, outcome: RefreshOutcome) -> None:
        """Publish ``outcome`` to every subscriber.

        With a bounded ``maxsize`` this waits for slow subscribers.
        """
        for queue in self._queues:
            await queue.put(outcome)

    async def join(self) -> None:
        """Wait until every subscriber has processed everything queued."""
        await asyncio.gather(*(queue.join() for queue in self._queues))
