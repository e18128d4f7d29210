from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from models.event import RefreshOutcome

log = logging.getLogger(__name__)


class OutcomeConsumer(ABC):
    """Base for tasks that react to refresh outcomes.

    A consumer drains the queue it was given by ``EventBus.subscribe()``.
    A failure while handling one outcome is logged and the loop moves on
    to the next.
    """

    def __init__(self, queue: asyncio.Queue[RefreshOutcome]) -> None:
        self._queue = queue

    @abstractmethod
    async def process(self, outcome: RefreshOutcome) -> None:
        """React to one refresh outcome."""

    async def run(self) -> None:
        """Consume outcomes until cancelled."""
        name = type(self).__name__
        log.info("%s listening for refresh outcomes", name)
        while True:
            outcome = await self._queue.get()
            try:
                await self.process(outcome)
            except Exception:
                log.exception("%s could not handle outcome for company %s", name, outcome.company_id)
            finally:
                self._queue.task_done()
