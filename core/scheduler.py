from __future__ import annotations

import asyncio
import logging

from core.refresh import StatusRefreshService

log = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 300


class Scheduler:
    """Periodic driver for batch refreshes.

    Every ``interval_seconds`` the scheduler asks the refresh service to
    process all stored companies. A failing pass is logged and the loop
    carries on; the next pass is the retry.
    """

    def __init__(
        self,
        service: StatusRefreshService,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        self._service = service
        self._interval = interval_seconds

    async def run_once(self) -> int:
        """Run a single batch refresh and return the processed count."""
        try:
            return await self._service.refresh_all()
        except Exception:
            log.exception("Batch refresh failed")
            return 0

    async def run(self) -> None:
        """Refresh all companies forever, sleeping between passes."""
        log.info("Scheduler started (interval=%ss)", self._interval)

        while True:
            await self.run_once()
            await asyncio.sleep(self._interval)
