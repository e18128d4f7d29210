"""Status Monitor -- entry point.

Assembles the refresh pipeline:

    Scheduler (periodic batch refresh)
        -> StatusRefreshService (fetch -> classify -> persist -> history)
        -> EventBus (asyncio.Queue fan-out of refresh outcomes)
        -> Consumer tasks (react to queue.get())

A shared httpx.AsyncClient is injected into every fetcher.
A semaphore inside the refresh service caps concurrent network fetches,
and a per-company lock keeps refreshes of one company from overlapping.
"""
from __future__ import annotations

import asyncio
import logging

import httpx

from consumers.console import ConsoleConsumer
from core.config import Settings, get_settings
from core.event_bus import EventBus
from core.refresh import StatusRefreshService
from core.registry import FetcherRegistry
from core.scheduler import Scheduler
from fetchers.feed import FeedFetcher
from fetchers.page import PageScraper
from storage.memory import InMemoryCompanyRepository
from storage.seed import load_companies

log = logging.getLogger("status_monitor")


async def run(settings: Settings) -> None:
    repository = InMemoryCompanyRepository()
    if settings.seed_file is not None:
        for company in load_companies(settings.seed_file):
            await repository.add_company(company)
    else:
        log.warning("No seed file configured; nothing to monitor")

    async with httpx.AsyncClient(
        timeout=settings.fetch_timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    ) as client:
        bus = EventBus()

        registry = FetcherRegistry()
        registry.register(FeedFetcher(client, timeout=settings.fetch_timeout_seconds))
        registry.register(PageScraper(client, timeout=settings.fetch_timeout_seconds))

        service = StatusRefreshService(
            repository=repository,
            registry=registry,
            bus=bus,
            concurrency_limit=settings.concurrency_limit,
        )
        scheduler = Scheduler(service, interval_seconds=settings.refresh_interval_seconds)

        consumer = ConsoleConsumer(queue=bus.subscribe())
        consumer_task = asyncio.create_task(consumer.run(), name=type(consumer).__name__)

        if settings.run_once:
            count = await scheduler.run_once()
            await bus.join()
            consumer_task.cancel()
            await asyncio.gather(consumer_task, return_exceptions=True)
            log.info("Refreshed %d company(ies)", count)
            return

        await asyncio.gather(
            asyncio.create_task(scheduler.run(), name="scheduler"),
            consumer_task,
        )


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        print("\nShutting down.")


if __name__ == "__main__":
    main()
