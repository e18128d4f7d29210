from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from core.classifier import classify
from core.event_bus import EventBus
from core.locks import KeyedLock
from core.registry import FetcherRegistry
from models.classification import (
    ClassificationInput,
    FailedInput,
    FeedInput,
    PageInput,
)
from models.company import CheckMethod, Company, CompanyHistory
from models.errors import FetchError, FetchErrorKind
from models.event import RefreshOutcome
from storage.base import CompanyRepository

log = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LIMIT = 20


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_input(method: CheckMethod, payload: Any) -> ClassificationInput:
    if method is CheckMethod.FEED:
        return FeedInput(tuple(payload))
    return PageInput(payload)


class StatusRefreshService:
    """Runs fetch -> classify -> persist -> append history for companies.

    Each refresh holds a per-company lock for its whole cycle, so two
    refreshes of the same company never interleave. A failed fetch is not
    retried: the company degrades to ``partially_down`` and the next
    scheduled or manual refresh tries again.

    Batch refreshes run companies concurrently, bounded by an
    ``asyncio.Semaphore``; one company's failure never stops the others.
    """

    def __init__(
        self,
        repository: CompanyRepository,
        registry: FetcherRegistry,
        bus: EventBus | None = None,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._registry = registry
        self._bus = bus
        self._semaphore = asyncio.Semaphore(concurrency_limit)
        self._locks = KeyedLock()
        self._clock = clock

    async def refresh_one(self, company: Company) -> RefreshOutcome:
        """Refresh a single company, mutating it and appending one history row."""
        async with self._locks.hold(company.id):
            previous_status = company.status
            fetcher = self._registry.get(company.check_method)
            error: str | None = None

            try:
                payload = await fetcher.fetch(company.status_page_url)
            except FetchError as exc:
                log.warning("Refresh of %s (%s) degraded: %s", company.name, company.id, exc)
                source: ClassificationInput = FailedInput(exc)
                error = str(exc)
            except Exception as exc:
                # Any other fetcher failure degrades the same way.
                log.exception("Fetcher for %s (%s) raised unexpectedly", company.name, company.id)
                failure = FetchError(
                    FetchErrorKind.PARSE,
                    company.status_page_url,
                    f"{type(exc).__name__}: {exc}",
                )
                source = FailedInput(failure)
                error = str(failure)
            else:
                source = _as_input(company.check_method, payload)

            result = classify(source, checked_at=self._clock())

            fields: dict[str, Any] = {
                "status": result.status,
                "last_checked_at": result.checked_at,
            }
            if result.extracted:
                fields["latest_incident"] = result.incident

            for name, value in fields.items():
                setattr(company, name, value)
            await self._repository.update_company(company.id, **fields)

            await self._repository.append_history(
                company.id,
                CompanyHistory(
                    id=str(uuid.uuid4()),
                    company_id=company.id,
                    status=result.status,
                    created_at=result.checked_at,
                    incident=result.incident,
                ),
            )

        outcome = RefreshOutcome(
            company_id=company.id,
            company_name=company.name,
            previous_status=previous_status,
            status=result.status,
            checked_at=result.checked_at,
            incident=result.incident,
            error=error,
        )

        if outcome.changed:
            log.info(
                "%s status changed: %s -> %s",
                company.name,
                previous_status.value,
                result.status.value,
            )
        else:
            log.debug("%s status unchanged: %s", company.name, result.status.value)

        if self._bus is not None:
            await self._bus.put(outcome)
        return outcome

    async def refresh_all(self, companies: Iterable[Company] | None = None) -> int:
        """Refresh every company (all stored ones by default).

        Returns the number of companies whose refresh cycle completed,
        including those that degraded because their source failed.
        """
        if companies is None:
            companies = await self._repository.find_all_companies()
        companies = list(companies)

        async def _worker(company: Company) -> bool:
            async with self._semaphore:
                try:
                    await self.refresh_one(company)
                except Exception:
                    log.exception("Refresh of %s (%s) failed", company.name, company.id)
                    return False
            return True

        results = await asyncio.gather(*(_worker(c) for c in companies))
        processed = sum(results)

        log.info("Batch refresh processed %d of %d companies", processed, len(companies))
        return processed
