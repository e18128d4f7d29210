from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from models.company import Company, CompanyHistory

MUTABLE_FIELDS = frozenset({"name", "status", "last_checked_at", "latest_incident"})


class CompanyRepository(ABC):
    """Persistence contract for companies and their status history.

    History is append-only: there is deliberately no way to update or
    delete an individual history row. Deleting a company removes its
    history with it.
    """

    @abstractmethod
    async def add_company(self, company: Company) -> Company:
        """Store a newly created company."""

    @abstractmethod
    async def get_company(self, company_id: str) -> Company:
        """Return a company, raising ``CompanyNotFoundError`` if unknown."""

    @abstractmethod
    async def find_companies_by_owner(self, owner_id: str) -> list[Company]:
        """Return the companies owned by ``owner_id`` in creation order."""

    @abstractmethod
    async def find_all_companies(self) -> list[Company]:
        """Return every stored company, for batch refresh."""

    @abstractmethod
    async def update_company(self, company_id: str, **fields: Any) -> Company:
        """Overwrite mutable fields of a company.

        Only fields in ``MUTABLE_FIELDS`` may be changed; anything else
        raises ``ValidationError``.
        """

    @abstractmethod
    async def append_history(self, company_id: str, entry: CompanyHistory) -> CompanyHistory:
        """Append a history row and return it as stored."""

    @abstractmethod
    async def find_history_by_company(self, company_id: str) -> list[CompanyHistory]:
        """Return a company's history, newest first."""

    @abstractmethod
    async def delete_company(self, company_id: str, owner_id: str) -> None:
        """Delete an owner's company together with all of its history."""
