from __future__ import annotations

import dataclasses
from datetime import timedelta
from typing import Any

from models.company import Company, CompanyHistory
from models.errors import CompanyNotFoundError, ValidationError
from storage.base import MUTABLE_FIELDS, CompanyRepository

_TICK = timedelta(microseconds=1)


class InMemoryCompanyRepository(CompanyRepository):
    """Process-local repository backed by plain dicts and lists.

    Suitable for a single process; contents are lost on restart.
    """

    def __init__(self) -> None:
        self._companies: dict[str, Company] = {}
        self._history: dict[str, list[CompanyHistory]] = {}

    async def add_company(self, company: Company) -> Company:
        if company.id in self._companies:
            raise ValidationError(f"company {company.id!r} already exists")
        self._companies[company.id] = company
        self._history[company.id] = []
        return company

    async def get_company(self, company_id: str) -> Company:
        try:
            return self._companies[company_id]
        except KeyError:
            raise CompanyNotFoundError(company_id) from None

    async def find_companies_by_owner(self, owner_id: str) -> list[Company]:
        return [c for c in self._companies.values() if c.owner_id == owner_id]

    async def find_all_companies(self) -> list[Company]:
        return list(self._companies.values())

    async def update_company(self, company_id: str, **fields: Any) -> Company:
        company = await self.get_company(company_id)
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ValidationError(f"cannot update fields: {', '.join(sorted(unknown))}")
        for name, value in fields.items():
            setattr(company, name, value)
        return company

    async def append_history(self, company_id: str, entry: CompanyHistory) -> CompanyHistory:
        await self.get_company(company_id)
        if entry.company_id != company_id:
            raise ValidationError(
                f"history entry belongs to {entry.company_id!r}, not {company_id!r}"
            )

        rows = self._history[company_id]
        if rows and entry.created_at <= rows[-1].created_at:
            # created_at must strictly increase per company
            entry = dataclasses.replace(entry, created_at=rows[-1].created_at + _TICK)
        rows.append(entry)
        return entry

    async def find_history_by_company(self, company_id: str) -> list[CompanyHistory]:
        await self.get_company(company_id)
        return list(reversed(self._history[company_id]))

    async def delete_company(self, company_id: str, owner_id: str) -> None:
        company = await self.get_company(company_id)
        if company.owner_id != owner_id:
            raise CompanyNotFoundError(company_id)
        del self._companies[company_id]
        del self._history[company_id]
