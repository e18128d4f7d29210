from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from models.company import Company, new_company
from models.errors import ValidationError

log = logging.getLogger(__name__)


def companies_from_records(records: list[dict[str, Any]]) -> list[Company]:
    """Build validated companies from JSON-style records.

    Keys follow the public JSON shape: ``ownerId`` (or ``userId``),
    ``name``, ``statusPageUrl`` and ``checkMethod`` (or ``method``).
    """
    companies: list[Company] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValidationError(f"record {index} is not an object")
        try:
            companies.append(new_company(
                owner_id=record.get("ownerId") or record.get("userId") or "",
                name=record.get("name", ""),
                status_page_url=record.get("statusPageUrl", ""),
                check_method=record.get("checkMethod") or record.get("method") or "feed",
            ))
        except ValidationError as exc:
            raise ValidationError(f"record {index}: {exc}") from exc
    return companies


def load_companies(path: Path) -> list[Company]:
    """Read a JSON array of company records from ``path``."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValidationError(f"{path} must contain a JSON array")
    companies = companies_from_records(data)
    log.info("Loaded %d company record(s) from %s", len(companies), path)
    return companies
