from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from models.company import CompanyStatus, Incident


@dataclass(frozen=True)
class RefreshOutcome:
    """Canonical event emitted once per company refresh.

    Fields:
        company_id:       Company the refresh ran for.
        company_name:     Display name at refresh time.
        previous_status:  Status before this refresh.
        status:           Status written by this refresh.
        checked_at:       When the check was attempted (UTC).
        incident:         Incident recorded in the history row, if any.
        error:            Fetch error message when the source was unavailable.
    """

    company_id: str
    company_name: str
    previous_status: CompanyStatus
    status: CompanyStatus
    checked_at: datetime
    incident: Incident | None = None
    error: str | None = None

    @property
    def changed(self) -> bool:
        return self.previous_status != self.status
