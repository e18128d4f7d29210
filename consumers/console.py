from __future__ import annotations

from consumers.base import OutcomeConsumer
from models.event import RefreshOutcome


class ConsoleConsumer(OutcomeConsumer):
    """Prints status changes and unreachable sources to stdout.

    Unchanged, successful refreshes are not printed.
    """

    async def process(self, outcome: RefreshOutcome) -> None:
        if not outcome.changed and outcome.error is None:
            return

        ts = outcome.checked_at.strftime("%Y-%m-%d %H:%M:%S")
        lines = [
            f"[{ts}] Company: {outcome.company_name}",
            f"  Status: {outcome.previous_status.value} -> {outcome.status.value}",
        ]
        if outcome.incident is not None and outcome.incident.title:
            lines.append(f"  Incident: {outcome.incident.title}")
        if outcome.error is not None:
            lines.append(f"  Error: {outcome.error}")
        print("\n".join(lines) + "\n", flush=True)
