"""Visit-history FHIR extension: build and read status history entries.

The history is carried on an Appointment or Encounter as a single extension
addressed by VISIT_HISTORY_EXTENSION_URL. Its inner ``extension`` list is an
append-only, chronologically ordered sequence of entries shaped as::

    {
      "url": "status",
      "extension": [
        {"url": "status", "valueString": "ARRIVED"},
        {"url": "period", "valuePeriod": {"start": "...", "end": "..."}}
      ]
    }

An entry without ``period.end`` is open: its status is the current one.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from .vocabulary import VisitStatus

VISIT_HISTORY_EXTENSION_URL = "https://fhir.zapehr.com/r4/StructureDefinitions/visit-history"

_ENTRY_URL  = "status"
_STATUS_URL = "status"
_PERIOD_URL = "period"


def utc_now_iso() -> str:
    """Current instant as an ISO-8601 UTC string, e.g. 2024-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StatusPeriod(BaseModel):
    """Interval during which a status was in effect; no end means still in effect."""

    start: str | None = Field(default=None, description="ISO-8601 start instant")
    end: str | None = Field(default=None, description="ISO-8601 end instant")

    @property
    def is_open(self) -> bool:
        return self.end is None


class StatusHistoryEntry(BaseModel):
    """One status transition recorded in the visit-history extension."""

    status: str
    period: StatusPeriod = Field(default_factory=StatusPeriod)

    @classmethod
    def from_fhir(cls, entry: dict) -> "StatusHistoryEntry":
        """Parse an inner visit-history entry.

        Raises:
            ValueError: if the entry has no status sub-extension.
        """
        status: str | None = None
        period: dict = {}
        for sub in entry.get("extension") or []:
            if sub.get("url") == _STATUS_URL:
                status = sub.get("valueString")
            elif sub.get("url") == _PERIOD_URL:
                period = sub.get("valuePeriod") or {}
        if status is None:
            raise ValueError(f"visit-history entry has no status: {entry!r}")
        return cls(status=status, period=StatusPeriod(**period))

    def to_fhir(self) -> dict:
        return {
            "url": _ENTRY_URL,
            "extension": [
                {"url": _STATUS_URL, "valueString": self.status},
                {"url": _PERIOD_URL, "valuePeriod": self.period.model_dump(exclude_none=True)},
            ],
        }


def make_entry(code: VisitStatus | str, timestamp: str | None = None) -> dict:
    """Build an open history entry for ``code`` starting at ``timestamp`` (default: now)."""
    status = code.value if isinstance(code, VisitStatus) else code
    entry = StatusHistoryEntry(
        status=status,
        period=StatusPeriod(start=timestamp if timestamp is not None else utc_now_iso()),
    )
    return entry.to_fhir()


def make_extension(code: VisitStatus | str, timestamp: str | None = None) -> dict:
    """Build a new visit-history extension holding a single open entry."""
    return {
        "url": VISIT_HISTORY_EXTENSION_URL,
        "extension": [make_entry(code, timestamp)],
    }


def find_visit_history(extensions: list[dict] | None) -> tuple[int, dict | None]:
    """Return (index, extension) of the visit-history extension, or (-1, None)."""
    for idx, ext in enumerate(extensions or []):
        if ext.get("url") == VISIT_HISTORY_EXTENSION_URL:
            return idx, ext
    return -1, None


def read_history(resource: dict[str, Any]) -> list[StatusHistoryEntry]:
    """Return the recorded status history of a resource, oldest first."""
    _, ext = find_visit_history(resource.get("extension"))
    if ext is None:
        return []
    return [StatusHistoryEntry.from_fhir(entry) for entry in ext.get("extension") or []]


def current_status(resource: dict[str, Any]) -> str | None:
    """Return the status of the most recent open history entry, if any."""
    for entry in reversed(read_history(resource)):
        if entry.period.is_open:
            return entry.status
    return None
