"""JSON Patch (RFC 6902) builders for recording visit status transitions."""

from __future__ import annotations

from typing import Any

from .history import find_visit_history, make_entry, make_extension, utc_now_iso
from .vocabulary import VisitStatus

# Position of the period sub-extension within a history entry
_PERIOD_IDX = 1


def build_visit_status_patch(
    resource: dict[str, Any],
    status: VisitStatus | str,
    timestamp: str | None = None,
) -> list[dict]:
    """Compute the operations that make ``status`` the current visit status.

    The visit-history extension is created when missing. Otherwise every open
    entry carrying a different status is closed at ``timestamp`` and a new open
    entry is appended, unless ``status`` is already open, in which case no
    operations are returned for the history.

    When the resource has no ``extension`` field at all, the new list holds a
    complete visit-history extension (not a bare entry), so the next call
    finds the history by URL and stays a no-op for the same status.

    Args:
        resource: FHIR Appointment or Encounter dict. Not modified.
        status: Partner visit status to record.
        timestamp: ISO-8601 instant for the transition (default: now).

    Returns:
        Ordered list of JSON Patch operations rooted at /extension.
    """
    code = status.value if isinstance(status, VisitStatus) else status
    ts = timestamp if timestamp is not None else utc_now_iso()

    extensions = resource.get("extension")
    if extensions is None:
        return [{"op": "add", "path": "/extension", "value": [make_extension(code, ts)]}]

    ext_idx, history_ext = find_visit_history(extensions)
    if history_ext is None:
        return [{"op": "add", "path": "/extension/-", "value": make_extension(code, ts)}]

    entries = history_ext.get("extension")
    if entries is None:
        return [{"op": "add", "path": f"/extension/{ext_idx}/extension", "value": [make_entry(code, ts)]}]

    operations: list[dict] = []
    already_current = False
    for entry_idx, entry in enumerate(entries):
        sub = entry["extension"]
        period = sub[_PERIOD_IDX].get("valuePeriod") or {}
        if period.get("end") is not None:
            continue
        if sub[0].get("valueString") != code:
            operations.append({
                "op": "add",
                "path": f"/extension/{ext_idx}/extension/{entry_idx}/extension/{_PERIOD_IDX}/valuePeriod/end",
                "value": ts,
            })
        else:
            already_current = True

    if not already_current:
        operations.append({
            "op": "add",
            "path": f"/extension/{ext_idx}/extension/-",
            "value": make_entry(code, ts),
        })
    return operations


def build_status_replace(resource: dict[str, Any], status: str) -> dict:
    """Operation setting the resource's native ``status`` field."""
    op = "replace" if "status" in resource else "add"
    return {"op": op, "path": "/status", "value": status}
