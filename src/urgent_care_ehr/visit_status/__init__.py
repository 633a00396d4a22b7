from .vocabulary import (
    VISIT_STATUSES,
    MissingValueError,
    UnrecognizedStatusError,
    VisitStatus,
    VisitStatusError,
    validate_visit_status,
)
from .mapping import to_appointment_status, to_encounter_status
from .history import (
    VISIT_HISTORY_EXTENSION_URL,
    StatusHistoryEntry,
    StatusPeriod,
    current_status,
    make_entry,
    make_extension,
    read_history,
)
from .patch import build_status_replace, build_visit_status_patch

__all__ = [
    "VISIT_STATUSES",
    "MissingValueError",
    "UnrecognizedStatusError",
    "VisitStatus",
    "VisitStatusError",
    "validate_visit_status",
    "to_appointment_status",
    "to_encounter_status",
    "VISIT_HISTORY_EXTENSION_URL",
    "StatusHistoryEntry",
    "StatusPeriod",
    "current_status",
    "make_entry",
    "make_extension",
    "read_history",
    "build_status_replace",
    "build_visit_status_patch",
]
