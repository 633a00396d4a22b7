"""Partner visit status → FHIR R4 Appointment/Encounter status mappings."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal

from .vocabulary import VisitStatus

AppointmentStatus = Literal[
    "proposed",
    "pending",
    "arrived",
    "booked",
    "cancelled",
    "waitlist",
    "checked-in",
    "entered-in-error",
    "fulfilled",
    "noshow",
]

EncounterStatus = Literal[
    "planned",
    "arrived",
    "triaged",
    "in-progress",
    "onleave",
    "finished",
    "cancelled",
    "entered-in-error",
    "unknown",
]

APPOINTMENT_STATUS_FALLBACK: AppointmentStatus = "proposed"
ENCOUNTER_STATUS_FALLBACK: EncounterStatus = "unknown"

APPOINTMENT_STATUS_MAP: Mapping[str, AppointmentStatus] = MappingProxyType({
    "PENDING":        "booked",
    "ARRIVED":        "arrived",
    "READY":          "checked-in",
    "INTAKE":         "checked-in",
    "PROVIDER-READY": "fulfilled",
    "PROVIDER":       "fulfilled",
    "DISCHARGE":      "fulfilled",
    "CHECKED-IN":     "fulfilled",
    "CANCELLED":      "cancelled",
    "NO-SHOW":        "noshow",
})

ENCOUNTER_STATUS_MAP: Mapping[str, EncounterStatus] = MappingProxyType({
    "PENDING":        "planned",
    "ARRIVED":        "arrived",
    "READY":          "arrived",
    "INTAKE":         "arrived",
    "PROVIDER-READY": "arrived",
    "PROVIDER":       "in-progress",
    "DISCHARGE":      "in-progress",
    "CHECKED-IN":     "finished",
    "CANCELLED":      "cancelled",
    "NO-SHOW":        "cancelled",
})


def to_appointment_status(code: VisitStatus | str) -> AppointmentStatus:
    """Return the FHIR Appointment.status for a partner code ('proposed' if unmapped)."""
    return APPOINTMENT_STATUS_MAP.get(code, APPOINTMENT_STATUS_FALLBACK)


def to_encounter_status(code: VisitStatus | str) -> EncounterStatus:
    """Return the FHIR Encounter.status for a partner code ('unknown' if unmapped)."""
    return ENCOUNTER_STATUS_MAP.get(code, ENCOUNTER_STATUS_FALLBACK)
