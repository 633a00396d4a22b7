"""Partner visit status sync use case.

The partner EHR reports a visit status change; the Appointment (and, when
known, the Encounter) is brought in line: its visit-history extension records
the transition and its native FHIR status follows the mapping tables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from pydantic import BaseModel, Field

from ..fhir.fhir_client import FHIRClient
from ..visit_status.history import utc_now_iso
from ..visit_status.mapping import to_appointment_status, to_encounter_status
from ..visit_status.patch import build_status_replace, build_visit_status_patch
from ..visit_status.vocabulary import VisitStatus, validate_visit_status

logger = logging.getLogger(__name__)


class VisitStatusSyncResult(BaseModel):
    """Outcome of one sync call."""

    status: VisitStatus
    appointment_operations: list[dict] = Field(default_factory=list)
    encounter_operations: list[dict] = Field(default_factory=list)
    appointment_patched: bool = False
    encounter_patched: bool = False


class VisitStatusSync:
    """Partner status → validated code → conditional JSON Patch on FHIR resources."""

    def __init__(self, client: FHIRClient) -> None:
        self._client = client

    def sync(
        self,
        raw_status: str | None,
        appointment_id: str,
        encounter_id: str | None = None,
        secrets: Mapping[str, str] | None = None,
        timestamp: str | None = None,
    ) -> VisitStatusSyncResult:
        """Record ``raw_status`` on the Appointment and optional Encounter.

        Raises:
            ConfigurationError, MissingValueError, UnrecognizedStatusError:
                from validation, before any request is made.
            requests.HTTPError: if a read or patch fails, including 412 when
                another writer updated the resource since it was read.
                The Appointment is patched before the Encounter, so an
                Encounter failure leaves the Appointment already updated and
                the two out of step. Calling sync again with the same status
                reconciles them: the Appointment yields no operations and only
                the Encounter is patched.
        """
        status = validate_visit_status(raw_status, secrets)
        ts = timestamp if timestamp is not None else utc_now_iso()
        result = VisitStatusSyncResult(status=status)

        result.appointment_operations, result.appointment_patched = self._sync_resource(
            "Appointment", appointment_id, status, ts, to_appointment_status,
        )
        if encounter_id:
            result.encounter_operations, result.encounter_patched = self._sync_resource(
                "Encounter", encounter_id, status, ts, to_encounter_status,
            )
        return result

    def _sync_resource(
        self,
        resource_type: str,
        resource_id: str,
        status: VisitStatus,
        timestamp: str,
        native_status: Callable[[VisitStatus], str],
    ) -> tuple[list[dict], bool]:
        response = self._client.get_resource(resource_type, resource_id)
        response.raise_for_status()
        resource = response.json()

        operations = build_visit_status_patch(resource, status, timestamp)
        target = native_status(status)
        if resource.get("status") != target:
            operations.append(build_status_replace(resource, target))

        if not operations:
            logger.info("%s/%s already at %s; nothing to patch", resource_type, resource_id, status)
            return operations, False

        version_id = (resource.get("meta") or {}).get("versionId")
        logger.info(
            "patching %s/%s to %s (%s) with %d operations",
            resource_type, resource_id, status, target, len(operations),
        )
        patched = self._client.patch_resource(resource_type, resource_id, operations, version_id=version_id)
        patched.raise_for_status()
        return operations, True
