"""Example: record partner visit status transitions on a (mock) FHIR server.

Usage:
    python examples/sync_visit_status.py
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from urgent_care_ehr.config import settings
from urgent_care_ehr.fhir.fhir_client import FHIRClient
from urgent_care_ehr.use_cases.visit_status_sync import VisitStatusSync
from urgent_care_ehr.visit_status.patch import build_visit_status_patch


SAMPLE_APPOINTMENT = {
    "resourceType": "Appointment",
    "id": "appointment-123",
    "meta": {"versionId": "3"},
    "status": "booked",
    "participant": [{"actor": {"reference": "Patient/patient-123"}, "status": "accepted"}],
}


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s | %(name)s | %(message)s")
    print("=== Partner Visit Status Sync Demo ===\n")

    # 1. Patch operations for a resource that has never recorded a status
    operations = build_visit_status_patch(SAMPLE_APPOINTMENT, "PENDING", "2024-01-01T09:00:00.000Z")
    print("First transition (PENDING):")
    print(json.dumps(operations, indent=2))
    print()

    # 2. Mock GET + conditional PATCH against the FHIR server
    print("Mocking FHIR GET + JSON Patch...")

    mock_get_response = MagicMock()
    mock_get_response.json.return_value = SAMPLE_APPOINTMENT
    mock_get_response.raise_for_status = MagicMock()

    mock_patch_response = MagicMock()
    mock_patch_response.status_code = 200
    mock_patch_response.raise_for_status = MagicMock()

    mock_session = MagicMock()
    mock_session.get.return_value = mock_get_response
    mock_session.patch.return_value = mock_patch_response

    client = FHIRClient("https://fhir.example.com/r4", session=mock_session)
    result = VisitStatusSync(client).sync(
        "ARRIVED",
        appointment_id="appointment-123",
        secrets={"ENVIRONMENT": "demo"},
        timestamp="2024-01-01T09:15:00.000Z",
    )

    headers = mock_session.patch.call_args[1]["headers"]
    print(f"Appointment patched: {result.appointment_patched}")
    print(f"If-Match: {headers['If-Match']}")
    print(json.dumps(result.appointment_operations, indent=2))
    print("\nSync demo complete.")


if __name__ == "__main__":
    main()
