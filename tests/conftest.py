"""Shared pytest fixtures, mock factories, and test markers.

Test tiers
----------
  unit        Fast, fully offline, zero external dependencies.
              Always run. Target: < 1 second total.

  integration Mock the FHIR server. Always run. Validates the end-to-end
              sync flow without real network calls.

  quality     Property-based (Hypothesis) checks of the history invariants.
              Always run offline.

  live        Real API calls against the public HAPI FHIR R4 server.
              Skipped unless HAPI_LIVE_TESTS is set. See tests/live/conftest.py.

Run specific tiers:
  pytest tests/unit tests/integration tests/quality   # offline only
  pytest tests/live -m live                           # live only
  pytest tests/ -v                                    # everything
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tests.fixtures.resources import appointment_with_history, history_entry

SECRETS = {"ENVIRONMENT": "test"}


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast offline unit tests")
    config.addinivalue_line("markers", "integration: mock-based integration tests")
    config.addinivalue_line("markers", "quality: property-based invariant checks")
    config.addinivalue_line("markers", "live: requires a reachable FHIR server (skipped by default)")


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture
def secrets() -> dict:
    return dict(SECRETS)


@pytest.fixture
def no_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ENVIRONMENT from the process environment for the test."""
    monkeypatch.delenv("ENVIRONMENT", raising=False)


# ---------------------------------------------------------------------------
# FHIR resource fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def bare_appointment() -> dict:
    return {"resourceType": "Appointment", "id": "appt-001", "status": "proposed"}


@pytest.fixture
def pending_appointment() -> dict:
    return appointment_with_history(history_entry("PENDING", "2024-01-01T00:00:00Z"))


@pytest.fixture
def arrived_appointment() -> dict:
    return appointment_with_history(
        history_entry("PENDING", "2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"),
        history_entry("ARRIVED", "2024-01-02T00:00:00Z"),
    )


@pytest.fixture
def bare_encounter() -> dict:
    return {
        "resourceType": "Encounter",
        "id": "enc-001",
        "meta": {"versionId": "7"},
        "status": "planned",
        "class": {"code": "VR"},
    }


# ---------------------------------------------------------------------------
# FHIR server session mocks
# ---------------------------------------------------------------------------

def make_response(json_body: dict | None = None, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_body or {}
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def mock_fhir_session() -> MagicMock:
    """Session whose GET returns nothing useful until a test sets side effects."""
    session = MagicMock()
    session.patch.return_value = make_response(status_code=200)
    return session
