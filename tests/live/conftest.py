"""Skip guards for live tests.

Every live test is guarded by a pytest.mark.skipif that checks for the
required environment variable. Tests silently skip when it is absent — they
never fail due to missing config.

Environment variables:
  HAPI_LIVE_TESTS          Any non-empty value enables the HAPI round trip
  HAPI_FHIR_URL            Override the server (default: public HAPI R4)

Set them in your shell before running:
  export HAPI_LIVE_TESTS=1
  pytest tests/live -v -m live
"""

from __future__ import annotations

import os
import pytest


def _skip_unless(env_var: str, reason: str | None = None):
    """Return a pytest.mark.skipif that skips when env_var is not set."""
    msg = reason or f"Set {env_var} to run this test"
    return pytest.mark.skipif(not os.environ.get(env_var), reason=msg)


skip_no_hapi = _skip_unless("HAPI_LIVE_TESTS", "Set HAPI_LIVE_TESTS=1 to run live HAPI FHIR tests")


@pytest.fixture(scope="session")
def hapi_base_url() -> str:
    return os.environ.get("HAPI_FHIR_URL", "https://hapi.fhir.org/baseR4")
