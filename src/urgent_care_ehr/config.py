"""Runtime configuration and secret lookup.

Values come from the process environment (optionally seeded from a ``.env``
file). Handlers invoked with an explicit secrets mapping (e.g. a Lambda event
payload) take precedence over the environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised when a required runtime configuration value is missing."""


class SecretsKeys:
    ENVIRONMENT = "ENVIRONMENT"
    FHIR_API_URL = "FHIR_API_URL"
    FHIR_ACCESS_TOKEN = "FHIR_ACCESS_TOKEN"


class Settings:
    FHIR_API_URL: str = os.getenv("FHIR_API_URL", "https://hapi.fhir.org/baseR4")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


def get_secret(key: str, secrets: Mapping[str, str] | None = None) -> str | None:
    """Return ``secrets[key]`` if supplied, else the environment value for ``key``."""
    if secrets and secrets.get(key):
        return secrets[key]
    return os.environ.get(key) or None
