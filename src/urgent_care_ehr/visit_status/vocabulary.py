"""Partner EHR visit status vocabulary and validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum

from ..config import ConfigurationError, SecretsKeys, get_secret

logger = logging.getLogger(__name__)


class VisitStatus(str, Enum):
    """Visit status codes emitted by the partner EHR."""

    ARRIVED = "ARRIVED"
    CANCELLED = "CANCELLED"
    CHECKED_IN = "CHECKED-IN"
    INTAKE = "INTAKE"
    NO_SHOW = "NO-SHOW"
    PENDING = "PENDING"
    PROVIDER = "PROVIDER"
    READY = "READY"
    DISCHARGE = "DISCHARGE"
    PROVIDER_READY = "PROVIDER-READY"

    def __str__(self) -> str:
        return self.value


VISIT_STATUSES: tuple[str, ...] = tuple(s.value for s in VisitStatus)


class VisitStatusError(ValueError):
    """Base class for visit status validation failures."""


class MissingValueError(VisitStatusError):
    """Raised when the visit record carries no status at all."""


class UnrecognizedStatusError(VisitStatusError):
    """Raised when the visit status is outside the partner vocabulary."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unrecognized value found for Visit.status on visit record: {value}")
        self.value = value


def validate_visit_status(
    visit_status: str | None,
    secrets: Mapping[str, str] | None = None,
) -> VisitStatus:
    """Check a raw partner status against the closed vocabulary.

    Args:
        visit_status: Status string as received from the partner EHR.
        secrets: Optional secrets mapping; falls back to the environment.

    Returns:
        The matching VisitStatus member.

    Raises:
        ConfigurationError: if ENVIRONMENT is not provisioned.
        MissingValueError: if visit_status is None or empty.
        UnrecognizedStatusError: if visit_status is not a known code.
    """
    logger.info("validating partner visit status %r", visit_status)

    if not get_secret(SecretsKeys.ENVIRONMENT, secrets):
        logger.error("secrets not defined: %s", SecretsKeys.ENVIRONMENT)
        raise ConfigurationError("Secrets not defined")

    if not visit_status:
        raise MissingValueError("Unexpectedly found no value for Visit.status on visit record")

    if visit_status not in VISIT_STATUSES:
        raise UnrecognizedStatusError(visit_status)

    return VisitStatus(visit_status)
