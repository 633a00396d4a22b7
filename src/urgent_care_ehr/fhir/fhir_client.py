"""Generic FHIR R4 HTTP client."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import requests

from ..config import SecretsKeys, get_secret, settings

logger = logging.getLogger(__name__)

FHIR_JSON = "application/fhir+json"
JSON_PATCH = "application/json-patch+json"


class FHIRClient:
    """Minimal FHIR R4 REST client for reading and patching resources."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        access_token: str | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._access_token = access_token

    @classmethod
    def from_settings(
        cls,
        secrets: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> "FHIRClient":
        """Build a client from FHIR_API_URL / FHIR_ACCESS_TOKEN.

        Each value is looked up in ``secrets`` first, then the environment.
        The base URL falls back to the configured default.
        """
        base_url = get_secret(SecretsKeys.FHIR_API_URL, secrets) or settings.FHIR_API_URL
        access_token = get_secret(SecretsKeys.FHIR_ACCESS_TOKEN, secrets)
        return cls(base_url, session=session, access_token=access_token)

    def post_resource(
        self,
        resource_type: str,
        resource: dict,
        headers: dict | None = None,
    ) -> requests.Response:
        """POST a FHIR resource and return the response."""
        url = f"{self.base_url}/{resource_type}"
        default_headers = self._headers({"Content-Type": FHIR_JSON, "Accept": FHIR_JSON}, headers)
        return self._session.post(url, json=resource, headers=default_headers)

    def get_resource(
        self,
        resource_type: str,
        resource_id: str,
        headers: dict | None = None,
    ) -> requests.Response:
        """GET a FHIR resource by type and logical ID."""
        url = f"{self.base_url}/{resource_type}/{resource_id}"
        default_headers = self._headers({"Accept": FHIR_JSON}, headers)
        return self._session.get(url, headers=default_headers)

    def patch_resource(
        self,
        resource_type: str,
        resource_id: str,
        operations: list[dict],
        version_id: str | None = None,
        headers: dict | None = None,
    ) -> requests.Response:
        """Apply a JSON Patch document to a FHIR resource.

        Args:
            resource_type: e.g. 'Appointment'.
            resource_id: Logical ID of the resource.
            operations: RFC 6902 operations, applied by the server in order.
            version_id: meta.versionId the operations were computed against.
                        When given, the update is conditional (If-Match) and
                        the server answers 412 if the resource has moved on.
        """
        url = f"{self.base_url}/{resource_type}/{resource_id}"
        default_headers = self._headers({"Content-Type": JSON_PATCH, "Accept": FHIR_JSON}, headers)
        if version_id is not None:
            default_headers["If-Match"] = f'W/"{version_id}"'
        logger.debug(
            "PATCH %s/%s (%d operations, version=%s)",
            resource_type, resource_id, len(operations), version_id,
        )
        return self._session.patch(url, json=operations, headers=default_headers)

    def _headers(self, defaults: dict, extra: dict | None) -> dict:
        if self._access_token:
            defaults["Authorization"] = f"Bearer {self._access_token}"
        if extra:
            defaults.update(extra)
        return defaults
