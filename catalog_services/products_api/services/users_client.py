# This file implements the HTTP client the products service uses to reach the users service.
# It exists so the composed endpoint does not embed request details or transport error handling.
# Transport failures, timeouts, and non-JSON bodies are converted into one clear exception type.
# No retry is attempted; the caller decides how a failure is reported.

from __future__ import annotations

import logging
from typing import Any

import requests

LOGGER = logging.getLogger("catalog.users_client")


class UsersServiceUnavailableError(RuntimeError):
    """Raised when the users service cannot be reached or does not answer with JSON."""


class UsersApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def list_users(self) -> Any:
        """Return the decoded `/users` payload, whatever JSON shape it has."""

        return self._request_json("/users")

    def count_users(self) -> int:
        """Count users; any JSON payload that is not an array counts as zero."""

        payload = self.list_users()
        return len(payload) if isinstance(payload, list) else 0

    def close(self) -> None:
        self.session.close()

    def _request_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise UsersServiceUnavailableError(f"request to {url} failed: {exc}") from exc

        if response.status_code >= 400:
            LOGGER.warning("users service answered %s for %s", response.status_code, url)

        try:
            return response.json()
        except ValueError as exc:
            raise UsersServiceUnavailableError(f"users service did not return valid JSON for {url}") from exc
