from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class TosApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def duos_text(self) -> str:
        # Local dev servers proxy '/api' through to the backend.
        base_url = self._settings.api_base("/api")
        envelope = self._http_client.request_strict(
            "GET",
            f"{base_url}/tos/text/duos",
            headers={"Accept": "text/plain"},
        )
        return envelope.text()

    def status(self) -> dict[str, Any]:
        """Registration diagnostics for the signed-in user.

        Keys include ``enabled``, ``adminEnabled``, ``inAllUsersGroup``,
        ``inGoogleProxyGroup`` and ``tosAccepted``.
        """
        return self._http_client.get_json(f"{self._settings.api_base()}/api/sam/register/self/diagnostics")

    def accept(self) -> dict[str, Any]:
        return self._http_client.post_json(f"{self._settings.api_base()}/api/sam/register/self/tos", {})

    def reject(self) -> Any:
        return self._http_client.delete(f"{self._settings.api_base()}/api/sam/register/self/tos").json()
