from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class InstitutionApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _url(self, path: str = "") -> str:
        return f"{self._settings.api_base()}/api/institutions{path}"

    def list(self) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url())

    def get(self, institution_id: int) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/{institution_id}"))

    def create(self, institution: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(self._url(), institution)

    def update(self, institution_id: int, institution: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.put_json(self._url(f"/{institution_id}"), institution)

    def delete(self, institution_id: int) -> int:
        return self._http_client.delete(self._url(f"/{institution_id}")).status_code
