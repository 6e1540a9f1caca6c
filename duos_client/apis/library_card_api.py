from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class LibraryCardApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _url(self, path: str = "") -> str:
        return f"{self._settings.api_base()}/api/libraryCards{path}"

    def list(self) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url())

    def create(self, card: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(self._url(), card)

    def update(self, card: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.put_json(self._url(f"/{card['id']}"), card)

    def delete(self, card_id: int) -> int:
        return self._http_client.delete(self._url(f"/{card_id}")).status_code
