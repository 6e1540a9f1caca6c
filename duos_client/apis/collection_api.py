from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class CollectionApi:
    """Data access request collections."""

    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _url(self, path: str) -> str:
        return f"{self._settings.api_base()}/api/collections{path}"

    def cancel(self, collection_id: int, role_name: str) -> dict[str, Any]:
        return self._http_client.put_json(self._url(f"/{collection_id}/cancel"), {}, params={"roleName": role_name})

    def revise(self, collection_id: int) -> dict[str, Any]:
        return self._http_client.put_json(self._url(f"/{collection_id}/resubmit"), {})

    def get(self, collection_id: int) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/{collection_id}"))

    def summaries_by_role(self, role_name: str) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url(f"/role/{role_name}/summary"))

    def summary_by_role_and_id(self, role_name: str, collection_id: int) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/role/{role_name}/summary/{collection_id}"))

    def open_elections(self, collection_id: int) -> dict[str, Any]:
        return self._http_client.post_json(self._url(f"/{collection_id}/election"), {})
