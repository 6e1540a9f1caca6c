from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class DacApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _url(self, path: str = "") -> str:
        return f"{self._settings.api_base()}/api/dac{path}"

    def list(self, with_users: bool | None = None) -> list[dict[str, Any]]:
        params = {"withUsers": str(with_users).lower()} if with_users is not None else None
        return self._http_client.get_json(self._url(), params=params)

    def create(self, name: str, description: str, email: str) -> dict[str, Any]:
        dac = {"name": name, "description": description, "email": email}
        return self._http_client.post_json(self._url(), dac)

    def update(self, dac_id: int, name: str, description: str, email: str) -> dict[str, Any]:
        dac = {"dacId": dac_id, "name": name, "description": description, "email": email}
        return self._http_client.put_json(self._url(), dac)

    def delete(self, dac_id: int) -> int:
        # no body on success
        return self._http_client.delete(self._url(f"/{dac_id}")).status_code

    def get(self, dac_id: int) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/{dac_id}"))

    def datasets(self, dac_id: int) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url(f"/{dac_id}/datasets"))

    def autocomplete_users(self, term: str) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url(f"/users/{term}"))

    def add_chair(self, dac_id: int, user_id: int) -> int:
        return self._http_client.request_strict("POST", self._url(f"/{dac_id}/chair/{user_id}")).status_code

    def remove_chair(self, dac_id: int, user_id: int) -> int:
        return self._http_client.request_strict("DELETE", self._url(f"/{dac_id}/chair/{user_id}")).status_code

    def add_member(self, dac_id: int, user_id: int) -> int:
        return self._http_client.request_strict("POST", self._url(f"/{dac_id}/member/{user_id}")).status_code

    def remove_member(self, dac_id: int, user_id: int) -> int:
        return self._http_client.request_strict("DELETE", self._url(f"/{dac_id}/member/{user_id}")).status_code

    def update_approval_status(self, dac_id: int, dataset_id: int, approval_status: bool) -> dict[str, Any]:
        return self._http_client.put_json(
            self._url(f"/{dac_id}/dataset/{dataset_id}"),
            {"approval": approval_status},
        )
