from __future__ import annotations

import copy
from typing import Any

from duos_client.config import AppSettings
from duos_client.errors import ApiHttpError
from duos_client.http import HttpClient

# Fields a user update must never send back to the server.
_READ_ONLY_USER_FIELDS = ("createDate", "institution", "libraryCards")


class UserApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _url(self, path: str = "") -> str:
        return f"{self._settings.api_base()}/api/user{path}"

    def me(self) -> dict[str, Any]:
        return self._http_client.get_json(self._url("/me"))

    def get(self, user_id: int) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/{user_id}"))

    def list_by_role(self, role_name: str) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url(f"/role/{role_name}"))

    def create(self, user: dict[str, Any]) -> Any:
        url = f"{self._settings.api_base()}/api/dacuser"
        try:
            return self._http_client.post_json(url, user)
        except ApiHttpError:
            return False

    def update_self(self, payload: dict[str, Any]) -> Any:
        try:
            return self._http_client.put_json(self._url(), payload)
        except ApiHttpError:
            return False

    def update(self, user: dict[str, Any], user_id: int) -> Any:
        filtered = copy.deepcopy(user)
        updated_user = filtered.get("updatedUser")
        if isinstance(updated_user, dict):
            for field_name in _READ_ONLY_USER_FIELDS:
                updated_user.pop(field_name, None)
        try:
            return self._http_client.put_json(self._url(f"/{user_id}"), filtered)
        except ApiHttpError:
            return False

    def register(self) -> dict[str, Any]:
        return self._http_client.post_json(self._url())

    def signing_officials(self) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url("/signing-officials"))

    def unassigned(self) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url("/institution/unassigned"))

    def add_role(self, user_id: int, role_id: int) -> Any:
        return self._http_client.request_lenient("PUT", self._url(f"/{user_id}/{role_id}")).json()

    def delete_role(self, user_id: int, role_id: int) -> Any:
        return self._http_client.request_lenient("DELETE", self._url(f"/{user_id}/{role_id}")).json()

    def relevant_datasets(self) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url("/me/dac/datasets"))

    def acknowledgements(self) -> dict[str, Any]:
        return self._http_client.get_json(self._url("/acknowledgements"))

    def accept_acknowledgements(self, *keys: str) -> dict[str, Any]:
        if not keys:
            return {}
        return self._http_client.post_json(self._url("/acknowledgements"), list(keys))

    def approved_datasets(self) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url("/me/researcher/datasets"))
