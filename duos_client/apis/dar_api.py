from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient

_SERVER_MANAGED_FIELDS = ("createDate", "sortDate", "data_access_request_id")


class DarApi:
    """Data access request endpoints (v2)."""

    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _url(self, path: str = "") -> str:
        return f"{self._settings.api_base()}/api/dar/v2{path}"

    def get_partial(self, dar_id: str) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/{dar_id}"))

    def update_draft(self, dar: dict[str, Any], reference_id: str) -> dict[str, Any]:
        return self._http_client.put_json(self._url(f"/draft/{reference_id}"), dar)

    def post_draft(self, dar: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(self._url("/draft/"), dar)

    def delete(self, dar_id: str) -> int:
        return self._http_client.delete(self._url(f"/{dar_id}")).status_code

    def post(self, dar: dict[str, Any]) -> dict[str, Any]:
        filtered = {key: value for key, value in dar.items() if key not in _SERVER_MANAGED_FIELDS}
        return self._http_client.post_json(self._url(), filtered)

    def download_document(self, reference_id: str, file_type: str) -> bytes:
        envelope = self._http_client.download(self._url(f"/{reference_id}/{file_type}"))
        return envelope.content()

    def upload_document(
        self,
        file_name: str,
        content: bytes,
        dar_id: str,
        file_type: str,
    ) -> Any:
        if not content:
            return None
        envelope = self._http_client.upload(
            self._url(f"/{dar_id}/{file_type}"),
            files={"file": (file_name, content)},
        )
        return envelope.json()
