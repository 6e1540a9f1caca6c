from __future__ import annotations

import json
from typing import Any, Iterable

from duos_client.config import AppSettings
from duos_client.errors import TransportError
from duos_client.http import HttpClient

NAME_NOT_FOUND = -1


class DatasetApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def _url(self, path: str) -> str:
        return f"{self._settings.api_base()}{path}"

    def names(self) -> list[str]:
        return self._http_client.get_json(self._url("/api/dataset/datasetNames"))

    def registration_schema(self) -> dict[str, Any]:
        return self._http_client.get_json(self._url("/schemas/dataset-registration/v1"))

    def post_form(self, form: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(self._url("/api/dataset/v2"), form)

    def register(self, registration: dict[str, Any], files: dict[str, Any] | None = None) -> Any:
        return self._multipart("POST", self._url("/api/dataset/v3"), "dataset", registration, files)

    def list(self) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url("/api/dataset/v2"))

    def get_by_ids(self, ids: Iterable[int]) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url("/api/dataset/batch"), params={"ids": list(ids)})

    def autocomplete(self, query: str) -> list[dict[str, Any]]:
        return self._http_client.get_json(self._url("/api/dataset/autocomplete"), params={"query": query})

    def search_index(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        return self._http_client.post_json(self._url("/api/dataset/search/index"), query)

    def get(self, dataset_id: int) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/api/dataset/v2/{dataset_id}"))

    def download(self, object_ids: list[Any], file_name: str | None = None) -> tuple[str, bytes]:
        """Download dataset metadata; returns ``(file_name, content)``."""
        envelope = self._http_client.download(
            self._url("/api/dataset/download"),
            payload=object_ids,
            method="POST",
        )
        if file_name is None:
            file_name = _file_name_from_disposition(envelope.headers.get("Content-Disposition", ""))
        try:
            body = envelope.json() or {}
        except TypeError:
            body = json.loads(envelope.content())
        if not isinstance(body, dict):
            raise TypeError(f"Dataset download from {envelope.url} did not return a JSON object")
        return file_name, str(body.get("datasets", "")).encode("utf-8")

    def delete(self, dataset_id: int) -> int:
        return self._http_client.delete(self._url(f"/api/dataset/{dataset_id}")).status_code

    def update(self, dataset_id: int, dataset: dict[str, Any]) -> int:
        envelope = self._http_client.request_strict("PUT", self._url(f"/api/dataset/{dataset_id}"), json_body=dataset)
        return envelope.status_code

    def update_v3(self, dataset_id: int, dataset: dict[str, Any], files: dict[str, Any] | None = None) -> Any:
        return self._multipart("PUT", self._url(f"/api/dataset/v3/{dataset_id}"), "dataset", dataset, files)

    def validate_name(self, name: str) -> Any:
        """Return the id of the dataset using ``name``, or ``NAME_NOT_FOUND``."""
        try:
            envelope = self._http_client.request_lenient(
                "GET",
                self._url("/api/dataset/validate"),
                params={"name": name},
            )
        except TransportError:
            return NAME_NOT_FOUND
        if envelope.status_code == 404:
            return NAME_NOT_FOUND
        try:
            return envelope.json()
        except TypeError:
            return NAME_NOT_FOUND

    def get_study(self, study_id: int) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/api/dataset/study/{study_id}"))

    def update_study(self, study_id: int, study: dict[str, Any], files: dict[str, Any] | None = None) -> Any:
        return self._multipart("PUT", self._url(f"/api/dataset/study/{study_id}"), "study", study, files)

    def study_names(self) -> list[str]:
        return self._http_client.get_json(self._url("/api/dataset/studyNames"))

    def get_by_identifier(self, dataset_identifier: str) -> dict[str, Any]:
        return self._http_client.get_json(self._url(f"/api/tdr/{dataset_identifier}"))

    def _multipart(
        self,
        method: str,
        url: str,
        part_name: str,
        document: dict[str, Any],
        files: dict[str, Any] | None,
    ) -> Any:
        parts: dict[str, Any] = {part_name: (None, json.dumps(document), "application/json")}
        parts.update(files or {})
        return self._http_client.upload(url, files=parts, method=method).json()


def _file_name_from_disposition(disposition: str) -> str:
    for part in disposition.split(";"):
        key, _, value = part.strip().partition("=")
        if key.lower() == "filename" and value:
            return value.strip('"')
    return "datasets.txt"
