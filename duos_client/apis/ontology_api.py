from __future__ import annotations

from typing import Any, Sequence

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class OntologyApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def autocomplete(self, partial: str) -> list[dict[str, Any]]:
        return self._http_client.get_json(f"{self._settings.ontology_base()}/autocomplete", params={"q": partial})

    def search_ids(self, ids: Sequence[str]) -> list[dict[str, Any]]:
        if not ids:
            return []
        envelope = self._http_client.request_lenient(
            "GET",
            f"{self._settings.ontology_base()}/search",
            params={"id": ",".join(ids)},
        )
        if envelope.status_code >= 400:
            return []
        return envelope.json()

    def translate(self, body: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(f"{self._settings.ontology_base()}/translate/paragraph", body)
