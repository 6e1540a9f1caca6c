from __future__ import annotations

from typing import Any, Iterable

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class MatchApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def find_batch(self, purpose_ids: Iterable[str] = ()) -> list[dict[str, Any]]:
        unique_ids = list(dict.fromkeys(purpose_ids))
        return self._http_client.get_json(
            f"{self._settings.api_base()}/api/match/purpose/batch",
            params={"purposeIds": ",".join(unique_ids)},
        )
