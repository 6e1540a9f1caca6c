from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class MetricsApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def dataset_stats(self, dataset_id: int) -> dict[str, Any]:
        return self._http_client.get_json(f"{self._settings.api_base()}/metrics/dataset/{dataset_id}")
