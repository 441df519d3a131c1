from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class SanitaryApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    # Vaccinations

    def get_vaccinations(self) -> dict[str, Any]:
        return self._http_client.get_json("/sanitary/vaccinations")

    def create_vaccination(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/sanitary/vaccinations", data)

    def apply_vaccination(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/sanitary/vaccinations/apply", data)

    def apply_batch_vaccination(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/sanitary/vaccinations/apply-batch", data)

    def get_animal_vaccinations(self, animal_id: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(
            f"/sanitary/animals/{animal_id}/vaccinations{build_query_string(params)}"
        )

    def get_vaccination_alerts(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/sanitary/alerts/vaccinations{build_query_string(params)}")

    # Health records

    def create_health_record(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/sanitary/health-records", data)

    def get_animal_health_records(self, animal_id: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(
            f"/sanitary/animals/{animal_id}/health-records{build_query_string(params)}"
        )

    # Campaigns

    def get_campaigns(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/sanitary/campaigns{build_query_string(params)}")

    def create_campaign(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/sanitary/campaigns", data)

    def get_campaign(self, campaign_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/sanitary/campaigns/{campaign_id}")

    def update_campaign_status(self, campaign_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/sanitary/campaigns/{campaign_id}/status", data)

    def get_stats(self) -> dict[str, Any]:
        return self._http_client.get_json("/sanitary/stats")
