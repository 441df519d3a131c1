from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class DashboardApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_overview(self) -> dict[str, Any]:
        return self._http_client.get_json("/dashboard/overview")

    def get_today_appointments(self) -> dict[str, Any]:
        return self._http_client.get_json("/dashboard/today")

    def get_alerts(self) -> dict[str, Any]:
        return self._http_client.get_json("/dashboard/alerts")

    def get_stats(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/dashboard/stats{build_query_string(params)}")
