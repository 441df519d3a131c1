from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.http import HttpClient


class SubscriptionApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_plans(self) -> dict[str, Any]:
        return self._http_client.get_json("/subscription/plans")

    def get_subscription_status(self) -> dict[str, Any]:
        return self._http_client.get_json("/subscription/status")

    def create_checkout_session(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/subscription/checkout", data)

    def create_portal_session(self) -> dict[str, Any]:
        return self._http_client.post_json("/subscription/portal")

    def cancel_subscription(self) -> dict[str, Any]:
        return self._http_client.post_json("/subscription/cancel")

    def resume_subscription(self) -> dict[str, Any]:
        return self._http_client.post_json("/subscription/resume")
