from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class NotificationsApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_notifications(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/notifications{build_query_string(params)}")

    def mark_as_read(self, notification_id: str) -> dict[str, Any]:
        return self._http_client.patch_json(f"/notifications/{notification_id}/read")

    def mark_all_as_read(self) -> dict[str, Any]:
        return self._http_client.post_json("/notifications/mark-all-read")

    def delete_notification(self, notification_id: str) -> dict[str, Any]:
        return self._http_client.delete_json(f"/notifications/{notification_id}")

    def register_push_token(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/notifications/push-token", data)

    def remove_push_token(self) -> dict[str, Any]:
        return self._http_client.delete_json("/notifications/push-token")
