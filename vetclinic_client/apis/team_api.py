from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.http import HttpClient


class TeamApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_members(self) -> dict[str, Any]:
        return self._http_client.get_json("/team/members")

    def invite_member(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/team/invite", data)

    def get_pending_invites(self) -> dict[str, Any]:
        return self._http_client.get_json("/team/invites/pending")

    def cancel_invite(self, invite_id: str) -> dict[str, Any]:
        return self._http_client.delete_json(f"/team/invites/{invite_id}")

    def update_member_role(self, user_id: str, role: str) -> dict[str, Any]:
        return self._http_client.patch_json(f"/team/members/{user_id}/role", {"role": role})

    def remove_member(self, user_id: str) -> dict[str, Any]:
        return self._http_client.delete_json(f"/team/members/{user_id}")
