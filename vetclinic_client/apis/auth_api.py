from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.http import HttpClient


class AuthApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def login(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/auth/login", data)

    def register(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/auth/register", data)

    def logout(self) -> dict[str, Any]:
        return self._http_client.post_json("/auth/logout")

    def refresh_token(self, refresh_token: str) -> dict[str, Any]:
        return self._http_client.post_json("/auth/refresh-token", {"refreshToken": refresh_token})

    def verify_email(self, token: str) -> dict[str, Any]:
        return self._http_client.post_json("/auth/verify-email", {"token": token})

    def resend_verification(self, email: str) -> dict[str, Any]:
        return self._http_client.post_json("/auth/resend-verification", {"email": email})

    def forgot_password(self, email: str) -> dict[str, Any]:
        return self._http_client.post_json("/auth/forgot-password", {"email": email})

    def reset_password(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/auth/reset-password", data)

    def get_profile(self) -> dict[str, Any]:
        return self._http_client.get_json("/auth/profile")

    def update_profile(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json("/auth/profile", data)

    def change_password(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/auth/change-password", data)
