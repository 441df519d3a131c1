from __future__ import annotations

import json
from typing import Any

import pytest

from vetclinic_client.config import AppSettings
from vetclinic_client.http import ApiHttpError
from vetclinic_client.storage import MemoryStorage


USER = {
    "id": "u-1",
    "firstName": "Ana",
    "lastName": "Souza",
    "email": "a@b.com",
    "role": "user",
    "permissions": {"financial": True},
}
ACCOUNT = {
    "id": "acc-1",
    "name": "Clínica Boa Vista",
    "plan": "pro",
    "subscriptionStatus": "active",
    "trialEndsAt": None,
}


def login_response(user=None, account=None) -> dict[str, Any]:
    return {
        "success": True,
        "data": {
            "user": user or USER,
            "account": account or ACCOUNT,
            "tokens": {"accessToken": "access-123", "refreshToken": "refresh-456"},
        },
    }


class FakeAuthApi:
    def __init__(self, login_result=None, login_error=None, logout_error=None):
        self.login_result = login_result or login_response()
        self.login_error = login_error
        self.logout_error = logout_error
        self.calls: list[tuple[str, Any]] = []
        self.storage_seen_at_login: list[str] | None = None
        self.storage = None

    def login(self, data):
        self.calls.append(("login", data))
        if self.storage is not None:
            self.storage_seen_at_login = sorted(self.storage.keys())
        if self.login_error:
            raise self.login_error
        return self.login_result

    def register(self, data):
        self.calls.append(("register", data))
        return {"success": True, "data": {"user": {"email": data.get("email")}}}

    def logout(self):
        self.calls.append(("logout", None))
        if self.logout_error:
            raise self.logout_error
        return {"success": True}


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, content: bytes | None = None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        if content is not None:
            self.content = content
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")
        self.text = self.content.decode("utf-8", errors="replace")

    def json(self):
        return json.loads(self.content.decode("utf-8"))


class FakeRequestsSession:
    """Stands in for ``requests.Session``; replies with queued responses."""

    def __init__(self, responses: list[FakeResponse] | None = None):
        self.headers: dict[str, str] = {}
        self.responses = list(responses or [])
        self.requests: list[dict[str, Any]] = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.requests.append(
            {"method": method, "url": url, "headers": headers or {}, "json": json, "timeout": timeout}
        )
        if self.responses:
            return self.responses.pop(0)
        return FakeResponse(200, {"success": True, "data": []})


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        base_url="https://vet.example.com/api/v1",
        timeout_seconds=10,
        query_retry_attempts=2,
        query_stale_seconds=300,
        storage_path=str(tmp_path / "session.json"),
        log_level="INFO",
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def auth_api(storage) -> FakeAuthApi:
    api = FakeAuthApi()
    api.storage = storage
    return api


def api_error(status_code: int = 401, message: str = "Credenciais inválidas") -> ApiHttpError:
    return ApiHttpError(status_code, message, {"success": False, "message": message})
