from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from vetclinic_client.config import AppSettings

logger = logging.getLogger(__name__)


class ApiHttpError(RuntimeError):
    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class HttpClient:
    """JSON transport for the practice backend.

    Paths are relative to ``settings.base_url`` and may already carry a query
    string. The bearer token is read from ``token_provider`` on every call so
    that a fresh login is picked up without rebuilding the client.
    """

    def __init__(
        self,
        settings: AppSettings,
        token_provider: Callable[[], str | None] | None = None,
        session: requests.Session | None = None,
    ):
        self._settings = settings
        self._token_provider = token_provider
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    def set_token_provider(self, token_provider: Callable[[], str | None] | None) -> None:
        self._token_provider = token_provider

    def get_json(self, path: str) -> dict[str, Any]:
        return self._request_json("GET", path)

    def post_json(self, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._request_json("POST", path, payload)

    def patch_json(self, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._request_json("PATCH", path, payload)

    def delete_json(self, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._request_json("DELETE", path, payload)

    def get_bytes(self, path: str) -> bytes:
        response = self._send("GET", path, None, accept="application/octet-stream")
        return response.content

    def _request_json(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = self._send(method, path, payload)
        if not response.content:
            return {}
        return response.json()

    def _send(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None,
        accept: str | None = None,
    ) -> requests.Response:
        url = f"{self._settings.base_url}{path}"
        headers = {}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if accept:
            headers["Accept"] = accept

        logger.debug("%s %s", method, path)
        response = self._session.request(
            method,
            url,
            headers=headers,
            json=payload,
            timeout=self._settings.timeout_seconds,
        )

        if response.ok:
            return response

        raise self._build_error(response)

    @staticmethod
    def _build_error(response: requests.Response) -> ApiHttpError:
        body: Any = None
        try:
            body = response.json()
        except ValueError:
            body = None

        message = ""
        if isinstance(body, dict):
            message = str(body.get("message") or "").strip()
        if not message:
            message = f"HTTP {response.status_code}: {response.text[:500]}"

        logger.debug("Request failed with HTTP %s", response.status_code)
        return ApiHttpError(
            status_code=response.status_code,
            message=message,
            payload=body,
        )
