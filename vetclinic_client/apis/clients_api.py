from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class ClientsApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_clients(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/clients{build_query_string(params)}")

    def get_client(self, client_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/clients/{client_id}")

    def create_client(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/clients", data)

    def update_client(self, client_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/clients/{client_id}", data)

    def delete_client(self, client_id: str) -> dict[str, Any]:
        return self._http_client.delete_json(f"/clients/{client_id}")

    def get_financial_summary(self, client_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/clients/{client_id}/financial")

    def get_service_history(self, client_id: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/clients/{client_id}/history{build_query_string(params)}")

    # Properties

    def get_properties(self, client_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/clients/{client_id}/properties")

    def create_property(self, client_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(f"/clients/{client_id}/properties", data)

    def update_property(self, client_id: str, property_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/clients/{client_id}/properties/{property_id}", data)

    def delete_property(self, client_id: str, property_id: str) -> dict[str, Any]:
        return self._http_client.delete_json(f"/clients/{client_id}/properties/{property_id}")
