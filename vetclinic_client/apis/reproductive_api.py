from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class ReproductiveApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def record_heat(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/reproductive/heat", data)

    def record_insemination(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/reproductive/insemination", data)

    def record_pregnancy_check(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/reproductive/pregnancy-check", data)

    def record_birth(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/reproductive/birth", data)

    def record_abortion(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/reproductive/abortion", data)

    def record_andrological_eval(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/reproductive/andrological", data)

    def create_procedure(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/reproductive/procedures", data)

    def update_procedure_result(self, procedure_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/reproductive/procedures/{procedure_id}/result", data)

    def get_animal_history(self, animal_id: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(
            f"/reproductive/animals/{animal_id}/history{build_query_string(params)}"
        )

    def get_animal_procedures(self, animal_id: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(
            f"/reproductive/animals/{animal_id}/procedures{build_query_string(params)}"
        )

    def get_pregnant_animals(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/reproductive/pregnant{build_query_string(params)}")

    def get_stats(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/reproductive/stats{build_query_string(params)}")
