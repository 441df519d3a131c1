from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class AppointmentsApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_appointments(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/appointments{build_query_string(params)}")

    def get_appointment(self, appointment_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/appointments/{appointment_id}")

    def create_appointment(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/appointments", data)

    def update_appointment(self, appointment_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/appointments/{appointment_id}", data)

    def update_appointment_status(self, appointment_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/appointments/{appointment_id}/status", data)

    def add_animals_to_appointment(self, appointment_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(f"/appointments/{appointment_id}/animals", data)

    def remove_animals_from_appointment(self, appointment_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.delete_json(f"/appointments/{appointment_id}/animals", data)

    def update_animal_procedure(
        self,
        appointment_id: str,
        animal_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        return self._http_client.patch_json(
            f"/appointments/{appointment_id}/animals/{animal_id}/procedure",
            data,
        )

    def add_services_to_appointment(self, appointment_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(f"/appointments/{appointment_id}/services", data)

    def get_today_appointments(self) -> dict[str, Any]:
        return self._http_client.get_json("/appointments/today")

    def get_upcoming_appointments(self, days: int = 7) -> dict[str, Any]:
        return self._http_client.get_json(f"/appointments/upcoming{build_query_string({'days': days})}")

    def get_appointment_stats(self) -> dict[str, Any]:
        return self._http_client.get_json("/appointments/stats")

    # Services catalogue

    def get_services(self) -> dict[str, Any]:
        return self._http_client.get_json("/appointments/services")

    def create_service(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/appointments/services", data)

    def update_service(self, service_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/appointments/services/{service_id}", data)

    def delete_service(self, service_id: str) -> dict[str, Any]:
        return self._http_client.delete_json(f"/appointments/services/{service_id}")
