from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class ReportsApi:
    """Report downloads. Every method returns the raw document bytes."""

    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def generate_appointment_report(self, appointment_id: str) -> bytes:
        return self._http_client.get_bytes(f"/reports/appointments/{appointment_id}")

    def generate_animal_report(self, animal_id: str) -> bytes:
        return self._http_client.get_bytes(f"/reports/animals/{animal_id}")

    def generate_invoice_report(self, invoice_id: str) -> bytes:
        return self._http_client.get_bytes(f"/reports/invoices/{invoice_id}")

    def generate_financial_report(self, params: dict[str, Any] | None = None) -> bytes:
        return self._http_client.get_bytes(f"/reports/financial{build_query_string(params)}")
