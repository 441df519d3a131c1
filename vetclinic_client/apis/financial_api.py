from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class FinancialApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_financial_stats(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/financial/stats{build_query_string(params)}")

    def get_receivables(self) -> dict[str, Any]:
        return self._http_client.get_json("/financial/receivables")

    def get_revenue_by_category(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/financial/revenue-by-category{build_query_string(params)}")

    def get_overdue_invoices(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/financial/overdue{build_query_string(params)}")

    # Invoices

    def get_invoices(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/financial/invoices{build_query_string(params)}")

    def get_invoice(self, invoice_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/financial/invoices/{invoice_id}")

    def create_invoice(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/financial/invoices", data)

    def update_invoice(self, invoice_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/financial/invoices/{invoice_id}", data)

    def update_invoice_status(self, invoice_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/financial/invoices/{invoice_id}/status", data)

    def record_payment(self, invoice_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(f"/financial/invoices/{invoice_id}/payments", data)

    def generate_invoice_pdf(self, invoice_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/financial/invoices/{invoice_id}/pdf")
