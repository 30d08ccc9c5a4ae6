"""Company profile endpoints."""

from __future__ import annotations

from typing import Any

from hr_dashboard.infrastructure.http.transport import Transport

UPDATE_FIELDS = ("name", "email", "phone", "address", "website", "industry", "size")


class CompanyApi:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get_company(self, company_id: int) -> Any:
        return self._transport.get(f"/api/companies/get/{company_id}")

    def list_companies(self) -> Any:
        return self._transport.get("/api/companies")

    def update_company(self, company_id: int, data: dict[str, Any]) -> dict[str, Any] | str:
        """
        Partial update. The backend answers with the updated company or with a
        plain confirmation string; both are passed through.
        """
        payload = {k: v for k, v in data.items() if k in UPDATE_FIELDS and v is not None}
        return self._transport.put(f"/api/companies/update/{company_id}", payload)
