"""HTTP client for the budget API and display helpers for its data."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx

from kakeboor.types import (
    CategoryInfo,
    CategoryListResponse,
    MonthlyReportInfo,
    TransactionInfo,
    TransactionListResponse,
    TransactionType,
    ValidationError,
)

API_BASE = "/api"
DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ApiError(Exception):
    """Raised when a request fails or its response cannot be read."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ApiClient:
    """A synchronous client for the budget REST API; usable as a context manager."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, transport=transport)

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._client.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._client.request(method, f"{API_BASE}{path}", **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(str(exc)) from exc

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(str(exc), response.status_code) from exc

    @staticmethod
    def _ensure_ok(response: httpx.Response, what: str) -> None:
        if not response.is_success:
            raise ApiError(
                f"Failed to {what}: {response.status_code}", response.status_code
            )

    def get_categories(self) -> list[CategoryInfo]:
        """Fetch all categories."""
        response = self._send("GET", "/categories/")
        self._ensure_ok(response, "fetch categories")
        try:
            return CategoryListResponse.from_dict(self._json(response)).results
        except ValidationError as exc:
            raise ApiError(str(exc), response.status_code) from exc

    def get_transactions(self) -> list[TransactionInfo]:
        """Fetch all transactions."""
        response = self._send("GET", "/transactions/")
        self._ensure_ok(response, "fetch transactions")
        try:
            return TransactionListResponse.from_dict(self._json(response)).results
        except ValidationError as exc:
            raise ApiError(str(exc), response.status_code) from exc

    def get_monthly_report(
        self, year: int | None = None, month: int | None = None
    ) -> MonthlyReportInfo:
        """Fetch the report for a month; defaults to the current UTC month."""
        now = datetime.now(timezone.utc)
        year = now.year if year is None else year
        month = now.month if month is None else month
        response = self._send(
            "GET", "/reports/monthly/", params={"year": year, "month": month}
        )
        self._ensure_ok(response, "fetch report")
        try:
            return MonthlyReportInfo.from_dict(self._json(response))
        except ValidationError as exc:
            raise ApiError(str(exc), response.status_code) from exc

    def create_transaction(
        self,
        amount: int,
        category_id: int,
        description: str,
        transaction_date: str,
        transaction_type: TransactionType | str,
    ) -> TransactionInfo:
        """Record a new transaction and return it as stored."""
        body = {
            "amount": amount,
            "category_id": category_id,
            "description": description,
            "transaction_date": transaction_date,
            "transaction_type": str(transaction_type),
        }
        response = self._send("POST", "/transactions/", json=body)
        self._ensure_ok(response, "create transaction")
        try:
            return TransactionInfo.from_dict(self._json(response))
        except ValidationError as exc:
            raise ApiError(str(exc), response.status_code) from exc

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction by id."""
        response = self._send("DELETE", f"/transactions/{transaction_id}/")
        if not response.is_success and response.status_code != 204:
            raise ApiError(
                f"Failed to delete transaction: {response.status_code}",
                response.status_code,
            )


def format_amount(amount: int) -> str:
    """Format an amount with thousands separators and a leading minus if negative."""
    formatted = f"{abs(amount):,}"
    return f"-{formatted}" if amount < 0 else formatted