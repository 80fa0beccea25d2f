"""
REST Client for a Remote Money Manager Backend

Every endpoint answers with the same envelope:

    {"success": true, "message": "...", "data": ...}

A call succeeds only when the HTTP status is 2xx AND ``success`` is true.
Anything else (HTTP error, transport failure, unparseable body,
``success: false``) becomes a RemoteApiError carrying the backend's
message when there is one.

The client keeps no cache and never retries.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

import requests
import structlog

from money_manager.config import get_settings
from money_manager.config.settings import RemoteApiSettings
from money_manager.models.ledger import (
    ALL,
    Account,
    Category,
    CategoryTotal,
    Division,
    FilterOptions,
    Transaction,
    TransactionDraft,
    TransactionType,
    Transfer,
    TransferDraft,
)
from money_manager.services.remote import mapping
from money_manager.services.remote.mapping import RemoteDashboardSummary

logger = structlog.get_logger(__name__)

DEFAULT_ERROR_MESSAGE = "API request failed"


class RemoteApiError(Exception):
    """Raised when the backend call fails or reports failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MoneyManagerApiClient:
    """
    Thin mirror of the backend's REST API.

    Returns domain models; wire naming and enum casing are handled in
    ``mapping``.
    """

    def __init__(
        self,
        settings: Optional[RemoteApiSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or get_settings().remote_api
        self.base_url = self.settings.base_url
        self.timeout = self.settings.timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    # =========================================================================
    # ENVELOPE
    # =========================================================================

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> Any:
        """Perform a call and return the envelope's ``data``."""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("api_transport_error", method=method, url=url, error=str(e))
            raise RemoteApiError(f"{DEFAULT_ERROR_MESSAGE}: {e}") from e

        try:
            envelope = response.json()
        except ValueError:
            envelope = None

        if not isinstance(envelope, dict):
            envelope = {}

        if not response.ok or not envelope.get("success"):
            message = envelope.get("message") or DEFAULT_ERROR_MESSAGE
            logger.warning(
                "api_request_failed",
                method=method,
                url=url,
                status_code=response.status_code,
                message=message,
            )
            raise RemoteApiError(message, status_code=response.status_code)

        logger.debug("api_request_ok", method=method, url=url, status_code=response.status_code)
        return envelope.get("data")

    @staticmethod
    def _range_params(start: datetime, end: datetime) -> dict:
        return {
            "startDate": mapping.datetime_to_wire(start),
            "endDate": mapping.datetime_to_wire(end),
        }

    @staticmethod
    def _optional_range_params(
        start: Optional[datetime],
        end: Optional[datetime],
    ) -> Optional[dict]:
        """Either bound may be left open; None when both are."""
        params = {}
        if start is not None:
            params["startDate"] = mapping.datetime_to_wire(start)
        if end is not None:
            params["endDate"] = mapping.datetime_to_wire(end)
        return params or None

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def list_transactions(self, filters: Optional[FilterOptions] = None) -> list[Transaction]:
        params = {}
        if filters is not None:
            if filters.division != ALL:
                params["division"] = mapping.division_to_wire(Division(filters.division))
            if filters.category != ALL:
                params["category"] = filters.category
            if filters.start_date is not None:
                params["startDate"] = mapping.datetime_to_wire(
                    datetime.combine(filters.start_date, datetime.min.time())
                )
            if filters.end_date is not None:
                params["endDate"] = mapping.datetime_to_wire(
                    datetime.combine(filters.end_date, datetime.max.time())
                )
        data = self._request("GET", "/transactions", params=params or None)
        return [mapping.transaction_from_wire(item) for item in data or []]

    def get_transaction(self, transaction_id: str) -> Transaction:
        return mapping.transaction_from_wire(
            self._request("GET", f"/transactions/{transaction_id}")
        )

    def create_transaction(self, draft: TransactionDraft) -> Transaction:
        data = self._request("POST", "/transactions", json=mapping.transaction_to_wire(draft))
        return mapping.transaction_from_wire(data)

    def update_transaction(self, transaction_id: str, updates: dict) -> Transaction:
        data = self._request(
            "PUT",
            f"/transactions/{transaction_id}",
            json=mapping.transaction_updates_to_wire(updates),
        )
        return mapping.transaction_from_wire(data)

    def delete_transaction(self, transaction_id: str) -> None:
        self._request("DELETE", f"/transactions/{transaction_id}")

    # =========================================================================
    # ACCOUNTS
    # =========================================================================

    def list_accounts(self) -> list[Account]:
        return [mapping.account_from_wire(item) for item in self._request("GET", "/accounts") or []]

    def get_account(self, account_id: str) -> Account:
        return mapping.account_from_wire(self._request("GET", f"/accounts/{account_id}"))

    def get_total_balance(self) -> Decimal:
        return mapping.amount_from_wire(self._request("GET", "/accounts/total-balance"))

    def create_account(self, account: Account) -> Account:
        data = self._request("POST", "/accounts", json=mapping.account_to_wire(account))
        return mapping.account_from_wire(data)

    def update_account(self, account_id: str, account: Account) -> Account:
        data = self._request(
            "PUT",
            f"/accounts/{account_id}",
            json=mapping.account_to_wire(account, include_id=False),
        )
        return mapping.account_from_wire(data)

    def delete_account(self, account_id: str) -> None:
        self._request("DELETE", f"/accounts/{account_id}")

    # =========================================================================
    # TRANSFERS
    # =========================================================================

    def list_transfers(self) -> list[Transfer]:
        return [mapping.transfer_from_wire(item) for item in self._request("GET", "/transfers") or []]

    def get_transfer(self, transfer_id: str) -> Transfer:
        return mapping.transfer_from_wire(self._request("GET", f"/transfers/{transfer_id}"))

    def get_transfers_by_date_range(self, start: datetime, end: datetime) -> list[Transfer]:
        data = self._request("GET", "/transfers/date-range", params=self._range_params(start, end))
        return [mapping.transfer_from_wire(item) for item in data or []]

    def create_transfer(self, draft: TransferDraft) -> Transfer:
        data = self._request("POST", "/transfers", json=mapping.transfer_to_wire(draft))
        return mapping.transfer_from_wire(data)

    def delete_transfer(self, transfer_id: str) -> None:
        self._request("DELETE", f"/transfers/{transfer_id}")

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    def list_categories(self) -> list[Category]:
        return [mapping.category_from_wire(item) for item in self._request("GET", "/categories") or []]

    def list_categories_by_type(self, txn_type: TransactionType) -> list[Category]:
        data = self._request("GET", f"/categories/type/{mapping.type_to_wire(txn_type)}")
        return [mapping.category_from_wire(item) for item in data or []]

    def get_category(self, category_id: str) -> Category:
        return mapping.category_from_wire(self._request("GET", f"/categories/{category_id}"))

    def create_category(self, category: Category) -> Category:
        data = self._request("POST", "/categories", json=mapping.category_to_wire(category))
        return mapping.category_from_wire(data)

    def update_category(self, category_id: str, category: Category) -> Category:
        data = self._request(
            "PUT",
            f"/categories/{category_id}",
            json=mapping.category_to_wire(category),
        )
        return mapping.category_from_wire(data)

    def delete_category(self, category_id: str) -> None:
        self._request("DELETE", f"/categories/{category_id}")

    # =========================================================================
    # DASHBOARD
    # =========================================================================

    def get_weekly_summary(self) -> RemoteDashboardSummary:
        return mapping.dashboard_summary_from_wire(self._request("GET", "/dashboard/summary/weekly"))

    def get_monthly_summary(self) -> RemoteDashboardSummary:
        return mapping.dashboard_summary_from_wire(self._request("GET", "/dashboard/summary/monthly"))

    def get_yearly_summary(self) -> RemoteDashboardSummary:
        return mapping.dashboard_summary_from_wire(self._request("GET", "/dashboard/summary/yearly"))

    def get_custom_summary(self, start: datetime, end: datetime) -> RemoteDashboardSummary:
        data = self._request(
            "GET",
            "/dashboard/summary/custom",
            params=self._range_params(start, end),
        )
        return mapping.dashboard_summary_from_wire(data)

    def get_category_summary(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[CategoryTotal]:
        data = self._request(
            "GET",
            "/dashboard/category-summary",
            params=self._optional_range_params(start, end),
        )
        return [mapping.category_summary_from_wire(item) for item in data or []]

    def get_totals(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> dict[str, Decimal]:
        data = self._request(
            "GET",
            "/dashboard/totals",
            params=self._optional_range_params(start, end),
        )
        return mapping.totals_from_wire(data)
