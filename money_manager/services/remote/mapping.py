"""
Wire Mapping for the Remote REST Backend

The backend speaks camelCase JSON with uppercase enum values
(INCOME/EXPENSE, OFFICE/PERSONAL) and plain JSON numbers for amounts.
In memory we use snake_case, lowercase enums and Decimal.

Every conversion between the two lives here, so the client itself
only moves envelopes around.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from money_manager.models.ledger import (
    Account,
    Category,
    CategoryTotal,
    Division,
    Transaction,
    TransactionDraft,
    TransactionType,
    Transfer,
    TransferDraft,
)


class RemotePeriodData(BaseModel):
    """One bar of the backend's period comparison."""

    period: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


class RemoteDashboardSummary(BaseModel):
    """Dashboard summary as computed by the backend."""

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    category_breakdown: list[CategoryTotal] = Field(default_factory=list)
    period_comparison: list[RemotePeriodData] = Field(default_factory=list)


# =============================================================================
# SCALARS
# =============================================================================

def type_to_wire(txn_type: TransactionType) -> str:
    return txn_type.value.upper()


def type_from_wire(value: str) -> TransactionType:
    return TransactionType(value.lower())


def division_to_wire(division: Division) -> str:
    return division.value.upper()


def division_from_wire(value: str) -> Division:
    return Division(value.lower())


def amount_to_wire(amount: Decimal) -> float:
    return float(amount)


def amount_from_wire(value: Any) -> Decimal:
    # str() first so 0.1 arrives as Decimal("0.1"), not its binary expansion
    return Decimal(str(value if value is not None else 0))


def datetime_to_wire(value: datetime) -> str:
    return value.isoformat()


# =============================================================================
# RECORDS
# =============================================================================

def transaction_to_wire(transaction: Union[TransactionDraft, Transaction]) -> dict:
    """Request body for create/update. Server-owned fields are left out."""
    return {
        "type": type_to_wire(transaction.type),
        "amount": amount_to_wire(transaction.amount),
        "description": transaction.description,
        "category": transaction.category,
        "division": division_to_wire(transaction.division),
        "accountId": transaction.account_id,
        "dateTime": datetime_to_wire(transaction.date_time),
    }


def transaction_from_wire(data: dict) -> Transaction:
    fields = {
        "id": data["id"],
        "type": type_from_wire(data["type"]),
        "amount": amount_from_wire(data["amount"]),
        "description": data.get("description") or "",
        "category": data["category"],
        "division": division_from_wire(data["division"]),
        "account_id": data["accountId"],
        "date_time": data["dateTime"],
    }
    if data.get("createdAt"):
        fields["created_at"] = data["createdAt"]
    return Transaction.model_validate(fields)


def transaction_updates_to_wire(updates: dict) -> dict:
    """Partial update body; only the given fields are sent."""
    converters = {
        "type": ("type", type_to_wire),
        "amount": ("amount", amount_to_wire),
        "description": ("description", str),
        "category": ("category", str),
        "division": ("division", division_to_wire),
        "account_id": ("accountId", str),
        "date_time": ("dateTime", datetime_to_wire),
    }
    body = {}
    for name, value in updates.items():
        if name not in converters:
            raise ValueError(f"Field cannot be updated remotely: {name}")
        wire_name, convert = converters[name]
        if name == "type":
            value = TransactionType(value)
        elif name == "division":
            value = Division(value)
        elif name == "amount":
            value = Decimal(str(value))
        body[wire_name] = convert(value)
    return body


def transfer_to_wire(transfer: Union[TransferDraft, Transfer]) -> dict:
    return {
        "fromAccountId": transfer.from_account_id,
        "toAccountId": transfer.to_account_id,
        "amount": amount_to_wire(transfer.amount),
        "description": transfer.description,
        "dateTime": datetime_to_wire(transfer.date_time),
    }


def transfer_from_wire(data: dict) -> Transfer:
    fields = {
        "id": data["id"],
        "from_account_id": data["fromAccountId"],
        "to_account_id": data["toAccountId"],
        "amount": amount_from_wire(data["amount"]),
        "description": data.get("description") or "",
        "date_time": data["dateTime"],
    }
    if data.get("createdAt"):
        fields["created_at"] = data["createdAt"]
    return Transfer.model_validate(fields)


def account_to_wire(account: Account, include_id: bool = True) -> dict:
    body = {
        "name": account.name,
        "balance": amount_to_wire(account.balance),
        "color": account.color,
    }
    if include_id:
        body["id"] = account.id
    return body


def account_from_wire(data: dict) -> Account:
    return Account(
        id=data["id"],
        name=data["name"],
        balance=amount_from_wire(data.get("balance")),
        color=data.get("color") or "#3b82f6",
    )


def category_to_wire(category: Category) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "icon": category.icon,
        "type": type_to_wire(category.type),
    }


def category_from_wire(data: dict) -> Category:
    return Category(
        id=data["id"],
        name=data["name"],
        icon=data.get("icon") or "Receipt",
        type=type_from_wire(data["type"]),
    )


# =============================================================================
# DASHBOARD
# =============================================================================

def category_summary_from_wire(data: dict) -> CategoryTotal:
    return CategoryTotal(
        category=data["categoryId"],
        name=data.get("categoryName") or data["categoryId"],
        icon=data.get("icon") or "Receipt",
        type=type_from_wire(data["type"]),
        amount=amount_from_wire(data.get("amount")),
        count=data.get("count") or 0,
    )


def dashboard_summary_from_wire(data: dict) -> RemoteDashboardSummary:
    return RemoteDashboardSummary(
        total_income=amount_from_wire(data.get("totalIncome")),
        total_expense=amount_from_wire(data.get("totalExpense")),
        balance=amount_from_wire(data.get("balance")),
        category_breakdown=[
            category_summary_from_wire(item)
            for item in data.get("categoryBreakdown") or []
        ],
        period_comparison=[
            RemotePeriodData(
                period=item["period"],
                income=amount_from_wire(item.get("income")),
                expense=amount_from_wire(item.get("expense")),
            )
            for item in data.get("periodComparison") or []
        ],
    )


def totals_from_wire(data: Optional[dict]) -> dict[str, Decimal]:
    data = data or {}
    return {
        "total_income": amount_from_wire(data.get("totalIncome")),
        "total_expense": amount_from_wire(data.get("totalExpense")),
        "balance": amount_from_wire(data.get("balance")),
    }
