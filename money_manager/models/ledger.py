"""
Core Data Models for Money Manager

These models define the strict schemas for all data held by the ledger.
They are designed to:
1. Reject malformed input before the ledger is touched
2. Provide clear validation error messages
3. Be serializable for local storage, Sheets rows and the REST mirror

DESIGN DECISION: Amounts are Decimal, never float.
Balances are derived by repeated addition and subtraction, and float
rounding would make them drift away from the transaction history.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction. Categories carry the same affinity."""
    INCOME = "income"
    EXPENSE = "expense"


class Division(str, Enum):
    """
    Partition of transactions into personal and office spending.

    Used for filtering only; it has no effect on balances.
    """
    PERSONAL = "personal"
    OFFICE = "office"


class PeriodKind(str, Enum):
    """Calendar-aligned dashboard periods."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


ALL = "all"


def new_id() -> str:
    return str(uuid4())


# =============================================================================
# REFERENCE DATA
# =============================================================================

class Category(BaseModel):
    """
    A spending or earning category.

    Categories are static configuration; the ledger never mutates them.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field(
        default="Receipt",
        description="Symbolic icon name, resolved by the presentation layer"
    )
    type: TransactionType


class Account(BaseModel):
    """
    A money account (cash, bank, card).

    CRITICAL: balance is a cache of the account's history. Only the
    ledger store changes it, and only as a side effect of a transaction
    or transfer.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(default_factory=new_id, min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    balance: Decimal = Field(default=Decimal("0"))
    color: str = Field(
        default="#3b82f6",
        pattern=r"^#[0-9a-fA-F]{6}$",
        description="Display color as a hex string"
    )


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionDraft(BaseModel):
    """
    User input for a new transaction.

    Constructing a draft is the validation step: an incomplete or
    malformed form never reaches the store.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    type: TransactionType
    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Positive amount; the type decides the sign"
    )
    description: str = Field(default="", max_length=200)
    category: str = Field(..., min_length=1, description="Category id")
    division: Division
    account_id: str = Field(..., min_length=1)
    date_time: datetime = Field(
        ...,
        description="When the transaction happened (user editable)"
    )

    @property
    def signed_amount(self) -> Decimal:
        """Effect of this transaction on its account's balance."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount


class Transaction(TransactionDraft):
    """A recorded transaction."""

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the record was created; drives the edit lock"
    )


# =============================================================================
# TRANSFERS
# =============================================================================

class TransferDraft(BaseModel):
    """User input for moving money between two accounts."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    from_account_id: str = Field(..., min_length=1)
    to_account_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    description: str = Field(default="", max_length=200)
    date_time: datetime

    @model_validator(mode='after')
    def validate_distinct_accounts(self) -> 'TransferDraft':
        if self.from_account_id == self.to_account_id:
            raise ValueError("Cannot transfer to the same account")
        return self


class Transfer(TransferDraft):
    """A recorded transfer. Transfers are never edited."""

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=datetime.now)


# =============================================================================
# QUERY MODELS
# =============================================================================

class FilterOptions(BaseModel):
    """
    Transaction history filters for one viewing session.

    Never persisted.
    """

    division: Union[Division, Literal["all"]] = ALL
    category: str = ALL
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode='after')
    def validate_range(self) -> 'FilterOptions':
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class CategoryTotal(BaseModel):
    """Amount summed over one category."""

    category: str
    name: str
    icon: str = "Receipt"
    type: TransactionType
    amount: Decimal = Decimal("0")
    count: int = Field(default=0, ge=0)


class PeriodData(BaseModel):
    """Income and expense for one bucket of the comparison chart."""

    period: str = Field(..., description="Display label, e.g. 'Mar 2025'")
    start: datetime
    end: datetime
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


class DashboardSummary(BaseModel):
    """Everything the dashboard shows for one period."""

    kind: Optional[PeriodKind] = Field(
        default=None,
        description="None for a custom date range"
    )
    offset: int = Field(default=0, ge=0)
    label: str
    start: datetime
    end: datetime

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    total_account_balance: Decimal

    income_categories: list[CategoryTotal] = Field(default_factory=list)
    expense_categories: list[CategoryTotal] = Field(default_factory=list)
    period_comparison: list[PeriodData] = Field(default_factory=list)
    recent_transactions: list[Transaction] = Field(default_factory=list)
