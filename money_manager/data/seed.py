"""
Bundled reference and sample data.

Categories are static configuration. Accounts, transactions and
transfers are only used when a collection has never been persisted,
so a first run shows a populated dashboard instead of an empty one.
Sample records are dated relative to ``now`` so they always fall in
the current dashboard periods.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from money_manager.models.ledger import (
    Account,
    Category,
    Division,
    Transaction,
    TransactionType,
    Transfer,
)


EXPENSE = TransactionType.EXPENSE
INCOME = TransactionType.INCOME

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    # Expense categories
    Category(id="fuel", name="Fuel", icon="Fuel", type=EXPENSE),
    Category(id="movie", name="Movie", icon="Film", type=EXPENSE),
    Category(id="food", name="Food", icon="UtensilsCrossed", type=EXPENSE),
    Category(id="loan", name="Loan", icon="Landmark", type=EXPENSE),
    Category(id="medical", name="Medical", icon="Stethoscope", type=EXPENSE),
    Category(id="shopping", name="Shopping", icon="ShoppingBag", type=EXPENSE),
    Category(id="transport", name="Transport", icon="Car", type=EXPENSE),
    Category(id="utilities", name="Utilities", icon="Zap", type=EXPENSE),
    Category(id="entertainment", name="Entertainment", icon="Gamepad2", type=EXPENSE),
    Category(id="education", name="Education", icon="GraduationCap", type=EXPENSE),
    Category(id="other-expense", name="Other Expense", icon="Receipt", type=EXPENSE),
    # Income categories
    Category(id="salary", name="Salary", icon="Briefcase", type=INCOME),
    Category(id="freelance", name="Freelance", icon="Laptop", type=INCOME),
    Category(id="investment", name="Investment", icon="TrendingUp", type=INCOME),
    Category(id="bonus", name="Bonus", icon="Gift", type=INCOME),
    Category(id="rental", name="Rental Income", icon="Home", type=INCOME),
    Category(id="other-income", name="Other Income", icon="Coins", type=INCOME),
)


def default_accounts() -> list[Account]:
    return [
        Account(id="cash", name="Cash", balance=Decimal("5000"), color="#10b981"),
        Account(id="bank", name="Bank Account", balance=Decimal("25000"), color="#3b82f6"),
        Account(id="credit", name="Credit Card", balance=Decimal("0"), color="#ef4444"),
    ]


# (type, amount, description, category, division, account, age)
_SAMPLE_TRANSACTIONS = (
    (INCOME, "75000", "Monthly salary", "salary", Division.OFFICE, "bank", timedelta(days=25)),
    (EXPENSE, "3500", "Grocery shopping", "food", Division.PERSONAL, "cash", timedelta(days=20)),
    (EXPENSE, "2000", "Fuel for car - office commute", "fuel", Division.OFFICE, "cash", timedelta(days=18)),
    (EXPENSE, "800", "Movie with family", "movie", Division.PERSONAL, "cash", timedelta(days=15)),
    (EXPENSE, "1500", "Doctor consultation", "medical", Division.PERSONAL, "bank", timedelta(days=12)),
    (INCOME, "15000", "Freelance project payment", "freelance", Division.PERSONAL, "bank", timedelta(days=10)),
    (EXPENSE, "5000", "Online shopping", "shopping", Division.PERSONAL, "credit", timedelta(days=8)),
    (EXPENSE, "1200", "Electricity bill", "utilities", Division.PERSONAL, "bank", timedelta(days=7)),
    (EXPENSE, "2500", "Fuel for weekend trip", "fuel", Division.PERSONAL, "cash", timedelta(days=5)),
    (EXPENSE, "3000", "Team lunch", "food", Division.OFFICE, "bank", timedelta(days=4)),
    (INCOME, "5000", "Investment returns", "investment", Division.PERSONAL, "bank", timedelta(days=3)),
    (EXPENSE, "1800", "Uber rides to office", "transport", Division.OFFICE, "cash", timedelta(days=2)),
    (EXPENSE, "500", "Netflix subscription", "entertainment", Division.PERSONAL, "credit", timedelta(days=1)),
    (EXPENSE, "2000", "Online course", "education", Division.PERSONAL, "bank", timedelta(hours=2)),
)

_SAMPLE_TRANSFERS = (
    ("bank", "cash", "10000", "ATM withdrawal", timedelta(days=22)),
    ("bank", "credit", "5000", "Credit card payment", timedelta(days=6)),
)


def sample_transactions(now: Optional[datetime] = None) -> list[Transaction]:
    now = now or datetime.now()
    return [
        Transaction(
            id=f"sample-txn-{index}",
            type=txn_type,
            amount=Decimal(amount),
            description=description,
            category=category,
            division=division,
            account_id=account_id,
            date_time=now - age,
            created_at=now - age,
        )
        for index, (txn_type, amount, description, category, division, account_id, age)
        in enumerate(_SAMPLE_TRANSACTIONS, start=1)
    ]


def sample_transfers(now: Optional[datetime] = None) -> list[Transfer]:
    now = now or datetime.now()
    return [
        Transfer(
            id=f"sample-transfer-{index}",
            from_account_id=source,
            to_account_id=destination,
            amount=Decimal(amount),
            description=description,
            date_time=now - age,
            created_at=now - age,
        )
        for index, (source, destination, amount, description, age)
        in enumerate(_SAMPLE_TRANSFERS, start=1)
    ]
