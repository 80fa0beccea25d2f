"""
Data Models Package

This package contains all Pydantic models used in Money Manager.
All data flowing through the ledger must conform to these schemas.
"""

from money_manager.models.ledger import (
    ALL,
    Account,
    Category,
    CategoryTotal,
    DashboardSummary,
    Division,
    FilterOptions,
    PeriodData,
    PeriodKind,
    Transaction,
    TransactionDraft,
    TransactionType,
    Transfer,
    TransferDraft,
)
from money_manager.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from money_manager.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Ledger models
    "ALL",
    "Account",
    "Category",
    "CategoryTotal",
    "DashboardSummary",
    "Division",
    "FilterOptions",
    "PeriodData",
    "PeriodKind",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "Transfer",
    "TransferDraft",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
