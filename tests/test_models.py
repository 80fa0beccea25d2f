"""
Tests for Money Manager

Test strategy:
1. Unit tests for individual components (models, validators, queries)
2. Integration tests for the store and dashboard (with in-memory storage)
3. No real API calls in tests (use mocks)
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from pydantic import ValidationError

from money_manager.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from money_manager.models.ledger import (
    ALL,
    Account,
    Category,
    Division,
    FilterOptions,
    Transaction,
    TransactionDraft,
    TransactionType,
    TransferDraft,
)
from money_manager.models.validation import ValidationIssue, ValidationResult


def draft_fields(**overrides):
    fields = {
        "type": TransactionType.EXPENSE,
        "amount": Decimal("250.00"),
        "description": "Dinner",
        "category": "food",
        "division": Division.PERSONAL,
        "account_id": "cash",
        "date_time": datetime(2025, 3, 1, 20, 30),
    }
    fields.update(overrides)
    return fields


class TestTransactionModels:
    """Tests for transaction-related Pydantic models."""

    def test_transaction_draft_creation(self):
        """Test TransactionDraft model creation."""
        draft = TransactionDraft(**draft_fields())
        assert draft.amount == Decimal("250.00")
        assert draft.category == "food"

    def test_draft_rejects_zero_amount(self):
        """Test that zero amounts are rejected."""
        with pytest.raises(ValidationError):
            TransactionDraft(**draft_fields(amount=Decimal("0")))

    def test_draft_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            TransactionDraft(**draft_fields(amount=Decimal("-10")))

    def test_draft_rejects_more_than_two_decimals(self):
        with pytest.raises(ValidationError):
            TransactionDraft(**draft_fields(amount=Decimal("1.005")))

    def test_draft_strips_whitespace(self):
        draft = TransactionDraft(**draft_fields(description="  Dinner  "))
        assert draft.description == "Dinner"

    def test_signed_amount(self):
        """Expenses take money out, income puts it in."""
        assert TransactionDraft(**draft_fields()).signed_amount == Decimal("-250.00")
        salary = TransactionDraft(**draft_fields(type=TransactionType.INCOME, category="salary"))
        assert salary.signed_amount == Decimal("250.00")

    def test_transaction_gets_id_and_created_at(self):
        txn = Transaction(**draft_fields())
        assert txn.id
        assert isinstance(txn.created_at, datetime)

    def test_transactions_are_immutable(self):
        txn = Transaction(**draft_fields())
        with pytest.raises(ValidationError):
            txn.amount = Decimal("1")

    def test_enum_values_are_lowercase(self):
        assert [t.value for t in TransactionType] == ["income", "expense"]
        assert [d.value for d in Division] == ["personal", "office"]


class TestTransferModels:
    """Tests for transfer drafts."""

    def test_transfer_draft_creation(self):
        draft = TransferDraft(
            from_account_id="bank",
            to_account_id="cash",
            amount=Decimal("300"),
            date_time=datetime(2025, 3, 1),
        )
        assert draft.description == ""

    def test_same_account_transfer_rejected(self):
        """Test that a transfer needs two different accounts."""
        with pytest.raises(ValidationError, match="same account"):
            TransferDraft(
                from_account_id="bank",
                to_account_id="bank",
                amount=Decimal("300"),
                date_time=datetime(2025, 3, 1),
            )


class TestAccountAndCategoryModels:
    """Tests for reference data models."""

    def test_account_defaults(self):
        account = Account(name="Wallet")
        assert account.balance == Decimal("0")
        assert account.color == "#3b82f6"
        assert account.id

    def test_account_rejects_bad_color(self):
        with pytest.raises(ValidationError):
            Account(name="Wallet", color="blue")

    def test_category_default_icon(self):
        category = Category(id="misc", name="Misc", type=TransactionType.EXPENSE)
        assert category.icon == "Receipt"


class TestFilterOptions:
    """Tests for history filters."""

    def test_defaults_match_everything(self):
        filters = FilterOptions()
        assert filters.division == ALL
        assert filters.category == ALL
        assert filters.start_date is None

    def test_division_accepts_enum_value(self):
        assert FilterOptions(division="office").division == Division.OFFICE

    def test_inverted_range_rejected(self):
        with pytest.raises(ValidationError):
            FilterOptions(start_date=date(2025, 3, 10), end_date=date(2025, 3, 1))


class TestAuditModels:
    """Tests for audit-related models."""

    def test_long_description_is_truncated(self):
        """A long account id in the message never fails event construction."""
        event = AuditEventBuilder.transaction_added("t", "expense", Decimal("1"), "x" * 600)
        assert len(event.description) == 500
        assert event.description.endswith("...")

    def test_account_id_length_limit(self):
        with pytest.raises(ValidationError):
            Account(id="x" * 51, name="Long")

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            description="Recorded expense",
        )
        assert event.event_id is not None
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_id="txn-1",
            description="Deleted",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "transaction_deleted"
        assert log_dict["entity_id"] == "txn-1"

    def test_audit_event_builder_transaction_added(self):
        event = AuditEventBuilder.transaction_added("txn-1", "expense", Decimal("200"), "a")
        assert event.event_type == AuditEventType.TRANSACTION_ADDED
        assert event.details == {"type": "expense", "amount": "200", "account_id": "a"}

    def test_audit_event_builder_edit_lock_rejected(self):
        event = AuditEventBuilder.edit_lock_rejected("txn-1", "delete", datetime(2025, 3, 1, 8, 0))
        assert event.severity == AuditSeverity.WARNING
        assert event.details["operation"] == "delete"
        assert event.details["created_at"] == "2025-03-01T08:00:00"

    def test_audit_event_builder_account_changed(self):
        event = AuditEventBuilder.account_changed(AuditEventType.ACCOUNT_DELETED, "a", "Wallet")
        assert event.description == "Account deleted: Wallet"


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_validation_result_has_errors(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="category", issue_type="unknown_reference", message="Bad category"),
            ValidationIssue(field="description", issue_type="missing", message="No description", severity="warning"),
        ])
        assert result.has_errors
        assert result.error_count == 1
        assert not result.is_valid
        assert result.summary() == "Bad category"

    def test_validation_result_warnings_only(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="description", issue_type="missing", message="No description", severity="warning"),
        ])
        assert result.is_valid
        assert result.error_count == 0

    def test_severity_must_be_known(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")
