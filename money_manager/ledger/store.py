"""
Ledger Store

The single source of truth for accounts, transactions and transfers.

GUARANTEES:
- An account's balance always equals its opening balance plus the net
  effect of every transaction and transfer that references it
- Transactions older than the edit window are never changed or removed
- A mutation either applies all of its balance changes or none of them
- Drafts that reference unknown accounts or categories are refused
  before anything changes

Persistence is a side effect after each mutation. A failed save is
logged and audited but does not undo the in-memory change.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

import structlog

from money_manager.audit import AuditLogger
from money_manager.config import get_settings
from money_manager.data.seed import (
    DEFAULT_CATEGORIES,
    default_accounts,
    sample_transactions,
    sample_transfers,
)
from money_manager.ledger import edit_lock, queries
from money_manager.ledger.errors import AccountInUseError, LedgerValidationError
from money_manager.models.audit import AuditEventBuilder, AuditEventType
from money_manager.models.ledger import (
    Account,
    Category,
    CategoryTotal,
    FilterOptions,
    Transaction,
    TransactionDraft,
    TransactionType,
    Transfer,
    TransferDraft,
)
from money_manager.models.validation import ValidationResult
from money_manager.services.storage import (
    Collection,
    LedgerStorageInterface,
    StorageError,
)
from money_manager.validation import LedgerValidator


logger = structlog.get_logger(__name__)

# Fields a caller may never overwrite through update_transaction
PROTECTED_FIELDS = frozenset({"id", "created_at"})


class LedgerStore:
    """
    In-process ledger backed by a persistence port.

    All operations are synchronous and complete before returning.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        categories: Iterable[Category] = DEFAULT_CATEGORIES,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
        edit_window_hours: Optional[int] = None,
    ):
        """
        Args:
            storage: Where the three collections are loaded from and saved to.
            categories: Static category configuration.
            audit_logger: Receives an event for every mutation and refusal.
            clock: Returns the current time. Defaults to ``datetime.now``.
            edit_window_hours: Overrides the configured edit window.
        """
        self._storage = storage
        self._categories: dict[str, Category] = {c.id: c for c in categories}
        self._audit = audit_logger or AuditLogger()
        self._clock = clock or datetime.now
        self._edit_window_hours = (
            edit_window_hours
            if edit_window_hours is not None
            else get_settings().ledger.edit_window_hours
        )
        self._validator = LedgerValidator(self._categories.values())

        self._transactions: list[Transaction] = []
        self._transfers: list[Transfer] = []
        self._accounts: dict[str, Account] = {}

        self.reload()

    # =========================================================================
    # LOADING AND PERSISTENCE
    # =========================================================================

    def reload(self) -> None:
        """
        Re-read every collection from storage.

        A collection that was never saved falls back to the bundled
        sample data, which is then saved so its ids stay stable.

        Raises:
            StorageError: If stored data cannot be read
        """
        now = self._clock()
        seeds = {
            Collection.TRANSACTIONS: lambda: sample_transactions(now),
            Collection.TRANSFERS: lambda: sample_transfers(now),
            Collection.ACCOUNTS: default_accounts,
        }

        loaded = {}
        for collection, seed in seeds.items():
            records = self._storage.load(collection)
            if records is None:
                records = seed()
                self._audit.log(AuditEventBuilder.seed_loaded(collection.value, len(records)))
                self._persist(collection, records)
            loaded[collection] = records

        self._transactions = list(loaded[Collection.TRANSACTIONS])
        self._transfers = list(loaded[Collection.TRANSFERS])
        self._accounts = {a.id: a for a in loaded[Collection.ACCOUNTS]}

    def _persist(self, collection: Collection, records: Sequence[Any]) -> None:
        try:
            self._storage.save(collection, records)
        except StorageError as e:
            logger.error("ledger_persist_failed", collection=collection.value, error=str(e))
            self._audit.log(AuditEventBuilder.persistence_failed(collection.value, str(e)))

    def _save_transactions(self) -> None:
        self._persist(Collection.TRANSACTIONS, self._transactions)

    def _save_transfers(self) -> None:
        self._persist(Collection.TRANSFERS, self._transfers)

    def _save_accounts(self) -> None:
        self._persist(Collection.ACCOUNTS, list(self._accounts.values()))

    # =========================================================================
    # READ-ONLY VIEWS
    # =========================================================================

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    @property
    def transfers(self) -> list[Transfer]:
        return list(self._transfers)

    @property
    def accounts(self) -> list[Account]:
        return list(self._accounts.values())

    @property
    def categories(self) -> list[Category]:
        return list(self._categories.values())

    @property
    def edit_window_hours(self) -> int:
        return self._edit_window_hours

    def now(self) -> datetime:
        return self._clock()

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    def get_transfer(self, transfer_id: str) -> Optional[Transfer]:
        return next((t for t in self._transfers if t.id == transfer_id), None)

    def get_account(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def categories_for(self, txn_type: TransactionType) -> list[Category]:
        """Categories offered for a transaction type."""
        return [c for c in self._categories.values() if c.type == txn_type]

    # =========================================================================
    # BALANCE BOOKKEEPING
    # =========================================================================

    def _apply_deltas(self, deltas: Mapping[str, Decimal]) -> None:
        """
        Apply balance changes to several accounts at once.

        Every new account state is computed before any is stored, so a
        failure leaves all balances untouched.
        """
        updated = {
            account_id: self._accounts[account_id].model_copy(
                update={"balance": self._accounts[account_id].balance + delta}
            )
            for account_id, delta in deltas.items()
            if delta
        }
        self._accounts.update(updated)

    def _reject(self, entity_type: str, result: ValidationResult) -> None:
        issues = [
            {"field": i.field, "type": i.issue_type, "message": i.message}
            for i in result.issues
            if i.severity == "error"
        ]
        self._audit.log(AuditEventBuilder.validation_failed(entity_type, issues))
        raise LedgerValidationError(result)

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def can_edit(self, created_at: datetime) -> bool:
        """True while the record is inside the edit window."""
        return edit_lock.can_edit(created_at, self._clock(), self._edit_window_hours)

    def add_transaction(self, draft: TransactionDraft) -> Transaction:
        """
        Record a new transaction and update its account's balance.

        Raises:
            LedgerValidationError: If the account or category is unknown,
                or the category doesn't fit the transaction type
        """
        result = self._validator.validate_transaction(draft, self._accounts)
        if not result.is_valid:
            self._reject("transaction", result)

        fields = draft.model_dump(include=set(TransactionDraft.model_fields))
        transaction = Transaction(**fields, created_at=self._clock())

        self._transactions.append(transaction)
        self._apply_deltas({transaction.account_id: transaction.signed_amount})

        self._save_transactions()
        self._save_accounts()
        self._audit.log(AuditEventBuilder.transaction_added(
            transaction.id,
            transaction.type.value,
            transaction.amount,
            transaction.account_id,
        ))
        return transaction

    def _editable(self, transaction_id: str, operation: str) -> Optional[Transaction]:
        transaction = self.get_transaction(transaction_id)
        if transaction is None:
            logger.info("transaction_not_found", transaction_id=transaction_id, operation=operation)
            return None
        if not self.can_edit(transaction.created_at):
            self._audit.log(AuditEventBuilder.edit_lock_rejected(
                transaction.id, operation, transaction.created_at
            ))
            return None
        return transaction

    def update_transaction(self, transaction_id: str, updates: Mapping[str, Any]) -> bool:
        """
        Merge ``updates`` into a transaction.

        The old balance effect is reverted and the new one applied, so a
        change of amount, type or account keeps every balance consistent.
        ``id``, ``created_at`` and unknown keys are refused outright.

        Returns:
            False if the transaction doesn't exist or is locked

        Raises:
            pydantic.ValidationError: If the merged record is malformed
            LedgerValidationError: If the merged record has bad references
                or ``updates`` names a field that cannot be updated
        """
        existing = self._editable(transaction_id, "update")
        if existing is None:
            return False

        unknown = sorted(
            k for k in updates
            if k not in TransactionDraft.model_fields or k in PROTECTED_FIELDS
        )
        if unknown:
            self._reject("transaction", ValidationResult(issues=[
                {
                    "field": k,
                    "issue_type": "unknown_field",
                    "message": f"'{k}' cannot be updated",
                }
                for k in unknown
            ]))

        merged = Transaction.model_validate({**existing.model_dump(), **updates})

        result = self._validator.validate_transaction(merged, self._accounts)
        if not result.is_valid:
            self._reject("transaction", result)

        deltas: dict[str, Decimal] = {existing.account_id: -existing.signed_amount}
        deltas[merged.account_id] = deltas.get(merged.account_id, Decimal("0")) + merged.signed_amount

        index = self._transactions.index(existing)
        self._transactions[index] = merged
        self._apply_deltas(deltas)

        self._save_transactions()
        self._save_accounts()
        changed = [
            name for name in TransactionDraft.model_fields
            if getattr(existing, name) != getattr(merged, name)
        ]
        self._audit.log(AuditEventBuilder.transaction_updated(merged.id, changed))
        return True

    def delete_transaction(self, transaction_id: str) -> bool:
        """
        Remove a transaction and revert its balance effect.

        Returns:
            False if the transaction doesn't exist or is locked
        """
        transaction = self._editable(transaction_id, "delete")
        if transaction is None:
            return False

        self._apply_deltas({transaction.account_id: -transaction.signed_amount})
        self._transactions.remove(transaction)

        self._save_transactions()
        self._save_accounts()
        self._audit.log(AuditEventBuilder.transaction_deleted(
            transaction.id, transaction.amount, transaction.account_id
        ))
        return True

    # =========================================================================
    # TRANSFERS
    # =========================================================================

    def add_transfer(self, draft: TransferDraft) -> Transfer:
        """
        Move money between two accounts.

        Both balances change together. Transfers have no edit window
        because they cannot be edited or deleted.

        Raises:
            LedgerValidationError: If either account is unknown
        """
        result = self._validator.validate_transfer(draft, self._accounts)
        if not result.is_valid:
            self._reject("transfer", result)

        fields = draft.model_dump(include=set(TransferDraft.model_fields))
        transfer = Transfer(**fields, created_at=self._clock())

        self._transfers.append(transfer)
        self._apply_deltas({
            transfer.from_account_id: -transfer.amount,
            transfer.to_account_id: transfer.amount,
        })

        self._save_transfers()
        self._save_accounts()
        self._audit.log(AuditEventBuilder.transfer_added(
            transfer.id,
            transfer.from_account_id,
            transfer.to_account_id,
            transfer.amount,
        ))
        return transfer

    def get_transfers_in_range(self, start: date, end: date) -> list[Transfer]:
        """Transfers dated within [start, end], both days included."""
        lower, upper = queries.start_of_day(start), queries.end_of_day(end)
        return [t for t in self._transfers if queries.within(t.date_time, lower, upper)]

    # =========================================================================
    # ACCOUNTS
    # =========================================================================

    def add_account(
        self,
        name: str,
        color: str = "#3b82f6",
        balance: Decimal = Decimal("0"),
        account_id: Optional[str] = None,
    ) -> Account:
        """Open an account with an opening balance."""
        fields = {"name": name, "color": color, "balance": balance}
        if account_id is not None:
            fields["id"] = account_id
        account = Account(**fields)
        if account.id in self._accounts:
            raise LedgerValidationError(ValidationResult(issues=[{
                "field": "id",
                "issue_type": "duplicate",
                "message": f"Account '{account.id}' already exists",
            }]))

        self._accounts[account.id] = account
        self._save_accounts()
        self._audit.log(AuditEventBuilder.account_changed(
            AuditEventType.ACCOUNT_ADDED, account.id, account.name
        ))
        return account

    def update_account(
        self,
        account_id: str,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> bool:
        """
        Rename or recolor an account.

        The balance is deliberately not editable here.
        """
        account = self._accounts.get(account_id)
        if account is None:
            return False

        fields = account.model_dump()
        if name is not None:
            fields["name"] = name
        if color is not None:
            fields["color"] = color
        self._accounts[account_id] = Account.model_validate(fields)

        self._save_accounts()
        self._audit.log(AuditEventBuilder.account_changed(
            AuditEventType.ACCOUNT_UPDATED, account_id, self._accounts[account_id].name
        ))
        return True

    def delete_account(self, account_id: str) -> bool:
        """
        Close an account.

        Raises:
            AccountInUseError: If any transaction or transfer references it
        """
        account = self._accounts.get(account_id)
        if account is None:
            return False

        in_use = any(t.account_id == account_id for t in self._transactions) or any(
            account_id in (t.from_account_id, t.to_account_id) for t in self._transfers
        )
        if in_use:
            raise AccountInUseError(
                f"Account '{account.name}' still has transactions or transfers"
            )

        del self._accounts[account_id]
        self._save_accounts()
        self._audit.log(AuditEventBuilder.account_changed(
            AuditEventType.ACCOUNT_DELETED, account_id, account.name
        ))
        return True

    def get_total_balance(self) -> Decimal:
        return sum((a.balance for a in self._accounts.values()), Decimal("0"))

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_filtered_transactions(self, filters: Optional[FilterOptions] = None) -> list[Transaction]:
        return queries.filter_transactions(self._transactions, filters or FilterOptions())

    def get_total_income(self, transactions: Iterable[Transaction]) -> Decimal:
        return queries.total_income(transactions)

    def get_total_expense(self, transactions: Iterable[Transaction]) -> Decimal:
        return queries.total_expense(transactions)

    def get_category_totals(self, transactions: Iterable[Transaction]) -> list[CategoryTotal]:
        return queries.category_totals(transactions, self._categories)
