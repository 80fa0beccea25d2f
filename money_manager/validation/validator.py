"""
Reference Validation

Two kinds of checks guard the ledger:

SCHEMA VALIDATION happens when a draft model is built: amounts must be
positive, required fields present, transfer accounts distinct. A form
that fails it never produces a draft.

REFERENCE VALIDATION happens here, against the ledger's current state:
- The account must exist
- The category must exist
- The category's type must match the transaction's type

IMPORTANT: Validation NEVER fixes references. It reports them, and the
store refuses the mutation.
"""

from typing import Iterable, Mapping

from money_manager.models.ledger import (
    Account,
    Category,
    TransactionDraft,
    TransferDraft,
)
from money_manager.models.validation import ValidationIssue, ValidationResult


class LedgerValidator:
    """Checks drafts against known accounts and categories."""

    def __init__(self, categories: Iterable[Category]):
        self._categories: dict[str, Category] = {c.id: c for c in categories}

    def _check_account(
        self,
        field: str,
        account_id: str,
        accounts: Mapping[str, Account],
    ) -> list[ValidationIssue]:
        if account_id in accounts:
            return []
        return [ValidationIssue(
            field=field,
            issue_type="unknown_reference",
            message=f"Account '{account_id}' does not exist",
            suggested_fix="Pick one of the existing accounts",
        )]

    def validate_transaction(
        self,
        draft: TransactionDraft,
        accounts: Mapping[str, Account],
    ) -> ValidationResult:
        issues = self._check_account("account_id", draft.account_id, accounts)

        category = self._categories.get(draft.category)
        if category is None:
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_reference",
                message=f"Category '{draft.category}' does not exist",
            ))
        elif category.type != draft.type:
            issues.append(ValidationIssue(
                field="category",
                issue_type="type_mismatch",
                message=(
                    f"Category '{category.name}' is for {category.type.value}, "
                    f"not {draft.type.value}"
                ),
                suggested_fix=f"Pick an {draft.type.value} category",
            ))

        if not draft.description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="No description given",
                severity="warning",
            ))

        return ValidationResult(issues=issues)

    def validate_transfer(
        self,
        draft: TransferDraft,
        accounts: Mapping[str, Account],
    ) -> ValidationResult:
        issues = self._check_account("from_account_id", draft.from_account_id, accounts)
        issues.extend(self._check_account("to_account_id", draft.to_account_id, accounts))
        # Drafts built through model_construct skip the model validator
        if draft.from_account_id == draft.to_account_id:
            issues.append(ValidationIssue(
                field="to_account_id",
                issue_type="same_account",
                message="Cannot transfer to the same account",
            ))
        return ValidationResult(issues=issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a user-friendly summary of validation results.
        """
        if result.is_valid:
            warnings = [i for i in result.issues if i.severity == "warning"]
            if warnings:
                return "Saved, with a note: " + "; ".join(w.message for w in warnings)
            return "All details look good."

        lines = [f"Please fix {result.error_count} problem(s):"]
        for issue in result.issues:
            if issue.severity != "error":
                continue
            line = f"- {issue.message}"
            if issue.suggested_fix:
                line += f" ({issue.suggested_fix})"
            lines.append(line)
        return "\n".join(lines)
