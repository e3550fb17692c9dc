"""Transaction domain service."""

from typing import Iterable, Optional
from datetime import date
from decimal import Decimal
from pocketbook.database.base import Database
from pocketbook.domain.context import RequestContext, require_context
from pocketbook.domain.entities import (
    Category,
    Transaction as TransactionEntity,
    TransactionFilter,
    TransactionKind,
)
from pocketbook.domain.errors import (
    NotFoundError,
    ValidationError,
    category_kind_mismatch,
    entity_not_found,
)
from pocketbook.domain.validation import clean_amount, clean_date, clean_description


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_category(self, ctx: RequestContext, category_id: int, kind: TransactionKind) -> Category:
        category = self.db.get_category(ctx, category_id)
        if category is None:
            raise NotFoundError(entity_not_found("Category", category_id))
        if category.kind != kind:
            raise ValidationError(category_kind_mismatch(category.name, [category.kind.value], kind.value))
        return category

    def _require_bank_account(self, ctx: RequestContext, bank_account_id: int) -> None:
        if self.db.get_bank_account(ctx, bank_account_id) is None:
            raise NotFoundError(entity_not_found("Bank account", bank_account_id))

    def _require_tags(self, ctx: RequestContext, tag_ids: Iterable[int]) -> frozenset[int]:
        tag_ids = frozenset(tag_ids)
        for tag_id in sorted(tag_ids):
            if self.db.get_tag(ctx, tag_id) is None:
                raise NotFoundError(entity_not_found("Tag", tag_id))
        return tag_ids

    def create_transaction(
        self,
        ctx: RequestContext,
        kind: TransactionKind | str,
        date: date | str,
        amount: Decimal | int | float | str,
        category_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        tag_ids: Iterable[int] = (),
        notes: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            ctx: Acting user
            kind: spend, earn or save
            date: Transaction date
            amount: Non-negative amount with at most two decimal places
            category_id: Optional category ID, must be of the same kind
            bank_account_id: Optional bank account ID
            tag_ids: Optional tag IDs
            notes: Optional notes

        Returns:
            Transaction ID

        Raises:
            ValidationError: If a field is invalid or the category kind differs
            NotFoundError: If a referenced row doesn't exist for this user
        """
        ctx = require_context(ctx)
        kind = TransactionKind.parse(kind)
        txn_date = clean_date(date)
        txn_amount = clean_amount(amount)

        # Verify references if provided
        if category_id is not None:
            self._require_category(ctx, category_id, kind)
        if bank_account_id is not None:
            self._require_bank_account(ctx, bank_account_id)
        tags = self._require_tags(ctx, tag_ids)

        return self.db.create_transaction(
            ctx,
            date=txn_date,
            kind=kind,
            amount=txn_amount,
            category_id=category_id,
            bank_account_id=bank_account_id,
            tag_ids=tags,
            notes=clean_description(notes, field="notes"),
        )

    def get_transaction(self, ctx: RequestContext, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            ctx: Acting user
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(require_context(ctx), transaction_id)

    def list_transactions(
        self, ctx: RequestContext, filters: TransactionFilter = TransactionFilter()
    ) -> list[TransactionEntity]:
        """List transactions with filters.

        Args:
            ctx: Acting user
            filters: Date range, kind, reference and tag filters plus ordering

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(require_context(ctx), filters)

    def sum_amount(self, ctx: RequestContext, filters: TransactionFilter = TransactionFilter()) -> Decimal:
        """Total amount of the transactions matching filters."""
        return self.db.sum_transactions_amount(require_context(ctx), filters)

    def update_transaction(
        self,
        ctx: RequestContext,
        transaction_id: int,
        kind: Optional[TransactionKind | str] = None,
        date: Optional[date | str] = None,
        amount: Optional[Decimal | int | float | str] = None,
        category_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        tag_ids: Optional[Iterable[int]] = None,
        notes: Optional[str] = None,
        clear_category: bool = False,
        clear_bank_account: bool = False,
    ) -> None:
        """Update transaction fields.

        Args:
            ctx: Acting user
            transaction_id: Transaction ID to update
            kind: Optional new kind
            date: Optional new date
            amount: Optional new amount
            category_id: Optional new category ID
            bank_account_id: Optional new bank account ID
            tag_ids: Optional new tag set (empty clears all tags)
            notes: Optional new notes
            clear_category: If True, clear the category (category_id must be None)
            clear_bank_account: If True, clear the bank account

        Raises:
            NotFoundError: If transaction or a referenced row doesn't exist
            ValidationError: If a field is invalid, or the resulting kind and
                category kind disagree
        """
        ctx = require_context(ctx)
        txn = self.db.get_transaction(ctx, transaction_id)
        if txn is None:
            raise NotFoundError(entity_not_found("Transaction", transaction_id))

        if clear_category and category_id is not None:
            raise ValidationError("Cannot set both category_id and clear_category")
        if clear_bank_account and bank_account_id is not None:
            raise ValidationError("Cannot set both bank_account_id and clear_bank_account")

        new_kind = TransactionKind.parse(kind) if kind is not None else None
        effective_kind = new_kind or txn.kind

        # The kind rule applies to the category the transaction ends up with
        effective_category_id = None if clear_category else (category_id or txn.category_id)
        if effective_category_id is not None:
            self._require_category(ctx, effective_category_id, effective_kind)
        if bank_account_id is not None:
            self._require_bank_account(ctx, bank_account_id)
        tags = self._require_tags(ctx, tag_ids) if tag_ids is not None else None

        self.db.update_transaction(
            ctx,
            transaction_id,
            date=clean_date(date) if date is not None else None,
            kind=new_kind,
            amount=clean_amount(amount) if amount is not None else None,
            category_id=category_id,
            bank_account_id=bank_account_id,
            tag_ids=tags,
            notes=clean_description(notes, field="notes"),
            update_category=clear_category,
            update_bank_account=clear_bank_account,
        )

    def delete_transaction(self, ctx: RequestContext, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.db.delete_transactions(require_context(ctx), [transaction_id])

    def delete_transactions(self, ctx: RequestContext, transaction_ids: Iterable[int]) -> int:
        """Delete several transactions at once.

        Nothing is deleted unless every ID is one of the user's transactions.

        Returns:
            Number of transactions deleted

        Raises:
            NotFoundError: If any ID doesn't exist
        """
        return self.db.delete_transactions(require_context(ctx), list(transaction_ids))
