"""Bulk upload of reference data and transactions."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional, TypeVar

from pocketbook.database.base import Database
from pocketbook.domain.context import RequestContext, require_context
from pocketbook.domain.entities import BulkUploadResult, RowError, TransactionKind
from pocketbook.domain.errors import (
    AuthenticationError,
    BackendError,
    DomainError,
    NotFoundError,
    UploadFormatError,
    ValidationError,
    category_kind_mismatch,
    name_not_found,
)
from pocketbook.domain.upload_document import UploadDocument, parse_upload_document
from pocketbook.domain.validation import (
    clean_amount,
    clean_date,
    clean_description,
    clean_name,
    clean_name_list,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BulkUploadOptions:
    """Switches for a bulk upload.

    auto_create_references: create categories, bank accounts and tags named by
        a transaction when they don't exist yet, instead of rejecting the row.
    """

    auto_create_references: bool = False


@dataclass(frozen=True)
class CategoryRow:
    kind: TransactionKind
    name: str
    description: Optional[str]


@dataclass(frozen=True)
class NamedRow:
    name: str
    description: Optional[str]


@dataclass(frozen=True)
class TransactionRow:
    date: date
    kind: TransactionKind
    amount: Decimal
    category: Optional[str]
    bank_account: Optional[str]
    tags: tuple[str, ...]
    notes: Optional[str]


def _require_object(raw: Any) -> dict:
    if not isinstance(raw, dict):
        raise ValidationError("Row must be a JSON object")
    return raw


def parse_category_row(raw: Any) -> CategoryRow:
    """Validate a raw category row."""
    row = _require_object(raw)
    if row.get("type") is None:
        raise ValidationError("Missing type")
    return CategoryRow(
        kind=TransactionKind.parse(row.get("type")),
        name=clean_name(row.get("name")),
        description=clean_description(row.get("description")),
    )


def parse_named_row(raw: Any) -> NamedRow:
    """Validate a raw bank account or tag row."""
    row = _require_object(raw)
    return NamedRow(
        name=clean_name(row.get("name")),
        description=clean_description(row.get("description")),
    )


def parse_transaction_row(raw: Any) -> TransactionRow:
    """Validate a raw transaction row.

    Optional reference fields may be omitted, null or blank.
    """
    row = _require_object(raw)
    if row.get("type") is None:
        raise ValidationError("Missing type")
    return TransactionRow(
        date=clean_date(row.get("date")),
        kind=TransactionKind.parse(row.get("type")),
        amount=clean_amount(row.get("amount")),
        category=clean_description(row.get("category"), field="category"),
        bank_account=clean_description(row.get("bank_account"), field="bank_account"),
        tags=clean_name_list(row.get("tags")),
        notes=clean_description(row.get("notes"), field="notes"),
    )


def validate_rows(
    rows: tuple[Any, ...], parse: Callable[[Any], T]
) -> tuple[list[tuple[int, T]], list[RowError]]:
    """Validate every row of a section.

    Returns:
        (valid rows with their 1-based index, row errors)
    """
    valid: list[tuple[int, T]] = []
    errors: list[RowError] = []
    for index, raw in enumerate(rows, start=1):
        try:
            valid.append((index, parse(raw)))
        except DomainError as e:
            errors.append(RowError(index=index, error=str(e)))
    return valid, errors


class BulkUploadService:
    """Service for bulk uploads.

    Sections are written in dependency order (categories, bank accounts,
    tags, transactions) so transactions can reference rows from the same
    document. Each row is written in its own savepoint and the whole upload
    in one unit of work.
    """

    def __init__(self, db: Database):
        """Initialize bulk upload service.

        Args:
            db: Database instance
        """
        self.db = db

    def upload_payload(
        self,
        ctx: Optional[RequestContext],
        payload: bytes | str,
        options: BulkUploadOptions = BulkUploadOptions(),
    ) -> BulkUploadResult:
        """Decode and upload a raw JSON payload.

        Document-level problems are returned as a failed result.
        """
        try:
            document = parse_upload_document(payload)
        except UploadFormatError as e:
            return BulkUploadResult.failure(str(e))
        return self.upload(ctx, document, options)

    def upload(
        self,
        ctx: Optional[RequestContext],
        document: UploadDocument,
        options: BulkUploadOptions = BulkUploadOptions(),
    ) -> BulkUploadResult:
        """Upload a decoded document.

        Args:
            ctx: Acting user
            document: Decoded upload document
            options: Upload switches

        Returns:
            BulkUploadResult. Rows that fail are listed in ``details`` and do
            not affect the other rows. Unrecoverable failures roll back every
            write and return a failed result without counts.
        """
        try:
            ctx = require_context(ctx)
            return self._upload(ctx, document, options)
        except (AuthenticationError, BackendError, UploadFormatError) as e:
            logger.warning("Bulk upload failed: %s", e)
            return BulkUploadResult.failure(str(e))

    def _upload(
        self, ctx: RequestContext, document: UploadDocument, options: BulkUploadOptions
    ) -> BulkUploadResult:
        categories, category_errors = validate_rows(document.categories, parse_category_row)
        bank_accounts, bank_account_errors = validate_rows(document.bank_accounts, parse_named_row)
        tags, tag_errors = validate_rows(document.tags, parse_named_row)
        transactions, transaction_errors = validate_rows(document.transactions, parse_transaction_row)

        counts = {"categories": 0, "bank_accounts": 0, "tags": 0, "transactions": 0}

        with self.db.atomic():
            counts["categories"] += self._write_rows(
                categories,
                category_errors,
                lambda row: self.db.upsert_category(ctx, row.kind, row.name, row.description)[1],
            )
            counts["bank_accounts"] += self._write_rows(
                bank_accounts,
                bank_account_errors,
                lambda row: self.db.upsert_bank_account(ctx, row.name, row.description)[1],
            )
            counts["tags"] += self._write_rows(
                tags,
                tag_errors,
                lambda row: self.db.upsert_tag(ctx, row.name, row.description)[1],
            )
            for index, row in transactions:
                created: dict[str, int] = {}
                try:
                    with self.db.savepoint():
                        self._insert_transaction(ctx, row, options, created)
                except DomainError as e:
                    if isinstance(e, BackendError):
                        raise
                    transaction_errors.append(RowError(index=index, error=str(e)))
                    continue
                counts["transactions"] += 1
                # Auto-created references only count once their row is kept
                for section, count in created.items():
                    counts[section] += count

        details = {
            "categories": category_errors,
            "bank_accounts": bank_account_errors,
            "tags": tag_errors,
            "transactions": transaction_errors,
        }
        result = BulkUploadResult(
            success=True,
            categories_inserted=counts["categories"],
            bank_accounts_inserted=counts["bank_accounts"],
            tags_inserted=counts["tags"],
            transactions_inserted=counts["transactions"],
            details={
                section: tuple(sorted(errors, key=lambda e: e.index))
                for section, errors in details.items()
                if errors
            },
        )

        logger.info(
            "Bulk upload for user %s: %s categories, %s bank accounts, %s tags, "
            "%s transactions inserted, %s row error(s)",
            ctx.user_id,
            result.categories_inserted,
            result.bank_accounts_inserted,
            result.tags_inserted,
            result.transactions_inserted,
            result.error_count,
        )
        for section, errors in result.details.items():
            for error in errors:
                logger.debug("Rejected %s row %s: %s", section, error.index, error.error)
        return result

    def _write_rows(
        self,
        rows: list[tuple[int, T]],
        errors: list[RowError],
        write: Callable[[T], bool],
    ) -> int:
        """Upsert validated reference rows one savepoint at a time.

        Returns:
            Number of rows actually inserted
        """
        inserted = 0
        for index, row in rows:
            try:
                with self.db.savepoint():
                    if write(row):
                        inserted += 1
            except DomainError as e:
                if isinstance(e, BackendError):
                    raise
                errors.append(RowError(index=index, error=str(e)))
        return inserted

    def _insert_transaction(
        self,
        ctx: RequestContext,
        row: TransactionRow,
        options: BulkUploadOptions,
        created: dict[str, int],
    ) -> int:
        category_id = None
        if row.category is not None:
            category_id = self._resolve_category(ctx, row.category, row.kind, options, created)

        bank_account_id = None
        if row.bank_account is not None:
            account = self.db.get_bank_account_by_name(ctx, row.bank_account)
            if account is not None:
                bank_account_id = account.id
            elif options.auto_create_references:
                bank_account_id, inserted = self.db.upsert_bank_account(ctx, row.bank_account)
                created["bank_accounts"] = created.get("bank_accounts", 0) + int(inserted)
            else:
                raise NotFoundError(name_not_found("Bank account", row.bank_account))

        tag_ids = set()
        for tag_name in row.tags:
            tag = self.db.get_tag_by_name(ctx, tag_name)
            if tag is not None:
                tag_ids.add(tag.id)
            elif options.auto_create_references:
                tag_id, inserted = self.db.upsert_tag(ctx, tag_name)
                tag_ids.add(tag_id)
                created["tags"] = created.get("tags", 0) + int(inserted)
            else:
                raise NotFoundError(name_not_found("Tag", tag_name))

        return self.db.create_transaction(
            ctx,
            date=row.date,
            kind=row.kind,
            amount=row.amount,
            category_id=category_id,
            bank_account_id=bank_account_id,
            tag_ids=frozenset(tag_ids),
            notes=row.notes,
        )

    def _resolve_category(
        self,
        ctx: RequestContext,
        name: str,
        kind: TransactionKind,
        options: BulkUploadOptions,
        created: dict[str, int],
    ) -> int:
        """Find the category of the transaction's kind by name.

        Raises:
            ValidationError: If the name only exists under other kinds
            NotFoundError: If the name doesn't exist and auto-create is off
        """
        category = self.db.get_category_by_name(ctx, kind, name)
        if category is not None:
            return category.id

        others = self.db.find_categories_by_name(ctx, name)
        if others:
            raise ValidationError(category_kind_mismatch(name, [c.kind.value for c in others], kind.value))

        if not options.auto_create_references:
            raise NotFoundError(name_not_found("Category", name))
        category_id, inserted = self.db.upsert_category(ctx, kind, name)
        created["categories"] = created.get("categories", 0) + int(inserted)
        return category_id
