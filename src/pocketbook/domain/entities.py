"""Domain model entities for pocketbook.

These are pure data classes representing business concepts, independent of
database schema. Every owned entity carries its ``owner_id`` so callers can
assert isolation without going back to the store.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pocketbook.domain.errors import ValidationError


class TransactionKind(str, Enum):
    """Classification shared by transactions and categories."""

    SPEND = "spend"
    EARN = "earn"
    SAVE = "save"

    @classmethod
    def parse(cls, value: Any) -> "TransactionKind":
        """Parse a kind from user input.

        Raises:
            ValidationError: If value is not one of spend, earn, save
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(kind.value for kind in cls)
        raise ValidationError(f"Invalid type {value!r}: must be one of {allowed}")


@dataclass(frozen=True)
class User:
    """Registered user."""

    id: int
    email: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity, scoped to one owner and one kind."""

    id: int
    owner_id: int
    kind: TransactionKind
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    in_use_count: int = 0


@dataclass(frozen=True)
class BankAccount:
    """Bank account domain entity."""

    id: int
    owner_id: int
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    in_use_count: int = 0


@dataclass(frozen=True)
class Tag:
    """Tag domain entity."""

    id: int
    owner_id: int
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    in_use_count: int = 0


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``category_name``, ``bank_account_name`` and ``tags`` are resolved from the
    referenced rows when the transaction is read.
    """

    id: int
    owner_id: int
    date: date
    kind: TransactionKind
    amount: Decimal
    category_id: Optional[int]
    bank_account_id: Optional[int]
    tag_ids: frozenset[int]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    category_name: Optional[str] = None
    bank_account_name: Optional[str] = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class TransactionFilter:
    """Filters shared by transaction listing and amount sums."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    kind: Optional[TransactionKind] = None
    category_id: Optional[int] = None
    bank_account_id: Optional[int] = None
    tags_any: tuple[str, ...] = ()
    tags_all: tuple[str, ...] = ()
    order_by: str = "date"
    descending: bool = True
    limit: Optional[int] = None
    offset: Optional[int] = None


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a guarded delete of a reference-data row."""

    ok: bool
    in_use_count: int


@dataclass(frozen=True)
class PeriodTotal:
    """Total amount per kind for a month or year (period is its first day)."""

    period: date
    kind: TransactionKind
    total: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Total amount per kind and category for a month or year."""

    period: date
    kind: TransactionKind
    category: Optional[str]
    total: Decimal


@dataclass(frozen=True)
class TagSetTotal:
    """Total amount per kind and exact tag set.

    ``period`` is None for the all-time view.
    """

    period: Optional[date]
    kind: TransactionKind
    tags: tuple[str, ...]
    total: Decimal


@dataclass(frozen=True)
class RowError:
    """Per-row failure in a bulk upload, 1-based in input order."""

    index: int
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "error": self.error}


UPLOAD_SECTIONS = ("categories", "bank_accounts", "tags", "transactions")


@dataclass(frozen=True)
class BulkUploadResult:
    """Outcome of a bulk upload.

    A failed result carries only ``error``; row-level failures leave
    ``success`` set and are listed in ``details``.
    """

    success: bool
    error: Optional[str] = None
    categories_inserted: int = 0
    bank_accounts_inserted: int = 0
    tags_inserted: int = 0
    transactions_inserted: int = 0
    details: dict[str, tuple[RowError, ...]] = field(default_factory=dict)

    @classmethod
    def failure(cls, error: str) -> "BulkUploadResult":
        return cls(success=False, error=error)

    @property
    def error_count(self) -> int:
        return sum(len(errors) for errors in self.details.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the upload result wire shape."""
        if not self.success:
            return {"success": False, "error": self.error}

        result: dict[str, Any] = {
            "success": True,
            "categories_inserted": self.categories_inserted,
            "bank_accounts_inserted": self.bank_accounts_inserted,
            "tags_inserted": self.tags_inserted,
            "transactions_inserted": self.transactions_inserted,
        }
        details = {
            section: [row.to_dict() for row in errors]
            for section, errors in self.details.items()
            if errors
        }
        if details:
            result["details"] = details
        return result


@dataclass(frozen=True)
class DataResetResult:
    """Counts of rows removed by a per-user data reset."""

    success: bool
    transactions_deleted: int
    categories_deleted: int
    tags_deleted: int
    bank_accounts_deleted: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "transactions_deleted": self.transactions_deleted,
            "categories_deleted": self.categories_deleted,
            "tags_deleted": self.tags_deleted,
            "bank_accounts_deleted": self.bank_accounts_deleted,
        }
