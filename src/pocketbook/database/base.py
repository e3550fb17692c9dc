"""Abstract database interface.

Every owned-data operation takes the acting ``RequestContext`` and must only
ever see or touch rows owned by ``ctx.user_id``. A row owned by another user
is indistinguishable from a missing row.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from pocketbook.domain.context import RequestContext
from pocketbook.domain.entities import (
    User,
    Category,
    BankAccount,
    Tag,
    Transaction,
    TransactionFilter,
    TransactionKind,
    DeleteOutcome,
    DataResetResult,
)


class Database(ABC):
    """Abstract database interface for pocketbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Run the enclosed calls as one unit of work.

        Writes inside the block become visible together when it exits, and are
        all discarded if it raises. Store failures surface as BackendError.
        """
        pass

    @abstractmethod
    def savepoint(self) -> AbstractContextManager[None]:
        """Isolate the enclosed writes so a failure undoes only them.

        Constraint violations surface as ConflictError.
        """
        pass

    # User operations
    @abstractmethod
    def create_user(self, email: str, password_hash: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by e-mail address."""
        pass

    @abstractmethod
    def get_password_hash(self, user_id: int) -> Optional[str]:
        """Get the stored password hash for a user."""
        pass

    @abstractmethod
    def update_password_hash(self, user_id: int, password_hash: str) -> None:
        """Replace the stored password hash for a user."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, ctx: RequestContext, kind: TransactionKind, name: str, description: Optional[str] = None
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def upsert_category(
        self, ctx: RequestContext, kind: TransactionKind, name: str, description: Optional[str] = None
    ) -> tuple[int, bool]:
        """Insert a category unless (kind, name) already exists.

        Returns (category ID, inserted). An existing row is left untouched.
        """
        pass

    @abstractmethod
    def get_category(self, ctx: RequestContext, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, ctx: RequestContext, kind: TransactionKind, name: str) -> Optional[Category]:
        """Get category by kind and name."""
        pass

    @abstractmethod
    def find_categories_by_name(self, ctx: RequestContext, name: str) -> list[Category]:
        """Get all categories with a name, across kinds."""
        pass

    @abstractmethod
    def list_categories(self, ctx: RequestContext, kind: Optional[TransactionKind] = None) -> list[Category]:
        """List categories with usage counts, optionally filtered by kind."""
        pass

    @abstractmethod
    def update_category(
        self,
        ctx: RequestContext,
        category_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        update_description: bool = False,
    ) -> None:
        """Update category name and/or description.

        Args:
            update_description: If True, set description even if it's None (to clear it)
        """
        pass

    @abstractmethod
    def delete_category_safe(self, ctx: RequestContext, category_id: int) -> DeleteOutcome:
        """Delete a category unless transactions reference it."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(self, ctx: RequestContext, name: str, description: Optional[str] = None) -> int:
        """Create a bank account. Returns bank account ID."""
        pass

    @abstractmethod
    def upsert_bank_account(
        self, ctx: RequestContext, name: str, description: Optional[str] = None
    ) -> tuple[int, bool]:
        """Insert a bank account unless the name already exists."""
        pass

    @abstractmethod
    def get_bank_account(self, ctx: RequestContext, bank_account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID."""
        pass

    @abstractmethod
    def get_bank_account_by_name(self, ctx: RequestContext, name: str) -> Optional[BankAccount]:
        """Get bank account by name."""
        pass

    @abstractmethod
    def list_bank_accounts(self, ctx: RequestContext) -> list[BankAccount]:
        """List bank accounts with usage counts."""
        pass

    @abstractmethod
    def update_bank_account(
        self,
        ctx: RequestContext,
        bank_account_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        update_description: bool = False,
    ) -> None:
        """Update bank account name and/or description."""
        pass

    @abstractmethod
    def delete_bank_account_safe(self, ctx: RequestContext, bank_account_id: int) -> DeleteOutcome:
        """Delete a bank account unless transactions reference it."""
        pass

    # Tag operations
    @abstractmethod
    def create_tag(self, ctx: RequestContext, name: str, description: Optional[str] = None) -> int:
        """Create a tag. Returns tag ID."""
        pass

    @abstractmethod
    def upsert_tag(self, ctx: RequestContext, name: str, description: Optional[str] = None) -> tuple[int, bool]:
        """Insert a tag unless the name already exists."""
        pass

    @abstractmethod
    def get_tag(self, ctx: RequestContext, tag_id: int) -> Optional[Tag]:
        """Get tag by ID."""
        pass

    @abstractmethod
    def get_tag_by_name(self, ctx: RequestContext, name: str) -> Optional[Tag]:
        """Get tag by name."""
        pass

    @abstractmethod
    def list_tags(self, ctx: RequestContext) -> list[Tag]:
        """List tags with usage counts."""
        pass

    @abstractmethod
    def update_tag(
        self,
        ctx: RequestContext,
        tag_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        update_description: bool = False,
    ) -> None:
        """Update tag name and/or description."""
        pass

    @abstractmethod
    def delete_tag_safe(self, ctx: RequestContext, tag_id: int) -> DeleteOutcome:
        """Delete a tag unless transactions reference it."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        ctx: RequestContext,
        date: date,
        kind: TransactionKind,
        amount: Decimal,
        category_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        tag_ids: frozenset[int] = frozenset(),
        notes: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID.

        Raises:
            NotFoundError: If a referenced category, bank account or tag is
                not owned by the acting user
        """
        pass

    @abstractmethod
    def get_transaction(self, ctx: RequestContext, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self, ctx: RequestContext, filters: TransactionFilter = TransactionFilter()
    ) -> list[Transaction]:
        """List transactions matching filters."""
        pass

    @abstractmethod
    def sum_transactions_amount(
        self, ctx: RequestContext, filters: TransactionFilter = TransactionFilter()
    ) -> Decimal:
        """Sum amounts of transactions matching filters (pagination ignored)."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        ctx: RequestContext,
        transaction_id: int,
        date: Optional[date] = None,
        kind: Optional[TransactionKind] = None,
        amount: Optional[Decimal] = None,
        category_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        tag_ids: Optional[frozenset[int]] = None,
        notes: Optional[str] = None,
        update_category: bool = False,
        update_bank_account: bool = False,
    ) -> None:
        """Update transaction fields.

        Args:
            tag_ids: New tag set; None leaves tags unchanged
            update_category: If True, update category_id even if it's None (to clear it)
            update_bank_account: If True, update bank_account_id even if it's None
        """
        pass

    @abstractmethod
    def delete_transactions(self, ctx: RequestContext, transaction_ids: list[int]) -> int:
        """Delete transactions by ID, all or nothing. Returns deleted count.

        Raises:
            NotFoundError: If any ID is not an owned transaction
        """
        pass

    @abstractmethod
    def reset_user_data(self, ctx: RequestContext) -> DataResetResult:
        """Delete all transactions, then all reference data, of the acting user."""
        pass
