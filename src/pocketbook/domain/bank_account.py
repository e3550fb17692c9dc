"""Bank account domain service."""

import logging
from typing import Optional

from pocketbook.database.base import Database
from pocketbook.domain.context import RequestContext, require_context
from pocketbook.domain.entities import BankAccount as BankAccountEntity
from pocketbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    delete_blocked,
    duplicate_name,
    entity_not_found,
)
from pocketbook.domain.validation import clean_description, clean_name

logger = logging.getLogger(__name__)


class BankAccountService:
    """Service for managing bank accounts."""

    def __init__(self, db: Database):
        """Initialize bank account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_bank_account(self, ctx: RequestContext, name: str, description: Optional[str] = None) -> int:
        """Create a new bank account.

        Args:
            ctx: Acting user
            name: Account name
            description: Optional description

        Returns:
            Bank account ID

        Raises:
            ConflictError: If account name already exists
        """
        ctx = require_context(ctx)
        name = clean_name(name)

        # Check if account with same name exists
        if self.db.get_bank_account_by_name(ctx, name) is not None:
            raise ConflictError(duplicate_name("Bank account", name))

        return self.db.create_bank_account(ctx, name=name, description=clean_description(description))

    def get_bank_account(self, ctx: RequestContext, bank_account_id: int) -> Optional[BankAccountEntity]:
        """Get bank account by ID, or None if not found."""
        return self.db.get_bank_account(require_context(ctx), bank_account_id)

    def get_bank_account_by_name(self, ctx: RequestContext, name: str) -> Optional[BankAccountEntity]:
        """Get bank account by name, or None if not found."""
        return self.db.get_bank_account_by_name(require_context(ctx), name.strip())

    def list_bank_accounts(self, ctx: RequestContext) -> list[BankAccountEntity]:
        """List all bank accounts of the acting user with usage counts."""
        return self.db.list_bank_accounts(require_context(ctx))

    def update_bank_account(
        self,
        ctx: RequestContext,
        bank_account_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        clear_description: bool = False,
    ) -> None:
        """Rename a bank account and/or change its description.

        Raises:
            NotFoundError: If account not found
            ConflictError: If name already exists
        """
        ctx = require_context(ctx)
        account = self.db.get_bank_account(ctx, bank_account_id)
        if account is None:
            raise NotFoundError(entity_not_found("Bank account", bank_account_id))

        # Check for duplicate names (excluding current account)
        if name is not None:
            name = clean_name(name)
            existing = self.db.get_bank_account_by_name(ctx, name)
            if existing is not None and existing.id != bank_account_id:
                raise ConflictError(duplicate_name("Bank account", name))

        self.db.update_bank_account(
            ctx,
            bank_account_id,
            name=name,
            description=None if clear_description else clean_description(description),
            update_description=clear_description,
        )

    def delete_bank_account(self, ctx: RequestContext, bank_account_id: int) -> None:
        """Delete a bank account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If transactions still reference the account
        """
        ctx = require_context(ctx)
        outcome = self.db.delete_bank_account_safe(ctx, bank_account_id)
        if not outcome.ok:
            logger.info(
                "Refused to delete bank account %s: in use by %s transaction(s)",
                bank_account_id,
                outcome.in_use_count,
            )
            raise DependencyError(delete_blocked("Bank account", outcome.in_use_count))
