"""Category domain service."""

import logging
from typing import Optional

from pocketbook.database.base import Database
from pocketbook.domain.context import RequestContext, require_context
from pocketbook.domain.entities import Category as CategoryEntity, TransactionKind
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


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        ctx: RequestContext,
        kind: TransactionKind | str,
        name: str,
        description: Optional[str] = None,
    ) -> int:
        """Create a category.

        Manual creation fails on duplicates; bulk upload skips them instead.

        Args:
            ctx: Acting user
            kind: Category kind (spend, earn or save)
            name: Category name
            description: Optional description

        Returns:
            Category ID

        Raises:
            ValidationError: If kind or name is invalid
            ConflictError: If the name already exists for this kind
        """
        ctx = require_context(ctx)
        kind = TransactionKind.parse(kind)
        name = clean_name(name)
        description = clean_description(description)

        if self.db.get_category_by_name(ctx, kind, name) is not None:
            raise ConflictError(duplicate_name("Category", name, kind.value))

        return self.db.create_category(ctx, kind=kind, name=name, description=description)

    def get_category(self, ctx: RequestContext, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID.

        Args:
            ctx: Acting user
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(require_context(ctx), category_id)

    def get_category_by_name(
        self, ctx: RequestContext, kind: TransactionKind | str, name: str
    ) -> Optional[CategoryEntity]:
        """Get category by kind and name."""
        return self.db.get_category_by_name(require_context(ctx), TransactionKind.parse(kind), name.strip())

    def list_categories(
        self, ctx: RequestContext, kind: Optional[TransactionKind | str] = None
    ) -> list[CategoryEntity]:
        """List categories with usage counts.

        Args:
            ctx: Acting user
            kind: Optional kind to filter by

        Returns:
            List of category entities
        """
        if kind is not None:
            kind = TransactionKind.parse(kind)
        return self.db.list_categories(require_context(ctx), kind=kind)

    def update_category(
        self,
        ctx: RequestContext,
        category_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        clear_description: bool = False,
    ) -> None:
        """Rename a category and/or change its description.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If the new name already exists for the same kind
        """
        ctx = require_context(ctx)
        category = self.db.get_category(ctx, category_id)
        if category is None:
            raise NotFoundError(entity_not_found("Category", category_id))

        if name is not None:
            name = clean_name(name)
            existing = self.db.get_category_by_name(ctx, category.kind, name)
            if existing is not None and existing.id != category_id:
                raise ConflictError(duplicate_name("Category", name, category.kind.value))

        self.db.update_category(
            ctx,
            category_id,
            name=name,
            description=None if clear_description else clean_description(description),
            update_description=clear_description,
        )

    def delete_category(self, ctx: RequestContext, category_id: int) -> None:
        """Delete a category that no transaction references.

        Raises:
            NotFoundError: If the category doesn't exist
            DependencyError: If transactions still reference it
        """
        ctx = require_context(ctx)
        outcome = self.db.delete_category_safe(ctx, category_id)
        if not outcome.ok:
            logger.info(
                "Refused to delete category %s: in use by %s transaction(s)",
                category_id,
                outcome.in_use_count,
            )
            raise DependencyError(delete_blocked("Category", outcome.in_use_count))
