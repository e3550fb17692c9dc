"""Tag domain service."""

import logging
from typing import Optional

from pocketbook.database.base import Database
from pocketbook.domain.context import RequestContext, require_context
from pocketbook.domain.entities import Tag as TagEntity
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


class TagService:
    """Service for managing tags."""

    def __init__(self, db: Database):
        self.db = db

    def create_tag(self, ctx: RequestContext, name: str, description: Optional[str] = None) -> int:
        """Create a tag. Returns tag ID.

        Raises:
            ConflictError: If a tag with this name already exists
        """
        ctx = require_context(ctx)
        name = clean_name(name)
        if self.db.get_tag_by_name(ctx, name) is not None:
            raise ConflictError(duplicate_name("Tag", name))
        return self.db.create_tag(ctx, name=name, description=clean_description(description))

    def get_tag(self, ctx: RequestContext, tag_id: int) -> Optional[TagEntity]:
        return self.db.get_tag(require_context(ctx), tag_id)

    def get_tag_by_name(self, ctx: RequestContext, name: str) -> Optional[TagEntity]:
        return self.db.get_tag_by_name(require_context(ctx), name.strip())

    def list_tags(self, ctx: RequestContext) -> list[TagEntity]:
        return self.db.list_tags(require_context(ctx))

    def update_tag(
        self,
        ctx: RequestContext,
        tag_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        clear_description: bool = False,
    ) -> None:
        """Rename a tag and/or change its description.

        Raises:
            NotFoundError: If the tag doesn't exist
            ConflictError: If the new name is taken
        """
        ctx = require_context(ctx)
        if self.db.get_tag(ctx, tag_id) is None:
            raise NotFoundError(entity_not_found("Tag", tag_id))

        if name is not None:
            name = clean_name(name)
            existing = self.db.get_tag_by_name(ctx, name)
            if existing is not None and existing.id != tag_id:
                raise ConflictError(duplicate_name("Tag", name))

        self.db.update_tag(
            ctx,
            tag_id,
            name=name,
            description=None if clear_description else clean_description(description),
            update_description=clear_description,
        )

    def delete_tag(self, ctx: RequestContext, tag_id: int) -> None:
        """Delete a tag that no transaction uses.

        Raises:
            NotFoundError: If the tag doesn't exist
            DependencyError: If transactions still carry the tag
        """
        ctx = require_context(ctx)
        outcome = self.db.delete_tag_safe(ctx, tag_id)
        if not outcome.ok:
            logger.info("Refused to delete tag %s: in use by %s transaction(s)", tag_id, outcome.in_use_count)
            raise DependencyError(delete_blocked("Tag", outcome.in_use_count))
