"""Per-user data reset."""

import logging
from typing import Optional

from pocketbook.database.base import Database
from pocketbook.domain.context import RequestContext, require_context
from pocketbook.domain.entities import DataResetResult

logger = logging.getLogger(__name__)


class DataResetService:
    """Service deleting everything a user owns except the account itself."""

    def __init__(self, db: Database):
        self.db = db

    def reset(self, ctx: Optional[RequestContext]) -> DataResetResult:
        """Delete the acting user's transactions, then their reference data.

        Other users' rows are never touched. The deletes run as one unit of
        work, so a failure leaves all data in place.

        Raises:
            AuthenticationError: If there is no acting user
            BackendError: If the store rejects the reset
        """
        ctx = require_context(ctx)
        with self.db.atomic():
            result = self.db.reset_user_data(ctx)

        logger.info(
            "Reset data for user %s: %s transactions, %s categories, %s tags, %s bank accounts deleted",
            ctx.user_id,
            result.transactions_deleted,
            result.categories_deleted,
            result.tags_deleted,
            result.bank_accounts_deleted,
        )
        return result
