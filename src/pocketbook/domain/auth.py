"""Authentication domain service."""

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from pocketbook.database.base import Database
from pocketbook.domain.context import RequestContext, require_context
from pocketbook.domain.errors import (
    AuthenticationError,
    ConflictError,
    ValidationError,
    NOT_AUTHENTICATED,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
INVALID_CREDENTIALS = "Invalid login credentials"


def normalize_email(email: str) -> str:
    """Lower-case and strip an e-mail address, rejecting obvious garbage."""
    normalized = (email or "").strip().lower()
    if "@" not in normalized or normalized.startswith("@") or normalized.endswith("@"):
        raise ValidationError(f"Invalid e-mail address '{email}'")
    return normalized


class AuthService:
    """Service for sign-up, sign-in and session checks."""

    def __init__(self, db: Database):
        """Initialize auth service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_password_strength(self, password: str) -> None:
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    def sign_up(self, email: str, password: str) -> RequestContext:
        """Register a new user and return its session.

        Raises:
            ValidationError: If the e-mail or password is unacceptable
            ConflictError: If the e-mail is already registered
        """
        email = normalize_email(email)
        self._check_password_strength(password)

        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(f"User '{email}' already exists")

        user_id = self.db.create_user(email=email, password_hash=generate_password_hash(password))
        logger.info("Registered user %s", user_id)
        return RequestContext(user_id=user_id, email=email)

    def sign_in(self, email: str, password: str) -> RequestContext:
        """Verify credentials and return a session.

        Raises:
            AuthenticationError: If the e-mail is unknown or the password is wrong
        """
        try:
            email = normalize_email(email)
        except ValidationError:
            raise AuthenticationError(INVALID_CREDENTIALS)

        user = self.db.get_user_by_email(email)
        if user is None:
            raise AuthenticationError(INVALID_CREDENTIALS)
        password_hash = self.db.get_password_hash(user.id)
        if password_hash is None or not check_password_hash(password_hash, password):
            logger.info("Rejected sign-in for user %s", user.id)
            raise AuthenticationError(INVALID_CREDENTIALS)
        return RequestContext(user_id=user.id, email=user.email)

    def session_for(self, email: Optional[str]) -> RequestContext:
        """Resolve the session of an already-registered user.

        Raises:
            AuthenticationError: If no e-mail is given or it is not registered
        """
        if not email:
            raise AuthenticationError(NOT_AUTHENTICATED)
        try:
            email = normalize_email(email)
        except ValidationError:
            raise AuthenticationError(NOT_AUTHENTICATED)

        user = self.db.get_user_by_email(email)
        if user is None:
            raise AuthenticationError(NOT_AUTHENTICATED)
        return RequestContext(user_id=user.id, email=user.email)

    def change_password(self, ctx: Optional[RequestContext], current_password: str, new_password: str) -> None:
        """Replace the acting user's password.

        Raises:
            AuthenticationError: If not authenticated or current password is wrong
            ValidationError: If the new password is too short
        """
        ctx = require_context(ctx)
        password_hash = self.db.get_password_hash(ctx.user_id)
        if password_hash is None or not check_password_hash(password_hash, current_password):
            raise AuthenticationError(INVALID_CREDENTIALS)
        self._check_password_strength(new_password)
        self.db.update_password_hash(ctx.user_id, generate_password_hash(new_password))
        logger.info("Changed password for user %s", ctx.user_id)
