"""Request context identifying the acting user."""

from dataclasses import dataclass
from typing import Optional

from pocketbook.domain.errors import AuthenticationError, NOT_AUTHENTICATED


@dataclass(frozen=True)
class RequestContext:
    """Authenticated session passed explicitly to every store operation."""

    user_id: int
    email: str


def require_context(ctx: Optional[RequestContext]) -> RequestContext:
    """Return ctx, or raise if there is no authenticated user.

    Raises:
        AuthenticationError: If ctx is None
    """
    if ctx is None:
        raise AuthenticationError(NOT_AUTHENTICATED)
    return ctx
