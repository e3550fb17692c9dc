"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist for the acting user."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class AuthenticationError(DomainError):
    """No authenticated user, or the credentials were rejected."""


class UploadFormatError(ValidationError):
    """Upload document rejected before any data is written."""


class BackendError(DomainError):
    """The data store rejected the whole operation."""


NOT_AUTHENTICATED = "Not authenticated"


def entity_not_found(entity: str, entity_id: int) -> str:
    """Return message for a missing (or foreign) entity."""
    return f"{entity} {entity_id} not found"


def name_not_found(entity: str, name: str) -> str:
    """Return message for a reference name that resolves to no row."""
    return f"{entity} '{name}' not found"


def duplicate_name(entity: str, name: str, kind: str | None = None) -> str:
    """Return message for a manual create/rename that hits a uniqueness key."""
    if kind is not None:
        return f"{entity} '{name}' already exists for type '{kind}'"
    return f"{entity} '{name}' already exists"


def category_kind_mismatch(name: str, category_kinds: list[str], kind: str) -> str:
    """Return message when a transaction names a category of another kind."""
    found = ", ".join(category_kinds)
    return (
        f"Category '{name}' has type {found} and cannot be used "
        f"for {kind} transactions"
    )


def delete_blocked(entity: str, in_use_count: int) -> str:
    """Return message when a reference-data row is still referenced."""
    return f"{entity} is in use by {in_use_count} transaction(s)"
