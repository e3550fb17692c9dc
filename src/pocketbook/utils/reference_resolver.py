"""Utility for resolving reference-data names or IDs to IDs."""

from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def resolve_reference(
    value: str | int,
    get_by_id: Callable[[int], Optional[T]],
    get_by_name: Callable[[str], Optional[T]],
    label: str,
) -> T:
    """Resolve a category, bank account or tag given by name or ID.

    Args:
        value: Name (str) or ID (int or string representation of int)
        get_by_id: Lookup by ID, scoped to the acting user
        get_by_name: Lookup by name, scoped to the acting user
        label: Entity label used in error messages

    Returns:
        The resolved entity

    Raises:
        ValueError: If nothing matches
    """
    # If it's already an integer, use it as ID
    if isinstance(value, int):
        entity = get_by_id(value)
        if entity is None:
            raise ValueError(f"{label} ID {value} not found")
        return entity

    # A name wins over a numeric-looking ID, so a tag called "2024" still resolves
    entity = get_by_name(value)
    if entity is not None:
        return entity

    try:
        entity_id = int(value)
    except (ValueError, TypeError):
        raise ValueError(f"{label} '{value}' not found")

    entity = get_by_id(entity_id)
    if entity is None:
        raise ValueError(f"{label} ID {entity_id} not found")
    return entity
