"""Store-generated identifiers"""

from typing import Any, Optional
from uuid import UUID, uuid4


def new_object_id() -> str:
    """Generate a new record identifier"""
    return uuid4().hex


def parse_object_id(value: Any) -> Optional[str]:
    """
    Parse the string form of an identifier.

    Returns the canonical form, or None when the value is not a valid id.
    Callers treat None as "not found".
    """
    if value is None:
        return None
    try:
        return UUID(str(value).strip()).hex
    except (ValueError, TypeError, AttributeError):
        return None
