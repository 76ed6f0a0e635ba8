"""
Shared Validators Module.

Common validation utilities used across services.
"""
from typing import Any
from uuid import UUID

from django.core.exceptions import ValidationError


def validate_uuid(value: Any, field_name: str = "value") -> UUID:
    """Validate and convert a value to UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(f"Invalid UUID format for {field_name}")


def same_uuid(first: Any, second: Any) -> bool:
    """
    Compare two user or object ids by UUID value, so upper case or
    unhyphenated spellings match their canonical form.
    """
    try:
        return validate_uuid(first) == validate_uuid(second)
    except ValidationError:
        return str(first) == str(second)
