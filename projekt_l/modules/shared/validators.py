"""
Projekt L Domain Validators

Purpose
-------
Validation helpers for XP awards and progression lookups. These validators
raise structured domain exceptions when validation fails.

Design Notes
------------
Validators:
- Accept data to validate as parameters
- Raise specific domain exceptions on failure
- Return None on success (raise-on-error pattern)

Usage
-----
    from projekt_l.modules.shared.validators import validate_xp_amount

    validate_xp_amount(250)
    validate_xp_amount(True)  # Raises: ValidationError
"""

from __future__ import annotations

from typing import Any


def validate_xp_amount(amount: Any, field: str = "amount") -> None:
    """
    Validate that an XP amount is a plain integer.

    Negative amounts are allowed (streak-break penalties); booleans and
    floats are not.

    Raises:
        ValidationError: If amount is not an int
    """
    from .exceptions import ValidationError

    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(
            field, f"XP amount must be an integer, got {type(amount).__name__}"
        )


def validate_identifier(value: Any, field: str) -> None:
    """
    Validate that a skill or source identifier is a non-empty string.

    Raises:
        ValidationError: If the value is not a non-blank string
    """
    from .exceptions import ValidationError

    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, f"{field} must be a non-empty string")
