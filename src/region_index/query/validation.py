from __future__ import annotations

from typing import Optional

from region_index.core.exceptions import QueryValidationError
from region_index.loader.records import MAX_CODE_LENGTH, MAX_NAME_LENGTH


def validate_code(code: object, code_length: Optional[int] = None) -> str:
    """
    Normalize and validate a region code typed by a caller.

    Returns the stripped code. Raises QueryValidationError when the code is
    empty, contains non-digits, or does not have ``code_length`` characters
    (when a canonical length is configured).
    """
    if not isinstance(code, str):
        raise QueryValidationError(f"Code must be a string, got {type(code).__name__}")

    value = code.strip()
    if not value:
        raise QueryValidationError("Code must not be empty")
    if not (value.isascii() and value.isdigit()):
        raise QueryValidationError(f"Code must contain digits only: {value!r}")
    if code_length is not None and len(value) != code_length:
        raise QueryValidationError(
            f"Code must be exactly {code_length} digits, got {len(value)}: {value!r}"
        )
    if len(value) > MAX_CODE_LENGTH:
        raise QueryValidationError(f"Code is longer than {MAX_CODE_LENGTH} digits")
    return value


def validate_name(name: object) -> str:
    """Return the trimmed search text, or raise QueryValidationError."""
    if not isinstance(name, str):
        raise QueryValidationError(f"Name must be a string, got {type(name).__name__}")

    value = name.strip()
    if not value:
        raise QueryValidationError("Name must not be empty")
    if len(value) >= MAX_NAME_LENGTH:
        raise QueryValidationError(f"Name must be shorter than {MAX_NAME_LENGTH} characters")
    return value


def validate_limit(limit: object) -> int:
    # bool is an int subclass; True/False are not meaningful limits.
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise QueryValidationError(f"Limit must be an integer, got {limit!r}")
    if limit < 0:
        raise QueryValidationError(f"Limit must not be negative, got {limit}")
    return limit
