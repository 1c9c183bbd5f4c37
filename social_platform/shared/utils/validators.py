# 📄 File: social_platform/shared/utils/validators.py

# 🧭 Purpose (Layman Explanation):
# Small checks used everywhere before we accept data: is this ID filled in, is this
# text more than just spaces, is this size a positive number, are these two people different.

# 🧪 Purpose (Technical Summary):
# Fail-fast argument guards shared by domain models and services. Each guard raises
# the platform ValidationError naming the offending parameter, and text guards
# return the trimmed value that should be stored.

# 🔗 Dependencies:
# - social_platform.shared.core.exceptions: ValidationError

# 🔄 Connected Modules / Calls From:
# Used by: every domain model validator and every service method's input check

from typing import Any, Optional

from social_platform.shared.core.exceptions import ValidationError


# ==============================================================================
# IDENTIFIER VALIDATION
# ==============================================================================

def require_id(value: Any, field: str) -> str:
    """
    Ensure an identifier is present.

    Args:
        value: Identifier to check
        field: Parameter name reported on failure

    Returns:
        The identifier as a string
    """
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field, constraint="required")
    return str(value)


def ensure_different(first: str, second: str, field: str, message: str) -> None:
    """Reject two identifiers that must not be equal (self-follow, self-message)."""
    if first == second:
        raise ValidationError(message, field=field, value=second, constraint="must_differ")


# ==============================================================================
# TEXT VALIDATION
# ==============================================================================

def require_text(value: Optional[str], field: str) -> str:
    """
    Ensure a string is non-empty after trimming.

    Returns:
        The trimmed string
    """
    if value is None or not str(value).strip():
        raise ValidationError(
            f"{field} cannot be empty or whitespace",
            field=field,
            constraint="not_blank",
        )
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Trim an optional string, collapsing blank input to None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


# ==============================================================================
# NUMERIC VALIDATION
# ==============================================================================

def require_positive(value: Optional[float], field: str) -> Any:
    """Ensure a size, duration or dimension is strictly greater than zero."""
    if value is None or value <= 0:
        raise ValidationError(
            f"{field} must be greater than zero",
            field=field,
            value=value,
            constraint="positive",
        )
    return value
