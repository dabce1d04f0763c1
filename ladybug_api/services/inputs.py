"""Validation helpers shared by the endpoint services."""

from __future__ import annotations

from ladybug_api.core.errors import ValidationAppError
from ladybug_api.utils.text_normalizer import sanitize_input


def require_text(
    value: str | None,
    parameter: str,
    *,
    max_length: int | None = None,
    min_length: int | None = None,
) -> str:
    """Sanitize a required text parameter and enforce its length bounds.

    Args:
        value: Raw query parameter value.
        parameter: Parameter name, used in error messages.
        max_length: Maximum length after sanitizing.
        min_length: Minimum length after sanitizing.

    Returns:
        The sanitized text.

    Raises:
        ValidationAppError: If the value is missing, empty or out of bounds.
    """
    if value is None or not value.strip():
        raise ValidationAppError(
            code="missing_parameter",
            message=f'Parameter "{parameter}" is required and cannot be empty',
            details={"parameter": parameter},
        )

    text = sanitize_input(value)
    if not text:
        raise ValidationAppError(
            code="missing_parameter",
            message=f'Parameter "{parameter}" is required and cannot be empty',
            details={"parameter": parameter},
        )

    if max_length is not None and len(text) > max_length:
        raise ValidationAppError(
            code="parameter_too_long",
            message=f'Parameter "{parameter}" is too long (max {max_length} characters)',
            details={"parameter": parameter, "max_length": max_length, "actual_length": len(text)},
        )
    if min_length is not None and len(text) < min_length:
        raise ValidationAppError(
            code="parameter_too_short",
            message=f'Parameter "{parameter}" is too short (min {min_length} characters)',
            details={"parameter": parameter, "min_length": min_length, "actual_length": len(text)},
        )
    return text


def require_choice(value: str, parameter: str, allowed: tuple[str, ...]) -> str:
    """Lower-case ``value`` and check it is one of ``allowed``."""
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise ValidationAppError(
            code="invalid_parameter",
            message=f'Parameter "{parameter}" must be one of: {", ".join(allowed)}',
            details={"parameter": parameter, "allowed_values": list(allowed)},
        )
    return normalized
