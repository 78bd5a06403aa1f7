"""
Configuration validation utilities.

Reads optional environment values and checks the numeric ranges of the
resolver's tuning constants.
"""
import os
import warnings
from typing import Optional

from .exceptions import ConfigurationError


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        # Warn but don't fail for optional configs
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default

    return value


def parse_bool(key: str, value: Optional[str]) -> bool:
    """
    Parse a boolean environment value.

    :param key: Environment variable name (for error messages)
    :param value: Raw value
    :return: Parsed boolean
    :raises: ConfigurationError if the value is not a recognised boolean
    """
    normalized = (value or "").strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationError(
        f"{key} must be a boolean (true/false), got '{value}'."
    )


def parse_int(key: str, value: Optional[str], minimum: int = 1) -> int:
    """
    Parse an integer environment value with a lower bound.

    :raises: ConfigurationError if not an integer or below minimum
    """
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be an integer, got '{value}'.")

    if parsed < minimum:
        raise ConfigurationError(
            f"{key} must be at least {minimum}, got {parsed}."
        )
    return parsed


def validate_share(key: str, value: float) -> float:
    """
    Validate a share threshold lies in (0.0, 1.0].

    :raises: ConfigurationError if out of range
    """
    if not 0.0 < value <= 1.0:
        raise ConfigurationError(
            f"{key} must be greater than 0.0 and at most 1.0, got {value}.\n"
            f"It is the minimum fraction of a prop's scenes a candidate owner "
            f"must appear in."
        )
    return value


def parse_share(key: str, value: Optional[str]) -> float:
    """Parse and validate a share threshold."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a number, got '{value}'.")
    return validate_share(key, parsed)


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "placeholder",
        "replace",
        "TODO",
    ]

    value_lower = value.lower()
    return any(pattern.lower() in value_lower for pattern in placeholder_patterns)
