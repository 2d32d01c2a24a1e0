"""
Configuration error hierarchy for the progression engine.

Exception Hierarchy
-------------------
ConfigError (base)
└── ConfigValidationError (invalid or out-of-range values)
"""


class ConfigError(Exception):
    """
    Base exception for all configuration-related errors.

    Example
    -------
    >>> try:
    ...     Config.validate()
    ... except ConfigError as e:
    ...     logger.error(f"Config operation failed: {e}")
    """
    pass


class ConfigValidationError(ConfigError):
    """
    Raised when configuration validation fails.

    Outside production, invalid values fall back to defaults with a warning;
    in production they raise this error so a misconfigured deploy fails fast.
    """
    pass


__all__ = [
    "ConfigError",
    "ConfigValidationError",
]
