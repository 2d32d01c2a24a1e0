"""
Infrastructure exceptions for the Projekt L progression engine.

Purpose
-------
Define the exception hierarchy for engineering-level failures around the
engine: misconfiguration and broken wiring between the engine and the host
application. Gameplay rule violations live in
`projekt_l.modules.shared.exceptions`.

Design Notes
------------
- All infrastructure exceptions inherit from `ProjektLInfrastructureException`.
- Each exception carries `message`, `details`, `severity`, `is_retryable`
  and `error_code`, mirroring the domain hierarchy so a single handler can
  log either kind with `to_dict()`.
- `ErrorSeverity` is shared with the domain hierarchy.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from projekt_l.modules.shared.exceptions import ErrorSeverity


class ProjektLInfrastructureException(Exception):
    """
    Base exception for all Projekt L infrastructure-level errors.

    Args:
        message: Human-readable error message
        details: Additional structured data about the error
        severity: Error severity level for logging handlers
        is_retryable: Whether the operation can be retried
        error_code: Optional code for programmatic handling

    Example:
        >>> raise ProjektLInfrastructureException(
        ...     "Logging queue unavailable",
        ...     {"queue_max_size": 10000}
        ... )
    """

    DEFAULT_SEVERITY: ErrorSeverity = ErrorSeverity.ERROR
    DEFAULT_RETRYABLE: bool = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None,
        is_retryable: Optional[bool] = None,
        error_code: Optional[str] = None,
    ) -> None:
        self.message: str = message
        self.details: Dict[str, Any] = details or {}
        self.severity: ErrorSeverity = severity or self.DEFAULT_SEVERITY
        self.is_retryable: bool = (
            is_retryable if is_retryable is not None else self.DEFAULT_RETRYABLE
        )
        self.error_code: str = error_code or self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
        }

    def __str__(self) -> str:
        details_str = f" | Details: {self.details}" if self.details else ""
        return f"[{self.error_code}] {self.message}{details_str}"


class ConfigurationError(ProjektLInfrastructureException):
    """
    Raised when a configuration key the engine depends on is unusable.

    Args:
        config_key: The configuration key that has issues
        message: Description of the configuration problem
    """

    DEFAULT_SEVERITY = ErrorSeverity.CRITICAL

    def __init__(self, config_key: str, message: str) -> None:
        self.config_key = config_key
        super().__init__(
            f"Configuration error for {config_key}: {message}",
            details={
                "config_key": config_key,
                "message": message,
            },
            error_code="CONFIG_ERROR",
        )


def get_error_severity(exc: Exception) -> ErrorSeverity:
    """Severity of an engine exception; unknown exceptions count as ERROR."""
    if isinstance(exc, ProjektLInfrastructureException):
        return exc.severity

    from projekt_l.modules.shared.exceptions import get_error_severity as domain_severity

    return domain_severity(exc)


__all__ = [
    "ErrorSeverity",
    "ProjektLInfrastructureException",
    "ConfigurationError",
    "get_error_severity",
]
