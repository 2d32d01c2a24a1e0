"""
Base Service Foundation

Purpose
-------
Provides the foundational class for domain services in Projekt L.
Services orchestrate domain models, enforce input rules and log what they
did. They do not own persistence; the caller loads and stores aggregates.

Design Notes
------------
This base class provides:
- Structured logging with operation context
- Config access through projekt_l.core.config.Config

Usage
-----
    class ProgressionService(BaseService):
        def __init__(self, logger=None):
            super().__init__(logger)

        def apply_event(self, character, event):
            self.log_operation("apply_event", user_id=character.id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from logging import Logger


class BaseService:
    """
    Base class for all domain services.

    Args:
        logger: Structured logger instance; defaults to a module logger
            named after the concrete service class
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        from projekt_l.core.logging import get_logger

        self.log = logger or get_logger(type(self).__module__)

    def get_config(self, key: str, default: Optional[Any] = None, required: bool = False) -> Any:
        """
        Safely retrieve a static configuration value.

        Raises:
            ConfigurationError: If required=True and key is missing
        """
        from projekt_l.core.config import Config
        from projekt_l.core.exceptions import ConfigurationError

        Config.validate()
        value = getattr(Config, key, default)
        if required and value is None:
            raise ConfigurationError(
                key, f"Required configuration key '{key}' is missing"
            )
        return value

    def log_operation(self, operation: str, **context: Any) -> None:
        self.log.info(
            f"Service operation: {operation}",
            extra={"service_operation": operation, **context},
        )

    def log_error(self, operation: str, error: Exception, **context: Any) -> None:
        """
        Log a service error with full context.

        Domain errors are logged at their own severity; anything else is an
        error.
        """
        from projekt_l.core.exceptions import get_error_severity

        level = getattr(logging, get_error_severity(error).value.upper())
        self.log.log(
            level,
            f"Service error during {operation}: {error}",
            extra={
                "service_operation": operation,
                "error_type": type(error).__name__,
                "error_message": str(error),
                **context,
            },
        )
