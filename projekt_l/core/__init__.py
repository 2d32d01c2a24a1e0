"""
Core infrastructure layer for the Projekt L progression engine.

Purpose
-------
Single import surface for the ambient subsystems around the engine:

- Configuration (Config, Environment)
- Logging (structured logging, log context, logger factory)
- Infrastructure exceptions

Design Decisions
----------------
- This module is intentionally thin: no logic, no configuration, no I/O.
- Importing it never configures logging; call setup_logging() explicitly.
"""

from __future__ import annotations

from projekt_l.core.config import Config, ConfigError, ConfigValidationError, Environment
from projekt_l.core.exceptions import (
    ConfigurationError,
    ErrorSeverity,
    ProjektLInfrastructureException,
)
from projekt_l.core.logging import (
    LogContext,
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "ConfigError",
    "ConfigValidationError",
    # Logging
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "LogContext",
    # Infrastructure Exceptions
    "ProjektLInfrastructureException",
    "ConfigurationError",
    "ErrorSeverity",
]
