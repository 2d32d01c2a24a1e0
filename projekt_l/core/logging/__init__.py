"""
Projekt L Logging Infrastructure

Exports the structured logging subsystem, log context helpers,
and configuration interface.
"""

from projekt_l.core.logging.logger import (
    LogContext,
    LoggerConfig,
    clear_log_context,
    get_log_context,
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "LogContext",
    "get_log_context",
    "clear_log_context",
    "LoggerConfig",
]
