"""
Projekt L Shared Module

Purpose
-------
Provides domain-level foundations for the progression modules:
- Domain exceptions and error handling
- Base service pattern
- Progression constants and formulas
- Domain validation utilities

Architecture
------------
- BaseService: Foundation for service classes (logging, config, validation)
- Domain exceptions: Rule violations raised by services and the domain layer
- Formulas: Pure threshold, level and progress functions for both curves
- Validators: Domain validation with structured error raising
- Constants: Curve parameters, tier breakpoints, balance bonus threshold

Usage
-----
    from projekt_l.modules.shared import (
        BaseService,
        ValidationError,
        calculate_faction_level,
        xp_for_level,
    )
"""

from __future__ import annotations

from .base_service import BaseService

from .exceptions import (
    ErrorSeverity,
    InvalidOperationError,
    NotFoundError,
    ProjektLDomainException,
    ValidationError,
    get_error_severity,
)

from .constants import (
    BALANCE_BONUS_MIN_LEVEL,
    FACTION_XP_BASE,
    LEVEL_TIERS,
    MIN_LEVEL,
    SKILL_XP_BASE,
)

from .factions import (
    FACTION_ORDER,
    FACTIONS,
    FactionId,
    FactionInfo,
    get_faction_info,
)

from .formulas import (
    calculate_faction_level,
    faction_level_progress,
    level_from_xp,
    progress_to_next_level,
    total_xp_for_level,
    xp_for_faction_level,
    xp_for_level,
    xp_to_next_faction_level,
)

from .validators import (
    validate_identifier,
    validate_xp_amount,
)

__all__ = [
    # Base patterns
    "BaseService",
    # Exceptions
    "ProjektLDomainException",
    "ErrorSeverity",
    "ValidationError",
    "NotFoundError",
    "InvalidOperationError",
    "get_error_severity",
    # Constants
    "MIN_LEVEL",
    "FACTION_XP_BASE",
    "SKILL_XP_BASE",
    "BALANCE_BONUS_MIN_LEVEL",
    "LEVEL_TIERS",
    # Factions
    "FactionId",
    "FactionInfo",
    "FACTIONS",
    "FACTION_ORDER",
    "get_faction_info",
    # Formulas
    "xp_for_faction_level",
    "calculate_faction_level",
    "faction_level_progress",
    "xp_to_next_faction_level",
    "xp_for_level",
    "total_xp_for_level",
    "level_from_xp",
    "progress_to_next_level",
    # Validators
    "validate_xp_amount",
    "validate_identifier",
]
