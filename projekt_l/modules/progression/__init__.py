"""
Progression Module
==================

XP, level and progression engine for Projekt L.

Components
----------
- resolver: add_xp() applies XP to a skill's (level, xp) and resolves level-ups
- stats: balance bonus, level tiers, XP display strings, faction radar
- models: QuadraticProgression / PowerLawProgression strategies
- ProgressionService: applies XP awards to a Character and builds the dashboard

The formulas both curves are built on live in projekt_l.modules.shared.formulas.
"""

from .models import (
    PowerLawProgression,
    ProgressionModel,
    ProgressionTarget,
    QuadraticProgression,
    get_progression_model,
)
from .resolver import XpApplicationResult, add_xp
from .service import ProgressionService
from .stats import (
    LevelTier,
    average_faction_level,
    build_faction_radar,
    format_xp,
    get_level_tier,
    has_balance_bonus,
)

__all__ = [
    "add_xp",
    "XpApplicationResult",
    "has_balance_bonus",
    "get_level_tier",
    "LevelTier",
    "format_xp",
    "average_faction_level",
    "build_faction_radar",
    "ProgressionModel",
    "QuadraticProgression",
    "PowerLawProgression",
    "ProgressionTarget",
    "get_progression_model",
    "ProgressionService",
]
