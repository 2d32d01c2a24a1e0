"""
Projekt L Progression Constants

Purpose
-------
Numeric parameters of the two progression curves and the derived stats built
on top of them: faction levels, skill/character levels, level tiers and the
balance bonus.

IMPORTANT:
This module contains GAMEPLAY constants only. Logging and environment
settings belong in projekt_l.core.config.

Design Notes
------------
- Values are annotated with typing.Final to signal immutability
- Grouped by progression system
- No side effects at import time
"""

from __future__ import annotations

from typing import Final, Tuple

# ============================================================================
# LEVEL BOUNDS
# ============================================================================

MIN_LEVEL: Final[int] = 1

# ============================================================================
# FACTION MODEL (quadratic)
# ============================================================================

# xp_for_faction_level(L) = L^2 * FACTION_XP_BASE
FACTION_XP_BASE: Final[int] = 100

# ============================================================================
# SKILL / CHARACTER MODEL (power-law)
# ============================================================================

# xp_for_level(L) = floor(SKILL_XP_BASE * L^1.5)
SKILL_XP_BASE: Final[int] = 100

# ============================================================================
# DERIVED STATS
# ============================================================================

# Every faction must reach this level for the balance bonus
BALANCE_BONUS_MIN_LEVEL: Final[int] = 3

# (minimum level, tier name, colour token), highest first
LEVEL_TIERS: Final[Tuple[Tuple[int, str, str], ...]] = (
    (100, "Legendary", "var(--level-diamond)"),
    (75, "Master", "var(--level-platinum)"),
    (50, "Expert", "var(--level-gold)"),
    (25, "Advanced", "var(--level-silver)"),
    (MIN_LEVEL, "Beginner", "var(--level-bronze)"),
)

XP_MILLION: Final[int] = 1_000_000
XP_THOUSAND: Final[int] = 1_000
