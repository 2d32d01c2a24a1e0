"""
Projekt L Progression Formulas

Purpose
-------
Pure calculation functions for the two progression curves:

- Faction model (quadratic): `level = max(1, floor(sqrt(xp / 100)))`
- Skill/character model (power-law): level `L` costs `floor(100 * L^1.5)` XP

Design Notes
------------
All formulas:
- Accept parameters explicitly and have no side effects
- Never raise for integer input; out-of-range values are clamped
- Use integer square roots so threshold boundaries are exact
  (`floor(100 * L^1.5) == isqrt(10_000 * L^3)`)

Non-finite floats are coerced with `int()` and surface as ValueError or
OverflowError.

Usage
-----
    from projekt_l.modules.shared.formulas import calculate_faction_level

    level = calculate_faction_level(2500)       # 5
    needed = xp_for_level(10)                   # 3162
"""

from __future__ import annotations

import math

from .constants import FACTION_XP_BASE, MIN_LEVEL, SKILL_XP_BASE


def _percent(part: int, whole: int) -> float:
    """`part` as a share of `whole` in [0, 100]; clamps before dividing."""
    if part <= 0:
        return 0.0
    if part >= whole:
        return 100.0
    return part * 100 / whole


# ============================================================================
# FACTION MODEL
# ============================================================================


def xp_for_faction_level(level: int) -> int:
    """
    Total faction XP at which `level` is reached.

    Example:
        >>> xp_for_faction_level(5)
        2500
        >>> xp_for_faction_level(50)
        250000
    """
    level = int(level)
    return level * level * FACTION_XP_BASE


def calculate_faction_level(xp: int) -> int:
    """
    Calculate faction level from total faction XP.

    Inverse of xp_for_faction_level on exact thresholds. Zero or negative XP
    is level 1.

    Example:
        >>> calculate_faction_level(399)
        1
        >>> calculate_faction_level(400)
        2
        >>> calculate_faction_level(-50)
        1
    """
    xp = max(int(xp), 0)
    return max(MIN_LEVEL, math.isqrt(xp // FACTION_XP_BASE))


def faction_level_progress(xp: int) -> int:
    """
    Percentage progress from the current faction level to the next.

    Rounded half-up and clamped to [0, 100]; exactly 0 on a threshold.

    Example:
        >>> faction_level_progress(550)
        30
        >>> faction_level_progress(900)
        0
    """
    xp = int(xp)
    level = calculate_faction_level(xp)
    current_threshold = xp_for_faction_level(level)
    next_threshold = xp_for_faction_level(level + 1)

    span = next_threshold - current_threshold
    earned = xp - current_threshold
    if earned <= 0:
        return 0
    if earned >= span:
        return 100
    # Integer half-up; exact for any size of xp.
    return (200 * earned + span) // (2 * span)


def xp_to_next_faction_level(xp: int) -> int:
    """XP still missing before the next faction level (never negative)."""
    xp = max(int(xp), 0)
    next_threshold = xp_for_faction_level(calculate_faction_level(xp) + 1)
    return max(0, next_threshold - xp)


# ============================================================================
# SKILL / CHARACTER MODEL
# ============================================================================


def xp_for_level(level: int) -> int:
    """
    XP required to complete `level` (per-level, not cumulative).

    Uses the power-law curve floor(100 * level^1.5).

    Example:
        >>> xp_for_level(1)
        100
        >>> xp_for_level(10)
        3162
        >>> xp_for_level(0)
        0
    """
    level = int(level)
    if level <= 0:
        return 0
    return math.isqrt(SKILL_XP_BASE * SKILL_XP_BASE * level**3)


def total_xp_for_level(level: int) -> int:
    """
    Cumulative XP required to reach `level` from zero.

    Example:
        >>> total_xp_for_level(2)
        382
    """
    return sum(xp_for_level(i) for i in range(1, int(level) + 1))


def level_from_xp(total_xp: int) -> int:
    """
    Level reached with `total_xp` lifetime XP.

    Consumes per-level thresholds starting at level 1 and returns the highest
    fully paid level (minimum 1).

    Example:
        >>> level_from_xp(381)
        1
        >>> level_from_xp(382)
        2
    """
    total_xp = int(total_xp)
    level = MIN_LEVEL
    accumulated = 0

    cost = xp_for_level(level)
    while accumulated + cost <= total_xp:
        accumulated += cost
        level += 1
        cost = xp_for_level(level)

    return max(MIN_LEVEL, level - 1)


def progress_to_next_level(level: int, current_xp_in_level: int) -> float:
    """
    Percentage of the next level's requirement already earned.

    Args:
        level: Current level
        current_xp_in_level: XP remainder carried in the current level

    Returns:
        Progress in [0, 100]; 100 if the next level costs nothing
    """
    xp_needed = xp_for_level(int(level) + 1)
    if xp_needed == 0:
        return 100.0

    return _percent(int(current_xp_in_level), xp_needed)
