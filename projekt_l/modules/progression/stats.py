"""
Aggregate and derived progression stats.

Pure functions over already-computed levels and XP totals: balance bonus
eligibility, tier naming, XP display strings and the life-balance radar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Union

from projekt_l.modules.shared.constants import (
    BALANCE_BONUS_MIN_LEVEL,
    LEVEL_TIERS,
    MIN_LEVEL,
    XP_MILLION,
    XP_THOUSAND,
)
from projekt_l.modules.shared.factions import FACTION_ORDER, FACTIONS, FactionId
from projekt_l.modules.shared.formulas import (
    calculate_faction_level,
    faction_level_progress,
)

FactionKey = Union[FactionId, str]


@dataclass(frozen=True)
class LevelTier:
    name: str
    color: str


def _normalize_levels(faction_levels: Mapping[FactionKey, int]) -> Dict[FactionId, int]:
    return {FactionId.parse(key): int(level) for key, level in faction_levels.items()}


def has_balance_bonus(faction_levels: Mapping[FactionKey, int]) -> bool:
    """
    True iff every faction is at BALANCE_BONUS_MIN_LEVEL or above.

    Factions missing from `faction_levels` count as level 1.

    Raises:
        NotFoundError: If a key names no faction
    """
    levels = _normalize_levels(faction_levels)
    return all(
        levels.get(faction_id, MIN_LEVEL) >= BALANCE_BONUS_MIN_LEVEL
        for faction_id in FactionId
    )


def get_level_tier(level: int) -> LevelTier:
    """
    Named tier and colour token for a character level.

    Example:
        >>> get_level_tier(50)
        LevelTier(name='Expert', color='var(--level-gold)')
    """
    level = int(level)
    for min_level, name, color in LEVEL_TIERS:
        if level >= min_level:
            return LevelTier(name=name, color=color)
    # Below level 1 only happens with corrupt input; show the entry tier.
    _, name, color = LEVEL_TIERS[-1]
    return LevelTier(name=name, color=color)


def _one_decimal(xp: int, unit: int) -> str:
    # Integer half-up rounding to tenths; exact for any size of xp.
    tenths = (xp * 10 + unit // 2) // unit
    return f"{tenths // 10}.{tenths % 10}"


def format_xp(xp: int) -> str:
    """
    Abbreviate an XP amount for display.

    Example:
        >>> format_xp(12_500)
        '12.5K'
        >>> format_xp(2_000_000)
        '2.0M'
        >>> format_xp(999)
        '999'
    """
    xp = int(xp)
    if xp >= XP_MILLION:
        return f"{_one_decimal(xp, XP_MILLION)}M"
    if xp >= XP_THOUSAND:
        return f"{_one_decimal(xp, XP_THOUSAND)}K"
    return str(xp)


def average_faction_level(faction_levels: Mapping[FactionKey, int]) -> int:
    """Half-up rounded mean of the given faction levels; 1 when empty."""
    if not faction_levels:
        return MIN_LEVEL
    levels = [max(MIN_LEVEL, int(level)) for level in faction_levels.values()]
    count = len(levels)
    return (2 * sum(levels) + count) // (2 * count)


def _faction_xp_totals(progress_records: Any) -> Dict[FactionId, int]:
    if isinstance(progress_records, Mapping):
        items: Iterable = progress_records.items()
    else:
        items = ((record.faction_id, record.total_xp) for record in progress_records)
    return {FactionId.parse(key): max(0, int(total_xp)) for key, total_xp in items}


def build_faction_radar(progress_records: Any) -> List[Dict[str, Any]]:
    """
    Radar chart entries, one per faction in FACTION_ORDER.

    Args:
        progress_records: Mapping of faction id to total XP, or an iterable
            of records exposing `faction_id` and `total_xp`

    Returns:
        List of dicts with faction_id, name, icon, color, level, xp, progress.
        Factions without a record show level 1 and 0 XP.
    """
    totals = _faction_xp_totals(progress_records)

    radar: List[Dict[str, Any]] = []
    for faction_id in FACTION_ORDER:
        info = FACTIONS[faction_id]
        xp = totals.get(faction_id, 0)
        radar.append(
            {
                "faction_id": faction_id.value,
                "name": info.name,
                "icon": info.icon,
                "color": info.color,
                "label": f"{info.icon} {info.name}",
                "level": calculate_faction_level(xp),
                "xp": xp,
                "progress": faction_level_progress(xp),
            }
        )
    return radar
