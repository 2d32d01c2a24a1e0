"""
Progression model strategies.

Factions level on the quadratic curve, skills and the overall character on the
power-law curve. Both are exposed through `ProgressionModel` so callers pick a
strategy per `ProgressionTarget` instead of branching on entity types.

All thresholds here are cumulative: `xp_for_level(L)` is the lifetime XP at
which level `L` is first reached. Below the first threshold the level is
still 1 and progress reads 0.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict

from projekt_l.modules.shared.constants import MIN_LEVEL
from projekt_l.modules.shared.formulas import (
    calculate_faction_level,
    level_from_xp,
    total_xp_for_level,
    xp_for_faction_level,
    xp_for_level as per_level_xp,
)


class ProgressionTarget(Enum):
    """What an XP award is aimed at."""

    FACTION = "faction"
    SKILL = "skill"
    CHARACTER = "character"

    @classmethod
    def from_string(cls, value: str) -> "ProgressionTarget":
        return cls(value.strip().lower())


class ProgressionModel(ABC):
    """Common interface of both progression curves."""

    name: str = "base"

    @abstractmethod
    def xp_for_level(self, level: int) -> int:
        """Cumulative XP at which `level` is reached."""

    @abstractmethod
    def level_for_xp(self, xp: int) -> int:
        """Level for a cumulative XP total (minimum 1)."""

    def progress_percent(self, xp: int) -> float:
        """Progress from the current level's threshold to the next, in [0, 100]."""
        xp = max(int(xp), 0)
        level = self.level_for_xp(xp)
        floor_xp = self.xp_for_level(level)
        ceiling_xp = self.xp_for_level(level + 1)

        span = ceiling_xp - floor_xp
        if span <= 0:
            return 100.0
        earned = xp - floor_xp
        if earned <= 0:
            return 0.0
        if earned >= span:
            return 100.0
        return earned * 100 / span

    def xp_to_next_level(self, xp: int) -> int:
        xp = max(int(xp), 0)
        return max(0, self.xp_for_level(self.level_for_xp(xp) + 1) - xp)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class QuadraticProgression(ProgressionModel):
    """
    Faction curve: level L at L^2 * 100 XP.

    `progress_percent` is the unrounded counterpart of
    `faction_level_progress`; both read 0 below 100 XP.
    """

    name = "quadratic"

    def xp_for_level(self, level: int) -> int:
        return xp_for_faction_level(max(MIN_LEVEL, int(level)))

    def level_for_xp(self, xp: int) -> int:
        return calculate_faction_level(xp)


class PowerLawProgression(ProgressionModel):
    """
    Skill/character curve: completing level L costs floor(100 * L^1.5) XP.

    Level L >= 2 is reached at the sum of the costs of levels 1..L, so
    `level_for_xp(xp_for_level(L)) == L` for every L >= 1.
    """

    name = "power_law"

    def xp_for_level(self, level: int) -> int:
        level = int(level)
        if level <= MIN_LEVEL:
            return 0
        return total_xp_for_level(level)

    def level_for_xp(self, xp: int) -> int:
        return level_from_xp(xp)

    def level_cost(self, level: int) -> int:
        """XP needed to complete `level` on its own."""
        return per_level_xp(level)


_MODELS: Dict[ProgressionTarget, ProgressionModel] = {
    ProgressionTarget.FACTION: QuadraticProgression(),
    ProgressionTarget.SKILL: PowerLawProgression(),
    ProgressionTarget.CHARACTER: PowerLawProgression(),
}


def get_progression_model(target: ProgressionTarget) -> ProgressionModel:
    """
    Strategy for a progression target.

    Raises:
        ValueError: If target is not a ProgressionTarget member or its value
    """
    if not isinstance(target, ProgressionTarget):
        target = ProgressionTarget.from_string(str(target))
    return _MODELS[target]
