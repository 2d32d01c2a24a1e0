"""
XP Application / Level-Up Resolver
==================================

Purpose
-------
Apply an XP gain to a skill's `(level, xp)` state on the power-law curve and
report how many levels were crossed. `xp` is the remainder carried inside the
current level; reaching `xp_for_level(level + 1)` consumes that amount and
advances one level, repeatedly, so a single large award can cross several
levels at once.

Rules
-----
- Zero gain returns the input state unchanged.
- Negative gains reduce the remainder but never below 0 and never level down.
- A starting level below 1 is treated as level 1.
- The function is pure; callers persist the returned state.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from projekt_l.modules.shared.constants import MIN_LEVEL
from projekt_l.modules.shared.formulas import xp_for_level


@dataclass(frozen=True)
class XpApplicationResult:
    """Skill state after an XP gain plus level-up metadata."""

    new_level: int
    new_xp: int
    leveled_up: bool
    levels_gained: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def add_xp(current_level: int, current_xp: int, xp_gained: int) -> XpApplicationResult:
    """
    Add XP to a skill and resolve any level-ups.

    Args:
        current_level: Level before the gain
        current_xp: XP remainder inside the current level
        xp_gained: XP to add (negative for penalties)

    Returns:
        XpApplicationResult with the new level and remainder

    Example:
        >>> add_xp(1, 0, xp_for_level(2) + xp_for_level(3) + 50)
        XpApplicationResult(new_level=3, new_xp=50, leveled_up=True, levels_gained=2)
    """
    new_level = max(MIN_LEVEL, int(current_level))
    new_xp = int(current_xp) + int(xp_gained)
    levels_gained = 0

    if new_xp < 0:
        new_xp = 0

    while new_xp >= xp_for_level(new_level + 1):
        new_xp -= xp_for_level(new_level + 1)
        new_level += 1
        levels_gained += 1

    return XpApplicationResult(
        new_level=new_level,
        new_xp=new_xp,
        leveled_up=levels_gained > 0,
        levels_gained=levels_gained,
    )
