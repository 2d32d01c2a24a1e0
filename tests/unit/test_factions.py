"""
Unit Tests for the Faction Catalog
==================================

Test Coverage
-------------
- Faction id parsing
- Display metadata lookup
- Radar order
"""

import pytest

from projekt_l.modules.shared.exceptions import NotFoundError
from projekt_l.modules.shared.factions import (
    FACTION_ORDER,
    FACTIONS,
    FactionId,
    get_faction_info,
)


@pytest.mark.unit
class TestFactionId:
    @pytest.mark.parametrize("raw", ["body", "BODY", "  Body ", FactionId.BODY])
    def test_parse(self, raw):
        assert FactionId.parse(raw) is FactionId.BODY

    def test_parse_unknown(self):
        with pytest.raises(NotFoundError) as exc_info:
            FactionId.parse("hobby")

        assert exc_info.value.error_code == "FACTION_NOT_FOUND"

    def test_is_str(self):
        assert FactionId.MIND == "mind"


@pytest.mark.unit
class TestFactionCatalog:
    def test_six_factions(self):
        assert set(FACTIONS) == set(FactionId)
        assert sorted(FACTION_ORDER) == sorted(FactionId)

    def test_radar_order(self):
        assert [f.value for f in FACTION_ORDER] == [
            "career",
            "body",
            "mind",
            "finance",
            "social",
            "knowledge",
        ]

    def test_get_faction_info(self):
        info = get_faction_info("finance")

        assert info.name == "Finance"
        assert info.icon == "💰"
        assert info.color == "#14B8A6"

    def test_get_faction_info_unknown(self):
        assert get_faction_info("hobby") is None
