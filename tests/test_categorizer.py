"""Tests for designator-prefix categorization."""

import pytest

from mergebom.categorizer import categorize, category_for_designator
from mergebom.errors import CategoryError
from mergebom.models import Category, Designator, Item


def make_item(*designators):
    fields = {}
    if designators:
        fields["designator"] = Designator(values=tuple(designators))
    return Item(fields=fields)


# =============================================================================
# PREFIX TABLE
# =============================================================================

class TestCategoryForDesignator:

    @pytest.mark.parametrize("designator,category", [
        ("J1", Category.CONNECTORS),
        ("X2", Category.CONNECTORS),
        ("P3", Category.CONNECTORS),
        ("SIM1", Category.CONNECTORS),
        ("S1", Category.MECHANICALS),
        ("SCR4", Category.MECHANICALS),
        ("SPA1", Category.MECHANICALS),
        ("BAT1", Category.MECHANICALS),
        ("BUZ1", Category.MECHANICALS),
        ("BT1", Category.MECHANICALS),
        ("B2", Category.MECHANICALS),
        ("SW3", Category.MECHANICALS),
        ("MP1", Category.MECHANICALS),
        ("K1", Category.MECHANICALS),
        ("F1", Category.FUSES),
        ("FU2", Category.FUSES),
        ("R10", Category.RESISTORS),
        ("RN1", Category.RESISTORS),
        ("R_G1", Category.RESISTORS),
        ("C7", Category.CAPACITORS),
        ("CAP1", Category.CAPACITORS),
        ("D1", Category.DIODE),
        ("DZ2", Category.DIODE),
        ("L1", Category.INDUCTORS),
        ("Q5", Category.TRANSISTOR),
        ("TR1", Category.TRANSFORMERS),
        ("Y1", Category.CRISTAL),
        ("U12", Category.IC),
    ])
    def test_known_prefixes(self, designator, category):
        assert category_for_designator(designator) is category

    def test_prefix_is_case_insensitive(self):
        assert category_for_designator("r5") is Category.RESISTORS
        assert category_for_designator("sw1") is Category.MECHANICALS

    @pytest.mark.parametrize("designator", ["LED1", "TP1", "JP1", "1R", "", "#"])
    def test_unknown_prefix_raises(self, designator):
        with pytest.raises(CategoryError):
            category_for_designator(designator)


# =============================================================================
# ITEMS
# =============================================================================

class TestCategorize:

    def test_first_designator_governs(self):
        assert categorize(make_item("C1", "R1", "U1")) is Category.CAPACITORS
        assert categorize(make_item("R1", "C1")) is Category.RESISTORS

    def test_no_designator_is_invalid(self):
        assert categorize(make_item()) is Category.INVALID

    def test_unknown_prefix_is_invalid(self):
        assert categorize(make_item("TP1", "R1")) is Category.INVALID


class TestCategoryOrdering:

    def test_ranks_descend_in_display_order(self):
        order = [
            Category.CONNECTORS, Category.MECHANICALS, Category.FUSES, Category.RESISTORS,
            Category.CAPACITORS, Category.DIODE, Category.INDUCTORS, Category.TRANSISTOR,
            Category.TRANSFORMERS, Category.CRISTAL, Category.IC, Category.INVALID,
        ]
        assert [c.rank for c in order] == list(range(11, -1, -1))

    def test_banner(self):
        assert Category.CONNECTORS.banner == "** J Connectors **"
        assert Category.TRANSFORMERS.banner == "** Tr Transformers **"
