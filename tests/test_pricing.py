"""
Unit tests for price bracket resolution.

Covers both bracket vocabularies ("10-15"/"1000+" and "<15"/"15-40") going
through the same resolver.
"""

import pytest

from core.exceptions import RateTableNotFoundError
from modules.pricing import BracketKind, PriceResolver, parse_bracket, resolve
from modules.rate_tables import (
    LAMINATED,
    RANGE_RATE_TABLE,
    SLEEVE,
    TIERED_RATE_TABLE,
    get_rate_table,
)


def single_size_table(brackets):
    return {"Prints": {"5x7": brackets}}


# Tests for parse_bracket

class TestParseBracket:
    """Descriptor parsing."""

    def test_inclusive_range(self):
        bracket = parse_bracket("10-15", 1500)
        assert bracket.kind is BracketKind.RANGE
        assert (bracket.lower, bracket.upper, bracket.price) == (10, 15, 1500)

    def test_open_ended(self):
        bracket = parse_bracket("1000+", 500)
        assert bracket.kind is BracketKind.OPEN
        assert bracket.lower == 1000

    def test_exclusive_upper(self):
        bracket = parse_bracket("<15", 4800)
        assert bracket.kind is BracketKind.BELOW
        assert bracket.upper == 15

    def test_whitespace_is_tolerated(self):
        bracket = parse_bracket(" 16 - 40 ", 1300)
        assert (bracket.lower, bracket.upper) == (16, 40)

    @pytest.mark.parametrize("descriptor", ["abc", "x-y", "10-", "-15", "1-2-3", "+", "<", "ten+", ""])
    def test_malformed_descriptors(self, descriptor):
        assert parse_bracket(descriptor, 100) is None


# Tests for resolve

class TestResolve:
    """First-match bracket resolution."""

    def test_inclusive_range_boundaries(self):
        table = single_size_table({"10-15": 1500, "16-40": 1300})
        assert resolve(table, "Prints", "5x7", 10) == 1500
        assert resolve(table, "Prints", "5x7", 15) == 1500
        assert resolve(table, "Prints", "5x7", 16) == 1300
        assert resolve(table, "Prints", "5x7", 40) == 1300

    def test_open_ended_bracket(self):
        table = single_size_table({"10-15": 1500, "1000+": 500})
        assert resolve(table, "Prints", "5x7", 1000) == 500
        assert resolve(table, "Prints", "5x7", 250000) == 500
        assert resolve(table, "Prints", "5x7", 999) is None

    def test_exclusive_upper_bracket(self):
        table = single_size_table({"<15": 4800, "15-40": 4300})
        assert resolve(table, "Prints", "5x7", 14) == 4800
        assert resolve(table, "Prints", "5x7", 15) == 4300

    def test_first_match_wins_on_overlap(self):
        table = single_size_table({"1-100": 10, "50-60": 20})
        assert resolve(table, "Prints", "5x7", 55) == 10

        reordered = single_size_table({"50-60": 20, "1-100": 10})
        assert resolve(reordered, "Prints", "5x7", 55) == 20

    def test_open_bracket_before_range_wins(self):
        table = single_size_table({"10+": 1, "10-15": 2})
        assert resolve(table, "Prints", "5x7", 12) == 1

    def test_malformed_brackets_are_skipped(self):
        table = single_size_table({"abc": 1, "x-y": 2, "5-10": 3})
        assert resolve(table, "Prints", "5x7", 7) == 3

    def test_unknown_category(self):
        table = single_size_table({"1+": 100})
        assert resolve(table, "Posters", "5x7", 10) is None

    def test_unknown_size(self):
        table = single_size_table({"1+": 100})
        assert resolve(table, "Prints", "A0", 10) is None

    def test_zero_and_negative_quantities(self):
        below = single_size_table({"<15": 4800, "15-40": 4300})
        assert resolve(below, "Prints", "5x7", 0) == 4800
        assert resolve(below, "Prints", "5x7", -3) == 4800

        ranges = single_size_table({"10-15": 1500, "1000+": 500})
        assert resolve(ranges, "Prints", "5x7", 0) is None
        assert resolve(ranges, "Prints", "5x7", -1) is None

    def test_gap_between_brackets_is_not_found(self):
        table = single_size_table({"10-15": 1500, "20-40": 1300})
        assert resolve(table, "Prints", "5x7", 17) is None


# Tests for the shipped rate tables

class TestRateTables:
    """Both historical price lists through one resolver."""

    def test_range_table(self):
        assert resolve(RANGE_RATE_TABLE, SLEEVE, "5x7", 15) == 1500
        assert resolve(RANGE_RATE_TABLE, SLEEVE, "5x7", 16) == 1300
        assert resolve(RANGE_RATE_TABLE, LAMINATED, "21x29 (A4)", 1000) == 12500

    def test_range_table_below_first_bracket(self):
        assert resolve(RANGE_RATE_TABLE, SLEEVE, "5x7", 9) is None

    def test_tiered_table(self):
        assert resolve(TIERED_RATE_TABLE, SLEEVE, "5x7", 1) == 4800
        assert resolve(TIERED_RATE_TABLE, SLEEVE, "5x7", 15) == 4300
        assert resolve(TIERED_RATE_TABLE, LAMINATED, "10x15", 150) == 7500
        assert resolve(TIERED_RATE_TABLE, LAMINATED, "10x15", 1200) == 5000

    def test_tiered_table_gap(self):
        assert resolve(TIERED_RATE_TABLE, LAMINATED, "10x15", 500) is None

    def test_get_rate_table(self):
        assert get_rate_table("range") is RANGE_RATE_TABLE
        assert get_rate_table("tiered") is TIERED_RATE_TABLE

    def test_get_unknown_rate_table(self):
        with pytest.raises(RateTableNotFoundError) as exc_info:
            get_rate_table("winter-sale")
        assert exc_info.value.details["available"] == ["range", "tiered"]


# Tests for PriceResolver

class TestPriceResolver:
    """Resolver object, quotes and catalogue."""

    @pytest.fixture
    def resolver(self):
        return PriceResolver(RANGE_RATE_TABLE, name="range")

    def test_price_for_defaults_to_zero(self, resolver):
        assert resolver.price_for("Unknown", "5x7", 20) == 0
        assert resolver.price_for(SLEEVE, "5x7", 20) == 1300

    def test_quote(self, resolver):
        quote = resolver.quote(SLEEVE, "6x9", 20)
        assert quote.found is True
        assert quote.to_dict() == {"unitPrice": 1500, "quantity": 20, "total": 30000}

    def test_quote_not_found(self, resolver):
        quote = resolver.quote(SLEEVE, "6x9", 500)
        assert quote.found is False
        assert quote.to_dict() == {"unitPrice": 0, "quantity": 500, "total": 0}

    def test_catalogue_keeps_table_order(self, resolver):
        catalogue = resolver.catalogue()
        assert list(catalogue) == [SLEEVE, LAMINATED]
        assert catalogue[SLEEVE] == ["5x7", "6x9"]

    def test_brackets_in_table_order(self, resolver):
        descriptors = [b.descriptor for b in resolver.brackets(SLEEVE, "5x7")]
        assert descriptors == ["10-15", "16-40", "41-100", "101-150", "1000+"]

    def test_brackets_skip_malformed(self):
        resolver = PriceResolver(single_size_table({"n/a": 0, "1+": 100}))
        assert [b.descriptor for b in resolver.brackets("Prints", "5x7")] == ["1+"]
