"""
Tests for ownership parsing.
"""
import re

import pytest
from breakdown_resolver.normalization.ownership import (
    OwnershipRule,
    OWNERSHIP_RULES,
    parse_ownership,
)


class TestParseOwnership:
    """Tests for parse_ownership."""

    def test_possessive(self):
        """Test the X's Y pattern."""
        parsed = parse_ownership("Rachel's Phone")

        assert parsed.owner == "Rachel"
        assert parsed.owner_key == "rachel"
        assert parsed.noun == "phone"
        assert parsed.rule == "possessive"
        assert parsed.has_owner

    def test_possessive_plural_owner(self):
        """Test a trailing apostrophe without s (the Wells' car)."""
        parsed = parse_ownership("the Wells' car")

        assert parsed.owner_key == "wells"
        assert parsed.noun == "car"

    def test_dash_separator(self):
        """Test the X - Y pattern."""
        parsed = parse_ownership("RACHEL - blue dress")

        assert parsed.owner == "RACHEL"
        assert parsed.noun == "blue dress"
        assert parsed.rule == "separator"

    def test_colon_separator(self):
        """Test the X: Y pattern."""
        parsed = parse_ownership("Howard: tie")

        assert parsed.owner_key == "howard"
        assert parsed.noun == "tie"

    def test_parenthetical_owner(self):
        """Test the Y (X's) pattern."""
        parsed = parse_ownership("Phone (Rachel's)")

        assert parsed.owner == "Rachel"
        assert parsed.noun == "phone"
        assert parsed.rule == "parenthetical"

    def test_no_owner(self):
        """Test that an unmarked item has an empty owner and the normalized noun."""
        parsed = parse_ownership("The Cellphone")

        assert parsed.owner == ""
        assert not parsed.has_owner
        assert parsed.noun == "phone"
        assert parsed.rule == ""

    def test_long_owner_rejected(self):
        """Test that a possessive buried in a long phrase is not an owner."""
        parsed = parse_ownership("A small bottle of Rachel's perfume")

        assert not parsed.has_owner

    def test_original_preserved(self):
        """Test that the original string is kept verbatim."""
        assert parse_ownership("  Rachel’s phone ").original == "  Rachel’s phone "

    @pytest.mark.parametrize("value", [None, "", "   ", 7])
    def test_never_raises(self, value):
        """Test that junk input yields an empty, ownerless parse."""
        parsed = parse_ownership(value)

        assert parsed.owner == ""
        assert parsed.noun == ""


class TestRuleTable:
    """Tests for the ordered rule table."""

    def test_rule_order(self):
        """Test that rules are tried possessive, separator, parenthetical."""
        assert [rule.name for rule in OWNERSHIP_RULES] == ["possessive", "separator", "parenthetical"]

    def test_first_match_wins(self):
        """Test that the possessive rule wins over the separator rule."""
        parsed = parse_ownership("Rachel's coat - red")

        assert parsed.rule == "possessive"
        assert parsed.owner == "Rachel"

    def test_custom_rules(self):
        """Test that a caller-supplied rule table is used instead of the default."""
        belongs = OwnershipRule(
            name="belongs",
            pattern=re.compile(r"^(.+?) belonging to (.+)$", re.IGNORECASE),
            extract=lambda m: (m.group(2), m.group(1)),
        )

        parsed = parse_ownership("Phone belonging to Mike", rules=[belongs])

        assert parsed.owner == "Mike"
        assert parsed.noun == "phone"
        assert parsed.rule == "belongs"
