"""
Tests for character name canonicalization.
"""
import pytest
from breakdown_resolver.grouping.character_canonicalizer import (
    CharacterCanonicalizer,
    character_key,
    clean_character_name,
    strip_honorific,
)
from breakdown_resolver.ids import SequentialIdGenerator


@pytest.fixture
def canonicalizer():
    return CharacterCanonicalizer()


class TestCleaning:
    """Tests for name cleaning helpers."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("HOWARD WELLS (40s)", "HOWARD WELLS"),
            ("Rachel (V.O.)", "Rachel"),
            ("JOHN - a bartender", "JOHN"),
            ("Mike: bartender", "Mike"),
            ("Sarah, his wife", "Sarah"),
            ("Rachel (CONT'D", "Rachel"),
        ],
    )
    def test_clean_character_name(self, raw, expected):
        """Test that annotations are stripped."""
        assert clean_character_name(raw) == expected

    def test_strip_honorific(self):
        """Test that a title prefix is removed."""
        assert strip_honorific("Dr. Rachel Wells") == "Rachel Wells"
        assert strip_honorific("Captain Howard") == "Howard"

    def test_honorific_alone_kept(self):
        """Test that a bare title is not stripped to nothing."""
        assert strip_honorific("Captain") == "Captain"

    def test_honorific_needs_word_boundary(self):
        """Test that names starting with title letters are untouched."""
        assert strip_honorific("Drew Barry") == "Drew Barry"

    def test_character_key(self):
        """Test that keys are case-free and title-free."""
        assert character_key("DR. RACHEL WELLS (40s)") == "rachel wells"


class TestCanonicalize:
    """Tests for CharacterCanonicalizer.canonicalize."""

    def test_subset_merge(self, canonicalizer):
        """Test that Rachel, Rachel Wells and Dr. Rachel Wells form one group."""
        result = canonicalizer.canonicalize(["Rachel", "Rachel Wells", "Dr. Rachel Wells"], SequentialIdGenerator())

        assert result.ungrouped == []
        assert len(result.groups) == 1
        assert result.groups[0].parent_name == "Rachel Wells"
        assert result.groups[0].variants == ["Rachel", "Rachel Wells", "Dr. Rachel Wells"]

    def test_single_variant_ungrouped(self, canonicalizer):
        """Test that a character with one variant is emitted ungrouped."""
        result = canonicalizer.canonicalize(["Howard", "Mike"], SequentialIdGenerator())

        assert result.ungrouped == ["Howard", "Mike"]
        assert result.groups == []

    def test_prefers_non_caps_display(self, canonicalizer):
        """Test that the canonical name avoids an all-caps form."""
        result = canonicalizer.canonicalize(["RACHEL WELLS", "Rachel Wells (V.O.)"], SequentialIdGenerator())

        assert result.groups[0].parent_name == "Rachel Wells"

    def test_ambiguous_first_name_left_alone(self, canonicalizer):
        """Test that a first name shared by two full names is not merged."""
        result = canonicalizer.canonicalize(["Rachel", "Rachel Wells", "Rachel Stone"], SequentialIdGenerator())

        assert result.ungrouped == ["Rachel", "Rachel Wells", "Rachel Stone"]

    def test_transitive_resolution(self, canonicalizer):
        """Test that a name folds through an intermediate to the fullest name."""
        result = canonicalizer.canonicalize(
            ["Wells", "Rachel Wells", "Rachel Anne Wells"], SequentialIdGenerator()
        )

        assert len(result.groups) == 1
        assert result.groups[0].parent_name == "Rachel Anne Wells"

    def test_device_cue_not_a_merge_target(self, canonicalizer):
        """Test that a name never folds into a device or voice cue."""
        result = canonicalizer.canonicalize(["Howard", "Howard Answering Machine"], SequentialIdGenerator())

        assert result.ungrouped == ["Howard", "Howard Answering Machine"]

    def test_blank_names_dropped(self, canonicalizer):
        """Test that blank names do not reach the output."""
        result = canonicalizer.canonicalize(["", "  ", "Mike"], SequentialIdGenerator())

        assert result.all_items() == ["Mike"]


class TestCanonicalNames:
    """Tests for the alias map used by attribution."""

    def test_alias_map(self, canonicalizer):
        """Test that every key maps to its canonical display name."""
        aliases = canonicalizer.canonical_names(["Rachel", "RACHEL WELLS", "Howard"])

        assert aliases["rachel"] == "RACHEL WELLS"
        assert aliases["rachel wells"] == "RACHEL WELLS"
        assert aliases["howard"] == "Howard"
