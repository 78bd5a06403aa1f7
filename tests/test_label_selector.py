"""
Tests for canonical label selection.
"""
import pytest
from breakdown_resolver.grouping.label_selector import LabelSelector


@pytest.fixture
def selector():
    return LabelSelector()


class TestChoose:
    """Tests for LabelSelector.choose."""

    def test_ownership_first(self, selector):
        """Test that a variant carrying ownership beats a longer plain one."""
        assert selector.choose(["Old Mobile Phone", "Rachel's Phone"]) == "Rachel's Phone"

    def test_longer_noun(self, selector):
        """Test that the longer normalized noun wins among plain variants."""
        assert selector.choose(["Phone", "Flip Phone"]) == "Flip Phone"

    def test_not_all_caps(self, selector):
        """Test that a non-all-caps variant beats an all-caps one of equal noun."""
        assert selector.choose(["PHONE", "phone!"]) == "phone!"

    def test_longer_original(self, selector):
        """Test that the longer original string breaks remaining ties."""
        assert selector.choose(["Phone", "Phone."]) == "Phone."

    def test_first_wins_full_tie(self, selector):
        """Test that a complete tie goes to the earliest variant."""
        assert selector.choose(["Sedan", "Coupe"]) == "Sedan"

    def test_title_case(self, selector):
        """Test presentation title-casing of the chosen label."""
        assert selector.choose(["rachel's phone"], title_case_result=True) == "Rachel's Phone"

    def test_empty_raises(self, selector):
        """Test that an empty group has no label."""
        with pytest.raises(ValueError):
            selector.choose([])

    def test_idempotent_single_variant(self, selector):
        """Test that re-selecting the chosen label returns it unchanged."""
        label = selector.choose(["RACHEL'S CELLPHONE", "phone"], title_case_result=True)

        assert selector.choose([label], title_case_result=True) == label

    def test_deterministic(self, selector):
        """Test that identical input yields identical labels."""
        variants = ["Gun", "Howard's Pistol", "REVOLVER"]

        assert selector.choose(variants) == selector.choose(list(variants))


class TestOwnedAndDisplay:
    """Tests for inferred-owner labels and proper-noun display forms."""

    def test_choose_owned(self, selector):
        """Test the "<Owner>'s <item>" label for inferred ownership."""
        assert selector.choose_owned("Howard", ["briefcase"], title_case_result=True) == "Howard's Briefcase"

    def test_choose_display_prefers_longest(self, selector):
        """Test that the longest display form wins."""
        assert selector.choose_display(["Rachel", "Rachel Wells"]) == "Rachel Wells"

    def test_choose_display_prefers_non_caps(self, selector):
        """Test that a non-all-caps form wins at equal length."""
        assert selector.choose_display(["RACHEL WELLS", "Rachel Wells"]) == "Rachel Wells"
