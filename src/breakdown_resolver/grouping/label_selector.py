"""
Canonical label selection.

Picks the display name of a merged group with fixed tie-break rules, so the
same variants always yield the same parentName.
"""
from typing import List, Sequence, Tuple

from ..normalization.normalizer import is_all_caps, normalize_apostrophes, title_case
from ..normalization.ownership import parse_ownership


class LabelSelector:
    """
    Chooses a group's parentName from its variants.

    Preference order:
    1. a variant carrying ownership marking ("Rachel's Phone")
    2. the longer normalized noun
    3. a variant that is not ALL CAPS
    4. the longer original string
    Remaining ties go to the earliest variant.
    """

    def rank(self, variant: str) -> Tuple[bool, int, bool, int]:
        parsed = parse_ownership(variant)
        return (
            parsed.has_owner,
            len(parsed.noun),
            not is_all_caps(variant),
            len(variant),
        )

    def choose(self, variants: Sequence[str], title_case_result: bool = False) -> str:
        """
        Choose the canonical label.

        :param variants: Non-empty variant strings, in input order
        :param title_case_result: Title-case the chosen label for presentation
        :return: Display label
        :raises: ValueError if variants is empty
        """
        if not variants:
            raise ValueError("Cannot choose a label for an empty group")

        # max() keeps the first of equally ranked variants
        best = max(variants, key=self.rank)
        best = normalize_apostrophes(best)
        return title_case(best) if title_case_result else best

    def choose_owned(self, owner: str, variants: Sequence[str], title_case_result: bool = False) -> str:
        """Label for a group whose owner was inferred rather than written: "<Owner>'s <item>"."""
        item = self.choose(variants)
        label = f"{normalize_apostrophes(owner)}'s {item}"
        return title_case(label) if title_case_result else label

    def choose_display(self, candidates: List[str]) -> str:
        """Pick among display forms of a proper noun: longest, then not ALL CAPS, then first."""
        if not candidates:
            raise ValueError("Cannot choose a display form from no candidates")
        return max(candidates, key=lambda c: (len(c), not is_all_caps(c)))
