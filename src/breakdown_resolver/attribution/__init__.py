"""
Ownership attribution from scene co-occurrence evidence.
"""
from .attributor import Attribution, CooccurrenceAttributor, top_candidate
from .glasses import DRINKWARE, EYEWEAR, classify_glasses, glasses_overrides, is_ambiguous_glasses
from .ownership_index import NounEvidence, OwnershipIndex

__all__ = [
    "Attribution",
    "CooccurrenceAttributor",
    "top_candidate",
    "DRINKWARE",
    "EYEWEAR",
    "classify_glasses",
    "glasses_overrides",
    "is_ambiguous_glasses",
    "NounEvidence",
    "OwnershipIndex",
]
