"""
Grouping layer: per-category bucketing, character and location
canonicalization, and label selection.
"""
from .label_selector import LabelSelector
from .grouping_engine import GroupingEngine, Bucket
from .character_canonicalizer import (
    CharacterCanonicalizer,
    character_key,
    clean_character_name,
    strip_honorific,
)
from .location_clusterer import (
    LocationClusterer,
    location_base,
    normalize_location_key,
    split_and_clean_locations,
)

__all__ = [
    "LabelSelector",
    "GroupingEngine",
    "Bucket",
    "CharacterCanonicalizer",
    "character_key",
    "clean_character_name",
    "strip_honorific",
    "LocationClusterer",
    "location_base",
    "normalize_location_key",
    "split_and_clean_locations",
]
