"""
Normalization layer: text keys, ownership parsing, synonym families and
category filters.
"""
from .normalizer import (
    normalize_key,
    normalize_apostrophes,
    normalize_owner,
    singularize,
    title_case,
    dedupe_casefold,
    casefold_key,
    is_all_caps,
)
from .ownership import parse_ownership, OwnershipRule, OWNERSHIP_RULES
from .synonyms import SynonymFamilyIndex, VEHICLE_FAMILIES, PROP_FAMILIES
from .filters import is_vehicle_entity, is_likely_vehicle_location, is_non_prop

__all__ = [
    "normalize_key",
    "normalize_apostrophes",
    "normalize_owner",
    "singularize",
    "title_case",
    "dedupe_casefold",
    "casefold_key",
    "is_all_caps",
    "parse_ownership",
    "OwnershipRule",
    "OWNERSHIP_RULES",
    "SynonymFamilyIndex",
    "VEHICLE_FAMILIES",
    "PROP_FAMILIES",
    "is_vehicle_entity",
    "is_likely_vehicle_location",
    "is_non_prop",
]
