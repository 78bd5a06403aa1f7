"""
Per-pass co-occurrence index.

Maps each normalized noun to the characters and locations it shares scenes
with. Built once per resolution pass from SceneContext records and thrown
away after attribution.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

from ..grouping.character_canonicalizer import (
    canonical_owner_key,
    character_key,
    clean_character_name,
    strip_honorific,
)
from ..grouping.location_clusterer import location_base, split_and_clean_locations
from ..normalization.normalizer import dedupe_casefold, normalize_owner
from ..normalization.ownership import parse_ownership
from ..schemas import SceneContext

logger = logging.getLogger(__name__)


@dataclass
class NounEvidence:
    """Scene evidence for one noun."""
    scene_count: int = 0
    character_counts: Counter = field(default_factory=Counter)
    location_counts: Counter = field(default_factory=Counter)
    explicit_owners: Counter = field(default_factory=Counter)
    # owner key -> display name, shared by all three counters
    names: Dict[str, str] = field(default_factory=dict)


class OwnershipIndex:
    """
    Noun -> co-occurrence evidence.

    Usage:
        index = OwnershipIndex.build(scenes, source_field="key_objects")
        evidence = index.get("phone")
    """

    def __init__(self):
        self._evidence: Dict[str, NounEvidence] = {}

    def __len__(self) -> int:
        return len(self._evidence)

    def __contains__(self, noun: str) -> bool:
        return noun in self._evidence

    def get(self, noun: str) -> Optional[NounEvidence]:
        return self._evidence.get(noun)

    @classmethod
    def build(
        cls,
        scenes: Sequence[SceneContext],
        source_field: str = "key_objects",
        character_aliases: Optional[Dict[str, str]] = None,
        include_locations: bool = True,
    ) -> "OwnershipIndex":
        """
        Build the index.

        :param scenes: Scene evidence
        :param source_field: SceneContext field holding the category's items
        :param character_aliases: character key -> canonical display name
        :param include_locations: Count location co-occurrences too
        :return: OwnershipIndex
        """
        index = cls()
        aliases = character_aliases or {}

        for scene in scenes:
            items = dedupe_casefold(getattr(scene, source_field, []) or [])
            if not items:
                continue

            characters = cls._scene_characters(scene.characters, aliases)
            locations = cls._scene_locations(scene) if include_locations else {}

            # One increment per scene, however often the noun is listed
            nouns_seen = set()
            for item in items:
                parsed = parse_ownership(item)
                if not parsed.noun:
                    continue
                evidence = index._evidence.setdefault(parsed.noun, NounEvidence())
                if parsed.has_owner:
                    owner_key = canonical_owner_key(parsed.owner, aliases) or parsed.owner_key
                    evidence.explicit_owners[owner_key] += 1
                    evidence.names.setdefault(owner_key, parsed.owner)
                if parsed.noun in nouns_seen:
                    continue
                nouns_seen.add(parsed.noun)

                evidence.scene_count += 1
                for key, display in characters.items():
                    evidence.character_counts[key] += 1
                    evidence.names.setdefault(key, display)
                for key, display in locations.items():
                    evidence.location_counts[key] += 1
                    evidence.names.setdefault(key, display)

        logger.debug(f"Ownership index over {len(scenes)} scenes: {len(index)} nouns ({source_field})")
        return index

    @staticmethod
    def _scene_characters(names: Iterable[str], aliases: Dict[str, str]) -> Dict[str, str]:
        characters: Dict[str, str] = {}
        for name in dedupe_casefold(names):
            display = aliases.get(character_key(name)) or strip_honorific(clean_character_name(name))
            key = canonical_owner_key(display, aliases)
            if key:
                characters.setdefault(key, display)
        return characters

    @staticmethod
    def _scene_locations(scene: SceneContext) -> Dict[str, str]:
        locations: Dict[str, str] = {}
        kept, _ = split_and_clean_locations(scene.location_name, scene.picture_vehicles)
        for location in kept:
            _, display = location_base(location)
            key = normalize_owner(display)
            if key:
                locations.setdefault(key, display)
        return locations
