"""
Grouping engine for noun categories (props, vehicles, wardrobe).

Items are bucketed by (owner, family). An ownerless bucket is folded into
an owned bucket only when exactly one owned bucket shares its family;
ambiguous ownership is never guessed.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..ids import IdGenerator
from ..models import CategoryResult, EntityGroup, ParsedOwnership
from ..normalization.normalizer import dedupe_casefold, normalize_apostrophes, title_case
from ..normalization.ownership import parse_ownership
from ..normalization.synonyms import SynonymFamilyIndex
from .character_canonicalizer import canonical_owner_key
from .label_selector import LabelSelector

logger = logging.getLogger(__name__)

ANY_FAMILY = "*"

BucketKey = Tuple[str, str]


@dataclass
class Bucket:
    """Items sharing an (owner, family) key."""
    owner_key: str
    family_id: str
    owner: str = ""
    items: List[str] = field(default_factory=list)
    nouns: Dict[str, str] = field(default_factory=dict)
    # True when the owner was inferred from scene evidence rather than written
    inferred_owner: bool = False

    @property
    def key(self) -> BucketKey:
        return (self.owner_key, self.family_id)

    @property
    def is_owned(self) -> bool:
        return bool(self.owner_key)

    def is_group(self) -> bool:
        """Two or more members, or a single member with ownership evidence."""
        return len(self.items) >= 2 or self.is_owned


class GroupingEngine:
    """
    Groups one category's raw items.

    Usage:
        engine = GroupingEngine(SynonymFamilyIndex(PROP_FAMILIES), title_case_labels=True)
        buckets = engine.build_buckets(["Phone", "Rachel's Phone"])
        result = engine.finalize(buckets, SequentialIdGenerator())
    """

    def __init__(
        self,
        family_index: SynonymFamilyIndex,
        label_selector: Optional[LabelSelector] = None,
        title_case_labels: bool = False,
        owner_only: bool = False,
        character_aliases: Optional[Dict[str, str]] = None,
    ):
        """
        :param family_index: Synonym families for this category
        :param label_selector: Canonical label rules (default LabelSelector())
        :param title_case_labels: Title-case parentNames for presentation
        :param owner_only: Bucket owned items by owner alone (wardrobe)
        :param character_aliases: character key -> canonical name; written owners
            that are character variants bucket under the canonical character
        """
        self._families = family_index
        self._labels = label_selector or LabelSelector()
        self.title_case_labels = title_case_labels
        self.owner_only = owner_only
        self.character_aliases = character_aliases or {}

    def owner_key(self, parsed: ParsedOwnership) -> str:
        if not parsed.has_owner:
            return ""
        return canonical_owner_key(parsed.owner, self.character_aliases) or parsed.owner_key

    def bucket_key(self, parsed: ParsedOwnership, noun: str) -> BucketKey:
        owner_key = self.owner_key(parsed)
        if self.owner_only and owner_key:
            return (owner_key, ANY_FAMILY)
        return (owner_key, self._families.family_key(noun))

    def build_buckets(
        self,
        items: List[str],
        noun_overrides: Optional[Dict[str, str]] = None,
    ) -> List[Bucket]:
        """
        Bucket items by (owner, family) and apply the cross-merge rule.

        :param items: Raw items (blank and case-insensitive duplicates are dropped)
        :param noun_overrides: Optional item -> noun key replacements (e.g. "glasses" senses)
        :return: Buckets in first-appearance order
        """
        noun_overrides = noun_overrides or {}
        buckets: Dict[BucketKey, Bucket] = {}

        for item in dedupe_casefold(items):
            parsed = parse_ownership(item)
            noun = noun_overrides.get(item, parsed.noun)
            key = self.bucket_key(parsed, noun)
            bucket = buckets.get(key)
            if bucket is None:
                bucket = Bucket(owner_key=key[0], family_id=key[1], owner=parsed.owner)
                buckets[key] = bucket
            bucket.items.append(item)
            bucket.nouns[item] = noun

        return self._cross_merge(list(buckets.values()))

    def _cross_merge(self, buckets: List[Bucket]) -> List[Bucket]:
        owned_by_family: Dict[str, List[Bucket]] = {}
        for bucket in buckets:
            if bucket.is_owned:
                owned_by_family.setdefault(bucket.family_id, []).append(bucket)

        survivors: List[Bucket] = []
        for bucket in buckets:
            if bucket.is_owned:
                survivors.append(bucket)
                continue

            candidates = owned_by_family.get(bucket.family_id, [])
            if len(candidates) == 1:
                target = candidates[0]
                target.items.extend(bucket.items)
                target.nouns.update(bucket.nouns)
                logger.debug(
                    f"Cross-merged {bucket.items} into owned bucket '{target.owner}' ({target.family_id})"
                )
                continue

            if len(candidates) > 1:
                logger.debug(
                    f"Left {bucket.items} standalone: {len(candidates)} owners share {bucket.family_id}"
                )
            survivors.append(bucket)

        return survivors

    def attach(self, buckets: List[Bucket], item: str, owner: str, owner_key: str) -> List[Bucket]:
        """
        Move a standalone item into the bucket of an inferred owner.

        Joins the owner's existing bucket for the same family when there is
        one, otherwise opens a new owned bucket.
        """
        source = next((b for b in buckets if item in b.items), None)
        if source is None:
            return buckets

        noun = source.nouns.get(item, "")
        family_id = ANY_FAMILY if self.owner_only else source.family_id
        target = next(
            (b for b in buckets if b.owner_key == owner_key and b.family_id == family_id),
            None,
        )

        source.items.remove(item)
        source.nouns.pop(item, None)
        if target is None:
            target = Bucket(owner_key=owner_key, family_id=family_id, owner=owner, inferred_owner=True)
            buckets.append(target)
        target.items.append(item)
        target.nouns[item] = noun

        return [b for b in buckets if b.items]

    def label(self, bucket: Bucket) -> str:
        """Canonical parentName for a bucket."""
        if self.owner_only and bucket.is_owned:
            owner = normalize_apostrophes(bucket.owner)
            return title_case(owner) if self.title_case_labels else owner
        if bucket.inferred_owner and not any(parse_ownership(i).has_owner for i in bucket.items):
            return self._labels.choose_owned(bucket.owner, bucket.items, self.title_case_labels)
        return self._labels.choose(bucket.items, self.title_case_labels)

    def finalize(self, buckets: List[Bucket], id_generator: IdGenerator) -> CategoryResult:
        """Turn buckets into groups (with canonical labels) and ungrouped items."""
        result = CategoryResult()
        for bucket in buckets:
            if bucket.is_group():
                result.groups.append(EntityGroup(
                    id=id_generator.next_id(),
                    parent_name=self.label(bucket),
                    variants=list(bucket.items),
                ))
            else:
                result.ungrouped.extend(bucket.items)
        return result

    def standalone_items(self, buckets: List[Bucket]) -> List[str]:
        """Items that would be emitted ungrouped."""
        return [item for b in buckets if not b.is_group() for item in b.items]

    def group(
        self,
        items: List[str],
        id_generator: IdGenerator,
        noun_overrides: Optional[Dict[str, str]] = None,
    ) -> CategoryResult:
        """Bucket and finalize in one step (no attribution)."""
        return self.finalize(self.build_buckets(items, noun_overrides), id_generator)
