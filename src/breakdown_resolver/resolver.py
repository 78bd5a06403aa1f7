import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from .attribution.attributor import CooccurrenceAttributor
from .attribution.glasses import glasses_overrides
from .attribution.ownership_index import OwnershipIndex
from .config import ResolverConfig
from .fanout import run_backfill
from .grouping.character_canonicalizer import CharacterCanonicalizer
from .grouping.grouping_engine import GroupingEngine
from .grouping.label_selector import LabelSelector
from .grouping.location_clusterer import LocationClusterer, split_and_clean_locations
from .ids import IdGenerator, create_id_generator
from .models import Category, CategoryResult
from .normalization.filters import is_non_prop, is_vehicle_entity
from .normalization.normalizer import dedupe_casefold
from .normalization.ownership import parse_ownership
from .normalization.synonyms import PROP_FAMILIES, VEHICLE_FAMILIES, FamilyTable, SynonymFamilyIndex
from .schemas import Breakdown, SceneContext, clean_string_list

logger = logging.getLogger(__name__)

DEFAULT_FAMILY_TABLES: Dict[Category, FamilyTable] = {
    Category.PROPS: PROP_FAMILIES,
    Category.VEHICLES: VEHICLE_FAMILIES,
    Category.WARDROBE: [],
}

# SceneContext field each noun category is attributed from
EVIDENCE_FIELDS: Dict[Category, str] = {
    Category.PROPS: "key_objects",
    Category.VEHICLES: "picture_vehicles",
    Category.WARDROBE: "wardrobe",
}

SceneInput = Union[SceneContext, Dict[str, Any]]


def coerce_scenes(scene_contexts: Optional[Iterable[SceneInput]]) -> List[SceneContext]:
    """Validate scene records; unusable records are skipped, never raised."""
    scenes: List[SceneContext] = []
    for scene in scene_contexts or []:
        if isinstance(scene, SceneContext):
            scenes.append(scene)
            continue
        if not isinstance(scene, dict):
            continue
        try:
            scenes.append(SceneContext.model_validate(scene))
        except ValidationError as e:
            logger.warning(f"Skipping malformed scene record: {e.error_count()} errors")
    return scenes


class EntityResolver:
    """
    Facade over the entity-resolution engine.
    Turns raw breakdown strings into {ungrouped, groups} per category.

    Every call is an independent resolution pass with its own id generator
    and ownership index; the resolver keeps no state between calls beyond
    its configuration and family indexes.
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        family_tables: Optional[Dict[Category, FamilyTable]] = None,
    ):
        """
        Composition root.

        :param config: Tuning constants (default ResolverConfig())
        :param family_tables: Per-category synonym families overriding the defaults
        :raises: FamilyTableError if strict tables contain a member in two families
        """
        self.config = config or ResolverConfig()
        self._labels = LabelSelector()
        self._characters = CharacterCanonicalizer(self._labels)
        self._locations = LocationClusterer(self._labels)
        self._attributor = CooccurrenceAttributor(self.config)

        tables = dict(DEFAULT_FAMILY_TABLES)
        tables.update(family_tables or {})
        self._family_indexes: Dict[Category, SynonymFamilyIndex] = {
            Category(category): self._build_index(table) for category, table in tables.items()
        }

    def _build_index(self, table: FamilyTable) -> SynonymFamilyIndex:
        return SynonymFamilyIndex(table, strict=self.config.strict_family_tables)

    def new_id_generator(self) -> IdGenerator:
        return create_id_generator(self.config.id_strategy)

    def backfill_scenes(
        self,
        scene_contexts: Optional[Iterable[SceneInput]],
        extractor: Callable[[SceneContext], Awaitable[Any]],
    ) -> List[SceneContext]:
        """
        Fill in entity evidence for scenes that have none, with at most
        config.fanout_batch_size extraction calls in flight.

        :param scene_contexts: Scene records
        :param extractor: Async call returning a SceneContext (or dict) for one scene
        :return: Scene records ready for resolve_category / resolve_breakdown
        """
        return run_backfill(coerce_scenes(scene_contexts), extractor, self.config.fanout_batch_size)

    # ----------------------------
    # Per-category resolution
    # ----------------------------
    def resolve_category(
        self,
        category: Union[Category, str],
        raw_items: Iterable[Any],
        scene_contexts: Optional[Iterable[SceneInput]] = None,
        family_tables: Optional[FamilyTable] = None,
        id_generator: Optional[IdGenerator] = None,
        character_aliases: Optional[Dict[str, str]] = None,
    ) -> CategoryResult:
        """
        Resolve one category.

        :param category: Category (or its string value)
        :param raw_items: Raw extracted items; null-ish and blank entries are dropped
        :param scene_contexts: Optional scene evidence for attribution
        :param family_tables: Synonym families for this call only
        :param id_generator: Id source (default: a fresh one per call)
        :param character_aliases: character key -> canonical name (derived from scenes if omitted)
        :return: CategoryResult
        """
        category = Category(category)
        items = dedupe_casefold(clean_string_list(list(raw_items or [])))
        scenes = coerce_scenes(scene_contexts)
        id_generator = id_generator or self.new_id_generator()

        if category == Category.CHARACTERS:
            return self._characters.canonicalize(items, id_generator)

        if category == Category.LOCATIONS:
            return self._resolve_locations(items, id_generator)

        excluded: List[str] = []
        if category == Category.PROPS:
            items, excluded = self._filter_props(items)

        if character_aliases is None and scenes:
            character_aliases = self._characters.canonical_names(
                [name for scene in scenes for name in scene.characters]
            )

        family_index = (
            self._build_index(family_tables)
            if family_tables is not None
            else self._family_indexes[category]
        )
        result = self._resolve_nouns(category, items, scenes, family_index, id_generator, character_aliases)
        result.excluded = excluded
        return result

    def _filter_props(self, items: List[str]):
        kept: List[str] = []
        excluded: List[str] = []
        for item in items:
            if is_vehicle_entity(item) or is_non_prop(item):
                excluded.append(item)
            else:
                kept.append(item)
        if excluded:
            logger.debug(f"Filtered {len(excluded)} non-prop items: {excluded}")
        return kept, excluded

    def _resolve_locations(self, items: List[str], id_generator: IdGenerator) -> CategoryResult:
        locations: List[str] = []
        excluded: List[str] = []
        for item in items:
            kept, dropped = split_and_clean_locations(item)
            locations.extend(kept)
            excluded.extend(dropped)

        result = self._locations.cluster(locations, id_generator)
        result.excluded = excluded
        return result

    def _resolve_nouns(
        self,
        category: Category,
        items: List[str],
        scenes: Sequence[SceneContext],
        family_index: SynonymFamilyIndex,
        id_generator: IdGenerator,
        character_aliases: Optional[Dict[str, str]],
    ) -> CategoryResult:
        engine = GroupingEngine(
            family_index,
            label_selector=self._labels,
            title_case_labels=category.value in self.config.title_case_categories,
            owner_only=category == Category.WARDROBE,
            character_aliases=character_aliases,
        )
        source_field = EVIDENCE_FIELDS[category]

        noun_overrides = glasses_overrides(items, scenes, source_field) if category == Category.PROPS else {}
        buckets = engine.build_buckets(items, noun_overrides)

        attributed = 0
        if scenes:
            index = OwnershipIndex.build(
                scenes,
                source_field=source_field,
                character_aliases=character_aliases,
                include_locations=category != Category.WARDROBE,
            )
            for item in engine.standalone_items(buckets):
                parsed = parse_ownership(item)
                if parsed.has_owner:
                    continue
                attribution = self._attributor.attribute(parsed.noun, index)
                if attribution is None:
                    continue
                buckets = engine.attach(buckets, item, attribution.owner, attribution.owner_key)
                attributed += 1

        result = engine.finalize(buckets, id_generator)
        logger.info(
            f"{category.value.capitalize()}: {len(items)} items -> {len(result.groups)} groups, "
            f"{len(result.ungrouped)} ungrouped, {attributed} attributed"
        )
        return result

    # ----------------------------
    # Whole-breakdown resolution
    # ----------------------------
    def resolve_breakdown(self, breakdown: Union[Breakdown, Dict[str, Any], None]) -> Dict[str, CategoryResult]:
        """
        Resolve every category of a breakdown in one pass.

        Characters are resolved first so scene characters can be mapped to
        their canonical names during attribution. Vehicles filtered out of
        props and locations are moved to the vehicles category.

        :param breakdown: Breakdown model or its dict form
        :return: category value -> CategoryResult
        """
        if not isinstance(breakdown, Breakdown):
            breakdown = Breakdown.model_validate(breakdown or {})

        id_generator = self.new_id_generator()
        scenes = breakdown.scenes

        characters = self.resolve_category(Category.CHARACTERS, breakdown.characters, id_generator=id_generator)
        aliases = self._characters.canonical_names(
            breakdown.characters + [name for scene in scenes for name in scene.characters]
        )

        locations = self.resolve_category(Category.LOCATIONS, breakdown.locations, id_generator=id_generator)
        props = self.resolve_category(
            Category.PROPS, breakdown.props, scenes, id_generator=id_generator, character_aliases=aliases
        )

        rerouted = list(locations.excluded) + [item for item in props.excluded if is_vehicle_entity(item)]
        if rerouted:
            logger.info(f"Moved {len(rerouted)} vehicle items to vehicles: {rerouted}")

        vehicles = self.resolve_category(
            Category.VEHICLES,
            breakdown.vehicles + rerouted,
            scenes,
            id_generator=id_generator,
            character_aliases=aliases,
        )
        wardrobe = self.resolve_category(
            Category.WARDROBE, breakdown.wardrobe, scenes, id_generator=id_generator, character_aliases=aliases
        )

        return {
            Category.CHARACTERS.value: characters,
            Category.LOCATIONS.value: locations,
            Category.PROPS.value: props,
            Category.WARDROBE.value: wardrobe,
            Category.VEHICLES.value: vehicles,
        }


def results_to_dict(results: Dict[str, CategoryResult]) -> Dict[str, dict]:
    """Wire form of resolve_breakdown's output."""
    return {category: result.to_dict() for category, result in results.items()}


def resolve_category(
    category: Union[Category, str],
    raw_items: Iterable[Any],
    scene_contexts: Optional[Iterable[SceneInput]] = None,
    family_tables: Optional[FamilyTable] = None,
    config: Optional[ResolverConfig] = None,
) -> CategoryResult:
    """
    Pure-function entry point: (rawItems, sceneContexts, familyTables) -> CategoryResult.
    """
    return EntityResolver(config).resolve_category(category, raw_items, scene_contexts, family_tables)
