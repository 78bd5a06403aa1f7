"""
Entity resolution for script breakdowns.

Turns noisy extracted strings (characters, locations, props, wardrobe,
vehicles) into canonical entities with alias groups.
"""
from .config import ResolverConfig
from .config_loader import load_config_from_env
from .exceptions import ResolverError, ConfigurationError, FamilyTableError
from .ids import IdGenerator, SequentialIdGenerator, UuidIdGenerator, create_id_generator
from .models import Category, CategoryResult, EntityGroup, ParsedOwnership
from .schemas import Breakdown, SceneContext
from .resolver import EntityResolver, resolve_category, results_to_dict
from .editing import merge_items, unlink_group, rename_group, remove_item, add_item
from .fanout import fan_out, backfill_scene_contexts

__all__ = [
    "ResolverConfig",
    "load_config_from_env",
    "ResolverError",
    "ConfigurationError",
    "FamilyTableError",
    "IdGenerator",
    "SequentialIdGenerator",
    "UuidIdGenerator",
    "create_id_generator",
    "Category",
    "CategoryResult",
    "EntityGroup",
    "ParsedOwnership",
    "Breakdown",
    "SceneContext",
    "EntityResolver",
    "resolve_category",
    "results_to_dict",
    "merge_items",
    "unlink_group",
    "rename_group",
    "remove_item",
    "add_item",
    "fan_out",
    "backfill_scene_contexts",
]
