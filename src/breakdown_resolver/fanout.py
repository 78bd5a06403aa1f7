"""
Bounded concurrent fan-out that feeds the engine.

Used when scenes have no extracted entities yet: one extraction call per
scene, at most batch_size in flight. A failed call only leaves its scene
without evidence; the rest of the batch carries on.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .schemas import SceneContext

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

# SceneContext fields an extraction call may fill in
EVIDENCE_FIELDS = ("characters", "key_objects", "location_name", "wardrobe", "picture_vehicles", "description")


async def fan_out(keys: Iterable[K], worker: Callable[[K], Awaitable[V]], batch_size: int = 5) -> Dict[K, V]:
    """
    Run worker(key) for every key with bounded concurrency.

    :param keys: Keys to process (duplicates run once)
    :param worker: Async callable per key
    :param batch_size: Maximum calls in flight
    :return: key -> result for the calls that succeeded
    :raises: ConfigurationError if batch_size < 1
    """
    if batch_size < 1:
        raise ConfigurationError(f"fanout batch size must be >= 1, got {batch_size}")

    unique = list(dict.fromkeys(keys))
    if not unique:
        return {}

    semaphore = asyncio.Semaphore(batch_size)

    async def run(key: K) -> V:
        async with semaphore:
            return await worker(key)

    results = await asyncio.gather(*(run(key) for key in unique), return_exceptions=True)

    succeeded: Dict[K, V] = {}
    for key, result in zip(unique, results):
        if isinstance(result, Exception):
            logger.warning(f"Fan-out call for {key!r} failed: {result}")
            continue
        succeeded[key] = result

    logger.info(f"Fan-out: {len(succeeded)}/{len(unique)} calls succeeded")
    return succeeded


def needs_extraction(scene: SceneContext) -> bool:
    """True when a scene carries no entity evidence at all."""
    return not (scene.characters or scene.key_objects or scene.location_name
                or scene.wardrobe or scene.picture_vehicles)


def merge_extraction(scene: SceneContext, extracted: Any) -> SceneContext:
    """
    Copy of the scene with the non-empty fields of an extraction result.

    Unusable results leave the scene unchanged.
    """
    if isinstance(extracted, SceneContext):
        found = extracted
    elif isinstance(extracted, dict):
        try:
            found = SceneContext.model_validate(extracted)
        except ValidationError as e:
            logger.warning(f"Discarding extraction for scene {scene.scene_number}: {e.error_count()} errors")
            return scene
    else:
        return scene

    update = {name: getattr(found, name) for name in EVIDENCE_FIELDS if getattr(found, name)}
    return scene.model_copy(update=update)


async def backfill_scene_contexts(
    scenes: List[SceneContext],
    extractor: Callable[[SceneContext], Awaitable[Any]],
    batch_size: int = 5,
) -> List[SceneContext]:
    """
    Extract entities for scenes that have none.

    :param scenes: Scene records, in order
    :param extractor: Async call returning a SceneContext or its dict form for one scene
    :param batch_size: Maximum extraction calls in flight
    :return: New scene list; failed scenes are returned unchanged
    """
    pending = [position for position, scene in enumerate(scenes) if needs_extraction(scene)]
    if not pending:
        return list(scenes)

    async def extract(position: int):
        return await extractor(scenes[position])

    extracted = await fan_out(pending, extract, batch_size)

    backfilled: List[SceneContext] = []
    for position, scene in enumerate(scenes):
        if position in extracted:
            scene = merge_extraction(scene, extracted[position])
        backfilled.append(scene)
    return backfilled


def run_backfill(
    scenes: List[SceneContext],
    extractor: Callable[[SceneContext], Awaitable[Any]],
    batch_size: Optional[int] = None,
) -> List[SceneContext]:
    """Synchronous wrapper around backfill_scene_contexts."""
    return asyncio.run(backfill_scene_contexts(scenes, extractor, batch_size or 5))
