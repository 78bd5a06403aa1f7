"""
Manual overrides layered on a resolved category.

Each operation returns a new CategoryResult and leaves its input untouched,
so a fresh engine run can be diffed against the edited result. Unknown
group ids and items are logged and ignored.
"""
import copy
import logging
from typing import Iterable, Optional

from .ids import IdGenerator, UuidIdGenerator
from .models import CategoryResult, EntityGroup
from .normalization.normalizer import normalize_apostrophes

logger = logging.getLogger(__name__)


def _copy(result: CategoryResult) -> CategoryResult:
    return copy.deepcopy(result)


def merge_items(
    result: CategoryResult,
    items: Iterable[str],
    parent_name: str,
    id_generator: Optional[IdGenerator] = None,
) -> CategoryResult:
    """
    Merge selected items into a new group.

    Selected items are removed from ungrouped and from any group holding
    them; groups left empty are dropped.

    :param result: Current category result
    :param items: Items to merge (at least two known items)
    :param parent_name: Display name of the new group
    :param id_generator: Id source (default: uuid ids)
    :return: New CategoryResult
    """
    parent_name = normalize_apostrophes(parent_name or "")
    items = list(items or [])
    present = set(result.all_items())
    selected = [item for item in dict.fromkeys(items) if item in present]

    unknown = [item for item in items if item not in present]
    if unknown:
        logger.warning(f"Ignoring unknown items in merge: {unknown}")
    if len(selected) < 2 or not parent_name:
        logger.warning(f"Merge needs two known items and a name; got {selected} / '{parent_name}'")
        return _copy(result)

    chosen = set(selected)
    edited = _copy(result)
    edited.ungrouped = [item for item in edited.ungrouped if item not in chosen]
    for group in edited.groups:
        group.variants = [v for v in group.variants if v not in chosen]
    edited.groups = [group for group in edited.groups if group.variants]

    id_generator = id_generator or UuidIdGenerator()
    edited.groups.append(EntityGroup(id=id_generator.next_id(), parent_name=parent_name, variants=selected))
    return edited


def unlink_group(result: CategoryResult, group_id: str) -> CategoryResult:
    """Dissolve a group; its variants go back to ungrouped."""
    group = result.find_group(group_id)
    if group is None:
        logger.warning(f"Cannot unlink unknown group '{group_id}'")
        return _copy(result)

    edited = _copy(result)
    edited.ungrouped.extend(group.variants)
    edited.groups = [g for g in edited.groups if g.id != group_id]
    return edited


def rename_group(result: CategoryResult, group_id: str, parent_name: str) -> CategoryResult:
    parent_name = normalize_apostrophes(parent_name or "")
    edited = _copy(result)
    group = edited.find_group(group_id)
    if group is None or not parent_name:
        logger.warning(f"Cannot rename group '{group_id}' to '{parent_name}'")
        return edited
    group.parent_name = parent_name
    return edited


def remove_item(result: CategoryResult, item: str) -> CategoryResult:
    """Delete an ungrouped item. Grouped items must be unlinked first."""
    edited = _copy(result)
    if item not in edited.ungrouped:
        logger.warning(f"Cannot remove '{item}': not an ungrouped item")
        return edited
    edited.ungrouped = [u for u in edited.ungrouped if u != item]
    return edited


def add_item(result: CategoryResult, item: str) -> CategoryResult:
    """Add a new ungrouped item; blanks and case-insensitive duplicates are ignored."""
    item = normalize_apostrophes(item or "")
    edited = _copy(result)
    if not item:
        return edited
    if any(existing.casefold() == item.casefold() for existing in edited.all_items()):
        logger.warning(f"Not adding '{item}': already present")
        return edited
    edited.ungrouped.append(item)
    return edited
