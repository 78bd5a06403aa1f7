from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Category(str, Enum):
    """Entity categories produced by script breakdown."""
    CHARACTERS = "characters"
    LOCATIONS = "locations"
    PROPS = "props"
    WARDROBE = "wardrobe"
    VEHICLES = "vehicles"


@dataclass(frozen=True)
class ParsedOwnership:
    owner: str
    noun: str
    original: str
    rule: str = ""
    owner_key: str = ""

    @property
    def has_owner(self) -> bool:
        return bool(self.owner_key)


@dataclass
class EntityGroup:
    id: str
    parent_name: str
    variants: List[str]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "parentName": self.parent_name,
            "variants": list(self.variants),
        }


@dataclass
class CategoryResult:
    ungrouped: List[str] = field(default_factory=list)
    groups: List[EntityGroup] = field(default_factory=list)
    # Items filtered out before grouping; not part of the wire output
    excluded: List[str] = field(default_factory=list)

    def all_items(self) -> List[str]:
        """Every item present in the result (ungrouped first, then group variants)."""
        items = list(self.ungrouped)
        for group in self.groups:
            items.extend(group.variants)
        return items

    def find_group(self, group_id: str):
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def to_dict(self) -> dict:
        return {
            "ungrouped": list(self.ungrouped),
            "groups": [group.to_dict() for group in self.groups],
        }
