"""
Input contract for the resolver.

Raw breakdown output is validated here; null-ish, non-string and blank
entries are dropped so the engine only ever sees clean strings.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def clean_string_list(value: Any) -> List[str]:
    """Keep non-blank strings (stripped); drop everything else."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


class SceneContext(BaseModel):
    """One scene's extracted data, used as evidence for ownership attribution."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    scene_number: Optional[int] = Field(default=None, alias="sceneNumber")
    characters: List[str] = Field(default_factory=list)
    key_objects: List[str] = Field(default_factory=list, alias="keyObjects")
    location_name: str = Field(default="", alias="locationName")
    wardrobe: List[str] = Field(default_factory=list)
    picture_vehicles: List[str] = Field(default_factory=list, alias="pictureVehicles")
    description: Optional[str] = Field(
        default=None,
        description="Optional free-text scene summary; only used as context for ambiguous nouns",
    )

    @field_validator("characters", "key_objects", "wardrobe", "picture_vehicles", mode="before")
    @classmethod
    def _clean_lists(cls, value: Any) -> List[str]:
        return clean_string_list(value)

    @field_validator("location_name", mode="before")
    @classmethod
    def _clean_location(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @field_validator("scene_number", mode="before")
    @classmethod
    def _clean_scene_number(cls, value: Any) -> Optional[int]:
        try:
            return int(value)
        except (TypeError, ValueError):
            return None


class Breakdown(BaseModel):
    """Raw extraction output for a whole script, one list per category."""
    model_config = ConfigDict(populate_by_name=True)

    characters: List[str] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)
    props: List[str] = Field(default_factory=list)
    wardrobe: List[str] = Field(default_factory=list)
    vehicles: List[str] = Field(default_factory=list)
    scenes: List[SceneContext] = Field(default_factory=list)

    @field_validator("characters", "locations", "props", "wardrobe", "vehicles", mode="before")
    @classmethod
    def _clean_lists(cls, value: Any) -> List[str]:
        return clean_string_list(value)

    @field_validator("scenes", mode="before")
    @classmethod
    def _clean_scenes(cls, value: Any) -> list:
        if not isinstance(value, (list, tuple)):
            return []
        return [scene for scene in value if isinstance(scene, (dict, SceneContext))]
