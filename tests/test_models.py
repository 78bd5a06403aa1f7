import pytest
from breakdown_resolver.models import Category, CategoryResult, EntityGroup
from breakdown_resolver.schemas import Breakdown, SceneContext, clean_string_list


def test_category_values():
    assert Category("props") is Category.PROPS
    assert [c.value for c in Category] == ["characters", "locations", "props", "wardrobe", "vehicles"]


def test_group_wire_format():
    group = EntityGroup(id="grp_1", parent_name="Howard's Gun", variants=["Gun", "Pistol"])

    assert group.to_dict() == {"id": "grp_1", "parentName": "Howard's Gun", "variants": ["Gun", "Pistol"]}


def test_category_result_hides_excluded():
    result = CategoryResult(
        ungrouped=["Lamp"],
        groups=[EntityGroup(id="grp_1", parent_name="Gun", variants=["Gun", "Pistol"])],
        excluded=["Rain"],
    )

    assert result.all_items() == ["Lamp", "Gun", "Pistol"]
    assert "excluded" not in result.to_dict()
    assert result.find_group("grp_1").parent_name == "Gun"
    assert result.find_group("grp_2") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ("Gun", ["Gun"]),
        ([" Gun ", None, 4, "", "   ", "Knife"], ["Gun", "Knife"]),
        ({"a": 1}, []),
    ],
)
def test_clean_string_list(value, expected):
    assert clean_string_list(value) == expected


def test_scene_context_accepts_both_spellings():
    camel = SceneContext.model_validate({"sceneNumber": "3", "keyObjects": ["Phone"], "locationName": " BAR "})
    snake = SceneContext(scene_number=3, key_objects=["Phone"], location_name="BAR")

    assert camel == snake
    assert camel.location_name == "BAR"


def test_scene_context_junk():
    scene = SceneContext.model_validate({"sceneNumber": "one", "characters": "Howard", "locationName": 12})

    assert scene.scene_number is None
    assert scene.characters == ["Howard"]
    assert scene.location_name == ""
    assert scene.description is None


def test_breakdown_drops_junk():
    breakdown = Breakdown.model_validate({
        "props": ["Gun", None, ""],
        "locations": None,
        "scenes": [{"sceneNumber": 1}, "scene two", None],
    })

    assert breakdown.props == ["Gun"]
    assert breakdown.locations == []
    assert len(breakdown.scenes) == 1
    assert breakdown.scenes[0].scene_number == 1
