EVAL_CASES = [
    {
        "id": "ambiguous_owner_phone",
        "category": "props",
        "items": ["Phone", "Rachel's Phone", "Mike's Phone"],
        "scenes": [],
        "expected_groups": [["Rachel's Phone"], ["Mike's Phone"]],
        "expected_parents": ["Rachel's Phone", "Mike's Phone"],
    },
    {
        "id": "single_owner_cross_merge",
        "category": "props",
        "items": ["Cellphone", "Rachel's Phone", "Notebook"],
        "scenes": [],
        "expected_groups": [["Cellphone", "Rachel's Phone"]],
        "expected_parents": ["Rachel's Phone"],
    },
    {
        "id": "character_subset_merge",
        "category": "characters",
        "items": ["Rachel", "Rachel Wells", "Dr. Rachel Wells", "Howard"],
        "scenes": [],
        "expected_groups": [["Rachel", "Rachel Wells", "Dr. Rachel Wells"]],
        "expected_parents": ["Rachel Wells"],
    },
    {
        "id": "character_device_voice",
        "category": "characters",
        "items": ["Howard", "Howard Answering Machine"],
        "scenes": [],
        "expected_groups": [],
        "expected_parents": [],
    },
    {
        "id": "location_base_cluster",
        "category": "locations",
        "items": ["Wells House", "Wells House - Kitchen", "Wells House - Bedroom", "Police Station"],
        "scenes": [],
        "expected_groups": [["Wells House", "Wells House - Kitchen", "Wells House - Bedroom"]],
        "expected_parents": ["Wells House"],
    },
    {
        "id": "vehicle_family",
        "category": "vehicles",
        "items": ["Howard's Corvette", "Car", "Bus"],
        "scenes": [],
        "expected_groups": [["Howard's Corvette", "Car"]],
        "expected_parents": ["Howard's Corvette"],
    },
    {
        "id": "cooccurrence_owner",
        "category": "props",
        "items": ["Briefcase"],
        "scenes": [
            {"sceneNumber": 1, "characters": ["Howard", "Rachel"], "keyObjects": ["Briefcase"]},
            {"sceneNumber": 2, "characters": ["Howard"], "keyObjects": ["Briefcase"]},
            {"sceneNumber": 3, "characters": ["Howard"], "keyObjects": ["Briefcase"]},
            {"sceneNumber": 4, "characters": ["Mike"], "keyObjects": ["Briefcase"]},
        ],
        "expected_groups": [["Briefcase"]],
        "expected_parents": ["Howard's Briefcase"],
    },
    {
        "id": "glasses_senses",
        "category": "props",
        "items": ["Glasses", "Beer Mug", "Reading Glasses"],
        "scenes": [
            {"sceneNumber": 1, "keyObjects": ["Glasses", "Beer Mug"]},
            {"sceneNumber": 2, "keyObjects": ["Reading Glasses"]},
        ],
        "expected_groups": [],
        "expected_parents": [],
    },
]
