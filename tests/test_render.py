from mushtree import MushroomRecord, build_tree, render


def test_render_single_leaf():
    tree = build_tree([MushroomRecord(True, odor="almond")], ["ODOR"])
    assert render(tree) == "└── Leaf: EDIBLE\n"


def test_render_one_split():
    records = [
        MushroomRecord(True, odor="almond"),
        MushroomRecord(True, odor="anise"),
        MushroomRecord(False, odor="foul"),
        MushroomRecord(False, odor="foul"),
    ]
    tree = build_tree(records, ["odor"])
    expected = (
        "└── [Split on: odor]\n"
        "    ├── Value = almond:\n"
        "    │   └── Leaf: EDIBLE\n"
        "    ├── Value = anise:\n"
        "    │   └── Leaf: EDIBLE\n"
        "    └── Value = foul:\n"
        "        └── Leaf: POISONOUS\n"
    )
    assert render(tree) == expected
    assert str(tree) == expected


def test_render_nested_split():
    records = [
        MushroomRecord(True, cap_shape="x", cap_color="n"),
        MushroomRecord(False, cap_shape="x", cap_color="y"),
        MushroomRecord(False, cap_shape="b", cap_color="n"),
        MushroomRecord(True, cap_shape="b", cap_color="y"),
    ]
    tree = build_tree(records, ["CAP-SHAPE", "CAP-COLOR"])
    expected = (
        "└── [Split on: CAP-SHAPE]\n"
        "    ├── Value = x:\n"
        "    │   └── [Split on: CAP-COLOR]\n"
        "    │       ├── Value = n:\n"
        "    │       │   └── Leaf: EDIBLE\n"
        "    │       └── Value = y:\n"
        "    │           └── Leaf: POISONOUS\n"
        "    └── Value = b:\n"
        "        └── [Split on: CAP-COLOR]\n"
        "            ├── Value = n:\n"
        "            │   └── Leaf: POISONOUS\n"
        "            └── Value = y:\n"
        "                └── Leaf: EDIBLE\n"
    )
    assert tree.render() == expected


def test_render_is_deterministic():
    records = [MushroomRecord(True, odor="almond"), MushroomRecord(False, odor="foul")]
    assert render(build_tree(records, ["ODOR"])) == render(build_tree(records, ["ODOR"]))
