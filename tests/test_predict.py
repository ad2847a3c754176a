import pytest
from mushtree import (
    EDIBLE,
    POISONOUS,
    UNSEEN_VALUE_LABEL,
    DecisionTree,
    MushroomRecord,
    TreeNotBuiltError,
    build_tree,
    predict,
)


def _mostly_poisonous():
    return [
        MushroomRecord(True, odor="almond"),
        MushroomRecord(False, odor="foul"),
        MushroomRecord(False, odor="foul"),
        MushroomRecord(False, odor="pungent"),
    ]


def test_predict_follows_branches():
    tree = build_tree(_mostly_poisonous(), ["ODOR"])
    assert predict(tree, MushroomRecord(False, odor="almond")) == EDIBLE
    assert predict(tree, MushroomRecord(True, odor="pungent")) == POISONOUS


def test_unseen_value_falls_back_to_edible():
    tree = build_tree(_mostly_poisonous(), ["ODOR"])
    assert UNSEEN_VALUE_LABEL == EDIBLE
    assert tree.predict(MushroomRecord(False, odor="musty")) == EDIBLE


def test_unseen_value_majority_strategy():
    tree = DecisionTree(unseen_value_strategy="majority").build(_mostly_poisonous(), ["ODOR"])
    assert tree.predict(MushroomRecord(True, odor="musty")) == POISONOUS
    assert tree.predict(MushroomRecord(True, odor="almond")) == EDIBLE


def test_predict_is_total_on_any_record():
    tree = build_tree(_mostly_poisonous(), ["ODOR"])
    assert tree.predict(MushroomRecord(True)) in (EDIBLE, POISONOUS)


def test_predict_before_build_raises():
    tree = DecisionTree()
    with pytest.raises(TreeNotBuiltError):
        tree.predict(MushroomRecord(True))
    with pytest.raises(TreeNotBuiltError):
        tree.render()
    assert str(tree) == "DecisionTree(<not built>)"


def test_predict_many_and_accuracy():
    records = _mostly_poisonous()
    tree = build_tree(records, ["ODOR"])
    assert tree.predict_many(records) == [EDIBLE, POISONOUS, POISONOUS, POISONOUS]
    assert tree.accuracy(records) == 1.0
    assert tree.accuracy([MushroomRecord(True, odor="foul")]) == 0.0


def test_predict_rule_traces_path():
    tree = build_tree(_mostly_poisonous(), ["ODOR"])
    assert tree.predict_rule(MushroomRecord(True, odor="foul")) == "ODOR = foul"
    assert tree.predict_rule(MushroomRecord(True, odor="musty")) == "ODOR = musty UNSEEN"


def test_export_rules_one_per_leaf():
    tree = build_tree(_mostly_poisonous(), ["ODOR"])
    assert tree.export_rules() == [
        "ODOR = almond => EDIBLE",
        "ODOR = foul => POISONOUS",
        "ODOR = pungent => POISONOUS",
    ]
    single = build_tree([MushroomRecord(True)], ["ODOR"])
    assert single.export_rules() == ["<root> => EDIBLE"]


def test_export_graphviz_returns_dot_source():
    pytest.importorskip("graphviz")
    tree = build_tree(_mostly_poisonous(), ["ODOR"])
    src = tree.export_graphviz()
    assert "ODOR" in src
    assert "almond" in src


def test_export_graphviz_writes_dot_file(tmp_path):
    pytest.importorskip("graphviz")
    tree = build_tree(_mostly_poisonous(), ["ODOR"])
    out_path = tree.export_graphviz(str(tmp_path / "tree"), format="dot")
    assert out_path.endswith(".dot")
    assert (tmp_path / "tree.dot").exists()
