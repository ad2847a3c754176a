import pytest
from mushtree import (
    EDIBLE,
    DecisionTree,
    EmptyDatasetError,
    MushroomRecord,
    TreeNotBuiltError,
    build_tree,
    prune,
)


def _odor_tree():
    records = [
        MushroomRecord(True, odor="almond"),
        MushroomRecord(True, odor="anise"),
        MushroomRecord(False, odor="foul"),
        MushroomRecord(False, odor="foul"),
    ]
    return build_tree(records, ["ODOR"])


def _xor_tree():
    records = [
        MushroomRecord(True, cap_shape="x", cap_color="n"),
        MushroomRecord(False, cap_shape="x", cap_color="y"),
        MushroomRecord(False, cap_shape="b", cap_color="n"),
        MushroomRecord(True, cap_shape="b", cap_color="y"),
    ]
    return build_tree(records, ["CAP-SHAPE", "CAP-COLOR"]), records


def test_prune_collapses_subtree_that_does_not_help():
    tree = _odor_tree()
    validation = [MushroomRecord(True, odor="almond"), MushroomRecord(True, odor="foul")]
    prune(tree, validation)
    assert tree.root.is_leaf
    assert tree.root.label == EDIBLE
    assert tree.render() == "└── Leaf: EDIBLE\n"


def test_prune_keeps_subtree_when_accuracy_would_drop():
    tree = _odor_tree()
    before = tree.render()
    validation = [
        MushroomRecord(True, odor="almond"),
        MushroomRecord(False, odor="foul"),
        MushroomRecord(False, odor="foul"),
    ]
    prune(tree, validation)
    assert tree.render() == before
    assert tree.accuracy(validation) == 1.0


def test_prune_never_lowers_validation_accuracy():
    tree, records = _xor_tree()
    validation = records + [MushroomRecord(True, cap_shape="x", cap_color="y")]
    acc_before = tree.accuracy(validation)
    tree.prune(validation)
    assert tree.accuracy(validation) >= acc_before


def test_prune_is_idempotent():
    tree, records = _xor_tree()
    validation = records[:3]
    tree.prune(validation)
    once = tree.render()
    tree.prune(validation)
    assert tree.render() == once


def test_prune_only_shrinks_the_tree():
    tree, records = _xor_tree()
    n_before = tree.root.n_nodes
    tree.prune(records[:2])
    assert tree.root.n_nodes <= n_before


def test_prune_empty_validation_raises():
    tree = _odor_tree()
    with pytest.raises(EmptyDatasetError):
        tree.prune([])


def test_prune_unbuilt_tree_raises():
    with pytest.raises(TreeNotBuiltError):
        DecisionTree().prune([MushroomRecord(True)])
