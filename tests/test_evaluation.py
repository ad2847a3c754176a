import pytest
from mushtree import EDIBLE, POISONOUS, EmptyDatasetError, MushroomRecord, build_tree, evaluate
from mushtree.evaluation import confusion_counts, results_from_counts


def test_confusion_counts_edible_is_positive():
    y_true = [EDIBLE, EDIBLE, POISONOUS, POISONOUS, EDIBLE]
    y_pred = [EDIBLE, POISONOUS, EDIBLE, POISONOUS, EDIBLE]
    assert confusion_counts(y_true, y_pred) == (2, 1, 1, 1)


def test_results_from_counts_formulas():
    res = results_from_counts(tp=3, fp=1, tn=4, fn=2)
    assert res.accuracy == pytest.approx(0.7)
    assert res.precision == pytest.approx(0.75)
    assert res.recall == pytest.approx(0.6)
    assert res.f1 == pytest.approx(2 * 0.75 * 0.6 / 1.35)


def test_zero_denominators_give_zero():
    res = results_from_counts(tp=0, fp=0, tn=3, fn=0)
    assert res.precision == 0.0
    assert res.recall == 0.0
    assert res.f1 == 0.0
    assert res.accuracy == 1.0


def test_evaluate_tree():
    records = [
        MushroomRecord(True, odor="almond"),
        MushroomRecord(False, odor="foul"),
    ]
    tree = build_tree(records, ["ODOR"])
    test = records + [MushroomRecord(False, odor="musty")]
    res = evaluate(tree, test)
    # musty is unseen and falls back to EDIBLE, a false positive
    assert res.accuracy == pytest.approx(2 / 3)
    assert res.precision == pytest.approx(0.5)
    assert res.recall == 1.0
    assert str(res) == "Accuracy=0.67, Precision=0.50, Recall=1.00, F1=0.67"
    assert set(res.as_dict()) == {"accuracy", "precision", "recall", "f1"}


def test_evaluate_empty_raises():
    tree = build_tree([MushroomRecord(True)], ["ODOR"])
    with pytest.raises(EmptyDatasetError):
        evaluate(tree, [])
