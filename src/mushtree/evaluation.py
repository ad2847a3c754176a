"""Binary classification metrics for a fitted tree, with EDIBLE as the positive class."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from sklearn.metrics import confusion_matrix

from .exceptions import EmptyDatasetError
from .records import EDIBLE, POISONOUS
from .tree import DecisionTree


@dataclass(frozen=True)
class ClassificationResults:
    """Accuracy, precision, recall and F1 of one evaluation run."""

    accuracy: float
    precision: float
    recall: float
    f1: float

    def __str__(self) -> str:
        return (f"Accuracy={self.accuracy:.2f}, Precision={self.precision:.2f}, "
                f"Recall={self.recall:.2f}, F1={self.f1:.2f}")

    def as_dict(self) -> dict[str, float]:
        return {"accuracy": self.accuracy, "precision": self.precision,
                "recall": self.recall, "f1": self.f1}


def _safe_div(a: float, b: float) -> float:
    return a / b if b != 0 else 0.0


def confusion_counts(y_true: Sequence[str], y_pred: Sequence[str]) -> tuple[int, int, int, int]:
    """
    Count outcomes with EDIBLE as the positive class.

    Parameters
    ----------
    y_true, y_pred : sequence of str
        ``EDIBLE`` / ``POISONOUS`` labels of equal length.

    Returns
    -------
    tuple[int, int, int, int]
        ``(tp, fp, tn, fn)``.
    """
    cm = confusion_matrix(list(y_true), list(y_pred), labels=[EDIBLE, POISONOUS])
    tp, fn = int(cm[0, 0]), int(cm[0, 1])
    fp, tn = int(cm[1, 0]), int(cm[1, 1])
    return tp, fp, tn, fn


def results_from_counts(tp: int, fp: int, tn: int, fn: int) -> ClassificationResults:
    precision = _safe_div(tp, tp + fp)
    recall = _safe_div(tp, tp + fn)
    return ClassificationResults(
        accuracy=_safe_div(tp + tn, tp + fp + tn + fn),
        precision=precision,
        recall=recall,
        f1=_safe_div(2 * precision * recall, precision + recall),
    )


def evaluate(tree: DecisionTree, records: Iterable[Any]) -> ClassificationResults:
    """
    Evaluate ``tree`` on ``records``.

    Ground truth is read through ``tree.view``.  Each ratio is 0 when its
    denominator is 0.

    Raises
    ------
    EmptyDatasetError
        If ``records`` is empty.
    """
    records = list(records)
    if not records:
        raise EmptyDatasetError("evaluate")
    y_true = [EDIBLE if tree.view.is_edible(r) else POISONOUS for r in records]
    y_pred = tree.predict_many(records)
    return results_from_counts(*confusion_counts(y_true, y_pred))
