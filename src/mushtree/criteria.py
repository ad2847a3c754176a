# -*- coding: utf-8 -*-
"""
mushtree.criteria
=================

Information-theoretic split criteria over a binary edible/poisonous target.

All public functions take a record multiset, an attribute name and an optional
:class:`~mushtree.records.RecordView`.  Internally everything reduces to class
count vectors ``[n_edible, n_poisonous]``, one for the parent and one per
partition, and the small helpers at the top of the module work on those.

Conventions
-----------
- ``0 * log2(0) = 0`` is enforced by dropping zero probabilities before the
  logarithm, so no function here can produce NaN.
- An empty record multiset has entropy 0 and every gain metric is 0.
- Sums run in partition order (first appearance of each value).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from .records import MUSHROOM_VIEW, RecordView, class_counts, partition


# -----------------------------------------------------------------------------
# Helpers on count vectors
# -----------------------------------------------------------------------------
def _entropy(dist_vec: np.ndarray) -> float:
    tot = dist_vec.sum()
    if tot <= 0:
        return 0.0
    p = dist_vec / tot
    p = p[p > 0]
    return float(-np.sum(p * np.log2(p)))

def _split_info(children: list[np.ndarray]) -> float:
    tot = sum(d.sum() for d in children)
    if tot <= 0:
        return 0.0
    w = [d.sum() / tot for d in children if d.sum() > 0]
    return float(-sum(wi * np.log2(wi) for wi in w))

def _info_gain(parent: np.ndarray, children: list[np.ndarray]) -> float:
    tot = parent.sum()
    if tot <= 0:
        return 0.0
    remainder = sum(d.sum() / tot * _entropy(d) for d in children)
    # round-off can push an uninformative split a hair below zero
    return max(0.0, _entropy(parent) - float(remainder))

def _gain_ratio(parent: np.ndarray, children: list[np.ndarray]) -> float:
    s = _split_info(children)
    return _info_gain(parent, children) / s if s > 0 else 0.0

def _partition_counts(records: Sequence[Any], attribute: str,
                      view: RecordView) -> dict[str, np.ndarray]:
    return {value: class_counts(subset, view)
            for value, subset in partition(records, attribute, view).items()}


# -----------------------------------------------------------------------------
# Entropy
# -----------------------------------------------------------------------------
def target_entropy(records: Sequence[Any], view: RecordView = MUSHROOM_VIEW) -> float:
    """Shannon entropy (base 2) of the edible/poisonous target over ``records``.

    Returns a value in ``[0, 1]``; exactly 0 for an empty or pure multiset.
    """
    return _entropy(class_counts(records, view))


def child_entropies(records: Sequence[Any], attribute: str,
                    view: RecordView = MUSHROOM_VIEW) -> dict[str, float]:
    """Entropy of each non-empty partition of ``records`` by ``attribute``.

    Keys follow partition order.
    """
    return {value: _entropy(counts)
            for value, counts in _partition_counts(records, attribute, view).items()}


def mean_child_entropy(records: Sequence[Any], attribute: str,
                       view: RecordView = MUSHROOM_VIEW) -> float:
    """Unweighted mean of :func:`child_entropies`; 0 when there are no partitions."""
    entropies = child_entropies(records, attribute, view)
    if not entropies:
        return 0.0
    return float(np.mean(list(entropies.values())))


# -----------------------------------------------------------------------------
# Gain
# -----------------------------------------------------------------------------
def information_gain(records: Sequence[Any], attribute: str,
                     view: RecordView = MUSHROOM_VIEW) -> float:
    """``H(S) - sum_v |S_v|/|S| * H(S_v)``."""
    children = list(_partition_counts(records, attribute, view).values())
    return _info_gain(class_counts(records, view), children)


def split_info(records: Sequence[Any], attribute: str,
               view: RecordView = MUSHROOM_VIEW) -> float:
    """Entropy of the partition-size distribution of ``records`` by ``attribute``."""
    return _split_info(list(_partition_counts(records, attribute, view).values()))


def gain_ratio(records: Sequence[Any], attribute: str,
               view: RecordView = MUSHROOM_VIEW) -> float:
    """Information gain divided by split info, or 0 when split info is 0."""
    children = list(_partition_counts(records, attribute, view).values())
    return _gain_ratio(class_counts(records, view), children)


def score_attribute(records: Sequence[Any], attribute: str, use_gain_ratio: bool = False,
                    view: RecordView = MUSHROOM_VIEW) -> tuple[float, float]:
    """Score one candidate split.

    Partitions ``records`` once and returns ``(score, mean_child_entropy)``
    where ``score`` is the gain ratio when ``use_gain_ratio`` is true and the
    information gain otherwise.  The builder uses this so telemetry and
    selection share one pass over the data.
    """
    counts = _partition_counts(records, attribute, view)
    children = list(counts.values())
    parent = class_counts(records, view)
    score = _gain_ratio(parent, children) if use_gain_ratio else _info_gain(parent, children)
    mean_entropy = float(np.mean([_entropy(d) for d in children])) if children else 0.0
    return score, mean_entropy
