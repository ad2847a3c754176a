# -*- coding: utf-8 -*-
"""
mushtree.estimator
==================

A scikit-learn style wrapper around :class:`~mushtree.tree.DecisionTree` for
array input.  Each row of ``X`` is a vector of categorical values and each
column is addressed by name (``feature_names``), so the same engine that runs
on :class:`~mushtree.records.MushroomRecord` objects runs on plain arrays or
``DataFrame.values``.
"""

from __future__ import annotations

from operator import attrgetter
from typing import NamedTuple

import numpy as np
from loguru import logger
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.model_selection import train_test_split

from .records import EDIBLE, POISONOUS, RecordView
from .telemetry import SplitMetricsRecorder
from .tree import MAX_DEPTH, DecisionTree


class _Row(NamedTuple):
    values: tuple
    edible: bool = False


def _row_view(feature_names: list[str]) -> RecordView:
    index: dict[str, int] = {}
    for i, name in enumerate(feature_names):
        # first column wins, like dedupe_attributes
        index.setdefault(name.upper(), i)

    def value_of(row: _Row, attribute: str) -> str:
        i = index.get(attribute.upper())
        return "" if i is None else str(row.values[i])

    return RecordView(value_of=value_of, is_edible=attrgetter("edible"))


def _encode_labels(y) -> list[bool]:
    edible = []
    for v in y:
        if isinstance(v, (bool, np.bool_)):
            edible.append(bool(v))
            continue
        label = str(v).upper()
        if label not in (EDIBLE, POISONOUS):
            raise ValueError(f"labels must be {EDIBLE!r}/{POISONOUS!r} or booleans, got {v!r}")
        edible.append(label == EDIBLE)
    return edible


class MushroomTreeClassifier(ClassifierMixin, BaseEstimator):
    """
    Categorical decision tree classifier for the edible/poisonous problem.

    Splits are multiway on categorical features and are chosen by information
    gain or, with ``use_gain_ratio=True``, by gain ratio.  Optional
    reduced-error pruning uses a hold-out carved from the training data.

    Parameters
    ----------
    use_gain_ratio : bool, default=False
        Select splits by gain ratio instead of information gain.
    max_depth : int or None, default=MAX_DEPTH
        Maximum depth of the tree.  ``None`` bounds depth only by the number
        of features.
    pruning : bool, default=False
        Whether to run reduced-error pruning after the tree is grown.
    validation_fraction : float, default=0.2
        Fraction of the training rows held out for pruning.  Ignored when
        ``pruning=False``.
    unseen_value_strategy : {"constant", "majority"}, default="constant"
        Prediction for values with no branch: the constant ``EDIBLE`` or the
        majority label of the node where the walk stopped.
    feature_names : list[str] or None, default=None
        Names of the columns of ``X``.  Defaults to ``f0, f1, ...``.
    random_state : int or None, default=None
        Seed for the pruning hold-out split.
    verbose : int, default=0
        When positive, a fit summary is logged at INFO instead of DEBUG.

    Attributes
    ----------
    tree_ : DecisionTree
        The fitted tree.
    classes_ : ndarray of shape (2,)
        ``["EDIBLE", "POISONOUS"]``.
    feature_names_ : list[str]
        Column names used for splitting.
    split_metrics_ : list[SplitMetrics]
        Telemetry recorded while growing the tree, in pre-order.

    Notes
    -----
    ``predict`` returns upper-case label strings, so ``score`` expects ``y``
    in that form.
    """

    def __init__(
        self,
        *,
        use_gain_ratio: bool = False,
        max_depth: int | None = MAX_DEPTH,
        pruning: bool = False,
        validation_fraction: float = 0.2,
        unseen_value_strategy: str = "constant",
        feature_names: list[str] | None = None,
        random_state: int | None = None,
        verbose: int = 0,
    ):
        self.use_gain_ratio = use_gain_ratio
        self.max_depth = max_depth
        self.pruning = pruning
        self.validation_fraction = validation_fraction
        self.unseen_value_strategy = unseen_value_strategy
        self.feature_names = feature_names
        self.random_state = random_state
        self.verbose = verbose

    def fit(self, X, y, feature_names=None):
        X = np.asarray(X, dtype=object)
        if X.ndim != 2:
            raise ValueError(f"X must be 2-dimensional, got shape {X.shape}")
        y = np.asarray(y)
        if len(y) != X.shape[0]:
            raise ValueError("X and y must have the same number of rows")

        n_features = X.shape[1]
        names = feature_names if feature_names is not None else self.feature_names
        if names is None:
            names = [f"f{i}" for i in range(n_features)]
        if len(names) != n_features:
            raise ValueError("feature_names length must match X.shape[1]")
        self.feature_names_ = list(names)
        self.n_features_in_ = n_features
        self.classes_ = np.array([EDIBLE, POISONOUS])

        rows = [_Row(tuple(x), e) for x, e in zip(X, _encode_labels(y))]
        train_rows, val_rows = rows, []
        if self.pruning:
            if not 0.0 < self.validation_fraction < 1.0:
                raise ValueError("validation_fraction must be in (0, 1)")
            train_rows, val_rows = train_test_split(
                rows, test_size=self.validation_fraction, random_state=self.random_state)

        recorder = SplitMetricsRecorder()
        self.tree_ = DecisionTree(max_depth=self.max_depth,
                                  unseen_value_strategy=self.unseen_value_strategy,
                                  view=_row_view(self.feature_names_))
        self.tree_.build(train_rows, self.feature_names_, self.use_gain_ratio, recorder)
        n_leaves_grown = self.tree_.get_n_leaves()
        if self.pruning:
            self.tree_.prune(val_rows)
        self.split_metrics_ = recorder.records

        log = logger.info if self.verbose > 0 else logger.debug
        log("Fitted tree on {} rows: {} splits scored, {} leaves grown, {} after pruning, depth {}",
            len(train_rows), len(recorder), n_leaves_grown, self.tree_.get_n_leaves(),
            self.tree_.get_depth())
        return self

    def _check_fitted(self) -> DecisionTree:
        if getattr(self, "tree_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")
        return self.tree_

    def _rows(self, X) -> list[_Row]:
        X = np.asarray(X, dtype=object)
        if X.ndim != 2:
            raise ValueError(f"X must be 2-dimensional, got shape {X.shape}")
        return [_Row(tuple(x)) for x in X]

    def predict(self, X):
        """
        Predict class labels for the provided samples.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Input samples with categorical values.

        Returns
        -------
        ndarray of shape (n_samples,)
            ``"EDIBLE"`` or ``"POISONOUS"`` per row.

        Raises
        ------
        ValueError
            If the estimator has not been fitted.
        """
        tree = self._check_fitted()
        return np.array(tree.predict_many(self._rows(X)), dtype=object)

    def predict_rule(self, X) -> list[str]:
        """Return the decision path (antecedent) followed by each row of ``X``."""
        tree = self._check_fitted()
        return [tree.predict_rule(row) for row in self._rows(X)]

    def export_rules(self) -> list[str]:
        return self._check_fitted().export_rules()

    def export_graphviz(self, filename: str | None = None, *, format: str = "png") -> str:
        return self._check_fitted().export_graphviz(filename, format=format)

    def print_tree(self) -> None:
        """Pretty-print the fitted tree to ``stdout``."""
        print(self._check_fitted().render(), end="")

    def get_depth(self) -> int:
        return self._check_fitted().get_depth()

    def get_n_leaves(self) -> int:
        return self._check_fitted().get_n_leaves()
