# -*- coding: utf-8 -*-
"""
mushtree.tree
=============

This module implements an ID3/C4.5-style decision tree over categorical
attributes with a binary edible/poisonous target.  Splits are multiway (one
child per observed attribute value) and are chosen by either information gain
or gain ratio.  Induction stops on pure nodes, when the attribute set is
exhausted, or at ``max_depth``.

Besides induction the :class:`DecisionTree` supports prediction with a fixed
fallback for attribute values never seen during training, reduced-error
post-pruning against a validation set, deterministic ASCII rendering, rule
export and Graphviz export.

A small functional API mirrors the methods for callers that prefer plain
functions: :func:`build_tree`, :func:`build_tree_with_telemetry`,
:func:`predict`, :func:`prune` and :func:`render`.

The module also contains the :class:`TreeNode` class which holds the data
structure for each node in the tree (internal or leaf).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from .criteria import score_attribute
from .exceptions import EmptyDatasetError, TreeNotBuiltError
from .records import (
    EDIBLE,
    MUSHROOM_VIEW,
    POISONOUS,
    RecordView,
    class_counts,
    dedupe_attributes,
    majority_label,
    partition,
)
from .telemetry import MetricsCallback, SplitMetrics

MAX_DEPTH = 7
UNSEEN_VALUE_LABEL = EDIBLE

_UNSEEN_STRATEGIES = ("constant", "majority")


# -----------------------------------------------------------------------------
# Node
# -----------------------------------------------------------------------------
class TreeNode:
    """Internal representation of a single node in a decision tree.

    A node is either a leaf or an internal node; ``is_leaf`` is the tag.
    Leaves carry a ``label``.  Internal nodes carry the
    ``splitting_attribute`` and an insertion-ordered mapping ``children`` from
    attribute value to child node.

    Parameters
    ----------
    is_leaf : bool, default=False
        Whether the node represents a terminal leaf.
    label : str or None, default=None
        Class label of a leaf.
    splitting_attribute : str or None, default=None
        Attribute an internal node splits on.
    class_counts : array-like of shape (2,), optional
        ``[n_edible, n_poisonous]`` of the training records that reached the
        node.

    Attributes
    ----------
    children : dict[str, TreeNode]
        Value -> child for internal nodes; empty for leaves.
    majority_label : str
        Majority class of the training records at this node (ties to
        ``EDIBLE``).  Used by the ``"majority"`` unseen-value strategy.
    """

    def __init__(self, *, is_leaf: bool = False, label: str | None = None,
                 splitting_attribute: str | None = None, class_counts=None):
        self.is_leaf: bool = is_leaf
        self.label: str | None = label
        self.splitting_attribute: str | None = splitting_attribute
        self.children: dict[str, TreeNode] = {}
        counts = np.zeros(2) if class_counts is None else np.asarray(class_counts, dtype=float)
        self.class_counts: tuple[int, int] = (int(counts[0]), int(counts[1]))
        self.majority_label: str = EDIBLE if counts[0] >= counts[1] else POISONOUS

    @classmethod
    def leaf(cls, label: str, class_counts=None) -> TreeNode:
        return cls(is_leaf=True, label=label, class_counts=class_counts)

    @classmethod
    def internal(cls, splitting_attribute: str, class_counts=None) -> TreeNode:
        return cls(is_leaf=False, splitting_attribute=splitting_attribute,
                   class_counts=class_counts)

    def add_child(self, value: str, child: TreeNode) -> None:
        self.children[value] = child

    def make_leaf(self, label: str) -> None:
        """Collapse this node into a leaf predicting ``label``."""
        self.is_leaf = True
        self.label = label
        self.splitting_attribute = None
        self.children = {}

    def snapshot(self) -> tuple:
        return (self.is_leaf, self.label, self.splitting_attribute, self.children)

    def restore(self, snapshot: tuple) -> None:
        self.is_leaf, self.label, self.splitting_attribute, self.children = snapshot

    def depth(self) -> int:
        """Length of the longest path from this node down to a leaf."""
        if self.is_leaf or not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children.values())

    @property
    def n_leaves(self) -> int:
        if self.is_leaf or not self.children:
            return 1
        return sum(ch.n_leaves for ch in self.children.values())

    @property
    def n_nodes(self) -> int:
        return 1 + sum(ch.n_nodes for ch in self.children.values())

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"TreeNode(leaf={self.label!r})"
        return (f"TreeNode(split={self.splitting_attribute!r}, "
                f"children={list(self.children)!r})")


# -----------------------------------------------------------------------------
# Tree
# -----------------------------------------------------------------------------
class DecisionTree:
    """
    Categorical decision tree for the edible/poisonous mushroom problem.

    The tree is grown top-down.  At every node the remaining attributes are
    scored with the selected criterion, the first attribute with the highest
    score (in attribute-set order) becomes the split, and one child is grown
    per observed value of that attribute with the attribute removed from the
    candidate set.  A node becomes a leaf when its records are pure, when no
    attributes remain, or when it sits at ``max_depth``; impure leaves take the
    majority label, with ties going to ``EDIBLE``.

    Parameters
    ----------
    max_depth : int or None, default=MAX_DEPTH
        Maximum depth of the tree (the root has depth 0).  ``None`` leaves the
        depth bounded only by the number of attributes.
    unseen_value_strategy : {"constant", "majority"}, default="constant"
        What :meth:`predict` returns when a record carries a value that has no
        branch at the current node.  ``"constant"`` returns
        ``UNSEEN_VALUE_LABEL`` (``EDIBLE``); ``"majority"`` returns the
        majority label of the training records at that node.
    view : RecordView, default=MUSHROOM_VIEW
        Accessors used to read attribute values and the target from records.

    Attributes
    ----------
    root : TreeNode or None
        Root node, ``None`` until :meth:`build` is called.
    attributes_ : list[str]
        Candidate attributes the tree was built with, after de-duplication.
    use_gain_ratio_ : bool
        Criterion used by the last build.

    Notes
    -----
    The core never logs and never performs I/O.  Telemetry is delivered
    through the optional ``metrics_callback`` of :meth:`build`.
    """

    def __init__(self, *, max_depth: int | None = MAX_DEPTH,
                 unseen_value_strategy: str = "constant",
                 view: RecordView = MUSHROOM_VIEW):
        if max_depth is not None and int(max_depth) < 0:
            raise ValueError(f"max_depth must be >= 0 or None, got {max_depth}")
        if unseen_value_strategy not in _UNSEEN_STRATEGIES:
            raise ValueError(
                f"unseen_value_strategy must be one of {_UNSEEN_STRATEGIES}, "
                f"got {unseen_value_strategy!r}"
            )
        self.max_depth = None if max_depth is None else int(max_depth)
        self.unseen_value_strategy = unseen_value_strategy
        self.view = view

        self.root: TreeNode | None = None
        self.attributes_: list[str] = []
        self.use_gain_ratio_: bool = False

    @property
    def is_built(self) -> bool:
        return self.root is not None

    # ------------------------------------------------------------------
    # Induction
    # ------------------------------------------------------------------
    def build(self, records: Iterable[Any], attributes: Iterable[str],
              use_gain_ratio: bool = False,
              metrics_callback: MetricsCallback | None = None) -> DecisionTree:
        """
        Grow the tree from ``records``.

        Parameters
        ----------
        records : iterable
            Training records.  Not modified.
        attributes : iterable of str
            Candidate attribute names in the order used for tie-breaking.
            Case-insensitive duplicates are dropped.  Must not include the
            target.
        use_gain_ratio : bool, default=False
            Select splits by gain ratio instead of information gain.
        metrics_callback : callable, optional
            ``metrics_callback(split_phase, SplitMetrics)``, called once per
            internal node before its children are grown.

        Returns
        -------
        DecisionTree
            ``self``, for chaining.

        Raises
        ------
        EmptyDatasetError
            If ``records`` is empty.
        """
        records = list(records)
        if not records:
            raise EmptyDatasetError("build")
        self.attributes_ = dedupe_attributes(attributes)
        self.use_gain_ratio_ = bool(use_gain_ratio)
        self.root = self._build_tree(records, self.attributes_, self.use_gain_ratio_,
                                     0, metrics_callback)
        return self

    def build_with_metrics(self, records: Iterable[Any], attributes: Iterable[str],
                           use_gain_ratio: bool,
                           metrics_callback: MetricsCallback) -> DecisionTree:
        """Same as :meth:`build` with a mandatory telemetry callback."""
        return self.build(records, attributes, use_gain_ratio, metrics_callback)

    def _build_tree(self, records: list, attributes: list[str], use_gain_ratio: bool,
                    depth: int, metrics_callback: MetricsCallback | None) -> TreeNode:
        counts = class_counts(records, self.view)
        n_edible, n_poisonous = counts
        if n_poisonous == 0:
            return TreeNode.leaf(EDIBLE, counts)
        if n_edible == 0:
            return TreeNode.leaf(POISONOUS, counts)
        majority = EDIBLE if n_edible >= n_poisonous else POISONOUS
        # Honour the attribute budget and max_depth
        if not attributes or (self.max_depth is not None and depth >= self.max_depth):
            return TreeNode.leaf(majority, counts)

        gains: dict[str, float] = {}
        entropies: dict[str, float] = {}
        for attribute in attributes:
            gains[attribute], entropies[attribute] = score_attribute(
                records, attribute, use_gain_ratio, self.view)

        if metrics_callback is not None:
            split_phase = depth + 1
            metrics_callback(split_phase, SplitMetrics(split_phase, gains, entropies))

        # max() keeps the first maximal key, i.e. attribute-set order breaks ties
        best = max(attributes, key=gains.__getitem__)
        node = TreeNode.internal(best, counts)
        remaining = [a for a in attributes if a != best]
        for value, subset in partition(records, best, self.view).items():
            if not subset:
                node.add_child(value, TreeNode.leaf(majority))
                continue
            node.add_child(value, self._build_tree(subset, remaining, use_gain_ratio,
                                                   depth + 1, metrics_callback))
        return node

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def predict(self, record: Any) -> str:
        """
        Classify a single record.

        Parameters
        ----------
        record : object
            A record readable through ``self.view``.

        Returns
        -------
        str
            ``EDIBLE`` or ``POISONOUS``.

        Raises
        ------
        TreeNotBuiltError
            If the tree has not been built.
        """
        node = self._require_root()
        while not node.is_leaf:
            value = self.view.value_of(record, node.splitting_attribute)
            child = node.children.get(value)
            if child is None:
                return self._unseen_label(node)
            node = child
        return node.label

    def predict_many(self, records: Iterable[Any]) -> list[str]:
        return [self.predict(r) for r in records]

    def accuracy(self, records: Sequence[Any]) -> float:
        """Fraction of ``records`` whose prediction matches their label."""
        records = list(records)
        if not records:
            raise EmptyDatasetError("accuracy")
        return self._n_correct(records) / len(records)

    def _n_correct(self, records: Sequence[Any]) -> int:
        n = 0
        for record in records:
            predicted_edible = self.predict(record) == EDIBLE
            if predicted_edible == bool(self.view.is_edible(record)):
                n += 1
        return n

    def _unseen_label(self, node: TreeNode) -> str:
        if self.unseen_value_strategy == "majority":
            return node.majority_label
        return UNSEEN_VALUE_LABEL

    def _require_root(self) -> TreeNode:
        if self.root is None:
            raise TreeNotBuiltError()
        return self.root

    # ------------------------------------------------------------------
    # Reduced-error pruning
    # ------------------------------------------------------------------
    def prune(self, validation: Iterable[Any]) -> DecisionTree:
        """
        Reduced-error post-pruning against a held-out validation set.

        Internal nodes are visited bottom-up.  Each one is tentatively turned
        into a leaf labelled with the majority class of the *whole* validation
        set; the change is kept unless accuracy of the whole tree on
        ``validation`` drops.  Leaves are never modified.

        Parameters
        ----------
        validation : iterable
            Validation records.

        Returns
        -------
        DecisionTree
            ``self``, pruned in place.

        Raises
        ------
        TreeNotBuiltError
            If the tree has not been built.
        EmptyDatasetError
            If ``validation`` is empty.
        """
        root = self._require_root()
        validation = list(validation)
        if not validation:
            raise EmptyDatasetError("prune")
        label = majority_label(validation, self.view)
        self._prune_node(root, validation, label)
        return self

    def _prune_node(self, node: TreeNode, validation: list, label: str) -> None:
        if node.is_leaf:
            return
        for child in list(node.children.values()):
            self._prune_node(child, validation, label)

        correct_before = self._n_correct(validation)
        saved = node.snapshot()
        node.make_leaf(label)
        if self._n_correct(validation) < correct_before:
            node.restore(saved)

    # ------------------------------------------------------------------
    # Structure queries
    # ------------------------------------------------------------------
    def get_depth(self) -> int:
        return self._require_root().depth()

    def get_n_leaves(self) -> int:
        return self._require_root().n_leaves

    # ------------------------------------------------------------------
    # Rendering / rules / Graphviz
    # ------------------------------------------------------------------
    def render(self) -> str:
        """
        Deterministic ASCII drawing of the tree.

        Children are listed in insertion order, each introduced by a
        ``Value = <v>:`` line.  A single-leaf tree renders as
        ``"└── Leaf: EDIBLE\\n"``.

        Returns
        -------
        str
            The drawing, one line per node or branch, newline-terminated.
        """
        lines: list[str] = []
        self._render_node(self._require_root(), "", True, lines)
        return "".join(lines)

    def __str__(self) -> str:
        if self.root is None:
            return "DecisionTree(<not built>)"
        return self.render()

    def _render_node(self, node: TreeNode, prefix: str, is_tail: bool,
                     lines: list[str]) -> None:
        branch = "└── " if is_tail else "├── "
        if node.is_leaf:
            lines.append(f"{prefix}{branch}Leaf: {node.label}\n")
            return
        lines.append(f"{prefix}{branch}[Split on: {node.splitting_attribute}]\n")
        child_prefix = prefix + ("    " if is_tail else "│   ")
        items = list(node.children.items())
        for i, (value, child) in enumerate(items):
            last = i == len(items) - 1
            lines.append(f"{child_prefix}{'└── ' if last else '├── '}Value = {value}:\n")
            self._render_node(child, child_prefix + ("    " if last else "│   "), True, lines)

    def export_rules(self) -> list[str]:
        """
        Export one ``"<antecedent> => <label>"`` rule per leaf.

        The antecedent is a conjunction of ``ATTR = value`` conditions from the
        root to the leaf; a single-leaf tree yields ``"<root> => <label>"``.
        Rules are listed in rendering order.

        Returns
        -------
        list[str]
            List of rule strings.
        """
        rules: list[str] = []
        self._collect_rules(self._require_root(), [], rules)
        return rules

    def predict_rule(self, record: Any) -> str:
        """
        Return the antecedent followed by ``record`` from the root to its leaf.

        When the record carries a value with no branch the trace stops there
        and ends with ``"ATTR = value UNSEEN"``.
        """
        return self._trace_rule(record, self._require_root())

    def _trace_rule(self, record, node: TreeNode, parts=None) -> str:
        parts = parts or []
        if node.is_leaf:
            return " AND ".join(parts) if parts else "<root>"
        value = self.view.value_of(record, node.splitting_attribute)
        child = node.children.get(value)
        if child is None:
            parts.append(f"{node.splitting_attribute} = {value} UNSEEN")
            return " AND ".join(parts)
        parts.append(f"{node.splitting_attribute} = {value}")
        return self._trace_rule(record, child, parts)

    def _collect_rules(self, node: TreeNode, parts, rules) -> None:
        if node.is_leaf:
            body = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{body} => {node.label}")
            return
        for value, child in node.children.items():
            self._collect_rules(child, parts + [f"{node.splitting_attribute} = {value}"], rules)

    def export_graphviz(self, filename: str | None = None, *, format: str = "png") -> str:
        """
        Export the tree structure in Graphviz format.

        When requesting a DOT file (``format='dot'``) no external Graphviz
        binary is required; the DOT source is written directly to disk.  For
        other formats this method invokes the system ``dot`` command and
        falls back to writing a ``.dot`` file when it is unavailable.

        Parameters
        ----------
        filename : str or None, default=None
            Basename of the output file (the extension is determined by
            ``format``).  If None, the DOT source code is returned as a string
            and no file is written.
        format : str, default="png"
            Desired output format, e.g. ``'png'``, ``'pdf'``, ``'svg'`` or
            ``'dot'``.

        Returns
        -------
        str
            Path to the written file, or the DOT source code if filename is None.

        Raises
        ------
        TreeNotBuiltError
            If the tree has not been built.
        RuntimeError
            If the ``graphviz`` package is not installed.
        """
        root = self._require_root()
        try:
            import graphviz
        except ImportError as exc:
            raise RuntimeError("Graphviz is required for export_graphviz but not installed.") from exc
        dot = graphviz.Digraph(format=format)
        self._add_graph_nodes(dot, root, "0")

        if filename is None:
            return dot.source

        if format.lower() == "dot":
            path = f"{filename}.dot"
            dot.save(path)
            return path
        try:
            dot.render(filename, cleanup=True)
            return f"{filename}.{format}"
        except graphviz.ExecutableNotFound:
            fallback_path = f"{filename}.dot"
            dot.save(fallback_path)
            return fallback_path

    def _add_graph_nodes(self, dot, node: TreeNode, name: str) -> None:
        n_edible, n_poisonous = node.class_counts
        if node.is_leaf:
            dot.node(name, f"{node.label}\nedible={n_edible} poisonous={n_poisonous}",
                     shape="box", style="filled", color="lightgrey")
            return
        dot.node(name, node.splitting_attribute, shape="ellipse", style="filled",
                 color="lightblue")
        for i, (value, child) in enumerate(node.children.items()):
            child_id = f"{name}_{i}"
            self._add_graph_nodes(dot, child, child_id)
            dot.edge(name, child_id, label=str(value))


# -----------------------------------------------------------------------------
# Functional API
# -----------------------------------------------------------------------------
def build_tree(training_set: Iterable[Any], attribute_names: Iterable[str],
               use_gain_ratio: bool = False, *, max_depth: int | None = MAX_DEPTH,
               view: RecordView = MUSHROOM_VIEW) -> DecisionTree:
    """Build a :class:`DecisionTree` without telemetry."""
    tree = DecisionTree(max_depth=max_depth, view=view)
    return tree.build(training_set, attribute_names, use_gain_ratio)


def build_tree_with_telemetry(training_set: Iterable[Any], attribute_names: Iterable[str],
                              use_gain_ratio: bool, sink: MetricsCallback, *,
                              max_depth: int | None = MAX_DEPTH,
                              view: RecordView = MUSHROOM_VIEW) -> DecisionTree:
    """Build a :class:`DecisionTree`, reporting every split to ``sink``."""
    tree = DecisionTree(max_depth=max_depth, view=view)
    return tree.build_with_metrics(training_set, attribute_names, use_gain_ratio, sink)


def predict(tree: DecisionTree, record: Any) -> str:
    return tree.predict(record)


def prune(tree: DecisionTree, validation_set: Iterable[Any]) -> DecisionTree:
    """Prune ``tree`` in place and return it."""
    return tree.prune(validation_set)


def render(tree: DecisionTree) -> str:
    return tree.render()
