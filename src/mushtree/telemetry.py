# -*- coding: utf-8 -*-
"""
mushtree.telemetry
==================

Per-split diagnostics emitted while a tree is induced.

Every time the builder scores the candidate attributes of a node it hands a
:class:`SplitMetrics` to the caller's callback, synchronously and before any
child is built.  Records therefore arrive in pre-order, and ``split_phase`` is
the 1-based depth of the node being split.

:class:`SplitMetricsRecorder` is a ready-made callback that keeps every record
and can lay them out as :mod:`pandas` tables.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pandas as pd


@dataclass(frozen=True)
class SplitMetrics:
    """Scores of every candidate attribute at one split.

    Attributes
    ----------
    split_phase : int
        1-based depth of the node being split.
    gains : dict[str, float]
        Attribute -> information gain or gain ratio (whichever criterion the
        build used), in attribute-set order.
    entropies : dict[str, float]
        Attribute -> arithmetic mean of the child entropies of its partitions.
    """

    split_phase: int
    gains: dict[str, float] = field(default_factory=dict)
    entropies: dict[str, float] = field(default_factory=dict)

    @property
    def best_attribute(self) -> str | None:
        """First attribute with the highest score, or ``None`` if there are none."""
        if not self.gains:
            return None
        return max(self.gains, key=self.gains.__getitem__)


MetricsCallback = Callable[[int, SplitMetrics], None]


class SplitMetricsRecorder:
    """Callback that stores every :class:`SplitMetrics` it receives.

    Examples
    --------
    >>> recorder = SplitMetricsRecorder()  # doctest: +SKIP
    >>> tree = build_tree_with_telemetry(train, ATTRIBUTE_NAMES, False, recorder)  # doctest: +SKIP
    >>> recorder.gain_table().head()  # doctest: +SKIP
    """

    def __init__(self) -> None:
        self.records: list[SplitMetrics] = []

    def __call__(self, split_phase: int, metrics: SplitMetrics) -> None:
        self.records.append(metrics)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def split_phases(self) -> list[int]:
        return [m.split_phase for m in self.records]

    def clear(self) -> None:
        self.records.clear()

    def to_frame(self) -> pd.DataFrame:
        """Long table with one row per (split, attribute), in arrival order."""
        rows = [
            {
                "split_phase": m.split_phase,
                "attribute": attribute,
                "gain": gain,
                "entropy": m.entropies.get(attribute, 0.0),
            }
            for m in self.records
            for attribute, gain in m.gains.items()
        ]
        return pd.DataFrame(rows, columns=["split_phase", "attribute", "gain", "entropy"])

    def gain_table(self) -> pd.DataFrame:
        """Two-column table keyed by ``"<ATTR> (Split <n>)"``."""
        return self._keyed_table("gain")

    def entropy_table(self) -> pd.DataFrame:
        """Two-column table keyed by ``"<ATTR> (Split <n>)"``."""
        return self._keyed_table("entropy")

    def _keyed_table(self, column: str) -> pd.DataFrame:
        frame = self.to_frame()
        keys = [f"{a} (Split {p})" for a, p in zip(frame["attribute"], frame["split_phase"])]
        return pd.DataFrame({"attribute": keys, column: frame[column].to_numpy()})
