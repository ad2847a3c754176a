# mushtree/__init__.py
"""
mushtree: categorical ID3/C4.5-style decision trees for the UCI Mushroom data.

Exports:
    - DecisionTree, TreeNode and the functional API
      (build_tree, build_tree_with_telemetry, predict, prune, render)
    - MushroomTreeClassifier (scikit-learn style)
    - MushroomRecord, ATTRIBUTE_NAMES, EDIBLE, POISONOUS
    - SplitMetrics, SplitMetricsRecorder
    - load_records, split_train_test, evaluate
"""
from loguru import logger

from .dataset import load_records, split_train_test
from .estimator import MushroomTreeClassifier
from .evaluation import ClassificationResults, evaluate
from .exceptions import EmptyDatasetError, TreeNotBuiltError
from .logging import PACKAGE_NAME, enable_logging
from .records import (
    ATTRIBUTE_NAMES,
    EDIBLE,
    MUSHROOM_VIEW,
    POISONOUS,
    MushroomRecord,
    RecordView,
    value_of,
)
from .telemetry import SplitMetrics, SplitMetricsRecorder
from .tree import (
    MAX_DEPTH,
    UNSEEN_VALUE_LABEL,
    DecisionTree,
    TreeNode,
    build_tree,
    build_tree_with_telemetry,
    predict,
    prune,
    render,
)

logger.disable(PACKAGE_NAME)

__all__ = [
    "ATTRIBUTE_NAMES",
    "EDIBLE",
    "MAX_DEPTH",
    "MUSHROOM_VIEW",
    "POISONOUS",
    "UNSEEN_VALUE_LABEL",
    "ClassificationResults",
    "DecisionTree",
    "EmptyDatasetError",
    "MushroomRecord",
    "MushroomTreeClassifier",
    "RecordView",
    "SplitMetrics",
    "SplitMetricsRecorder",
    "TreeNode",
    "TreeNotBuiltError",
    "build_tree",
    "build_tree_with_telemetry",
    "enable_logging",
    "evaluate",
    "load_records",
    "predict",
    "prune",
    "render",
    "split_train_test",
    "value_of",
]
__version__ = "0.1.0"
