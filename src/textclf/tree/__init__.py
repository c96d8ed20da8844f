"""Decision tree sub-package: nodes, splits, tree operations, and sklearn adapters."""

from __future__ import annotations

from textclf.tree.models import (
    THRESHOLD_DECIMAL_PLACES,
    DecisionRule,
    Node,
    Partition,
    Split,
    Splitter,
    ThresholdSplit,
    Vectorizer,
)
from textclf.tree.operations import (
    build_tree,
    classify_features,
    count_leaves,
    extract_rules,
    prune_tree,
    render_tree,
    tree_depth,
)

__all__ = [
    "THRESHOLD_DECIMAL_PLACES",
    "DecisionRule",
    "Node",
    "Partition",
    "Split",
    "Splitter",
    "ThresholdSplit",
    "Vectorizer",
    "build_tree",
    "classify_features",
    "count_leaves",
    "extract_rules",
    "prune_tree",
    "render_tree",
    "tree_depth",
]
