"""Adapters exposing fitted sklearn estimators as splitters and vectorizers.

`SklearnTreeSplitter` replays the splits of a fitted
`sklearn.tree.DecisionTreeClassifier`, so `build_tree` reproduces its structure.
`SklearnVectorizer` wraps a fitted sklearn text transformer such as
`CountVectorizer` or `TfidfVectorizer`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from scipy import sparse
from sklearn.tree import DecisionTreeClassifier
from sklearn.utils.validation import check_is_fitted

from textclf.tree.models import Partition, ThresholdSplit


class SklearnTreeSplitter:
    """Splitter that walks the nodes of a fitted sklearn decision tree.

    A node is terminal when sklearn marks it as a leaf. Its label is whether
    the node's majority class equals `positive_class`. Each split keeps the
    node's NaN routing. sklearn compares float32 inputs against its
    thresholds, so feed the built tree float32 features (as
    `SklearnVectorizer` returns) to reproduce `predict` exactly.

    Attributes:
        tree (DecisionTreeClassifier): The fitted single-output classifier.
        node_id (int): Index of the node in `tree.tree_` this splitter stands for.
        feature_names (list[str] | None): Names used when rendering splits.
        positive_class (Any): Class value mapped to the label True.

    Examples:
        >>> from sklearn.tree import DecisionTreeClassifier
        >>> fitted = DecisionTreeClassifier(max_depth=1).fit([[0.0], [1.0]], [False, True])
        >>> splitter = SklearnTreeSplitter(fitted, feature_names=["toxic"])
        >>> splitter.split().split.describe()
        'toxic <= 0.5'
    """

    def __init__(
        self,
        tree: DecisionTreeClassifier,
        *,
        feature_names: Sequence[str] | None = None,
        positive_class: Any = True,
        node_id: int = 0,
    ) -> None:
        """Initialize the splitter at `node_id` (the root by default).

        Args:
            tree (DecisionTreeClassifier): A fitted classifier with a single output.
            feature_names (Sequence[str] | None): One name per feature column.
                When None, splits render as `feature[<index>]`.
            positive_class (Any): Class value that maps to the label True.
                Defaults to True, which also matches the integer class 1.
            node_id (int): Node of `tree.tree_` to start from.

        Raises:
            sklearn.exceptions.NotFittedError: If `tree` has not been fitted.
            ValueError: If `tree` is not a classifier or has several outputs,
                if `positive_class` is not one of its classes, or if
                `feature_names` has the wrong length.
        """
        check_is_fitted(tree)
        if not hasattr(tree, "classes_"):
            raise ValueError(f"Expected a fitted tree classifier, got {type(tree).__name__}.")
        if tree.n_outputs_ != 1:
            raise ValueError(f"Only single-output trees are supported, got {tree.n_outputs_} outputs.")
        classes = tree.classes_.tolist()
        if positive_class not in classes:
            raise ValueError(f"positive_class {positive_class!r} is not one of the tree's classes {classes}.")
        if feature_names is not None and len(feature_names) != tree.n_features_in_:
            raise ValueError(
                f"feature_names has {len(feature_names)} entries but the tree expects {tree.n_features_in_} features."
            )
        self.tree = tree
        self.node_id = node_id
        self.feature_names = list(feature_names) if feature_names is not None else None
        self.positive_class = positive_class

    def split(self) -> Partition | None:
        """Return the sklearn split at this node, or None at a leaf.

        Returns:
            Partition | None: Splitters for both children and the node's
                threshold split, or None when the node is a leaf.
        """
        sklearn_tree = self.tree.tree_
        left_child = int(sklearn_tree.children_left[self.node_id])
        right_child = int(sklearn_tree.children_right[self.node_id])
        if left_child == right_child:  # Both are TREE_LEAF (-1) at leaves
            return None

        feature_index = int(sklearn_tree.feature[self.node_id])
        threshold_split = ThresholdSplit(
            feature_index=feature_index,
            threshold=float(sklearn_tree.threshold[self.node_id]),
            feature_name=self.feature_names[feature_index] if self.feature_names is not None else None,
            missing_goes_left=bool(sklearn_tree.missing_go_to_left[self.node_id]),
        )
        return Partition(
            left=self._child(left_child),
            right=self._child(right_child),
            split=threshold_split,
        )

    def label(self) -> bool:
        """Return whether this node's majority class is the positive class.

        Returns:
            bool: True when the most frequent class at the node is `positive_class`.
        """
        class_weights = self.tree.tree_.value[self.node_id][0]
        majority_class = self.tree.classes_[int(np.argmax(class_weights))]
        return bool(majority_class == self.positive_class)

    def _child(self, node_id: int) -> SklearnTreeSplitter:
        """Return a splitter for another node of the same tree."""
        return SklearnTreeSplitter(
            self.tree,
            feature_names=self.feature_names,
            positive_class=self.positive_class,
            node_id=node_id,
        )


class SklearnVectorizer:
    """Vectorizer backed by a fitted sklearn text transformer.

    Attributes:
        estimator (Any): Fitted transformer with a `transform(documents)` method,
            e.g. `CountVectorizer` or `TfidfVectorizer`.
    """

    def __init__(self, estimator: Any) -> None:
        """Initialize the vectorizer.

        Args:
            estimator (Any): A fitted sklearn transformer over raw documents.

        Raises:
            sklearn.exceptions.NotFittedError: If `estimator` has not been fitted.
        """
        check_is_fitted(estimator)
        self.estimator = estimator

    def transform(self, text: str) -> np.ndarray:
        """Vectorize a single document.

        Args:
            text (str): The document to vectorize.

        Returns:
            np.ndarray: Dense float32 matrix of shape `(1, n_features)`, the
                dtype sklearn trees cast their input to before splitting.
        """
        matrix = self.estimator.transform([text])
        if sparse.issparse(matrix):
            matrix = matrix.toarray()
        return np.asarray(matrix, dtype=np.float32)

    @property
    def feature_names(self) -> list[str]:
        """Feature names reported by the estimator, in column order."""
        return [str(name) for name in self.estimator.get_feature_names_out()]
