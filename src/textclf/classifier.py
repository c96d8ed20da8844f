"""TextClassifier: a binary decision tree over vectorized text."""

from __future__ import annotations

import sys
from typing import TextIO

import numpy as np
from loguru import logger

from textclf.exceptions import FeatureMatrixError, InvalidDepthError, InvalidTextError
from textclf.tree.models import DecisionRule, Node, Splitter, Vectorizer
from textclf.tree.operations import (
    build_tree,
    classify_features,
    count_leaves,
    extract_rules,
    prune_tree,
    render_tree,
    tree_depth,
)


class TextClassifier:
    """Classifies text by walking a binary decision tree.

    The tree is built once, at construction, from a splitter. Text is turned
    into a feature vector by the vectorizer and routed from the root to a leaf,
    whose label is the prediction. `prune` replaces the tree with a shallower
    copy.

    Not thread-safe: callers must not run `classify`, `print`, and `prune`
    concurrently on one instance.

    Examples:
        >>> from sklearn.feature_extraction.text import CountVectorizer
        >>> from sklearn.tree import DecisionTreeClassifier
        >>> from textclf.tree.adapters import SklearnTreeSplitter, SklearnVectorizer
        >>> texts = ["you are awful", "have a nice day", "awful awful", "nice work"]
        >>> counts = CountVectorizer().fit(texts)
        >>> fitted = DecisionTreeClassifier(random_state=0).fit(counts.transform(texts), [True, False, True, False])
        >>> classifier = TextClassifier(
        ...     SklearnVectorizer(counts),
        ...     SklearnTreeSplitter(fitted, feature_names=counts.get_feature_names_out().tolist()),
        ... )
        >>> classifier.classify("what an awful idea")
        True
    """

    def __init__(self, vectorizer: Vectorizer, splitter: Splitter) -> None:
        """Build the decision tree from `splitter`.

        Args:
            vectorizer (Vectorizer): Turns text into a one-row feature matrix
                at classification time.
            splitter (Splitter): Splitter for the full training set; consulted
                only during construction.
        """
        self._vectorizer = vectorizer
        self._root = build_tree(splitter)
        logger.debug("Decision tree built", depth=self.depth, leaf_count=self.leaf_count)

    @property
    def root(self) -> Node:
        """Root node of the current tree."""
        return self._root

    @property
    def depth(self) -> int:
        """Number of edges on the longest root-to-leaf path."""
        return tree_depth(self._root)

    @property
    def leaf_count(self) -> int:
        """Number of leaves in the current tree."""
        return count_leaves(self._root)

    def classify(self, text: str) -> bool:
        """Predict the label of `text`.

        Args:
            text (str): The document to classify. Case handling and
                tokenization are up to the vectorizer.

        Returns:
            bool: Label of the leaf the document's feature vector reaches.

        Raises:
            InvalidTextError: If `text` is not a string.
            FeatureMatrixError: If the vectorizer does not return a non-empty
                2-D matrix, or a split indexes past the end of the vector.
        """
        if not isinstance(text, str):
            logger.warning("Classification failed", reason="text is not a str", text_type=type(text).__name__)
            raise InvalidTextError(text)

        features = self._vectorize(text)
        label = classify_features(self._root, features)
        logger.trace("Text classified", label=label)
        return label

    def render(self) -> str:
        """Return the tree as nested if/else pseudocode.

        Returns:
            str: One statement per line; each nesting level adds one leading space.
        """
        return "\n".join(render_tree(self._root))

    def print(self, file: TextIO | None = None) -> None:
        """Write the tree as nested if/else pseudocode.

        Args:
            file (TextIO | None): Destination stream. Defaults to standard output.
        """
        stream = file if file is not None else sys.stdout
        for line in render_tree(self._root):
            print(line, file=stream)

    def prune(self, depth: int) -> None:
        """Turn every node `depth` levels below the root into a leaf.

        Pruned nodes keep the label they held before pruning. `prune(0)`
        collapses the tree into a single leaf; a depth at or beyond the tree's
        depth leaves predictions unchanged.

        Args:
            depth (int): Non-negative depth at which to cut the tree.

        Raises:
            InvalidDepthError: If `depth` is negative or not an int.
        """
        leaf_count_before = self.leaf_count
        try:
            self._root = prune_tree(self._root, depth)
        except InvalidDepthError as exc:
            logger.warning("Pruning failed", depth=depth, reason=str(exc))
            raise
        logger.info(
            "Decision tree pruned",
            depth=depth,
            leaf_count_before=leaf_count_before,
            leaf_count_after=self.leaf_count,
        )

    def rules(self) -> list[DecisionRule]:
        """Return one rule per leaf, left to right.

        Returns:
            list[DecisionRule]: The conditions leading to each leaf and its label.
        """
        return extract_rules(self._root)

    def _vectorize(self, text: str) -> np.ndarray:
        """Vectorize `text` and return the first row of the feature matrix.

        Args:
            text (str): The document to vectorize.

        Returns:
            np.ndarray: 1-D float feature vector.

        Raises:
            FeatureMatrixError: If the matrix is not 2-D or has no rows or columns.
        """
        raw_matrix = self._vectorizer.transform(text)
        try:
            matrix = np.asarray(raw_matrix, dtype=float)
        except (TypeError, ValueError) as exc:
            msg = f"Vectorizer returned a matrix that is not numeric and rectangular: {exc}"
            logger.warning("Classification failed", reason=msg)
            raise FeatureMatrixError(msg, shape=tuple(getattr(raw_matrix, "shape", ()))) from exc
        if matrix.ndim != 2 or matrix.size == 0:
            msg = f"Vectorizer must return a non-empty 2-D matrix, got shape {matrix.shape}"
            logger.warning("Classification failed", reason=msg)
            raise FeatureMatrixError(msg, shape=matrix.shape)
        return matrix[0]
