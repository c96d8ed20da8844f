"""Tree node, split, and collaborator contracts for the text classifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, NamedTuple, Protocol, runtime_checkable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from textclf.exceptions import FeatureMatrixError, MalformedNodeError

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

THRESHOLD_DECIMAL_PLACES: Final[int] = 4  # Decimal places shown for split thresholds.

# ---------------------------------------------------------------------------
# Collaborator contracts
# ---------------------------------------------------------------------------


@runtime_checkable
class Split(Protocol):
    """A predicate over a feature vector that decides which branch to descend."""

    def go_left(self, features: np.ndarray) -> bool:
        """Return True when `features` should descend into the left subtree."""
        ...

    def describe(self) -> str:
        """Return the condition as text, e.g. `"feature[3] <= 0.5"`."""
        ...


class Partition(NamedTuple):
    """A splitter's answer when the current subset should be divided.

    Attributes:
        left (Splitter): Splitter for the subset that satisfies `split`.
        right (Splitter): Splitter for the remaining subset.
        split (Split): The predicate that separates the two subsets.
    """

    left: Splitter
    right: Splitter
    split: Split


@runtime_checkable
class Splitter(Protocol):
    """Recursively partitions a labeled dataset; consulted only while building a tree."""

    def split(self) -> Partition | None:
        """Return a partition of the current subset, or None when it should be a leaf."""
        ...

    def label(self) -> bool:
        """Return the label assigned to the current subset."""
        ...


@runtime_checkable
class Vectorizer(Protocol):
    """Turns raw text into a 2-D numeric matrix with one row per document."""

    def transform(self, text: str) -> np.ndarray:
        """Return the feature matrix for `text`."""
        ...


# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class ThresholdSplit(BaseModel):
    """Sends a feature vector left when one feature is at or below a threshold.

    Follows the sklearn convention: `x[feature_index] <= threshold` goes left,
    and a NaN feature goes to the side named by `missing_goes_left`.

    Attributes:
        feature_index (int): Column of the feature vector to test.
        threshold (float): Inclusive upper bound for the left branch.
        feature_name (str | None): Optional name used when rendering the
            condition. Defaults to `feature[<feature_index>]`.
        missing_goes_left (bool): Branch taken when the feature is NaN.
            Defaults to False, the branch a plain `<=` comparison would pick.

    Examples:
        >>> split = ThresholdSplit(feature_index=3, threshold=0.5)
        >>> split.describe()
        'feature[3] <= 0.5'
        >>> split.go_left(np.array([0.0, 0.0, 0.0, 0.25]))
        True
        >>> ThresholdSplit(feature_index=0, threshold=1.5, feature_name="toxic").describe()
        'toxic <= 1.5'
    """

    model_config = ConfigDict(frozen=True)

    feature_index: int = Field(ge=0, description="Column of the feature vector to test.")
    threshold: float = Field(description="Inclusive upper bound for descending left.")
    feature_name: str | None = Field(default=None, description="Name used when rendering the condition.")
    missing_goes_left: bool = Field(default=False, description="Branch taken when the feature is NaN.")

    def go_left(self, features: np.ndarray) -> bool:
        """Evaluate this split against a feature vector.

        Args:
            features (np.ndarray): 1-D feature vector.

        Returns:
            bool: True if `features[feature_index] <= threshold`, or
                `missing_goes_left` when the feature is NaN.

        Raises:
            FeatureMatrixError: If the vector has no column `feature_index`.
        """
        if self.feature_index >= len(features):
            raise FeatureMatrixError(
                f"Split on feature {self.feature_index} cannot evaluate a vector of length {len(features)}",
                shape=tuple(np.shape(features)),
            )
        value = features[self.feature_index]
        if np.isnan(value):
            return self.missing_goes_left
        return bool(value <= self.threshold)

    def describe(self) -> str:
        """Return the condition as `"<name> <= <threshold>"`.

        Returns:
            str: The rendered condition with the threshold rounded to
                `THRESHOLD_DECIMAL_PLACES`.
        """
        name = self.feature_name if self.feature_name is not None else f"feature[{self.feature_index}]"
        return f"{name} <= {round(self.threshold, THRESHOLD_DECIMAL_PLACES)}"

    def __str__(self) -> str:
        """Return the rendered condition."""
        return self.describe()


@dataclass(frozen=True)
class Node:
    """A leaf or internal node of a decision tree.

    Every node carries a label, so that pruning can turn an internal node into
    a leaf without consulting anything else. Nodes are immutable; pruning
    builds new ones.

    Attributes:
        label (bool): Prediction when this node is treated as a leaf.
        split (Split | None): Branch predicate; None for leaves.
        left (Node | None): Subtree for vectors where `split.go_left` is True.
        right (Node | None): Subtree for the remaining vectors.

    Raises:
        MalformedNodeError: If only some of `split`, `left`, `right` are given.
    """

    label: bool
    split: Split | None = None
    left: Node | None = None
    right: Node | None = None

    def __post_init__(self) -> None:
        """Check that the node is either a leaf or a complete internal node."""
        parts = (self.split is not None, self.left is not None, self.right is not None)
        if any(parts) and not all(parts):
            raise MalformedNodeError(has_split=parts[0], has_left=parts[1], has_right=parts[2])

    @property
    def is_leaf(self) -> bool:
        """Whether this node has no split and no children."""
        return self.split is None


class DecisionRule(BaseModel):
    """The path from the root to one leaf, with the leaf's label.

    Attributes:
        conditions (list[str]): Rendered conditions along the path, root first.
            Right branches are rendered as `not (<condition>)`. Empty for a
            single-leaf tree.
        label (bool): Label of the leaf at the end of the path.

    Examples:
        >>> rule = DecisionRule(conditions=["feature[0] <= 0.5"], label=True)
        >>> str(rule)
        'if feature[0] <= 0.5 then true'
    """

    conditions: list[str] = Field(description="Rendered conditions along the path from the root.")
    label: bool = Field(description="Label of the leaf at the end of the path.")

    def __str__(self) -> str:
        """Return the rule as `"if <c1> and <c2> then <label>"`."""
        label = str(self.label).lower()
        if not self.conditions:
            return f"always {label}"
        return f"if {' and '.join(self.conditions)} then {label}"
