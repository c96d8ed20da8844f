"""Shared fixtures: scripted splitters and vectorizers for building small trees."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

import numpy as np
import pytest
from loguru import logger

from textclf.logging import PACKAGE_NAME
from textclf.tree.models import Partition, ThresholdSplit

# A leaf label, or `(label, split, left_layout, right_layout)` for an internal node.
TreeLayout: TypeAlias = "bool | tuple[bool, ThresholdSplit, TreeLayout, TreeLayout]"


@dataclass
class ScriptedSplitter:
    """Splitter that replays a nested tree layout.

    Attributes:
        layout (TreeLayout): The node this splitter stands for.
        split_calls (list[int]): Shared counter; one entry per `split()` call
            anywhere in the tree.
    """

    layout: TreeLayout
    split_calls: list[int] = field(default_factory=list)

    def split(self) -> Partition | None:
        """Return the scripted partition, or None for a leaf layout."""
        self.split_calls.append(1)
        if isinstance(self.layout, bool):
            return None
        _, threshold_split, left_layout, right_layout = self.layout
        return Partition(
            left=ScriptedSplitter(left_layout, self.split_calls),
            right=ScriptedSplitter(right_layout, self.split_calls),
            split=threshold_split,
        )

    def label(self) -> bool:
        """Return the scripted label."""
        return self.layout if isinstance(self.layout, bool) else self.layout[0]


@dataclass
class LookupVectorizer:
    """Vectorizer that returns a fixed one-row matrix per text.

    Attributes:
        vectors (Mapping[str, Sequence[float]]): Feature vector per known text.
        default (Sequence[float]): Vector for any other text.
        seen (list[str]): Every text passed to `transform`, in order.
    """

    vectors: Mapping[str, Sequence[float]] = field(default_factory=dict)
    default: Sequence[float] = (0.0, 0.0, 0.0)
    seen: list[str] = field(default_factory=list)

    def transform(self, text: str) -> np.ndarray:
        """Return the scripted vector for `text` as a `(1, n)` matrix."""
        self.seen.append(text)
        return np.array([self.vectors.get(text, self.default)], dtype=float)


@pytest.fixture
def make_splitter() -> Callable[[TreeLayout], ScriptedSplitter]:
    """Return a factory building a `ScriptedSplitter` from a tree layout.

    Returns:
        Callable[[TreeLayout], ScriptedSplitter]: The splitter factory.
    """
    return ScriptedSplitter


@pytest.fixture
def make_vectorizer() -> Callable[..., LookupVectorizer]:
    """Return a factory building a `LookupVectorizer`.

    Returns:
        Callable[..., LookupVectorizer]: The vectorizer factory.
    """
    return LookupVectorizer


@pytest.fixture
def two_level_layout() -> TreeLayout:
    """Root split on feature 0 with a True left leaf and a False right leaf.

    Returns:
        TreeLayout: The tree layout.
    """
    return (True, ThresholdSplit(feature_index=0, threshold=0.5), True, False)


@pytest.fixture
def three_level_layout() -> TreeLayout:
    """Three-level tree: a root split and two internal children with leaf grandchildren.

    Layout (left branch taken when the feature is <= 0.5)::

        root (True) splits feature 0
        |- left (False) splits feature 1 -> leaves True / False
        |- right (True) splits feature 2 -> leaves False / True

    Returns:
        TreeLayout: The tree layout.
    """
    return (
        True,
        ThresholdSplit(feature_index=0, threshold=0.5),
        (False, ThresholdSplit(feature_index=1, threshold=0.5), True, False),
        (True, ThresholdSplit(feature_index=2, threshold=0.5), False, True),
    )


@pytest.fixture
def enabled_package_logger() -> Iterator[None]:
    """Enable textclf logging for the duration of a test.

    Yields:
        None: Nothing; used only for setup/teardown side effects.
    """
    logger.enable(PACKAGE_NAME)
    yield
    logger.disable(PACKAGE_NAME)
