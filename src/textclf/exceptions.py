"""Custom exceptions for the text classifier.

All exceptions subclass ``TreeValidationError``, which itself subclasses
``ValueError``. Catch the base class to handle any invalid input handed to the
classifier or its tree helpers:

- InvalidTextError: Raised when ``classify`` receives something other than a string.
- FeatureMatrixError: Raised when a vectorizer returns an empty or non 2-D matrix,
  or when a split indexes past the end of a feature vector.
- InvalidDepthError: Raised when a prune depth is negative or not an integer.
- MalformedNodeError: Raised when a tree node is neither a leaf nor a complete
  internal node.
"""

from __future__ import annotations

from typing import Any


class TreeValidationError(ValueError):
    """Base exception for invalid input to the classifier and its tree helpers."""

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including the message.
        """
        return f"{self.__class__.__name__}(message={str(self)!r})"


class InvalidTextError(TreeValidationError):
    """Raised when text to classify is not a string.

    Attributes:
        text (Any): The rejected value.

    Examples:
        >>> err = InvalidTextError(None)
        >>> str(err)
        'Text to classify must be a str, got NoneType'
    """

    text: Any

    def __init__(self, text: Any) -> None:
        """Initialize InvalidTextError.

        Args:
            text (Any): The value that was passed instead of a string.
        """
        super().__init__(f"Text to classify must be a str, got {type(text).__name__}")
        self.text = text

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and text.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, text={self.text!r})"


class FeatureMatrixError(TreeValidationError):
    """Raised when a feature matrix or vector cannot be used for traversal.

    Attributes:
        shape (tuple[int, ...]): Shape of the offending array.
    """

    shape: tuple[int, ...]

    def __init__(self, message: str, *, shape: tuple[int, ...]) -> None:
        """Initialize FeatureMatrixError.

        Args:
            message (str): Description of what is wrong with the array.
            shape (tuple[int, ...]): Shape of the offending array.
        """
        super().__init__(message)
        self.shape = shape

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and shape.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, shape={self.shape!r})"


class InvalidDepthError(TreeValidationError):
    """Raised when a prune depth is negative or not an integer.

    Attributes:
        depth (Any): The rejected depth.

    Examples:
        >>> err = InvalidDepthError(-1)
        >>> err.depth
        -1
    """

    depth: Any

    def __init__(self, depth: Any) -> None:
        """Initialize InvalidDepthError.

        Args:
            depth (Any): The rejected depth value.
        """
        super().__init__(f"Prune depth must be a non-negative int, got {depth!r}")
        self.depth = depth

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and depth.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, depth={self.depth!r})"


class MalformedNodeError(TreeValidationError):
    """Raised when a node is only partly internal.

    A node must either have a split and both children, or none of them.

    Attributes:
        has_split (bool): Whether the node was given a split.
        has_left (bool): Whether the node was given a left child.
        has_right (bool): Whether the node was given a right child.
    """

    has_split: bool
    has_left: bool
    has_right: bool

    def __init__(self, *, has_split: bool, has_left: bool, has_right: bool) -> None:
        """Initialize MalformedNodeError.

        Args:
            has_split (bool): Whether the node was given a split.
            has_left (bool): Whether the node was given a left child.
            has_right (bool): Whether the node was given a right child.
        """
        super().__init__(
            "A node must have a split and both children, or none of them "
            f"(split={has_split}, left={has_left}, right={has_right})"
        )
        self.has_split = has_split
        self.has_left = has_left
        self.has_right = has_right

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including which parts were present.
        """
        return (
            f"{self.__class__.__name__}("
            f"message={str(self)!r}, has_split={self.has_split!r}, "
            f"has_left={self.has_left!r}, has_right={self.has_right!r})"
        )
