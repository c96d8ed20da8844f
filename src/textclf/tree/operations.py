"""Tree construction, traversal, rendering, pruning, and rule extraction."""

from __future__ import annotations

import numpy as np

from textclf.exceptions import InvalidDepthError
from textclf.tree.models import DecisionRule, Node, Split, Splitter

# ---------------------------------------------------------------------------
# Public interface -- Construction
# ---------------------------------------------------------------------------


def build_tree(splitter: Splitter) -> Node:
    """Build a decision tree by recursively asking `splitter` to partition its data.

    A splitter that declines to partition produces a leaf. Otherwise the node
    keeps the splitter's label (used later if the node is pruned) and its
    children are built from the partition's left and right splitters.

    Args:
        splitter (Splitter): Splitter for the full dataset.

    Returns:
        Node: Root of the constructed tree.
    """
    partition = splitter.split()
    if partition is None:
        return Node(label=splitter.label())
    return Node(
        label=splitter.label(),
        split=partition.split,
        left=build_tree(partition.left),
        right=build_tree(partition.right),
    )


# ---------------------------------------------------------------------------
# Public interface -- Classification
# ---------------------------------------------------------------------------


def classify_features(root: Node, features: np.ndarray) -> bool:
    """Walk the tree from `root` and return the label of the leaf `features` reaches.

    Args:
        root (Node): Root of the tree.
        features (np.ndarray): 1-D feature vector.

    Returns:
        bool: Label of the reached leaf.
    """
    node = root
    while node.split is not None:
        node = node.left if node.split.go_left(features) else node.right  # type: ignore[assignment]
    return node.label


# ---------------------------------------------------------------------------
# Public interface -- Rendering
# ---------------------------------------------------------------------------


def render_tree(root: Node) -> list[str]:
    """Render the tree as nested if/else pseudocode, one statement per line.

    Each level of nesting adds a single leading space.

    Args:
        root (Node): Root of the tree.

    Returns:
        list[str]: Lines in pre-order.

    Examples:
        >>> from textclf.tree.models import ThresholdSplit
        >>> tree = Node(
        ...     label=True,
        ...     split=ThresholdSplit(feature_index=0, threshold=0.5),
        ...     left=Node(label=True),
        ...     right=Node(label=False),
        ... )
        >>> print("\\n".join(render_tree(tree)))
        if (feature[0] <= 0.5)
         return true;
        else
         return false;
    """
    lines: list[str] = []
    _render_node(root, indent="", lines=lines)
    return lines


# ---------------------------------------------------------------------------
# Public interface -- Pruning
# ---------------------------------------------------------------------------


def prune_tree(root: Node, depth: int) -> Node:
    """Return a copy of the tree cut off at `depth` levels below the root.

    Every node exactly `depth` levels down becomes a leaf carrying its own
    label. Leaves above the cut are unchanged. The input tree is not modified
    and shares no nodes with the result.

    Args:
        root (Node): Root of the tree to prune.
        depth (int): Non-negative depth at which nodes become leaves. `0`
            collapses the whole tree into a leaf with the root's label.

    Returns:
        Node: Root of the pruned tree.

    Raises:
        InvalidDepthError: If `depth` is negative or not an int.
    """
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
        raise InvalidDepthError(depth)
    return _prune_node(root, depth)


# ---------------------------------------------------------------------------
# Public interface -- Inspection
# ---------------------------------------------------------------------------


def tree_depth(root: Node) -> int:
    """Return the number of edges on the longest root-to-leaf path.

    Args:
        root (Node): Root of the tree.

    Returns:
        int: `0` for a single leaf.
    """
    if root.is_leaf:
        return 0
    _, left, right = _branches(root)
    return 1 + max(tree_depth(left), tree_depth(right))


def count_leaves(root: Node) -> int:
    """Return the number of leaves in the tree.

    Args:
        root (Node): Root of the tree.

    Returns:
        int: Leaf count, at least 1.
    """
    if root.is_leaf:
        return 1
    _, left, right = _branches(root)
    return count_leaves(left) + count_leaves(right)


def extract_rules(root: Node) -> list[DecisionRule]:
    """Extract one rule per leaf, left to right.

    Args:
        root (Node): Root of the tree.

    Returns:
        list[DecisionRule]: Rules whose conditions trace the path to each leaf.
            Conditions for right branches are rendered as `not (<condition>)`.
    """
    rules: list[DecisionRule] = []
    _walk_rules(root, path=[], rules=rules)
    return rules


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _branches(node: Node) -> tuple[Split, Node, Node]:
    """Return the split and children of an internal node.

    A node that is not a leaf always has a split and both children.
    """
    return node.split, node.left, node.right  # type: ignore[return-value]


def _render_node(node: Node, *, indent: str, lines: list[str]) -> None:
    """Append the rendering of `node` and its subtrees to `lines`.

    Args:
        node (Node): Node to render.
        indent (str): Leading whitespace for this node's statements.
        lines (list[str]): Accumulator; lines are appended in-place.
    """
    if node.is_leaf:
        lines.append(f"{indent}return {str(node.label).lower()};")
        return
    split, left, right = _branches(node)
    lines.append(f"{indent}if ({split.describe()})")
    _render_node(left, indent=indent + " ", lines=lines)
    lines.append(f"{indent}else")
    _render_node(right, indent=indent + " ", lines=lines)


def _prune_node(node: Node, remaining: int) -> Node:
    """Rebuild `node` with every descendant `remaining` levels down turned into a leaf.

    Args:
        node (Node): Node to rebuild.
        remaining (int): Levels left before the cut.

    Returns:
        Node: The rebuilt node.
    """
    if remaining == 0 or node.is_leaf:
        return Node(label=node.label)
    split, left, right = _branches(node)
    return Node(
        label=node.label,
        split=split,
        left=_prune_node(left, remaining - 1),
        right=_prune_node(right, remaining - 1),
    )


def _walk_rules(node: Node, *, path: list[str], rules: list[DecisionRule]) -> None:
    """Recursively accumulate a rule for every leaf under `node`.

    Args:
        node (Node): Current node.
        path (list[str]): Conditions from the root to `node`.
        rules (list[DecisionRule]): Accumulator; rules are appended in-place.
    """
    if node.is_leaf:
        rules.append(DecisionRule(conditions=path, label=node.label))
        return
    split, left, right = _branches(node)
    condition = split.describe()
    _walk_rules(left, path=[*path, condition], rules=rules)
    _walk_rules(right, path=[*path, f"not ({condition})"], rules=rules)
