# -*- coding: utf-8 -*-
"""
chitree.tree
============

Decision tree data structure, breadth‑first construction and classification.

The tree splits on categorical attributes only: an internal node owns one
child per value of its split attribute, in value order, including children
that received no rows.  Such empty children stay leaves forever and defer to
their parent's label when a row reaches them.

Construction is queue driven (no recursion).  Each popped node computes its
majority label, then either stays a leaf (no rows, perfectly classified, or
no attribute with positive gain) or is split on the attribute with the
largest impurity gain.
"""

# -----------------------------------------------------------------------------

from __future__ import annotations

import copy
from collections import deque
from collections.abc import Iterator, Sequence

from loguru import logger

from .dataset import Dataset
from .exceptions import EmptyDatasetError, InvalidAttributeValueError
from .impurity import check_criterion, gain


# -----------------------------------------------------------------------------
# Node
# -----------------------------------------------------------------------------
class TreeNode:
    """A single node of a categorical decision tree.

    Parameters
    ----------
    data : Dataset
        Rows that reach this node.
    parent : TreeNode or None, default=None
        Owning node; ``None`` for the root.

    Attributes
    ----------
    children : list[TreeNode] or None
        One child per value of ``split_attribute``; ``None`` for a leaf.
    split_attribute : int or None
        Attribute tested at this node.  Meaningless once the node is a leaf,
        which is the case after pruning.
    predicted_label : int or None
        Majority class of ``data`` (ties go to 0), set during construction,
        also for children that received no rows.
    """

    __slots__ = ("data", "parent", "children", "split_attribute", "predicted_label")

    def __init__(self, data: Dataset, parent: TreeNode | None = None):
        self.data = data
        self.parent = parent
        self.children: list[TreeNode] | None = None
        self.split_attribute: int | None = None
        self.predicted_label: int | None = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def n_samples(self) -> int:
        return self.data.n_rows

    @property
    def depth(self) -> int:
        d, node = 0, self
        while node.parent is not None:
            d += 1
            node = node.parent
        return d

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else f"split on {self.split_attribute}"
        return f"TreeNode({kind}, n={self.n_samples}, label={self.predicted_label})"


# -----------------------------------------------------------------------------
# Tree
# -----------------------------------------------------------------------------
class DecisionTree:
    """Owner of a root :class:`TreeNode`.

    Built by :func:`build_tree`, mutated in place by
    :func:`chitree.pruning.prune`, read by everything else.
    """

    def __init__(self, root: TreeNode, criterion: str = "gini"):
        self.root = root
        self.criterion = criterion

    def nodes(self) -> Iterator[TreeNode]:
        """Iterate over all nodes in breadth‑first order."""
        q = deque([self.root])
        while q:
            node = q.popleft()
            yield node
            if node.children is not None:
                q.extend(node.children)

    @property
    def n_nodes(self) -> int:
        return sum(1 for _ in self.nodes())

    @property
    def n_leaves(self) -> int:
        return sum(1 for n in self.nodes() if n.is_leaf)

    @property
    def n_internal_nodes(self) -> int:
        return sum(1 for n in self.nodes() if not n.is_leaf)

    @property
    def depth(self) -> int:
        return max(n.depth for n in self.nodes() if n.is_leaf)

    def copy(self) -> "DecisionTree":
        """Independent copy; datasets are immutable and stay shared."""
        memo = {}
        for node in self.nodes():
            memo[id(node.data)] = node.data
        return copy.deepcopy(self, memo)

    def __repr__(self) -> str:
        return (f"DecisionTree(criterion={self.criterion!r}, nodes={self.n_nodes}, "
                f"leaves={self.n_leaves})")


# -----------------------------------------------------------------------------
# Construction
# -----------------------------------------------------------------------------
def find_best_attribute(data: Dataset, criterion: str = "gini") -> int | None:
    """
    Index of the attribute with the largest impurity gain.

    Attributes are scanned in index order and only a strictly larger gain
    replaces the current best, so ties go to the lowest index.  Returns
    ``None`` when no attribute has a positive gain.
    """
    max_gain = 0.0
    best = 0
    for j in range(data.n_attributes):
        g = gain(data, j, criterion)
        if g > max_gain:
            max_gain = g
            best = j
    if max_gain == 0:
        return None
    return best


def build_tree(data: Dataset, criterion: str = "gini") -> DecisionTree:
    """
    Grow a decision tree breadth‑first.

    Parameters
    ----------
    data : Dataset
        Training rows.  Must not be empty.
    criterion : {"gini", "entropy"}, default="gini"
        Impurity measure used to rank candidate splits.

    Returns
    -------
    DecisionTree
        The unpruned tree.
    """
    check_criterion(criterion)
    if data.n_rows == 0:
        raise EmptyDatasetError("cannot build a tree from an empty dataset")

    root = TreeNode(data)
    q = deque([root])
    while q:
        node = q.popleft()
        node.predicted_label = node.data.majority_label()
        if node.n_samples == 0 or node.data.is_pure():
            continue
        attribute = find_best_attribute(node.data, criterion)
        if attribute is None:
            continue
        node.split_attribute = attribute
        node.children = []
        for part in node.data.partition_by(attribute):
            child = TreeNode(part, parent=node)
            child.predicted_label = part.majority_label()
            node.children.append(child)
            if part.n_rows > 0:
                q.append(child)
        logger.debug("split {} rows on attribute {} into {} branches",
                     node.n_samples, attribute, len(node.children))

    tree = DecisionTree(root, criterion)
    logger.info("built {} tree: {} nodes, {} leaves",
                criterion, tree.n_nodes, tree.n_leaves)
    return tree


# -----------------------------------------------------------------------------
# Prediction
# -----------------------------------------------------------------------------
def _next_child(node: TreeNode, row: Sequence) -> TreeNode:
    value = row[node.split_attribute]
    n_values = len(node.children)
    try:
        idx = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidAttributeValueError(node.split_attribute, value, n_values) from None
    if idx != value or not 0 <= idx < n_values:
        raise InvalidAttributeValueError(node.split_attribute, value, n_values)
    return node.children[idx]


def terminal_node(tree: DecisionTree, row: Sequence) -> tuple[TreeNode, int]:
    """Return the node where ``row`` stops descending and the edges walked."""
    node, steps = tree.root, 0
    while node.children is not None:
        node = _next_child(node, row)
        steps += 1
    return node, steps


def classify(tree: DecisionTree, row: Sequence) -> int:
    """
    Predict the class of a single row.

    Raises :class:`InvalidAttributeValueError` when a value has no branch at
    a split node.  A row that ends in a leaf without training rows gets the
    label of that leaf's parent.
    """
    node, _ = terminal_node(tree, row)
    if node.n_samples == 0:
        return node.parent.predicted_label
    return node.predicted_label


def average_error(tree: DecisionTree, data: Dataset) -> float:
    """Fraction of rows in ``data`` whose class is predicted wrongly."""
    if data.n_rows == 0:
        raise EmptyDatasetError("average error is undefined for an empty dataset")
    mistakes = 0
    for i in range(data.n_rows):
        if classify(tree, data.row(i)) != data.class_label(i):
            mistakes += 1
    return mistakes / data.n_rows
