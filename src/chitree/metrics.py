"""Path‑length statistics of a tree over a set of rows."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .dataset import Dataset
from .exceptions import EmptyDatasetError
from .tree import DecisionTree, terminal_node


def _rows(data) -> np.ndarray:
    return data.X if isinstance(data, Dataset) else np.asarray(data)


def height(tree: DecisionTree, row: Sequence) -> int:
    """Number of edges walked while classifying ``row``."""
    _, steps = terminal_node(tree, row)
    return steps


def max_height(tree: DecisionTree, data: Dataset) -> int:
    """Longest path over the rows of ``data`` (a Dataset or a 2-D array of rows)."""
    return max((height(tree, row) for row in _rows(data)), default=0)


def avg_height(tree: DecisionTree, data: Dataset) -> float:
    rows = _rows(data)
    if len(rows) == 0:
        raise EmptyDatasetError("average height is undefined for an empty dataset")
    return sum(height(tree, row) for row in rows) / len(rows)
