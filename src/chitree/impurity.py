# -*- coding: utf-8 -*-
"""
chitree.impurity
================

Impurity measures and the impurity gain of a categorical split.

Both measures work on the two‑element class probability vector
``[P(y=0), P(y=1)]`` returned by :func:`probabilities`.
"""

from __future__ import annotations

import numpy as np

from .dataset import Dataset
from .exceptions import EmptyDatasetError

CRITERIA = ("gini", "entropy")


def check_criterion(criterion: str) -> str:
    if criterion not in CRITERIA:
        raise ValueError(f"criterion must be one of {CRITERIA}, got {criterion!r}")
    return criterion


def probabilities(data: Dataset) -> np.ndarray:
    """Return ``[P(y=0), P(y=1)]`` over the rows of ``data``."""
    if data.n_rows == 0:
        raise EmptyDatasetError("class probabilities are undefined for an empty dataset")
    return data.class_counts() / float(data.n_rows)


def entropy(probs) -> float:
    """
    Shannon entropy in bits, ``-sum(p * log2(p))``.

    If any probability is exactly zero the result is ``0.0`` without looking
    at the other entries.  With two classes a zero entry means the set is
    pure, so this equals the full sum; it is not a general ``log2(0)`` guard
    and must not be reused for more than two classes.
    """
    p = np.asarray(probs, dtype=float)
    if (p == 0).any():
        return 0.0
    return float(-np.sum(p * np.log2(p)))


def gini(probs) -> float:
    """Gini impurity, ``1 - sum(p ** 2)``."""
    p = np.asarray(probs, dtype=float)
    return float(1.0 - np.sum(p ** 2))


def impurity(probs, criterion: str = "gini") -> float:
    if check_criterion(criterion) == "gini":
        return gini(probs)
    return entropy(probs)


def gain(data: Dataset, attribute: int, criterion: str = "gini") -> float:
    """
    Impurity gain of splitting ``data`` on ``attribute``.

    Parameters
    ----------
    data : Dataset
        Rows reaching the node.  Must not be empty.
    attribute : int
        Index of the candidate split attribute.
    criterion : {"gini", "entropy"}, default="gini"
        Impurity measure, used for both the parent and the children.

    Returns
    -------
    float
        ``impurity(data) - sum(|sub| / |data| * impurity(sub))`` where the
        sum runs over the non‑empty sub‑views of the split.
    """
    check_criterion(criterion)
    n = float(data.n_rows)
    parent = impurity(probabilities(data), criterion)
    weighted = 0.0
    for sub in data.partition_by(attribute):
        if sub.n_rows == 0:
            continue
        weighted += (sub.n_rows / n) * impurity(probabilities(sub), criterion)
    return parent - weighted
