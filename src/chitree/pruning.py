# -*- coding: utf-8 -*-
"""
chitree.pruning
===============

Chi‑square significance pruning.

Every internal node is tested, top down, for whether its split separates the
classes better than chance.  The statistic compares the observed class
counts of each child with the counts expected from the parent's class
proportions:

    chi2 = sum_c (o0_c - E0_c)**2 / E0_c + (o1_c - E1_c)**2 / E1_c
    E0_c = |c| * P0,  E1_c = |c| * P1

and is checked against a tabulated critical value for
``df = (#non‑empty children) - 1`` at the requested significance level.
Splits below the critical value are collapsed into leaves; the collapsed
node keeps the majority label it got during construction.
"""

from __future__ import annotations

from collections import deque

import numpy as np
from loguru import logger

from .tree import DecisionTree, TreeNode

# Significance levels, in table column order.
P_VALUES = (1.0, 0.75, 0.5, 0.25, 0.05, 0.005)

# Critical values, rows = degrees of freedom 0..10, columns = P_VALUES.
CHI_SQUARE_TABLE = np.array([
    [0, 0.102, 0.455, 1.323, 3.841, 7.879],
    [0, 0.575, 1.386, 2.773, 5.991, 10.597],
    [0, 1.213, 2.366, 4.108, 7.815, 12.838],
    [0, 1.923, 3.357, 5.385, 9.488, 14.860],
    [0, 2.675, 4.351, 6.626, 11.070, 16.750],
    [0, 3.455, 5.348, 7.841, 12.592, 18.548],
    [0, 4.255, 6.346, 9.037, 14.067, 20.278],
    [0, 5.071, 7.344, 10.219, 15.507, 21.955],
    [0, 5.899, 8.343, 11.389, 16.919, 23.589],
    [0, 6.737, 9.342, 12.549, 18.307, 25.188],
    [0, 7.584, 10.341, 13.701, 19.675, 26.757],
], dtype=float)
CHI_SQUARE_TABLE.setflags(write=False)


def p_value_column(p_value: float) -> int:
    """
    Table column for a significance level.

    Only the exact values in :data:`P_VALUES` are recognised.  Anything else
    falls back to the strictest column (0.005) with a warning.
    """
    for col, p in enumerate(P_VALUES):
        if p_value == p:
            return col
    logger.warning("unrecognised p-value {}; using the {} column", p_value, P_VALUES[-1])
    return len(P_VALUES) - 1


def degrees_of_freedom(node: TreeNode) -> int:
    """Number of children holding rows, minus one."""
    return sum(1 for c in node.children if c.n_samples != 0) - 1


def critical_value(df: int, p_value: float) -> float:
    """
    Look up the critical chi‑square value.

    A negative ``df`` reads row 0.  Raises ``ValueError`` when ``df`` is
    beyond the last tabulated row.
    """
    return _table_value(df, p_value_column(p_value))


def _table_value(df: int, col: int) -> float:
    row = max(df, 0)
    if row >= CHI_SQUARE_TABLE.shape[0]:
        raise ValueError(
            f"no critical values tabulated for {df} degrees of freedom "
            f"(max {CHI_SQUARE_TABLE.shape[0] - 1})"
        )
    return float(CHI_SQUARE_TABLE[row, col])


def chi_square_statistic(node: TreeNode) -> float:
    """Chi‑square statistic of the split held by an internal node."""
    n0, n1 = node.data.class_counts()
    n = float(node.n_samples)
    p0, p1 = n0 / n, n1 / n
    chi = 0.0
    for child in node.children:
        size = child.n_samples
        e0 = size * p0
        e1 = size * p1
        if e0 != 0 and e1 != 0:
            o0, o1 = child.data.class_counts()
            chi += (o0 - e0) ** 2 / e0 + (o1 - e1) ** 2 / e1
    return float(chi)


def prune(tree: DecisionTree, p_value: float) -> int:
    """
    Prune ``tree`` in place at significance level ``p_value``.

    Parameters
    ----------
    tree : DecisionTree
        Tree to prune.  Its nodes are modified.
    p_value : float
        One of :data:`P_VALUES`.  ``1.0`` never prunes; smaller values
        prune more.

    Returns
    -------
    int
        Number of internal nodes turned into leaves.
    """
    col = p_value_column(p_value)
    # collect first: the tree is left untouched if a lookup fails
    doomed = []
    q = deque([tree.root])
    while q:
        node = q.popleft()
        if node.children is None:
            continue
        chi = chi_square_statistic(node)
        df = degrees_of_freedom(node)
        crit = _table_value(df, col)
        if chi >= crit:
            q.extend(c for c in node.children if c.children is not None)
        else:
            logger.debug("pruning split on attribute {} (chi2={:.4f} < {} at df={})",
                         node.split_attribute, chi, crit, df)
            doomed.append(node)
    for node in doomed:
        node.children = None
    n_pruned = len(doomed)
    logger.info("pruning at p={} removed {} splits", p_value, n_pruned)
    return n_pruned
