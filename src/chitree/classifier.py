# -*- coding: utf-8 -*-
"""
chitree.classifier
==================

Scikit‑learn style estimator around the categorical decision tree.

:class:`ChiSquareTreeClassifier` grows a tree with :func:`chitree.tree.build_tree`
and, when ``p_value`` is set, immediately prunes it with
:func:`chitree.pruning.prune`.  The fitted tree stays available as ``tree_``
so it can be pruned again, measured or rendered.
"""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin

from . import export, metrics
from .dataset import Dataset
from .impurity import check_criterion
from .pruning import prune
from .tree import average_error, build_tree, classify


class ChiSquareTreeClassifier(ClassifierMixin, BaseEstimator):
    """
    Binary decision tree over categorical attributes with chi‑square pruning.

    Parameters
    ----------
    criterion : {"gini", "entropy"}, default="gini"
        Impurity measure used to pick split attributes.
    p_value : float or None, default=None
        Significance level for chi‑square pruning, one of
        ``1.0, 0.75, 0.5, 0.25, 0.05, 0.005``.  ``None`` leaves the tree
        unpruned.  Other values fall back to the 0.005 column.
    cardinalities : list[int] or None, default=None
        Number of values per attribute.  Inferred from the training data
        when omitted; set it when some value may be missing from ``X``.

    Attributes
    ----------
    tree_ : DecisionTree
        The fitted (and possibly pruned) tree.
    classes_ : ndarray of shape (2,)
        Always ``[0, 1]``.
    n_features_in_ : int
        Number of attributes seen during ``fit``.

    Notes
    -----
    Attribute values must be integer codes ``0 .. cardinality - 1`` and
    labels must be 0 or 1.  Use :meth:`chitree.dataset.Dataset.from_frame`
    to encode a DataFrame.
    """

    def __init__(self, *, criterion: str = "gini", p_value: float | None = None,
                 cardinalities: list[int] | None = None):
        self.criterion = criterion
        self.p_value = p_value
        self.cardinalities = cardinalities

    def _check_fitted(self):
        if getattr(self, "tree_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")

    def _as_dataset(self, X, y) -> Dataset:
        if isinstance(X, Dataset):
            return X
        return Dataset(X, y)

    def fit(self, X, y=None):
        """
        Grow the tree and optionally prune it.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features) or Dataset
            Integer attribute codes, or a ready :class:`Dataset` (``y`` is
            then ignored).
        y : array-like of shape (n_samples,)
            Class labels in ``{0, 1}``.

        Returns
        -------
        self
        """
        check_criterion(self.criterion)
        if isinstance(X, Dataset):
            data = X
        else:
            if y is None:
                raise ValueError("y is required unless X is a Dataset")
            data = Dataset(X, y, self.cardinalities)
        tree = build_tree(data, self.criterion)
        if self.p_value is not None:
            prune(tree, self.p_value)
        self.tree_ = tree
        self.classes_ = np.array([0, 1])
        self.n_features_in_ = data.n_attributes
        return self

    def predict(self, X):
        """
        Predict class labels.

        Raises
        ------
        ValueError
            If the estimator has not been fitted.
        InvalidAttributeValueError
            If a row holds a value with no branch at some split.
        """
        self._check_fitted()
        rows = X.X if isinstance(X, Dataset) else np.asarray(X)
        return np.array([classify(self.tree_, x) for x in rows], dtype=int)

    def prune(self, p_value: float) -> int:
        """Prune the fitted tree in place; returns the number of collapsed splits."""
        self._check_fitted()
        return prune(self.tree_, p_value)

    def average_error(self, X, y=None) -> float:
        self._check_fitted()
        return average_error(self.tree_, self._as_dataset(X, y))

    def max_height(self, X) -> int:
        self._check_fitted()
        return metrics.max_height(self.tree_, X)

    def avg_height(self, X) -> float:
        self._check_fitted()
        return metrics.avg_height(self.tree_, X)

    def export_text(self) -> str:
        self._check_fitted()
        return export.render(self.tree_)

    def print_tree(self, sink=print) -> None:
        self._check_fitted()
        export.print_tree(self.tree_, sink)

    def export_graphviz(self, filename: str | None = None, *, format: str = "dot") -> str:
        self._check_fitted()
        return export.export_graphviz(self.tree_, filename, format=format)
