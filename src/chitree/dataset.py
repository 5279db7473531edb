# -*- coding: utf-8 -*-
"""
chitree.dataset
===============

Immutable view over a categorical, binary‑labelled table.

Each row holds ``n_attributes`` categorical values encoded as dense integers
``0 .. cardinality - 1`` plus a class label in ``{0, 1}``.  A view never
changes after construction: the backing arrays are private copies flagged
read‑only, so a single :class:`Dataset` can be handed to several tree builds
without copying.  :meth:`Dataset.partition_by` produces fresh sub‑views, one
per attribute value, which is how the tree builder distributes rows to the
children of a node.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .exceptions import EmptyDatasetError


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, copy=True)
    a.setflags(write=False)
    return a


class Dataset:
    """Read‑only table of categorical attributes and binary class labels.

    Parameters
    ----------
    X : array-like of shape (n_rows, n_attributes)
        Integer attribute values.  Column ``j`` must lie in
        ``0 .. cardinalities[j] - 1``.
    y : array-like of shape (n_rows,)
        Class labels, each 0 or 1.
    cardinalities : sequence of int, optional
        Number of possible values per attribute.  When omitted it is inferred
        as ``max(column) + 1`` (at least 1).  Declaring it explicitly matters
        when a value never occurs in the data but should still produce an
        (empty) branch.
    """

    __slots__ = ("_X", "_y", "_cardinalities")

    def __init__(self, X, y, cardinalities: Sequence[int] | None = None):
        X = np.asarray(X)
        y = np.asarray(y)
        if X.ndim == 1 and X.size == 0:
            X = X.reshape(0, 0 if cardinalities is None else len(cardinalities))
        if X.ndim != 2:
            raise ValueError("X must be a 2-D array of attribute values")
        if y.ndim != 1 or len(y) != X.shape[0]:
            raise ValueError("y must be 1-D with one label per row of X")
        if X.size and not np.issubdtype(X.dtype, np.integer):
            if not np.all(np.equal(np.mod(X.astype(float), 1), 0)):
                raise ValueError("attribute values must be integer category codes")
        X = X.astype(np.int64)
        y = y.astype(np.int64)
        if y.size and not np.isin(y, (0, 1)).all():
            raise ValueError("class labels must be 0 or 1")

        n_attributes = X.shape[1]
        if cardinalities is None:
            if X.shape[0]:
                cardinalities = [max(int(c), 0) + 1 for c in X.max(axis=0)]
            else:
                cardinalities = [1] * n_attributes
        cardinalities = tuple(int(c) for c in cardinalities)
        if len(cardinalities) != n_attributes:
            raise ValueError("cardinalities length must match X.shape[1]")
        if any(c < 1 for c in cardinalities):
            raise ValueError("every attribute needs a cardinality of at least 1")
        if X.shape[0]:
            if (X < 0).any():
                raise ValueError("attribute values must be non-negative")
            too_big = X >= np.asarray(cardinalities)
            if too_big.any():
                j = int(np.nonzero(too_big.any(axis=0))[0][0])
                raise ValueError(
                    f"attribute {j} has values outside 0..{cardinalities[j] - 1}"
                )

        self._X = _frozen(X)
        self._y = _frozen(y)
        self._cardinalities = cardinalities

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_arrays(cls, X, y, cardinalities: Sequence[int] | None = None) -> "Dataset":
        return cls(X, y, cardinalities)

    @classmethod
    def from_frame(cls, df, target: str,
                   cardinalities: Sequence[int] | None = None) -> "Dataset":
        """Build a view from a pandas DataFrame.

        Integer columns are taken as category codes; any other column is
        converted to a pandas ``Categorical`` and replaced by its codes (the
        declared categories then fix the cardinality).  ``target`` names the
        0/1 label column.
        """
        import pandas as pd

        features = [c for c in df.columns if c != target]
        codes, inferred = [], []
        for name in features:
            col = df[name]
            if pd.api.types.is_integer_dtype(col):
                codes.append(col.to_numpy())
                inferred.append(int(col.max()) + 1 if len(col) else 1)
            else:
                cat = pd.Categorical(col)
                if (cat.codes < 0).any():
                    raise ValueError(f"column {name!r} contains missing values")
                codes.append(cat.codes)
                inferred.append(max(len(cat.categories), 1))
        X = np.column_stack(codes) if codes else np.empty((len(df), 0), dtype=np.int64)
        return cls(X, df[target].to_numpy(), cardinalities or inferred)

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    @property
    def n_rows(self) -> int:
        return int(self._X.shape[0])

    @property
    def n_attributes(self) -> int:
        return int(self._X.shape[1])

    @property
    def cardinalities(self) -> tuple[int, ...]:
        return self._cardinalities

    @property
    def X(self) -> np.ndarray:
        return self._X

    @property
    def y(self) -> np.ndarray:
        return self._y

    def __len__(self) -> int:
        return self.n_rows

    def __repr__(self) -> str:
        return (f"Dataset(n_rows={self.n_rows}, n_attributes={self.n_attributes}, "
                f"cardinalities={self._cardinalities})")

    def cardinality(self, attribute: int) -> int:
        return self._cardinalities[attribute]

    def row(self, i: int) -> np.ndarray:
        return self._X[i]

    def class_label(self, i: int) -> int:
        return int(self._y[i])

    # ------------------------------------------------------------------
    # Class statistics
    # ------------------------------------------------------------------
    def class_counts(self) -> np.ndarray:
        """Return ``[n0, n1]``, the number of rows labelled 0 and 1."""
        return np.bincount(self._y, minlength=2)[:2]

    def majority_label(self) -> int:
        """Label 1 only when strictly more frequent than label 0."""
        n0, n1 = self.class_counts()
        return 1 if n1 > n0 else 0

    def is_pure(self) -> bool:
        """True when every row carries the first row's label."""
        if self.n_rows == 0:
            raise EmptyDatasetError("purity is undefined for an empty dataset")
        return bool((self._y == self._y[0]).all())

    # ------------------------------------------------------------------
    # Distribution
    # ------------------------------------------------------------------
    def partition_by(self, attribute: int) -> list["Dataset"]:
        """Split rows by their value on ``attribute``.

        Returns exactly ``cardinality(attribute)`` views in value order.
        Values that never occur yield empty views; row order is preserved
        within each view.
        """
        col = self._X[:, attribute]
        parts = []
        for v in range(self._cardinalities[attribute]):
            mask = col == v
            parts.append(Dataset(self._X[mask], self._y[mask], self._cardinalities))
        return parts
