import numpy as np
import pytest
from chitree import Dataset
from chitree.impurity import entropy, gain, gini, impurity


def _separable_dataset():
    """Attribute 0 (2 values) equals the label; attribute 1 (3 values) is noise."""
    X = np.array([[0, 0], [0, 1], [0, 2], [1, 0], [1, 1], [1, 2], [0, 0], [1, 1]])
    y = X[:, 0].copy()
    return Dataset(X, y, cardinalities=[2, 3])


def test_pure_sets_have_zero_impurity():
    for probs in ([1.0, 0.0], [0.0, 1.0]):
        assert gini(probs) == 0.0
        assert entropy(probs) == 0.0


def test_balanced_set_is_maximal():
    assert np.isclose(gini([0.5, 0.5]), 0.5)
    assert np.isclose(entropy([0.5, 0.5]), 1.0)


def test_entropy_returns_zero_as_soon_as_a_probability_is_zero():
    assert entropy([0.0, 0.3]) == 0.0


def test_entropy_value():
    expected = -(0.25 * np.log2(0.25) + 0.75 * np.log2(0.75))
    assert np.isclose(entropy([0.25, 0.75]), expected)


def test_unknown_criterion():
    with pytest.raises(ValueError):
        impurity([0.5, 0.5], "misclassification")


def test_gain_by_hand():
    data = _separable_dataset()
    assert np.isclose(gain(data, 0, "gini"), 0.5)
    assert np.isclose(gain(data, 0, "entropy"), 1.0)
    # attribute 1: value groups (2,1), (1,2), (1,1)
    assert np.isclose(gain(data, 1, "gini"), 1.0 / 24.0)


def test_gain_is_never_negative():
    rng = np.random.default_rng(0)
    X = rng.integers(0, 3, size=(60, 4))
    y = rng.integers(0, 2, size=60)
    data = Dataset(X, y, cardinalities=[3, 3, 3, 3])
    for criterion in ("gini", "entropy"):
        for j in range(4):
            assert gain(data, j, criterion) >= -1e-12
