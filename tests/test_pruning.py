import numpy as np
import pytest
from chitree import CHI_SQUARE_TABLE, P_VALUES, Dataset, average_error, build_tree, classify, prune
from chitree.export import render
from chitree.pruning import (chi_square_statistic, critical_value, degrees_of_freedom,
                             p_value_column)


def _separable_dataset():
    X = np.array([[0, 0], [0, 1], [0, 2], [1, 0], [1, 1], [1, 2], [0, 0], [1, 1]])
    y = X[:, 0].copy()
    return Dataset(X, y, cardinalities=[2, 3])


def _nested_dataset():
    X = np.array([[0, 0], [0, 1], [0, 1], [1, 0], [1, 1], [1, 0]])
    y = np.array([0, 1, 1, 1, 1, 1])
    return Dataset(X, y, cardinalities=[2, 3])


def _noisy_dataset(seed=0):
    rng = np.random.default_rng(seed)
    X = rng.integers(0, 3, size=(300, 5))
    noise = rng.random(300) < 0.3
    y = ((X[:, 0] == 2) ^ noise).astype(int)
    return Dataset(X, y, cardinalities=[3] * 5)


def test_table_values():
    assert CHI_SQUARE_TABLE.shape == (11, 6)
    assert (CHI_SQUARE_TABLE[:, 0] == 0).all()
    assert CHI_SQUARE_TABLE[0, 1] == 0.102
    assert CHI_SQUARE_TABLE[3, 5] == 14.860
    assert CHI_SQUARE_TABLE[10, 4] == 19.675
    assert (np.diff(CHI_SQUARE_TABLE, axis=1) > 0).all()
    with pytest.raises(ValueError):
        CHI_SQUARE_TABLE[0, 0] = 1.0


def test_p_value_columns():
    assert [p_value_column(p) for p in P_VALUES] == [0, 1, 2, 3, 4, 5]
    assert p_value_column(0.1) == 5
    assert critical_value(1, 0.1) == 10.597


def test_critical_value_edges():
    assert critical_value(-1, 0.75) == 0.102
    assert critical_value(10, 0.5) == 10.341
    with pytest.raises(ValueError):
        critical_value(11, 0.5)


def test_statistic_by_hand():
    tree = build_tree(_nested_dataset())
    root = tree.root
    inner = root.children[0]
    assert np.isclose(chi_square_statistic(root), 1.2)
    assert degrees_of_freedom(root) == 1
    assert np.isclose(chi_square_statistic(inner), 3.0)
    # the empty branch is not counted
    assert degrees_of_freedom(inner) == 1


def test_separable_statistic():
    tree = build_tree(_separable_dataset())
    assert np.isclose(chi_square_statistic(tree.root), 8.0)


def test_p_one_never_prunes():
    data = _noisy_dataset()
    tree = build_tree(data)
    before = render(tree)
    n_nodes = tree.n_nodes
    assert prune(tree, 1.0) == 0
    assert tree.n_nodes == n_nodes
    assert render(tree) == before


def test_nested_thresholds():
    tree = build_tree(_nested_dataset())
    assert prune(tree, 0.75) == 0
    assert tree.n_internal_nodes == 2

    tree = build_tree(_nested_dataset())
    assert prune(tree, 0.5) == 1
    assert tree.root.is_leaf
    assert tree.root.predicted_label == 1
    assert classify(tree, [0, 0]) == 1
    assert np.isclose(average_error(tree, _nested_dataset()), 1 / 6)


def test_separable_split_survives_until_strictest_level():
    data = _separable_dataset()
    tree = build_tree(data)
    prune(tree, 0.05)
    assert not tree.root.is_leaf
    prune(tree, 0.005)
    assert tree.root.is_leaf
    # collapsed root keeps its (tie) label
    assert tree.root.predicted_label == 0
    assert average_error(tree, data) == 0.5


def test_stricter_levels_keep_fewer_nodes():
    data = _noisy_dataset(3)
    original = build_tree(data, "entropy")
    counts = []
    for p in P_VALUES:
        tree = original.copy()
        prune(tree, p)
        counts.append(tree.n_internal_nodes)
    assert counts[0] == original.n_internal_nodes
    assert all(a >= b for a, b in zip(counts, counts[1:]))
    assert counts[-1] < counts[0]


def test_pruned_nodes_keep_their_label():
    data = _noisy_dataset(5)
    tree = build_tree(data)
    labels = {id(n): n.predicted_label for n in tree.nodes()}
    prune(tree, 0.05)
    for node in tree.nodes():
        assert node.predicted_label == labels[id(node)]


def _wide_dataset():
    """Attribute 1 has 12 populated values, one more than the table covers."""
    a1 = np.repeat(np.arange(12), 2)
    X = np.column_stack([np.zeros(24, dtype=int), a1])
    return Dataset(X, a1 % 2, cardinalities=[2, 12])


def test_too_many_degrees_of_freedom_leaves_tree_untouched():
    tree = build_tree(_wide_dataset())
    assert degrees_of_freedom(tree.root) == 11
    before = render(tree)
    with pytest.raises(ValueError):
        prune(tree, 0.05)
    assert render(tree) == before
    assert tree.n_internal_nodes == 1
