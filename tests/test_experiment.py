import numpy as np
import pytest
from chitree import Dataset, EmptyDatasetError, P_VALUES, run_experiment


def _separable_dataset():
    X = np.array([[0, 0], [0, 1], [0, 2], [1, 0], [1, 1], [1, 2], [0, 0], [1, 1]])
    y = X[:, 0].copy()
    return Dataset(X, y, cardinalities=[2, 3])


def test_sweep_reports_every_level():
    data = _separable_dataset()
    lines = []
    result = run_experiment(data, data, data, sink=lines.append)

    assert result.criterion_errors == {"entropy": 0.0, "gini": 0.0}
    assert result.criterion == "gini"
    assert [r.p_value for r in result.pruning] == list(P_VALUES)
    # chi2 = 8 with df = 1: only the 0.005 level (10.597) collapses the root
    assert [r.validation_error for r in result.pruning] == [0.0] * 5 + [0.5]
    assert result.pruning[0].max_height == 1
    assert result.pruning[-1].max_height == 0
    assert result.pruning[-1].n_nodes == 1
    assert result.best_p_value == 1.0
    assert result.test_error == 0.0

    assert lines[0] == "Validation error using Entropy: 0.0"
    assert lines[1] == "Validation error using Gini: 0.0"
    assert sum(line.startswith("Decision Tree with p_value of") for line in lines) == 6
    assert "Best Validation error at p_value: 1.0" in lines
    assert "Test error with best tree: 0.0" in lines
    assert lines[-1] == "  Leaf. Returning value: 1"


def test_sweep_picks_lowest_validation_error():
    data = _separable_dataset()
    result = run_experiment(data, data, data, p_values=(0.005, 0.05), sink=lambda line: None)
    assert result.best_p_value == 0.05


def test_sweep_ties_go_to_earliest_level():
    data = _separable_dataset()
    result = run_experiment(data, data, data, p_values=(0.75, 1.0), sink=lambda line: None)
    assert result.best_p_value == 0.75


def test_sweep_needs_rows():
    data = _separable_dataset()
    empty = Dataset(np.empty((0, 2), dtype=int), [], cardinalities=[2, 3])
    with pytest.raises(EmptyDatasetError):
        run_experiment(data, empty, data, sink=lambda line: None)
    with pytest.raises(EmptyDatasetError):
        run_experiment(data, data, empty, sink=lambda line: None)
