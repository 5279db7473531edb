# -*- coding: utf-8 -*-
"""
chitree.experiment
==================

Train / validate / test sweep over impurity criteria and pruning levels.

:func:`run_experiment` compares a Gini and an Entropy tree on the validation
set, then rebuilds the better one once per significance level in
:data:`chitree.pruning.P_VALUES`, prunes it, and picks the level with the
lowest validation error.  The winning configuration is rebuilt and scored on
the test set.  Every intermediate figure is written as a line of text into a
reporting sink (``print`` by default) and returned as an
:class:`ExperimentResult`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from .dataset import Dataset
from .exceptions import EmptyDatasetError
from .export import ReportSink, print_tree
from .metrics import avg_height, max_height
from .pruning import P_VALUES, prune
from .tree import DecisionTree, average_error, build_tree

_RULE = "-" * 52


@dataclass
class PruningResult:
    """Scores of one tree pruned at ``p_value``."""
    p_value: float
    train_error: float
    validation_error: float
    max_height: int
    avg_height: float
    n_nodes: int


@dataclass
class ExperimentResult:
    criterion_errors: dict[str, float]
    criterion: str
    pruning: list[PruningResult] = field(default_factory=list)
    best_p_value: float | None = None
    test_error: float | None = None
    tree: DecisionTree | None = None


def _build_pruned(train: Dataset, criterion: str, p_value: float) -> DecisionTree:
    tree = build_tree(train, criterion)
    prune(tree, p_value)
    return tree


def run_experiment(train: Dataset, validation: Dataset, test: Dataset,
                   p_values: Sequence[float] = P_VALUES,
                   sink: ReportSink = print) -> ExperimentResult:
    """
    Select a criterion and a pruning level, then score the result.

    Parameters
    ----------
    train, validation, test : Dataset
        The three splits.  ``validation`` and ``test`` must not be empty.
    p_values : sequence of float, default=P_VALUES
        Significance levels to try, in order.  Ties in validation error go
        to the earliest level.
    sink : callable, default=print
        Receives one line of text per reported figure.

    Returns
    -------
    ExperimentResult
    """
    if validation.n_rows == 0 or test.n_rows == 0:
        raise EmptyDatasetError("validation and test sets must contain rows")
    if not p_values:
        raise ValueError("p_values must not be empty")

    errors = {}
    for criterion in ("entropy", "gini"):
        errors[criterion] = average_error(build_tree(train, criterion), validation)
        sink(f"Validation error using {criterion.capitalize()}: {errors[criterion]}")
    sink(_RULE)
    # gini unless entropy is strictly better
    criterion = "entropy" if errors["entropy"] < errors["gini"] else "gini"
    result = ExperimentResult(criterion_errors=errors, criterion=criterion)
    logger.info("selected {} criterion", criterion)

    best_error = None
    for p in p_values:
        tree = _build_pruned(train, criterion, p)
        scores = PruningResult(
            p_value=p,
            train_error=average_error(tree, train),
            validation_error=average_error(tree, validation),
            max_height=max_height(tree, validation),
            avg_height=avg_height(tree, validation),
            n_nodes=tree.n_nodes,
        )
        result.pruning.append(scores)
        sink(f"Decision Tree with p_value of: {p}")
        sink(f"The train error of the decision tree is: {scores.train_error}")
        sink(f"Max height on validation data: {scores.max_height}")
        sink(f"Average height on validation data: {scores.avg_height}")
        sink(f"The validation error of the decision tree is: {scores.validation_error}")
        sink(_RULE)
        if best_error is None or scores.validation_error < best_error:
            best_error = scores.validation_error
            result.best_p_value = p

    sink(f"Best Validation error at p_value: {result.best_p_value}")
    result.tree = _build_pruned(train, criterion, result.best_p_value)
    result.test_error = average_error(result.tree, test)
    sink(f"Test error with best tree: {result.test_error}")
    print_tree(result.tree, sink)
    return result
