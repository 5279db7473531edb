# chitree/__init__.py
"""
chitree: categorical decision trees with chi-square pruning.

Exports:
    - ChiSquareTreeClassifier (scikit-learn style estimator)
    - Dataset
    - build_tree, classify, average_error, prune
    - height, max_height, avg_height, render, print_tree
    - run_experiment
"""
from loguru import logger

from .dataset import Dataset
from .exceptions import ChiTreeError, EmptyDatasetError, InvalidAttributeValueError
from .impurity import entropy, gain, gini, probabilities
from .tree import DecisionTree, TreeNode, average_error, build_tree, classify, find_best_attribute
from .pruning import CHI_SQUARE_TABLE, P_VALUES, prune
from .metrics import avg_height, height, max_height
from .export import export_graphviz, print_tree, render
from .classifier import ChiSquareTreeClassifier
from .experiment import ExperimentResult, PruningResult, run_experiment
from .logging import enable_logging

logger.disable(__name__)

__all__ = [
    "ChiSquareTreeClassifier",
    "Dataset",
    "DecisionTree",
    "TreeNode",
    "build_tree",
    "find_best_attribute",
    "classify",
    "average_error",
    "probabilities",
    "entropy",
    "gini",
    "gain",
    "prune",
    "CHI_SQUARE_TABLE",
    "P_VALUES",
    "height",
    "max_height",
    "avg_height",
    "render",
    "print_tree",
    "export_graphviz",
    "run_experiment",
    "ExperimentResult",
    "PruningResult",
    "enable_logging",
    "ChiTreeError",
    "EmptyDatasetError",
    "InvalidAttributeValueError",
]
__version__ = "0.1.0"
