import numpy as np
from loguru import logger
from chitree import Dataset, build_tree, enable_logging, prune
from chitree.logging import PACKAGE_NAME, LoggingHandle


def _separable_dataset():
    X = np.array([[0, 0], [0, 1], [1, 0], [1, 1]])
    return Dataset(X, X[:, 0].copy())


def test_unrecognised_p_value_warns():
    messages = []
    with enable_logging(level="WARNING", sink=messages.append):
        tree = build_tree(_separable_dataset())
        prune(tree, 0.1)
    assert len(messages) == 1
    assert "unrecognised p-value 0.1" in messages[0]


def test_debug_messages_describe_splits():
    messages = []
    with enable_logging(level="DEBUG", sink=messages.append):
        build_tree(_separable_dataset())
    assert any("split 4 rows on attribute 0" in m for m in messages)
    assert any("built gini tree" in m for m in messages)


def test_silent_after_last_handle():
    handle = enable_logging(level="DEBUG", sink=lambda m: None)
    handle.disable()
    assert LoggingHandle._active_ids == set()
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", filter=PACKAGE_NAME)
    try:
        build_tree(_separable_dataset())
    finally:
        logger.remove(handler_id)
    assert messages == []
