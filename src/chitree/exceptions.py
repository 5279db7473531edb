"""Exceptions raised by chitree."""


class ChiTreeError(Exception):
    """Base class for all chitree errors."""


class EmptyDatasetError(ChiTreeError, ValueError):
    """An operation that needs at least one row received an empty dataset."""


class InvalidAttributeValueError(ChiTreeError, ValueError):
    """A row holds a value with no matching branch at a split node.

    Parameters
    ----------
    attribute : int
        Index of the split attribute.
    value : object
        The offending value taken from the row.
    n_values : int
        Number of branches available at the node.
    """

    def __init__(self, attribute: int, value, n_values: int):
        self.attribute = attribute
        self.value = value
        self.n_values = n_values
        super().__init__(
            f"value {value!r} of attribute {attribute} is outside 0..{n_values - 1}"
        )
