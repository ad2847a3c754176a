"""Exceptions raised by the induction engine.

Both subclass ``ValueError`` so callers written against scikit-learn style
estimators (which report unfitted models with ``ValueError``) keep working.
"""

from __future__ import annotations


class EmptyDatasetError(ValueError):
    """Raised when an operation needs at least one record and got none.

    Attributes:
        operation (str): Name of the operation that received the empty input.
    """

    operation: str

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires at least one record")
        self.operation = operation


class TreeNotBuiltError(ValueError):
    """Raised when a tree is used before ``build`` has been called."""

    def __init__(self, message: str = "Tree not built. Call build(...) first.") -> None:
        super().__init__(message)
