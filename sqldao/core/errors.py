"""Exceptions raised by the DAO layer.

Driver exceptions are never wrapped; they reach the caller unchanged.
"""

from __future__ import annotations


class DaoConfigurationError(ValueError):
    """Raised when a DAO is built without a usable database or paging setup."""


class InvalidProcedureError(ValueError):
    """Raised when a stored-procedure call is missing its criteria or name."""


class PagingParameterConflictError(ValueError):
    """Raised when a caller bind name collides with a reserved paging name."""


class IncorrectResultSizeError(RuntimeError):
    """Raised when a single-row query returns more than one row."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Incorrect result size: expected {expected}, actual {actual}.")
        self.expected = expected
        self.actual = actual
