"""
cova/core/errors.py

Exception hierarchy.

Every error raised on purpose by the package derives from CovaError and
from the builtin it refines, so callers may catch either.
"""

from __future__ import annotations


class CovaError(Exception):
    """Base class for all package errors."""


class ConstructionError(CovaError, ValueError):
    """Malformed cell, restriction map, field or graph at construction time."""


class DimensionMismatch(CovaError, ValueError):
    """Incompatible shapes or dimensions in chain or sheaf operations."""


class CellLookupError(CovaError, LookupError):
    """Reference to a cell, handle or stalk value that is not present."""
