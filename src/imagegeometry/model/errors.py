"""
Geometry Errors
Exceptions raised by the image geometry model.
"""


class GeometryError(Exception):
    """Base class for all geometry errors."""


class InvalidDimension(GeometryError, ValueError):
    """The requested dimension is not an integer."""


class LengthMismatch(GeometryError, ValueError):
    """A per-axis sequence does not have exactly 'dimension' entries."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        super().__init__(f"'{name}' expects {expected} values, got {actual}.")
        self.name = name
        self.expected = expected
        self.actual = actual


class UninitializedGeometry(GeometryError, RuntimeError):
    """Per-axis values are needed but no geometry arrays are allocated."""


class InvalidAxisValue(GeometryError, ValueError):
    """A per-axis value cannot be stored without loss (e.g. a fractional size)."""
