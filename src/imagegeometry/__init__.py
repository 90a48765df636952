"""
N-dimensional image geometry: per-axis size, spacing and origin with
pipeline change notification.
"""
from imagegeometry.model.data_object import DataObject
from imagegeometry.model.errors import (
    GeometryError,
    InvalidAxisValue,
    InvalidDimension,
    LengthMismatch,
    UninitializedGeometry,
)
from imagegeometry.model.image_base import GeometryArrays, ImageBase

__all__ = [
    "DataObject",
    "GeometryArrays",
    "GeometryError",
    "InvalidAxisValue",
    "ImageBase",
    "InvalidDimension",
    "LengthMismatch",
    "UninitializedGeometry",
]
