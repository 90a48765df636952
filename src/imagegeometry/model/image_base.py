"""
Image Geometry (Data Model)
===========================
This module defines the geometric metadata of an N-dimensional image.

Why is this file needed?
------------------------
1. Ownership: It owns the per-axis size, spacing and origin arrays. Their
   length always equals the dimension stored by the DataObject base.
2. Change detection: Setters only record a change when a value actually
   differs, and then notify the pipeline exactly once per call.
3. Decoupling: Consumers read copies of the arrays, so nothing outside
   this object can hold a reference that survives a reallocation.

Classes:
    GeometryArrays: The three same-length per-axis arrays, allocated together.
    ImageBase: Dimension (re)configuration and per-axis setters.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import numbers
from typing import Any, Dict, Optional, TYPE_CHECKING

import numpy as np

from imagegeometry.config import SIZE_DTYPE, COORD_DTYPE
from imagegeometry.model.data_object import DataObject
from imagegeometry.model.errors import InvalidAxisValue, InvalidDimension, LengthMismatch, UninitializedGeometry

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Field name -> dtype of the stored array
AXIS_FIELDS: Dict[str, Any] = {
    "size": SIZE_DTYPE,
    "spacing": COORD_DTYPE,
    "origin": COORD_DTYPE,
}


def _checked_dimension(dimension: Any) -> int:
    """Validate a requested dimension. Negative values are clamped to 0."""
    if isinstance(dimension, bool) or not isinstance(dimension, numbers.Integral):
        raise InvalidDimension(f"Dimension must be an integer, got {dimension!r}.")
    return max(int(dimension), 0)


def _coerce_axis_values(name: str, values: npt.ArrayLike, dimension: int) -> np.ndarray:
    """
    Convert 'values' to the dtype of array 'name' after checking it holds
    exactly 'dimension' entries. Sizes must be whole numbers.
    """
    raw = np.asarray(values)
    actual = raw.shape[0] if raw.ndim == 1 else raw.size
    if raw.ndim != 1 or actual != dimension:
        raise LengthMismatch(name, dimension, actual)

    if name == "size" and raw.size and not np.issubdtype(raw.dtype, np.integer):
        if not np.issubdtype(raw.dtype, np.floating):
            raise InvalidAxisValue(f"'size' must hold integers, got dtype {raw.dtype}.")
        whole = np.all(np.isfinite(raw)) and np.all(raw == np.trunc(raw))
        if not (whole and np.all(np.abs(raw) < np.iinfo(AXIS_FIELDS[name]).max)):
            raise InvalidAxisValue(f"'size' must hold whole numbers, got {raw.tolist()}.")

    try:
        return raw.astype(AXIS_FIELDS[name])
    except (TypeError, ValueError) as e:
        raise InvalidAxisValue(f"Cannot convert '{name}' values {values!r}: {e}") from e


@dataclass
class GeometryArrays:
    """
    Per-axis geometry arrays. Always created through allocate(), so all
    three share one length.
    """
    size: npt.NDArray[np.int64]
    spacing: npt.NDArray[np.float64]
    origin: npt.NDArray[np.float64]

    @classmethod
    def allocate(cls, dimension: int) -> GeometryArrays:
        """Contents are uninitialized. Callers must set them before reading."""
        if dimension <= 0:
            raise InvalidDimension(f"Cannot allocate geometry arrays for dimension {dimension}.")
        try:
            return cls(
                size=np.empty(dimension, dtype=SIZE_DTYPE),
                spacing=np.empty(dimension, dtype=COORD_DTYPE),
                origin=np.empty(dimension, dtype=COORD_DTYPE),
            )
        except (ValueError, MemoryError, OverflowError) as e:
            raise InvalidDimension(f"Cannot allocate geometry arrays for dimension {dimension}: {e}") from e

    def __len__(self) -> int:
        return len(self.size)


class ImageBase(DataObject):
    """
    Geometry descriptor of an N-dimensional image.

    The descriptor starts empty (dimension 0, no arrays). Call set_dimension()
    first, then set_size(), set_spacing() and set_origin().
    """

    def __init__(self) -> None:
        super().__init__()
        self._arrays: Optional[GeometryArrays] = None

    def __del__(self) -> None:
        if getattr(self, "_arrays", None) is not None:
            self.release()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(dimension={self.get_dimension()}, "
            f"size={self._as_list('size')}, spacing={self._as_list('spacing')}, "
            f"origin={self._as_list('origin')})"
        )

    # --- DIMENSION ---

    @property
    def dimension(self) -> int:
        return self.get_dimension()

    def set_dimension(self, dimension: int) -> None:
        """
        Reconfigure the geometry for 'dimension' axes.

        Negative values are clamped to 0. Requesting the current dimension is
        a no-op. Otherwise the old arrays are dropped, fresh (uninitialized)
        ones are allocated and the pipeline is notified once.
        """
        dimension = _checked_dimension(dimension)
        previous = self.get_dimension()
        if dimension == previous:
            return

        # Nothing is dropped until the new arrays exist
        arrays = GeometryArrays.allocate(dimension) if dimension > 0 else None

        if previous != 0:
            self.release()

        self.set_dimension_storage(dimension)
        self._arrays = arrays
        logger.debug(f"Geometry reconfigured: dimension {previous} -> {dimension}")

        self.modified()

    def is_initialized(self) -> bool:
        return self._arrays is not None

    def initialize(self) -> None:
        """Drop the arrays and reset the dimension to 0."""
        previous = self.get_dimension()
        self.release()
        self.set_dimension_storage(0)
        if previous != 0:
            self.modified()

    def release(self) -> bool:
        """
        Free the per-axis arrays. Returns True if anything was released.
        The stored dimension is left as is and no notification is sent.
        """
        if self._arrays is None:
            return False
        logger.debug(f"Releasing geometry arrays of dimension {len(self._arrays)}")
        self._arrays = None
        return True

    # --- PER-AXIS SETTERS ---

    def set_size(self, size: npt.ArrayLike) -> bool:
        """Set the number of samples along every axis."""
        return self._assign("size", size)

    def set_spacing(self, spacing: npt.ArrayLike) -> bool:
        """Set the physical distance between adjacent samples along every axis."""
        return self._assign("spacing", spacing)

    def set_origin(self, origin: npt.ArrayLike) -> bool:
        """Set the physical coordinate of index zero."""
        return self._assign("origin", origin)

    def _assign(self, name: str, values: npt.ArrayLike) -> bool:
        """
        Overwrite the axes of array 'name' that differ from 'values'.
        Notifies once if at least one axis changed. Returns whether it did.
        """
        dimension = self.get_dimension()
        incoming = _coerce_axis_values(name, values, dimension)

        if dimension == 0:
            return False

        if self._arrays is None:
            raise UninitializedGeometry(
                f"Cannot set '{name}': no geometry arrays are allocated for dimension {dimension}."
            )

        stored = getattr(self._arrays, name)
        changed_axes = stored != incoming
        modified = bool(changed_axes.any())

        if modified:
            stored[changed_axes] = incoming[changed_axes]
            self.modified()

        return modified

    # --- READERS ---

    def get_size(self) -> Optional[npt.NDArray[np.int64]]:
        return self._copy_of("size")

    def get_spacing(self) -> Optional[npt.NDArray[np.float64]]:
        return self._copy_of("spacing")

    def get_origin(self) -> Optional[npt.NDArray[np.float64]]:
        return self._copy_of("origin")

    def _copy_of(self, name: str) -> Optional[npt.NDArray]:
        if self._arrays is None:
            return None
        return getattr(self._arrays, name).copy()

    def _as_list(self, name: str) -> Optional[list]:
        array = self._copy_of(name)
        return None if array is None else array.tolist()

    # --- COPY & SERIALIZATION ---

    def copy_information(self, other: ImageBase) -> None:
        """Take over dimension, size, spacing and origin of another geometry."""
        self.set_dimension(other.get_dimension())
        if not other.is_initialized():
            return
        self.set_size(other.get_size())
        self.set_spacing(other.get_spacing())
        self.set_origin(other.get_origin())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimension": self.get_dimension(),
            "size": self._as_list("size"),
            "spacing": self._as_list("spacing"),
            "origin": self._as_list("origin"),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], geometry: Optional[ImageBase] = None) -> ImageBase:
        """
        Build (or reconfigure 'geometry') from a to_dict() snapshot.

        The whole snapshot is validated before 'geometry' is touched, so a bad
        snapshot leaves it unchanged. A nonzero dimension needs all three lists.
        """
        dimension = _checked_dimension(data.get("dimension", 0))
        arrays = {
            name: _coerce_axis_values(name, data[name], dimension)
            for name in AXIS_FIELDS
            if data.get(name) is not None
        }
        if dimension > 0 and len(arrays) != len(AXIS_FIELDS):
            missing = [name for name in AXIS_FIELDS if name not in arrays]
            raise UninitializedGeometry(f"Snapshot of dimension {dimension} has no values for {missing}.")

        geometry = geometry if geometry is not None else cls()
        geometry.set_dimension(dimension)
        for name, values in arrays.items():
            geometry._assign(name, values)
        return geometry
