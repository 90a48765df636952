"""
Pipeline Data Object
====================
Base class for every data object that takes part in a processing pipeline.

Why is this file needed?
------------------------
1. Dimension storage: It owns the dimensionality of the dataset. Subclasses
   read it back through get_dimension() and never keep their own copy.
2. Change notification: Downstream consumers connect to 'modified_signal'
   and drop their cached results whenever it fires.
3. Modification time: Every call to modified() bumps a monotonically
   increasing counter, so consumers can also compare timestamps instead of
   listening to the signal.

Classes:
    DataObject: QObject carrying dimension storage and the modified signal.
"""
from __future__ import annotations

import itertools
import logging

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)

# Shared across all data objects, like a global modification clock.
_MTIME_CLOCK = itertools.count(1)


class DataObject(QObject):
    """Dimension storage plus the 'modified' notification sink."""
    modified_signal = Signal()

    def __init__(self) -> None:
        super().__init__()
        self._dimension: int = 0
        self._mtime: int = 0

    def get_dimension(self) -> int:
        return self._dimension

    def set_dimension_storage(self, dimension: int) -> None:
        """Write the raw dimension value. Does NOT notify and does NOT touch subclass state."""
        self._dimension = dimension

    def get_mtime(self) -> int:
        return self._mtime

    def modified(self) -> None:
        """Mark this object as changed and notify all connected consumers."""
        self._mtime = next(_MTIME_CLOCK)
        logger.debug(f"{type(self).__name__} modified (mtime={self._mtime})")
        self.modified_signal.emit()
