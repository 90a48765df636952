import pytest
from PySide6.QtCore import QCoreApplication

from imagegeometry.model.image_base import ImageBase


class SignalCounter:
    """Counts emissions of a data object's modified signal."""

    def __init__(self, data_object) -> None:
        self.count = 0
        data_object.modified_signal.connect(self._on_modified)

    def _on_modified(self) -> None:
        self.count += 1


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def geometry():
    return ImageBase()


@pytest.fixture
def counter(geometry):
    return SignalCounter(geometry)
