import h5py
import pytest

from imagegeometry.config import DEFAULT_GEOMETRY_PATH
from imagegeometry.model.errors import LengthMismatch, UninitializedGeometry
from imagegeometry.model.image_base import ImageBase
from imagegeometry.model.io import GeometryIO, APP_VERSION

from conftest import SignalCounter


def _make_geometry():
    geometry = ImageBase()
    geometry.set_dimension(3)
    geometry.set_size([10, 20, 30])
    geometry.set_spacing([1.0, 1.0, 2.0])
    geometry.set_origin([0.0, -5.0, 12.5])
    return geometry


def test_hdf5_round_trip(tmp_path):
    path = str(tmp_path / "geometry.h5")
    original = _make_geometry()

    GeometryIO.save_geometry(original, path)
    loaded = GeometryIO.load_geometry(path)

    assert loaded.to_dict() == original.to_dict()


def test_hdf5_layout(tmp_path):
    path = str(tmp_path / "geometry.h5")
    GeometryIO.save_geometry(_make_geometry(), path)

    with h5py.File(path, "r") as f:
        assert f.attrs["version"] == APP_VERSION
        assert int(f["geometry"].attrs["dimension"]) == 3
        assert f["geometry"]["size"][:].tolist() == [10, 20, 30]


def test_hdf5_empty_geometry(tmp_path):
    path = str(tmp_path / "empty.h5")
    GeometryIO.save_geometry(ImageBase(), path)

    with h5py.File(path, "r") as f:
        assert "size" not in f["geometry"]

    loaded = GeometryIO.load_geometry(path)
    assert loaded.get_dimension() == 0
    assert not loaded.is_initialized()


def test_load_into_existing_geometry_notifies(tmp_path):
    path = str(tmp_path / "geometry.h5")
    GeometryIO.save_geometry(_make_geometry(), path)

    target = ImageBase()
    counter = SignalCounter(target)
    result = GeometryIO.load_geometry(path, geometry=target)

    assert result is target
    assert counter.count >= 1
    assert target.get_origin().tolist() == [0.0, -5.0, 12.5]


def test_load_rejects_non_hdf5(tmp_path):
    path = tmp_path / "not_a_geometry.h5"
    path.write_text("plain text")

    with pytest.raises(ValueError):
        GeometryIO.load_geometry(str(path))


def test_load_rejects_missing_group(tmp_path):
    path = str(tmp_path / "other.h5")
    with h5py.File(path, "w") as f:
        f.create_group("mesh")

    with pytest.raises(ValueError):
        GeometryIO.load_geometry(path)


def test_json_round_trip(tmp_path):
    path = str(tmp_path / "geometry.json")
    original = _make_geometry()

    GeometryIO.save_json(original, path)
    loaded = GeometryIO.load_json(path)

    assert loaded.to_dict() == original.to_dict()


def test_default_geometry_asset():
    geometry = GeometryIO.load_json(DEFAULT_GEOMETRY_PATH)

    assert geometry.get_dimension() == 3
    assert geometry.get_size().tolist() == [10, 20, 30]
    assert geometry.get_spacing().tolist() == [1.0, 1.0, 2.0]
    assert geometry.get_origin().tolist() == [0.0, 0.0, 0.0]


def test_bad_file_leaves_target_untouched(tmp_path):
    path = str(tmp_path / "broken.h5")
    with h5py.File(path, "w") as f:
        grp = f.create_group("geometry")
        grp.attrs["dimension"] = 3
        grp.create_dataset("size", data=[1, 2])
        grp.create_dataset("spacing", data=[1.0, 1.0, 1.0])
        grp.create_dataset("origin", data=[0.0, 0.0, 0.0])

    target = ImageBase()
    target.set_dimension(2)
    target.set_size([7, 8])
    counter = SignalCounter(target)

    with pytest.raises(LengthMismatch):
        GeometryIO.load_geometry(path, geometry=target)

    assert target.get_dimension() == 2
    assert target.get_size().tolist() == [7, 8]
    assert counter.count == 0


def test_released_geometry_does_not_reload_as_allocated(tmp_path):
    path = str(tmp_path / "released.h5")
    released = ImageBase()
    released.set_dimension(3)
    released.release()

    GeometryIO.save_geometry(released, path)

    with pytest.raises(UninitializedGeometry):
        GeometryIO.load_geometry(path)
