"""
Input/Output Manager (HDF5 / JSON)
Handles saving and loading an ImageBase geometry to .h5 and .json files.
"""
import json
import logging
from importlib.metadata import version, PackageNotFoundError
from typing import Optional

import h5py
import numpy as np

from imagegeometry.config import SIZE_DTYPE, COORD_DTYPE
from imagegeometry.model.image_base import ImageBase

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("imagegeometry")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


class GeometryIO:

    @staticmethod
    def save_geometry(geometry: ImageBase, filepath: str) -> None:
        logger.info(f"Saving geometry to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION

                grp_geo = f.create_group("geometry")
                grp_geo.attrs["dimension"] = geometry.get_dimension()

                # Arrays are only written when allocated; dimension 0 has none
                if geometry.is_initialized():
                    grp_geo.create_dataset("size", data=geometry.get_size())
                    grp_geo.create_dataset("spacing", data=geometry.get_spacing())
                    grp_geo.create_dataset("origin", data=geometry.get_origin())

            logger.info(f"Geometry saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save geometry: {e}")
            raise e

    @staticmethod
    def load_geometry(filepath: str, geometry: Optional[ImageBase] = None) -> ImageBase:
        """
        Load a geometry from an .h5 file. If 'geometry' is given it is
        reconfigured in place, so its connected consumers get notified.
        """
        logger.info(f"Loading geometry from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        try:
            with h5py.File(filepath, "r") as f:
                if "geometry" not in f:
                    raise ValueError(f"File '{filepath}' contains no 'geometry' group.")
                grp_geo = f["geometry"]

                # HDF5 returns numpy scalars, convert to native python
                data = {"dimension": int(grp_geo.attrs.get("dimension", 0))}
                for name, dtype in (("size", SIZE_DTYPE), ("spacing", COORD_DTYPE), ("origin", COORD_DTYPE)):
                    if name in grp_geo:
                        data[name] = np.asarray(grp_geo[name][:], dtype=dtype)

                geometry = ImageBase.from_dict(data, geometry=geometry)

            logger.info(f"Geometry loaded from: {filepath}")
            return geometry

        except Exception as e:
            logger.exception(f"Failed to load geometry: {e}")
            raise e

    @staticmethod
    def save_json(geometry: ImageBase, filepath: str) -> None:
        logger.info(f"Saving geometry JSON to: {filepath}")
        payload = {"version": APP_VERSION, "geometry": geometry.to_dict()}
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    @staticmethod
    def load_json(filepath: str, geometry: Optional[ImageBase] = None) -> ImageBase:
        logger.info(f"Loading geometry JSON from: {filepath}")
        with open(filepath, "r", encoding="utf-8") as f:
            payload = json.load(f)

        # Accept both the wrapped form and a bare to_dict() snapshot
        data = payload.get("geometry", payload)
        try:
            return ImageBase.from_dict(data, geometry=geometry)
        except Exception as e:
            logger.exception(f"Failed to load geometry JSON: {e}")
            raise e
