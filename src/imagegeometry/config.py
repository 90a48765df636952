"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and dtypes scattered
   throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (sample geometry JSONs) when the package is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_GEOMETRY_PATH (str): Absolute path to the bundled sample geometry.
    SIZE_DTYPE, COORD_DTYPE: numpy dtypes of the per-axis arrays.
    LOG_LEVEL (int): Logging level taken from IMAGEGEOMETRY_LOG_LEVEL.
    LOG_FILE (str | None): Log file path taken from IMAGEGEOMETRY_LOG_FILE.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import numpy as np


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/imagegeometry/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


def get_log_level(default: int = logging.INFO) -> int:
    """Read the log level name from the environment, falling back to 'default'."""
    name = os.environ.get("IMAGEGEOMETRY_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_GEOMETRY_PATH: str = os.path.join(ASSETS_PATH, "geometry_default.json")

SIZE_DTYPE = np.int64
COORD_DTYPE = np.float64

LOG_LEVEL: int = get_log_level()
LOG_FILE: Optional[str] = os.environ.get("IMAGEGEOMETRY_LOG_FILE") or None
