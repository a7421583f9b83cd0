"""Shared helper modules used across the project.

The :mod:`utils` package contains lightweight helpers for logging,
configuration and error reporting. These utilities are used by the vision
and CLI packages and carry no camera dependencies.
"""

from .logger import Logger, LoggerType
from .settings import (
    CLOUD_EXT,
    CaptureCfg,
    LoggingCfg,
    paths,
    logging,
    capture,
)
from .config import Config
from .error_tracker import (
    CameraError,
    CameraConnectionError,
    ColorFormatError,
    DeviceError,
    ErrorTracker,
    PointCloudWriteError,
)

__all__ = [
    "Logger",
    "LoggerType",
    "CLOUD_EXT",
    "CaptureCfg",
    "LoggingCfg",
    "paths",
    "logging",
    "capture",
    "Config",
    "CameraError",
    "CameraConnectionError",
    "ColorFormatError",
    "DeviceError",
    "ErrorTracker",
    "PointCloudWriteError",
]
