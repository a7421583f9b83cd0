"""Error types and centralized unhandled exception tracking."""

from __future__ import annotations

import signal
import sys
import traceback
from typing import Any, Callable, List, Optional

from utils.logger import Logger


class CameraError(Exception):
    """Base class for camera related errors."""


class DeviceError(CameraError):
    """
    Fault reported by the sensor SDK.

    Keeps the name of the failing SDK call and its arguments so the
    failure can be reported as ``operation(args)``.
    """

    def __init__(self, operation: str, args: str, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.args_repr = args
        self.message = message

    @classmethod
    def from_exception(
        cls, exc: BaseException, operation: str = "", args: str = ""
    ) -> "DeviceError":
        """Build from a ``pyrealsense2`` error, falling back to given names."""
        failed_function = getattr(exc, "get_failed_function", None)
        failed_args = getattr(exc, "get_failed_args", None)
        if callable(failed_function):
            operation = failed_function() or operation
        if callable(failed_args):
            args = failed_args() or args
        return cls(operation, args, str(exc))

    def describe(self) -> str:
        return (
            f"RealSense error calling {self.operation}({self.args_repr}):\n"
            f"    {self.message}"
        )


class CameraConnectionError(DeviceError):
    """Raised when the camera device cannot be opened."""


class ColorFormatError(CameraError):
    """Raised when a color source uses a texel layout the sampler cannot read."""


class PointCloudWriteError(RuntimeError):
    """Raised when a point cloud file cannot be written."""


class ErrorTracker:
    """Installable global exception hook that logs uncaught errors."""

    logger = Logger.get_logger("utils.error_tracker")
    _installed = False
    _orig_hook: Optional[Callable[..., None]] = None
    _cleanup_funcs: List[Callable[[], None]] = []

    @classmethod
    def register_cleanup(cls, func: Callable[[], None]) -> None:
        """Register a cleanup function executed on fatal errors."""
        if func not in cls._cleanup_funcs:
            cls._cleanup_funcs.append(func)

    @classmethod
    def unregister_cleanup(cls, func: Callable[[], None]) -> None:
        if func in cls._cleanup_funcs:
            cls._cleanup_funcs.remove(func)

    @classmethod
    def _run_cleanup(cls) -> None:
        for func in list(cls._cleanup_funcs):
            try:
                func()
            except Exception as e:
                cls.logger.error(f"Cleanup failed: {e}")
        cls._cleanup_funcs.clear()

    @classmethod
    def install_excepthook(cls) -> None:
        """Log unhandled exceptions through the project logger."""
        if cls._installed:
            return

        cls._orig_hook = sys.excepthook

        def _hook(exc_type, exc, tb) -> None:
            message = "".join(traceback.format_exception(exc_type, exc, tb))
            cls.logger.error(f"Unhandled exception:\n{message}")
            cls._run_cleanup()
            if cls._orig_hook:
                cls._orig_hook(exc_type, exc, tb)

        sys.excepthook = _hook
        cls._installed = True
        cls.logger.debug("Global exception hook installed")

    @classmethod
    def install_signal_handlers(cls) -> None:
        """Shutdown gracefully on SIGINT or SIGTERM."""

        def _handler(signum: int, frame: Any) -> None:
            cls.logger.info(f"Received signal {signum}")
            cls._run_cleanup()
            raise SystemExit(1)

        signal.signal(signal.SIGINT, _handler)
        signal.signal(signal.SIGTERM, _handler)
