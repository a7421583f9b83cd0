"""Abstract camera session interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CameraBase(ABC):
    """Minimal streaming session API: start, blocking frame wait, stop."""

    @abstractmethod
    def start(self) -> None:
        """Open the device and start streaming."""

    @abstractmethod
    def wait_for_frames(self) -> Any:
        """Block until the next time-aligned frame bundle is available."""

    @abstractmethod
    def stop(self) -> None:
        """Stop streaming and release the device."""

    def __enter__(self) -> "CameraBase":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
