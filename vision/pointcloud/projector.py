"""Depth to 3-D projection contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass
class Projection:
    """
    Per depth pixel output of a projector, in depth raster order.

    - vertices: ``(N, 3)`` float32 metric positions, ``(0, 0, 0)`` where
      the depth reading is missing.
    - texcoords: ``(N, 2)`` float32 normalized ``(u, v)`` into the color
      frame; values outside ``[0, 1]`` mean no corresponding texel.
    """

    vertices: np.ndarray
    texcoords: np.ndarray

    def __post_init__(self) -> None:
        self.vertices = np.asarray(self.vertices, dtype=np.float32).reshape(-1, 3)
        self.texcoords = np.asarray(self.texcoords, dtype=np.float32).reshape(-1, 2)
        if len(self.vertices) != len(self.texcoords):
            raise ValueError(
                f"{len(self.vertices)} vertices but "
                f"{len(self.texcoords)} texture coordinates"
            )

    def __len__(self) -> int:
        return len(self.vertices)


class Projector(ABC):
    """Maps a depth frame to 3-D points and texture coordinates."""

    @abstractmethod
    def project(self, depth: Any, color: Any) -> Projection:
        """Project every pixel of ``depth``, texturing against ``color``."""
