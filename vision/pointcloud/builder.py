"""Organized colored point clouds built from projected depth."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from utils.logger import Logger, LoggerType
from vision.frames import ColorTexture
from .projector import Projection
from .texture import sample_colors


@dataclass
class OrganizedCloud:
    """
    Point grid mirroring the depth image.

    ``points`` is ``(width*height, 3)`` float32 in depth raster order,
    ``colors`` the matching ``(width*height, 3)`` uint8 RGB, zero when unset.
    """

    width: int
    height: int
    points: np.ndarray
    colors: np.ndarray
    is_dense: bool = False

    def __post_init__(self) -> None:
        count = self.width * self.height
        self.points = np.asarray(self.points, dtype=np.float32).reshape(-1, 3)
        self.colors = np.asarray(self.colors, dtype=np.uint8).reshape(-1, 3)
        if len(self.points) != count or len(self.colors) != count:
            raise ValueError(
                f"Cloud {self.width}x{self.height} needs {count} points, "
                f"got {len(self.points)} points and {len(self.colors)} colors"
            )

    @classmethod
    def empty(cls, width: int, height: int) -> "OrganizedCloud":
        count = width * height
        return cls(
            width,
            height,
            np.zeros((count, 3), dtype=np.float32),
            np.zeros((count, 3), dtype=np.uint8),
        )

    def __len__(self) -> int:
        return self.width * self.height

    def grid(self) -> np.ndarray:
        """Points reshaped to ``(height, width, 3)``."""
        return self.points.reshape(self.height, self.width, 3)


@dataclass
class CloudBuilder:
    """Fill an organized cloud from a projection and its color texture."""

    logger: LoggerType = field(
        default_factory=lambda: Logger.get_logger("vision.pointcloud.builder")
    )

    def build(
        self,
        projection: Projection,
        texture: ColorTexture,
        width: int,
        height: int,
    ) -> OrganizedCloud:
        """
        Build a ``width x height`` cloud.

        Positions are copied in projection order; colors are sampled from
        ``texture`` for coordinates inside ``[0, 1]`` and left unset elsewhere.
        """
        cloud = OrganizedCloud.empty(width, height)
        if len(projection) != len(cloud):
            raise ValueError(
                f"Projection has {len(projection)} points, "
                f"depth grid {width}x{height} needs {len(cloud)}"
            )
        cloud.points[:] = projection.vertices
        colors, mask = sample_colors(texture, projection.texcoords)
        cloud.colors[:] = colors
        self.logger.debug(
            f"Cloud {width}x{height}: {int(mask.sum())}/{len(cloud)} colored points"
        )
        return cloud
