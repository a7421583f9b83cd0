# vision/pointcloud/viewer.py
"""Open3D conversion and display of organized clouds."""

from __future__ import annotations

import numpy as np
import open3d as o3d

from .builder import OrganizedCloud


def to_open3d(
    cloud: OrganizedCloud, drop_empty: bool = False
) -> o3d.geometry.PointCloud:
    """
    Convert to an Open3D cloud with colors in ``[0, 1]``.

    With ``drop_empty`` points at the origin (no depth reading) are removed.
    """
    points = cloud.points.astype(np.float64)
    colors = cloud.colors.astype(np.float64) / 255.0
    if drop_empty:
        keep = np.any(cloud.points != 0, axis=1)
        points, colors = points[keep], colors[keep]
    pcd = o3d.geometry.PointCloud()
    pcd.points = o3d.utility.Vector3dVector(points)
    pcd.colors = o3d.utility.Vector3dVector(colors)
    return pcd


def show(clouds: list[OrganizedCloud], title: str = "Point clouds") -> None:
    """Open an Open3D window with all ``clouds``."""
    o3d.visualization.draw_geometries(
        [to_open3d(c, drop_empty=True) for c in clouds], window_name=title
    )
