"""Depth camera capture and point cloud helpers.

The vision package turns RealSense framesets into organized colored point
clouds and stores them as binary PCD files. Frame selection, texture
sampling, cloud building and the PCD codec work on plain numpy arrays;
only :mod:`vision.camera.realsense` and :mod:`vision.pointcloud.projector`
talk to the SDK.
"""

from .camera import CameraBase
from .frames import ColorTexture, select_frames, texture_from_frame
from .pointcloud import (
    CloudBuilder,
    OrganizedCloud,
    Projection,
    read_pcd,
    write_pcd,
)
from .capture import CaptureRunner, CaptureState

__all__ = [
    "CameraBase",
    "ColorTexture",
    "select_frames",
    "texture_from_frame",
    "CloudBuilder",
    "OrganizedCloud",
    "Projection",
    "read_pcd",
    "write_pcd",
    "CaptureRunner",
    "CaptureState",
]
