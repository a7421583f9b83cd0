"""Camera session interfaces.

This subpackage defines the abstract :class:`CameraBase` streaming session.
The RealSense implementation lives in :mod:`vision.camera.realsense` and is
imported explicitly so that code working on recorded or simulated frames
does not need ``pyrealsense2``.
"""

from .camera_base import CameraBase

__all__ = [
    "CameraBase",
]
