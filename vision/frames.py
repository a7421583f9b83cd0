"""Frame selection and color texture extraction.

Works on anything shaped like a ``pyrealsense2`` frameset: the selector
only calls ``get_color_frame``, ``get_infrared_frame`` and
``get_depth_frame``, the texture helper only reads the video frame
accessors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np


@dataclass(frozen=True)
class ColorTexture:
    """
    Raw bytes of the frame used to color the cloud.

    ``data`` is the flat frame buffer, rows are ``stride`` bytes apart and
    may be padded past ``width * bytes_per_pixel``.
    """

    data: np.ndarray
    width: int
    height: int
    stride: int
    bytes_per_pixel: int = 3

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid texture size {self.width}x{self.height}")
        if self.stride < self.width * self.bytes_per_pixel:
            raise ValueError(
                f"Stride {self.stride} shorter than a row of "
                f"{self.width}x{self.bytes_per_pixel} bytes"
            )
        if self.data.size < self.stride * (self.height - 1) + (
            self.width * self.bytes_per_pixel
        ):
            raise ValueError(
                f"Buffer of {self.data.size} bytes too small for "
                f"{self.width}x{self.height} texture"
            )


def select_frames(frames: Any) -> Tuple[Any, Any]:
    """
    Return ``(color, depth)`` from a frameset.

    Color is preferred, infrared intensity is the fallback color source.
    Raises ``RuntimeError`` when the bundle carries no usable frame.
    """
    color = frames.get_color_frame()
    if not color:
        color = frames.get_infrared_frame()
    depth = frames.get_depth_frame()
    if not color:
        raise RuntimeError("Frameset has neither a color nor an infrared frame")
    if not depth:
        raise RuntimeError("Frameset has no depth frame")
    return color, depth


def texture_from_frame(frame: Any) -> ColorTexture:
    """Copy a video frame's pixels into a :class:`ColorTexture`."""
    width = frame.get_width()
    height = frame.get_height()
    stride = frame.get_stride_in_bytes()
    bpp = frame.get_bytes_per_pixel()
    pixels = np.asanyarray(frame.get_data())
    # padded rows may come through as a strided view, repack them
    data = np.ascontiguousarray(pixels).view(np.uint8).reshape(-1).copy()
    if data.size < stride * (height - 1) + width * bpp:
        stride = data.size // height
    return ColorTexture(data, width, height, stride, bpp)
