# vision/pointcloud/texture.py
"""Texture coordinate to texel lookup.

Normalized ``(u, v)`` coordinates inside ``[0, 1] x [0, 1]`` pick a texel
by truncating ``u * width`` and ``v * height`` and clamping into the image.
Coordinates outside that square (or non-finite) carry no color.
"""

from __future__ import annotations

import numpy as np

from utils.error_tracker import ColorFormatError
from utils.settings import COLOR_BYTES_PER_PIXEL, INFRARED_BYTES_PER_PIXEL
from vision.frames import ColorTexture


def inside_texture(uv: np.ndarray) -> np.ndarray:
    """Boolean mask of coordinates inside ``[0, 1]`` on both axes."""
    uv = np.asarray(uv, dtype=np.float64).reshape(-1, 2)
    with np.errstate(invalid="ignore"):
        return np.all((uv >= 0.0) & (uv <= 1.0), axis=1)


def texel_indices(
    uv: np.ndarray, width: int, height: int
) -> tuple[np.ndarray, np.ndarray]:
    """
    Map texture coordinates to clamped ``(col, row)`` pixel indices.

    Truncates toward zero and clamps to ``[0, width-1]`` / ``[0, height-1]``.
    Defined for every real input, NaN maps to 0. The products are taken in
    float32 like the SDK's texture coordinates.
    """
    uv = np.asarray(uv, dtype=np.float32).reshape(-1, 2)
    with np.errstate(over="ignore", invalid="ignore"):
        u = uv[:, 0] * np.float32(width)
        v = uv[:, 1] * np.float32(height)
    u = np.nan_to_num(u, nan=0.0, posinf=width, neginf=0.0)
    v = np.nan_to_num(v, nan=0.0, posinf=height, neginf=0.0)
    # clamp before the int cast, truncation then clamp gives the same index
    cols = np.trunc(np.clip(u, 0, width - 1)).astype(np.int64)
    rows = np.trunc(np.clip(v, 0, height - 1)).astype(np.int64)
    return cols, rows


def texel_offsets(
    uv: np.ndarray,
    width: int,
    height: int,
    stride: int,
    bytes_per_pixel: int = COLOR_BYTES_PER_PIXEL,
) -> np.ndarray:
    """Byte offset of the first channel of each texel: ``col*bpp + row*stride``."""
    cols, rows = texel_indices(uv, width, height)
    return cols * bytes_per_pixel + rows * stride


def sample_colors(
    texture: ColorTexture, uv: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """
    Look up one RGB triple per texture coordinate.

    Returns ``(colors, mask)``: ``colors`` is ``(N, 3)`` uint8, zero where
    ``mask`` is False. Three byte texels are read in buffer order as R, G, B;
    single byte (infrared) texels are replicated into all three channels.
    """
    uv = np.asarray(uv, dtype=np.float64).reshape(-1, 2)
    bpp = texture.bytes_per_pixel
    if bpp not in (COLOR_BYTES_PER_PIXEL, INFRARED_BYTES_PER_PIXEL):
        raise ColorFormatError(
            f"Cannot sample {bpp} bytes per pixel texture, "
            f"expected {COLOR_BYTES_PER_PIXEL} or {INFRARED_BYTES_PER_PIXEL}"
        )
    colors = np.zeros((uv.shape[0], 3), dtype=np.uint8)
    mask = inside_texture(uv)
    if not mask.any():
        return colors, mask
    offsets = texel_offsets(
        uv[mask], texture.width, texture.height, texture.stride, bpp
    )
    buf = texture.data
    if bpp == COLOR_BYTES_PER_PIXEL:
        colors[mask, 0] = buf[offsets]
        colors[mask, 1] = buf[offsets + 1]
        colors[mask, 2] = buf[offsets + 2]
    else:
        colors[mask] = buf[offsets][:, None]
    return colors, mask
