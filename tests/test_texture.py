import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
import numpy as np
import pytest

from utils.error_tracker import ColorFormatError
from vision.frames import ColorTexture
from vision.pointcloud.texture import (
    inside_texture,
    sample_colors,
    texel_indices,
    texel_offsets,
)


def test_boundary_coordinates_clamp_into_image():
    uv = np.array([[0.0, 0.0], [1.0, 1.0], [1.0, 0.0], [0.0, 1.0]])
    cols, rows = texel_indices(uv, 640, 480)
    assert cols.tolist() == [0, 639, 639, 0]
    assert rows.tolist() == [0, 479, 0, 479]


def test_indices_truncate_instead_of_rounding():
    uv = np.array([[0.49, 0.74], [0.26, 0.99]])
    cols, rows = texel_indices(uv, 4, 4)
    # 1.96 -> 1, 2.96 -> 2, 1.04 -> 1, 3.96 -> 3
    assert cols.tolist() == [1, 1]
    assert rows.tolist() == [2, 3]


def test_offsets_stay_inside_buffer_for_any_real_coordinate():
    width, height, stride = 7, 5, 7 * 3 + 5
    values = [-1e30, -1.0, -0.0, 0.0, 1e-7, 0.5, 0.9999999, 1.0, 1.0000001,
              2.0, 1e30, np.inf, -np.inf, np.nan]
    uv = np.array([(u, v) for u in values for v in values], dtype=np.float64)
    offsets = texel_offsets(uv, width, height, stride)
    assert offsets.min() >= 0
    assert offsets.max() + 2 < stride * height
    assert offsets.max() == (width - 1) * 3 + (height - 1) * stride


def test_inside_texture_is_inclusive_and_rejects_nan():
    uv = np.array(
        [[0.0, 0.0], [1.0, 1.0], [-1e-6, 0.5], [0.5, 1.000001], [np.nan, 0.5]]
    )
    assert inside_texture(uv).tolist() == [True, True, False, False, False]


def test_sample_colors_reads_rgb_at_stride_offset():
    width, height, stride = 4, 3, 4 * 3 + 2
    data = np.arange(stride * height, dtype=np.uint8)
    texture = ColorTexture(data, width, height, stride, 3)
    uv = np.array([[0.5, 0.5], [0.0, 0.0], [1.5, 0.5], [0.5, -0.1]])
    colors, mask = sample_colors(texture, uv)
    # (0.5, 0.5) -> col 2, row 1 -> offset 2*3 + 1*14 = 20
    assert colors[0].tolist() == [20, 21, 22]
    assert colors[1].tolist() == [0, 1, 2]
    assert mask.tolist() == [True, True, False, False]
    assert colors[2].tolist() == [0, 0, 0]
    assert colors[3].tolist() == [0, 0, 0]


def test_sample_colors_replicates_infrared_intensity():
    image = np.array([[10, 20], [30, 40]], dtype=np.uint8)
    texture = ColorTexture(image.reshape(-1), 2, 2, 2, 1)
    colors, mask = sample_colors(texture, np.array([[0.75, 0.75], [0.0, 0.0]]))
    assert mask.all()
    assert colors.tolist() == [[40, 40, 40], [10, 10, 10]]


def test_sample_colors_rejects_unknown_texel_layout():
    texture = ColorTexture(np.zeros(16, dtype=np.uint8), 2, 2, 4, 2)
    with pytest.raises(ColorFormatError):
        sample_colors(texture, np.array([[0.5, 0.5]]))


def test_texture_rejects_short_buffer():
    with pytest.raises(ValueError):
        ColorTexture(np.zeros(10, dtype=np.uint8), 2, 2, 6, 3)
