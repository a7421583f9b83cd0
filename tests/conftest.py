import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from utils.error_tracker import DeviceError
from utils.logger import Logger
from vision.camera import CameraBase
from vision.pointcloud.projector import Projection, Projector


class FakeVideoFrame:
    """Stands in for ``rs.video_frame``; ``pad`` adds bytes at each row end."""

    def __init__(self, image: np.ndarray, pad: int = 0) -> None:
        image = np.asarray(image, dtype=np.uint8)
        self.height, self.width = image.shape[:2]
        self.bpp = 1 if image.ndim == 2 else image.shape[2]
        row = self.width * self.bpp
        self.stride = row + pad
        self.buffer = np.zeros(self.stride * self.height, dtype=np.uint8)
        rows = self.buffer.reshape(self.height, self.stride)
        rows[:, :row] = image.reshape(self.height, row)
        self.image = image

    def get_width(self):
        return self.width

    def get_height(self):
        return self.height

    def get_stride_in_bytes(self):
        return self.stride

    def get_bytes_per_pixel(self):
        return self.bpp

    def get_data(self):
        return self.buffer


class FakeDepthFrame:
    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def get_width(self):
        return self.width

    def get_height(self):
        return self.height


class FakeFrameset:
    def __init__(self, color=None, depth=None, infrared=None) -> None:
        self.color = color
        self.depth = depth
        self.infrared = infrared

    def get_color_frame(self):
        return self.color

    def get_infrared_frame(self):
        return self.infrared

    def get_depth_frame(self):
        return self.depth


class GridProjector(Projector):
    """
    Projects depth pixel ``(x, y)`` to ``(x, y, 1)`` and texture
    coordinate ``((x + 0.5) / w, (y + 0.5) / h)``; the first pixel of every
    row gets ``u = -0.25`` so it falls outside the color frame.
    """

    def project(self, depth, color):
        w, h = depth.get_width(), depth.get_height()
        ys, xs = np.mgrid[0:h, 0:w]
        vertices = np.stack((xs, ys, np.ones_like(xs)), axis=-1).reshape(-1, 3)
        u = (xs + 0.5) / w
        u[:, 0] = -0.25
        v = (ys + 0.5) / h
        texcoords = np.stack((u, v), axis=-1).reshape(-1, 2)
        return Projection(vertices, texcoords)


class FakeSession(CameraBase):
    """Serves the same frameset forever; raises DeviceError on wait ``fail_at``."""

    def __init__(
        self, frameset, fail_at: int | None = None, fail_start=False, fail_stop=False
    ):
        self.frameset = frameset
        self.fail_at = fail_at
        self.fail_start = fail_start
        self.fail_stop = fail_stop
        self.waits = 0
        self.started = 0
        self.stopped = 0

    def start(self):
        if self.fail_start:
            raise DeviceError("rs2::pipeline::start", "", "No device connected")
        self.started += 1

    def wait_for_frames(self):
        if self.fail_at is not None and self.waits == self.fail_at:
            raise DeviceError(
                "rs2::pipeline::wait_for_frames", "", "Device disconnected"
            )
        self.waits += 1
        return self.frameset

    def stop(self):
        self.stopped += 1
        if self.fail_stop:
            raise RuntimeError("stop_streaming() failed. UVC device is not streaming!")


def color_image(width: int = 8, height: int = 6) -> np.ndarray:
    """Image whose texel (x, y) is (x, y, x + y) so lookups are checkable."""
    ys, xs = np.mgrid[0:height, 0:width]
    return np.stack((xs, ys, xs + ys), axis=-1).astype(np.uint8)


@pytest.fixture
def frameset():
    return FakeFrameset(
        color=FakeVideoFrame(color_image(), pad=4), depth=FakeDepthFrame(4, 3)
    )


@pytest.fixture
def projector():
    return GridProjector()


@pytest.fixture
def make_session(frameset):
    def _make(fail_at=None, fail_start=False, fail_stop=False):
        return FakeSession(
            frameset, fail_at=fail_at, fail_start=fail_start, fail_stop=fail_stop
        )

    return _make


@pytest.fixture(autouse=True)
def log_to_captured_streams(capsys):
    # loguru sinks keep the stream they were added with, rebind per test
    Logger.configure(to_file=False)
    yield
    Logger.configure(to_file=False)
