# vision/pointcloud/pcd.py
"""Binary PCD (v0.7) reader and writer for organized XYZRGB clouds.

The layout matches what PCL writes for ``PointXYZRGB`` with
``savePCDFileBinary``: ``x y z`` as float32 and ``rgb`` as the float32
reinterpretation of ``0xAARRGGBB`` (alpha 255), 16 packed little-endian
bytes per point, raster order.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from utils.error_tracker import PointCloudWriteError
from .builder import OrganizedCloud

PCD_VERSION = "0.7"
PCD_FIELDS = ("x", "y", "z", "rgb")

POINT_DTYPE = np.dtype(
    [("x", "<f4"), ("y", "<f4"), ("z", "<f4"), ("rgb", "<u4")]
)

_ALPHA = np.uint32(0xFF000000)


@dataclass(frozen=True)
class PcdHeader:
    width: int
    height: int
    points: int
    fields: tuple[str, ...] = PCD_FIELDS
    data: str = "binary"
    viewpoint: tuple[float, ...] = (0, 0, 0, 1, 0, 0, 0)

    def encode(self) -> bytes:
        vp = " ".join(f"{v:g}" for v in self.viewpoint)
        lines = [
            f"# .PCD v{PCD_VERSION} - Point Cloud Data file format",
            f"VERSION {PCD_VERSION}",
            "FIELDS " + " ".join(self.fields),
            "SIZE " + " ".join("4" for _ in self.fields),
            "TYPE " + " ".join("F" for _ in self.fields),
            "COUNT " + " ".join("1" for _ in self.fields),
            f"WIDTH {self.width}",
            f"HEIGHT {self.height}",
            f"VIEWPOINT {vp}",
            f"POINTS {self.points}",
            f"DATA {self.data}",
        ]
        return ("\n".join(lines) + "\n").encode("ascii")


def pack_rgb(colors: np.ndarray) -> np.ndarray:
    """``(N, 3)`` uint8 RGB to ``(N,)`` uint32 ``0xFFRRGGBB``."""
    c = np.asarray(colors, dtype=np.uint32).reshape(-1, 3)
    return _ALPHA | (c[:, 0] << 16) | (c[:, 1] << 8) | c[:, 2]


def unpack_rgb(packed: np.ndarray) -> np.ndarray:
    """``(N,)`` uint32 ``0xAARRGGBB`` to ``(N, 3)`` uint8 RGB."""
    p = np.asarray(packed, dtype=np.uint32)
    return np.stack(((p >> 16) & 0xFF, (p >> 8) & 0xFF, p & 0xFF), axis=1).astype(
        np.uint8
    )


def encode_pcd(cloud: OrganizedCloud) -> bytes:
    """Serialize ``cloud`` to binary PCD bytes."""
    header = PcdHeader(cloud.width, cloud.height, len(cloud))
    body = np.empty(len(cloud), dtype=POINT_DTYPE)
    body["x"] = cloud.points[:, 0]
    body["y"] = cloud.points[:, 1]
    body["z"] = cloud.points[:, 2]
    body["rgb"] = pack_rgb(cloud.colors)
    return header.encode() + body.tobytes()


def write_pcd(path: str | Path, cloud: OrganizedCloud) -> Path:
    """
    Write ``cloud`` as a binary PCD file.

    The payload is encoded before the file is opened; any ``OSError`` while
    writing is raised as :class:`PointCloudWriteError`.
    """
    path = Path(path)
    payload = encode_pcd(cloud)
    try:
        with open(path, "wb") as f:
            f.write(payload)
    except OSError as e:
        raise PointCloudWriteError(f"Failed to write {path}: {e}") from e
    return path


def _parse_header(f) -> dict[str, list[str]]:
    header: dict[str, list[str]] = {}
    while True:
        line = f.readline()
        if not line:
            raise ValueError("Unexpected end of file in PCD header")
        text = line.decode("ascii").strip()
        if not text or text.startswith("#"):
            continue
        key, *values = text.split()
        header[key.upper()] = values
        if key.upper() == "DATA":
            return header


def read_pcd_header(path: str | Path) -> PcdHeader:
    with open(path, "rb") as f:
        raw = _parse_header(f)
    return PcdHeader(
        width=int(raw["WIDTH"][0]),
        height=int(raw["HEIGHT"][0]),
        points=int(raw["POINTS"][0]),
        fields=tuple(raw["FIELDS"]),
        data=raw["DATA"][0],
        viewpoint=tuple(float(v) for v in raw.get("VIEWPOINT", [])),
    )


def read_pcd(path: str | Path) -> OrganizedCloud:
    """Load a binary ``x y z rgb`` PCD file written by :func:`write_pcd`."""
    with open(path, "rb") as f:
        raw = _parse_header(f)
        fields = tuple(raw["FIELDS"])
        if fields != PCD_FIELDS:
            raise ValueError(f"Unsupported PCD fields {fields}")
        if raw["DATA"][0] != "binary":
            raise ValueError(f"Unsupported PCD data encoding {raw['DATA'][0]}")
        width = int(raw["WIDTH"][0])
        height = int(raw["HEIGHT"][0])
        count = int(raw["POINTS"][0])
        body = np.frombuffer(f.read(), dtype=POINT_DTYPE, count=count)
    points = np.stack((body["x"], body["y"], body["z"]), axis=1)
    return OrganizedCloud(width, height, points, unpack_rgb(body["rgb"]))
