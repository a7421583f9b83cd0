# cli/pointcloud_view.py
"""Summarize and visualize captured PCD point clouds with Open3D."""

from __future__ import annotations

import argparse
import sys

import numpy as np

from utils.logger import Logger
from vision.pointcloud.pcd import read_pcd


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="View captured PCD point clouds.")
    parser.add_argument("inputs", nargs="+", help="Input PCD files")
    parser.add_argument(
        "--no-window", action="store_true", help="Only log a summary per file"
    )
    args = parser.parse_args(argv)

    logger = Logger.get_logger("cli.pointcloud_view")
    clouds = []
    for path in Logger.progress(args.inputs, desc="Loading", total=len(args.inputs)):
        cloud = read_pcd(path)
        valid = int(np.count_nonzero(np.any(cloud.points != 0, axis=1)))
        colored = int(np.count_nonzero(np.any(cloud.colors != 0, axis=1)))
        logger.info(
            f"{path}: {cloud.width}x{cloud.height}, {len(cloud)} points, "
            f"{valid} with depth, {colored} colored"
        )
        clouds.append(cloud)
    if not args.no_window:
        from vision.pointcloud.viewer import show

        show(clouds)
    return 0


if __name__ == "__main__":
    sys.exit(main())
