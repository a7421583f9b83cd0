# cli/pointcloud_capture.py
"""Capture a sequence of colored point clouds from a RealSense camera."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from utils.config import Config
from utils.error_tracker import DeviceError, ErrorTracker
from utils.logger import Logger
from utils.settings import CaptureCfg, capture
from vision.capture import CaptureRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Capture colored point clouds from RealSense into PCD files."
    )
    parser.add_argument("--config", help="YAML config file (default conf/app.yaml)")
    parser.add_argument("--frames", type=int, help="Number of clouds to capture")
    parser.add_argument("--output-dir", help="Directory receiving the PCD files")
    return parser


def load_capture_cfg(args: argparse.Namespace) -> CaptureCfg:
    """Merge dataclass defaults, YAML config and command line options."""
    Config.load(args.config, force_reload=True)
    frames = args.frames
    if frames is None:
        frames = int(Config.get("capture.frames", capture.frames))
    output_dir = args.output_dir or Config.get("capture.output_dir", capture.output_dir)
    filename = Config.get("capture.filename", capture.filename)
    return CaptureCfg(frames=frames, output_dir=Path(output_dir), filename=filename)


def run(args: argparse.Namespace, session=None, projector=None) -> int:
    """Run the capture and return the process exit status."""
    logger = Logger.get_logger("cli.pointcloud_capture")
    try:
        cfg = load_capture_cfg(args)
        if session is None or projector is None:
            from vision.camera.realsense import RealSenseProjector, RealSenseSession

            session = session or RealSenseSession()
            projector = projector or RealSenseProjector()
        CaptureRunner(session, projector, cfg).run()
    except DeviceError as e:
        logger.error(e.describe())
        return 1
    except Exception as e:
        logger.error(str(e))
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    ErrorTracker.install_excepthook()
    ErrorTracker.install_signal_handlers()
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
