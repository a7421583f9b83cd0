# vision/capture.py
"""Fixed-count capture loop: frameset in, PCD file out."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from utils.logger import Logger, LoggerType
from utils.settings import CaptureCfg, capture
from .camera import CameraBase
from .frames import select_frames, texture_from_frame
from .pointcloud.builder import CloudBuilder, OrganizedCloud
from .pointcloud.pcd import write_pcd
from .pointcloud.projector import Projector


class CaptureState(Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    STOPPED = "stopped"


@dataclass
class CaptureRunner:
    """
    Drive ``session`` for ``cfg.frames`` iterations.

    Each iteration waits for a frameset, picks color (or infrared) and
    depth, projects, builds an organized cloud and writes it to
    ``cfg.output_dir / cfg.filename.format(index=i)``. Any error ends the
    run; the session is stopped exactly once whatever happens.
    """

    session: CameraBase
    projector: Projector
    cfg: CaptureCfg = capture
    builder: CloudBuilder = field(default_factory=CloudBuilder)
    logger: LoggerType = field(
        default_factory=lambda: Logger.get_logger("vision.capture")
    )
    state: CaptureState = CaptureState.IDLE
    iteration: int = 0

    def __post_init__(self) -> None:
        if self.cfg.frames < 0:
            raise ValueError(f"Frame count must be >= 0, got {self.cfg.frames}")

    def output_path(self, index: int) -> Path:
        return Path(self.cfg.output_dir) / self.cfg.filename.format(index=index)

    def capture_cloud(self) -> OrganizedCloud:
        """Wait for one frameset and turn it into a cloud."""
        frames = self.session.wait_for_frames()
        color, depth = select_frames(frames)
        projection = self.projector.project(depth, color)
        return self.builder.build(
            projection,
            texture_from_frame(color),
            depth.get_width(),
            depth.get_height(),
        )

    def run(self) -> list[Path]:
        """Capture all frames and return the written paths in order."""
        if self.state is not CaptureState.IDLE:
            raise RuntimeError(f"Capture already {self.state.value}")
        written: list[Path] = []
        Path(self.cfg.output_dir).mkdir(parents=True, exist_ok=True)
        self.session.start()
        self.state = CaptureState.STREAMING
        try:
            for index in range(self.cfg.frames):
                self.iteration = index
                cloud = self.capture_cloud()
                path = write_pcd(self.output_path(index), cloud)
                written.append(path)
                self.logger.info(f"Saved {path}")
        except BaseException:
            self.state = CaptureState.STOPPED
            # keep the capture error as the reported one
            try:
                self.session.stop()
            except Exception as e:
                self.logger.warning(f"Failed to stop camera session: {e}")
            raise
        self.state = CaptureState.STOPPED
        self.session.stop()
        return written
