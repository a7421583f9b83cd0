# vision/camera/realsense.py
"""RealSense streaming session and projector.

Starts the default device with the driver's recommended stream profiles
and hands out framesets. No stream configuration is applied here, the
resolution, frame rate and formats are whatever the device reports as
its defaults.
"""

from __future__ import annotations

import numpy as np
import pyrealsense2 as rs

from utils.error_tracker import CameraConnectionError, DeviceError, ErrorTracker
from utils.logger import Logger, LoggerType
from vision.pointcloud.projector import Projection, Projector
from .camera_base import CameraBase


class RealSenseSession(CameraBase):
    """Intel RealSense pipeline wrapper translating SDK faults to DeviceError."""

    def __init__(self, logger: LoggerType | None = None) -> None:
        self.logger = logger or Logger.get_logger("vision.realsense")
        self.pipeline = rs.pipeline()
        self.profile: rs.pipeline_profile | None = None
        self.started = False

    def start(self) -> None:
        """Start streaming with the default configuration."""
        try:
            self.profile = self.pipeline.start()
        except Exception as e:
            # "No device connected" arrives as a plain RuntimeError
            self.logger.debug(f"Failed to start RealSense pipeline: {e}")
            raise CameraConnectionError.from_exception(
                e, "rs2::pipeline::start", ""
            ) from e
        self.started = True
        ErrorTracker.register_cleanup(self.stop)
        self._log_device_info()

    def _log_device_info(self) -> None:
        device = self.profile.get_device()
        name = device.get_info(rs.camera_info.name)
        serial = device.get_info(rs.camera_info.serial_number)
        self.logger.debug(f"Device: {name} SN:{serial}")
        for stream in self.profile.get_streams():
            video = stream.as_video_stream_profile()
            self.logger.debug(
                f"Stream {stream.stream_name()}: {video.width()}x{video.height()} "
                f"{stream.format()} @ {stream.fps()} fps"
            )

    def wait_for_frames(self) -> rs.composite_frame:
        """Block until the next frameset arrives."""

        assert self.started, "Camera not started"
        try:
            return self.pipeline.wait_for_frames()
        except Exception as e:
            raise DeviceError.from_exception(
                e, "rs2::pipeline::wait_for_frames", ""
            ) from e

    def stop(self) -> None:
        """Stop camera streaming."""

        if not self.started:
            return
        self.started = False
        ErrorTracker.unregister_cleanup(self.stop)
        try:
            self.pipeline.stop()
        except Exception as e:
            raise DeviceError.from_exception(e, "rs2::pipeline::stop", "") from e
        self.logger.debug("RealSense pipeline stopped")


class RealSenseProjector(Projector):
    """Deprojects depth with ``rs.pointcloud`` mapped to the color frame."""

    def __init__(self) -> None:
        self.pc = rs.pointcloud()

    def project(self, depth: rs.depth_frame, color: rs.video_frame) -> Projection:
        try:
            self.pc.map_to(color)
            points = self.pc.calculate(depth)
        except Exception as e:
            raise DeviceError.from_exception(
                e, "rs2::pointcloud::calculate", ""
            ) from e
        vertices = np.asanyarray(points.get_vertices()).view(np.float32)
        texcoords = np.asanyarray(points.get_texture_coordinates()).view(np.float32)
        return Projection(vertices.reshape(-1, 3), texcoords.reshape(-1, 2))
