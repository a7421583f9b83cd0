"""Project wide configuration dataclasses and default values."""

from dataclasses import dataclass
from pathlib import Path

# Root dir
BASE_DIR = Path(__file__).resolve().parent.parent

# Point cloud file extension written by the capture loop
CLOUD_EXT = ".pcd"


@dataclass(frozen=True)
class Paths:
    """
    Filesystem locations used by the project.
    Captured clouds go to the current working directory by default,
    these paths only cover configuration.
    """

    CONF_DIR: Path = BASE_DIR / "conf"
    DEFAULT_CONFIG: Path = CONF_DIR / "app.yaml"


paths = Paths()


@dataclass(frozen=True)
class LoggingCfg:
    """
    Logging configuration for the project.

    - level: Log level ("INFO", "DEBUG", etc.)
    - json: Enable/disable structured JSON logging in the file sink.
    - to_file: Also write a log file into ``log_dir``.
    - log_dir: Directory where log files are stored.
    - log_format: Console log output format.
    - log_file_format: File log output format.
    - progress_bar_format: TQDM progress bar format.
    """

    level: str = "INFO"
    json: bool = True
    to_file: bool = False
    log_dir: Path = Path(".logs")
    log_format: str = "<level>{message}</level>"
    log_debug_format: str = (
        "<green>{time:MM-DD HH:mm:ss}</green>"
        "[<level>{level:.3}</level>]"
        "[<cyan>{extra[module]:.16}</cyan>:<cyan>{line:<3}</cyan>]"
        "<level>{message}</level>"
    )
    log_file_format: str = "{time:YYYY-MM-DD HH:mm:ss}[{level}][{file}:{line}]{message}"
    progress_bar_format: str = (
        "{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]"
    )


logging = LoggingCfg()


@dataclass(frozen=True)
class CaptureCfg:
    """
    Capture loop parameters.

    - frames: number of frame bundles to capture, one file each.
    - output_dir: directory receiving the clouds.
    - filename: file name template, ``{index}`` is the zero-based iteration.
    """

    frames: int = 10
    output_dir: Path = Path(".")
    filename: str = "pointcloud_{index}" + CLOUD_EXT


capture = CaptureCfg()


# Bytes per texel the color sampler knows how to read:
# 3 for RGB8/BGR8 color streams, 1 for the Y8 infrared fallback.
COLOR_BYTES_PER_PIXEL = 3
INFRARED_BYTES_PER_PIXEL = 1

__all__ = [
    "BASE_DIR",
    "CLOUD_EXT",
    "Paths",
    "LoggingCfg",
    "CaptureCfg",
    "paths",
    "logging",
    "capture",
    "COLOR_BYTES_PER_PIXEL",
    "INFRARED_BYTES_PER_PIXEL",
]
