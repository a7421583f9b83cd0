"""Logging helpers built on top of loguru."""

from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, TypeVar, cast

from loguru import logger as _logger
from loguru._logger import Logger as LoguruLogger
from tqdm.auto import tqdm

from utils.settings import logging as LOGCFG

LoggerType = LoguruLogger
T = TypeVar("T")

_is_configured = False
_log_dir = LOGCFG.log_dir


class Logger:
    """Project-wide logger wrapper using loguru and global config."""

    @staticmethod
    def _configure(level: str, json_format: bool, to_file: bool) -> None:
        """
        Configure log sinks.

        Records below ERROR go to stdout, ERROR and above to stderr, so the
        capture run prints its saved files on stdout and failures on stderr.
        """
        global _is_configured
        _logger.remove()
        fmt = LOGCFG.log_debug_format if level == "DEBUG" else LOGCFG.log_format
        _logger.add(
            sys.stdout,
            level=level,
            serialize=False,
            format=fmt,
            filter=lambda record: record["level"].no < 40,
        )
        _logger.add(sys.stderr, level="ERROR", serialize=False, format=fmt)
        if to_file:
            os.makedirs(_log_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            _logger.add(
                _log_dir / f"{timestamp}.log.json",
                level=level,
                serialize=json_format,
                format=LOGCFG.log_file_format,
            )
        _is_configured = True

    @staticmethod
    def get_logger(
        name: str, level: str = None, json_format: bool = None
    ) -> LoguruLogger:
        """
        Return a configured loguru logger bound to ``name``.
        If level or json_format are not specified, uses global config.
        """
        global _is_configured
        if not _is_configured:
            Logger._configure(
                level or LOGCFG.level,
                json_format if json_format is not None else LOGCFG.json,
                LOGCFG.to_file,
            )
        return _logger.bind(module=name)

    @staticmethod
    def progress(
        iterable: Iterable[T],
        desc: str | None = None,
        total: int | None = None,
    ) -> Iterable[T]:
        """Return a tqdm iterator with unified style."""
        return cast(
            Iterable[T],
            tqdm(
                iterable,
                desc=desc,
                total=total,
                leave=False,
                bar_format=LOGCFG.progress_bar_format,
            ),
        )

    @staticmethod
    def configure(
        level: str = None,
        log_dir: str | Path = None,
        json_format: bool = None,
        to_file: bool = None,
    ) -> None:
        """Manually configure the logger with given settings."""
        global _log_dir
        _log_dir = Path(log_dir) if log_dir is not None else LOGCFG.log_dir
        Logger._configure(
            level or LOGCFG.level,
            json_format if json_format is not None else LOGCFG.json,
            to_file if to_file is not None else LOGCFG.to_file,
        )
