# utils/config.py
"""Configuration loader with YAML backend."""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, cast
from omegaconf import OmegaConf
from utils.logger import Logger
from utils.settings import paths

DEFAULT_CONFIG_PATH = paths.DEFAULT_CONFIG


class ConfigLoader:
    """Strategy interface for config loading."""

    def load(self, filename: str) -> Dict[str, Any]:
        raise NotImplementedError


class YamlConfigLoader(ConfigLoader):
    def load(self, filename: str) -> Dict[str, Any]:
        """Load YAML file and return plain ``dict`` data."""

        cfg = OmegaConf.load(filename)
        return cast(Dict[str, Any], OmegaConf.to_container(cfg, resolve=True))


class Config:
    _data: Dict[str, Any] | None = None
    _loader: ConfigLoader = YamlConfigLoader()
    _logger = Logger.get_logger("utils.config")

    @classmethod
    def load(
        cls, filename: Path | str | None = None, force_reload: bool = False
    ) -> None:
        """
        Load configuration from ``filename`` unless already loaded.

        Without ``filename`` the bundled ``conf/app.yaml`` is used; if it is
        missing the dataclass defaults in :mod:`utils.settings` apply.
        An explicit ``filename`` that cannot be read is an error.
        """

        if cls._data is not None and not force_reload:
            return

        if filename is None:
            if not DEFAULT_CONFIG_PATH.exists():
                cls._logger.debug(
                    f"No config at {DEFAULT_CONFIG_PATH}, using defaults"
                )
                cls._data = {}
                return
            filename = DEFAULT_CONFIG_PATH

        try:
            cls._data = cls._loader.load(str(filename)) or {}
            cls._logger.debug(f"Config loaded from {filename}")
            logging_cfg = cls._data.get("logging", {})
            Logger.configure(
                level=logging_cfg.get("level"),
                log_dir=logging_cfg.get("log_dir"),
                json_format=logging_cfg.get("json"),
                to_file=logging_cfg.get("to_file"),
            )
        except Exception as e:
            cls._logger.debug(f"Failed to load config: {e}")
            raise

    @classmethod
    def get(cls, path: str, default: Any | None = None) -> Any:
        """Retrieve value from dotted ``path`` or return ``default``."""
        if cls._data is None:
            cls.load()
        value = cls._data
        for key in path.split("."):
            if not isinstance(value, dict):
                cls._logger.debug(f"Key {key} not found in path {path}")
                return default
            value = value.get(key, None)
            if value is None:
                cls._logger.debug(f"Key {key} not found in path {path}")
                return default
        return value

    @classmethod
    def set_loader(cls, loader: ConfigLoader) -> None:
        """Replace the config loader strategy (useful for testing)."""

        cls._loader = loader
        cls._logger.debug(f"Config loader set to {loader.__class__.__name__}")

    @classmethod
    def reset(cls) -> None:
        """Forget loaded data so the next access reloads."""

        cls._data = None
