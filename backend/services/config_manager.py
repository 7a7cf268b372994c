"""
Configuration Manager - Handle backend settings persistence
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from models.config import SECTION_MODELS, default_sections, validate_section

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "DEVTOOLBOX_CONFIG_DIR"


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # 1. environment variable
            config_dir = os.environ.get(CONFIG_DIR_ENV)

            # 2. ~/.devtoolbox
            if not config_dir:
                try:
                    config_dir = os.path.expanduser("~/.devtoolbox")
                except Exception:
                    config_dir = None

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    logger.warning("Cannot write to %s: %s", config_dir, e)
                    self._config_file = None

            # 3. temp directory
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "devtoolbox"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                logger.info("Using temporary config path: %s", self._config_file)

        except Exception as e:
            logger.error("Config directory setup failed: %s", e)
            self._config_file = Path(tempfile.gettempdir()) / "devtoolbox_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next call re-reads the environment"""
        cls._instance = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, filling gaps from defaults"""
        if not self._config_file.exists():
            return self._default_config()

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading config from %s: %s", self._config_file, e)
            return self._default_config()

        if not isinstance(stored, dict):
            logger.warning("Ignoring config in %s: expected a JSON object", self._config_file)
            return self._default_config()

        return self._validate(self._merge(self._default_config(), stored))

    def _validate(self, config: dict[str, Any]) -> dict[str, Any]:
        """Replace any section with bad values by its defaults"""
        defaults = self._default_config()
        for name in SECTION_MODELS:
            try:
                config[name] = validate_section(name, config[name])
            except ValidationError as e:
                logger.warning(
                    "Invalid '%s' settings in %s, using defaults: %s",
                    name,
                    self._config_file,
                    e.errors()[0]["msg"],
                )
                config[name] = defaults[name]
        return config

    @staticmethod
    def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value
        return merged

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return default_sections()

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return copy.deepcopy(self._config)

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config = self._merge(self._config, config)

        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        # Readers re-load on every request, so swap in a complete file
        fd, tmp_path = tempfile.mkstemp(dir=self._config_file.parent, prefix=".config-", suffix=".json")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(self._config, f, indent=2)
            os.replace(tmp_path, self._config_file)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise RuntimeError(f"Failed to save config: {e}")

    def get(self, key: str, default=None):
        """Get specific config value"""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set specific config value"""
        self._config[key] = value
        self.save_config(self._config)
