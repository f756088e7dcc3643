"""
Configuration Manager - Handle backend settings persistence
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from services.line_diff import (
    DEFAULT_EMPTY_PLACEHOLDER,
    DEFAULT_FALLBACK_NOTICE,
    DEFAULT_MAX_CELLS,
)


class ConfigManager:
    """Manage configuration persistence"""

    _instance = None
    _config_file = None

    def __init__(self):
        try:
            # 1st: environment variable
            config_dir = os.environ.get("SCENE_HISTORY_CONFIG_DIR")

            # 2nd: home directory ~/.scene_history
            if not config_dir:
                try:
                    config_dir = os.path.expanduser("~/.scene_history")
                except Exception:
                    config_dir = None

            if config_dir:
                config_path = Path(config_dir)
                try:
                    config_path.mkdir(parents=True, exist_ok=True)
                    self._config_file = config_path / "config.json"
                except OSError as e:
                    print(f"[ConfigManager] Warning: Cannot write to {config_dir}: {e}")
                    self._config_file = None

            # 3rd: system temp dir
            if not self._config_file:
                tmp_dir = Path(tempfile.gettempdir()) / "scene_history"
                tmp_dir.mkdir(parents=True, exist_ok=True)
                self._config_file = tmp_dir / "config.json"
                print(f"[ConfigManager] Using temporary config path: {self._config_file}")

        except OSError as e:
            print(f"[ConfigManager] Critical Error in init: {e}")
            self._config_file = Path(tempfile.gettempdir()) / "scene_history_config_fallback.json"

        self._config = self._load_config()

    @classmethod
    def get_instance(cls) -> "ConfigManager":
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = ConfigManager()
        return cls._instance

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file, filling in missing sections"""
        config = self._default_config()
        if not self._config_file.exists():
            return config

        try:
            with open(self._config_file) as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"[ConfigManager] Error loading config: {e}")
            return config

        if not isinstance(stored, dict):
            print(f"[ConfigManager] Ignoring malformed config in {self._config_file}")
            return config

        for key, value in stored.items():
            if isinstance(config.get(key), dict):
                if isinstance(value, dict):
                    config[key] = {**config[key], **value}
                else:
                    print(f"[ConfigManager] Ignoring malformed '{key}' section, using defaults")
            else:
                config[key] = value
        return config

    def _default_config(self) -> dict[str, Any]:
        """Get default configuration"""
        return {
            "diff": {
                "maxCells": DEFAULT_MAX_CELLS,
                "emptyPlaceholder": DEFAULT_EMPTY_PLACEHOLDER,
                "fallbackNotice": DEFAULT_FALLBACK_NOTICE,
            },
            "server": {"host": "0.0.0.0", "port": 8000},
        }

    def get_config(self) -> dict[str, Any]:
        """Get current configuration"""
        # Reload config from file to ensure we have the latest
        self._config = self._load_config()
        return copy.deepcopy(self._config)

    def save_config(self, config: dict[str, Any]):
        """Save configuration to file"""
        self._config.update(config)

        self._config_file.parent.mkdir(parents=True, exist_ok=True)

        # Readers reload on every request, so never expose a half-written file
        fd, tmp_path = tempfile.mkstemp(
            dir=self._config_file.parent, prefix=".config-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(self._config, f, indent=2)
            os.replace(tmp_path, self._config_file)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise RuntimeError(f"Failed to save config: {e}")
