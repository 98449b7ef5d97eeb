"""Persistent user settings for layout and view geometry.

Settings live in a JSON file in the OS-appropriate user config directory
and survive application restarts. Missing or invalid values fall back to
the defaults in ``EditorConstants``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

# Accepted integer range per setting key
SETTING_RANGES = {
    'default_indent': (1, 8),
    'view_width': (10, 200),
    'view_height': (3, 100),
}


@dataclass
class LayoutSettings:
    default_indent: int = EditorConstants.DEFAULT_INDENT
    view_width: int = EditorConstants.VIEW_WIDTH
    view_height: int = EditorConstants.VIEW_HEIGHT

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SettingsPersistence:
    """Reads and writes the settings file."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir(EditorConstants.CONFIG_APP_NAME))
        self._settings_file = self._config_dir / EditorConstants.CONFIG_FILE_NAME
        self._settings_cache: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def load(self) -> Dict[str, Any]:
        """Load raw settings from disk.

        Returns an empty dict if the file doesn't exist or can't be read.
        """
        if self._settings_cache is not None:
            return dict(self._settings_cache)

        if not self._settings_file.exists():
            self._settings_cache = {}
            return {}

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}

        self._settings_cache = data
        return dict(data)

    def save(self, settings: Dict[str, Any]) -> bool:
        """Save settings atomically (temp file + rename).

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
            self._settings_cache = dict(settings)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def validate_setting(self, key: str, value: Any) -> bool:
        """Check a single setting value.

        Unknown keys are accepted so newer settings files still load.
        """
        if key not in SETTING_RANGES:
            return True
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        low, high = SETTING_RANGES[key]
        return low <= value <= high

    def load_layout_settings(self) -> LayoutSettings:
        """Return stored settings merged over the defaults."""
        settings = LayoutSettings()
        for key, value in self.load().items():
            if key not in SETTING_RANGES:
                continue
            if self.validate_setting(key, value):
                setattr(settings, key, value)
            else:
                logger.warning(f"Ignoring invalid setting {key}={value!r}")
        return settings

    def write_defaults(self, settings: LayoutSettings) -> bool:
        """Create the settings file from ``settings`` unless one already exists.

        Gives users a file to edit after the first run.
        """
        if self.settings_file.exists():
            return False
        return self.save(settings.to_dict())


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence

