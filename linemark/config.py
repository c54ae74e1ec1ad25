"""User settings for the linemark editor.

Settings are read from a JSON file in the OS-appropriate config directory.
Anything missing or invalid falls back to the defaults in EditorConstants.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    tab_width: int = EditorConstants.TAB_WIDTH
    quit_times: int = EditorConstants.QUIT_TIMES
    status_message_timeout: float = EditorConstants.STATUS_MESSAGE_TIMEOUT


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.
    
    Args:
        key: Setting key name.
        value: Setting value to validate.
        
    Returns:
        True if the value can be used for the key.
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        return False
    if key == 'tab_width':
        return isinstance(value, int) and 1 <= value <= 32
    if key == 'quit_times':
        return isinstance(value, int) and 0 <= value <= 100
    if key == 'status_message_timeout':
        return isinstance(value, (int, float)) and value >= 0
    return False


class SettingsStore:
    """Loads and saves EditorSettings as settings.json in the user config dir."""
    
    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir("linemark"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[EditorSettings] = None
    
    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_raw(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> EditorSettings:
        """Return the user's settings, defaults filled in."""
        if self._settings_cache is not None:
            return self._settings_cache
        
        raw = self._read_raw()
        settings = EditorSettings()
        for f in fields(EditorSettings):
            if f.name not in raw:
                continue
            value = raw[f.name]
            if validate_setting(f.name, value):
                setattr(settings, f.name, value)
            else:
                logger.warning(f"Ignoring invalid setting {f.name}={value!r}")
        
        self._settings_cache = settings
        return settings
    
    def save(self, settings: EditorSettings) -> bool:
        """Save settings to disk atomically.
        
        Returns:
            True if save was successful, False otherwise.
        """
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False
        
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
        
        self._settings_cache = settings
        return True
    
    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None
