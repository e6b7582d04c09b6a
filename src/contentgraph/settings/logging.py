"""
Logging-related settings for contentgraph.

Console output is on by default. The CSV build log is opt-in and lands in
``<output>/logs/`` unless a log directory is configured explicitly.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "contentgraph.csv"
LOG_DIR_NAME = "logs"
VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5


def normalize_level(value: str) -> Optional[str]:
    """Return the canonical level name, or None if it is not a level."""
    level = str(value).strip().upper()
    return level if level in VALID_LEVELS else None


class LoggingSettings:
    """Manages console and build log settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    def _get_int(self, key: str, default: int) -> int:
        value = self.settings.value(key, default)
        try:
            return int(str(value)) if value is not None else default
        except ValueError:
            return default

    def _set_level(self, key: str, value: str, current: str) -> None:
        level = normalize_level(value)
        if level is None:
            logger.warning(f"Invalid log level for {key}: {value}, keeping {current}")
            return
        self.settings.setValue(key, level)
        self.settings.sync()

    # === CONSOLE ===

    @property
    def console_logging(self) -> bool:
        return self._get_bool("logging/console_enabled", True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self.settings.setValue("logging/console_enabled", value)
        self.settings.sync()

    @property
    def console_log_level(self) -> str:
        """Console threshold; an invalid stored value reads as INFO."""
        return normalize_level(self._get_str("logging/console_level", "INFO")) or "INFO"

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._set_level("logging/console_level", value, self.console_log_level)

    @property
    def console_use_colors(self) -> bool:
        return self._get_bool("logging/console_use_colors", True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self.settings.setValue("logging/console_use_colors", value)
        self.settings.sync()

    # === BUILD LOG FILE ===

    @property
    def file_logging(self) -> bool:
        return self._get_bool("logging/file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self.settings.setValue("logging/file_enabled", value)
        self.settings.sync()

    @property
    def file_log_level(self) -> str:
        return normalize_level(self._get_str("logging/file_level", "DEBUG")) or "DEBUG"

    @file_log_level.setter
    def file_log_level(self, value: str) -> None:
        self._set_level("logging/file_level", value, self.file_log_level)

    @property
    def log_dir(self) -> Optional[Path]:
        """Explicit log directory, or None to log next to the build output."""
        value = self._get_str("logging/dir")
        return Path(value) if value else None

    @log_dir.setter
    def log_dir(self, value: Optional[Path]) -> None:
        self.settings.setValue("logging/dir", str(value) if value else "")
        self.settings.sync()

    def log_file_path(self, output_path: Optional[Path]) -> Path:
        """Resolve the CSV build log location."""
        if self.log_dir is not None:
            return self.log_dir / LOG_FILE_NAME
        if output_path is not None:
            return output_path / LOG_DIR_NAME / LOG_FILE_NAME
        return Path(LOG_DIR_NAME) / LOG_FILE_NAME

    @property
    def max_bytes(self) -> int:
        """Size at which the build log rotates."""
        value = self._get_int("logging/max_bytes", DEFAULT_MAX_BYTES)
        return value if value > 0 else DEFAULT_MAX_BYTES

    @property
    def backup_count(self) -> int:
        """Number of rotated build logs kept."""
        value = self._get_int("logging/backup_count", DEFAULT_BACKUP_COUNT)
        return value if value >= 0 else DEFAULT_BACKUP_COUNT
