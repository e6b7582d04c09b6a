"""
Core settings management for contentgraph.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QSettings

from .types import ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .logging import LoggingSettings
from .build import BuildSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to build settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self,
        profile: str = "default",
        settings_file: Optional[Union[str, Path]] = None,
    ):
        """Initialize settings with organization, application name, and profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Optional INI file to use instead of the native
                per-user store.
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("contentgraph", "contentgraph")
        self.profile = profile

        # Use profile as a group to create hierarchy: contentgraph/contentgraph/default/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._logging = LoggingSettings(self.settings)
        self._build = BuildSettings(self.settings)

        # Ensure version and migrate if needed
        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def build(self) -> BuildSettings:
        """Access build settings subsystem."""
        return self._build

    # === VERSION AND FIRST RUN ===

    @property
    def is_first_run(self) -> bool:
        """Check if this is the first run of the application."""
        value = self.settings.value("app/first_run", True)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", ConfigVersion.CURRENT.value)
        return str(value) if value is not None else ConfigVersion.CURRENT.value

    def get_settings_file_path(self) -> str:
        """Return the backing store location."""
        return self.settings.fileName()

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def data_path(self) -> Optional[Path]:
        """Get the game table directory."""
        return self._paths.data_path

    @data_path.setter
    def data_path(self, value: Optional[Path]) -> None:
        """Set the game table directory."""
        self._paths.data_path = value

    @property
    def output_path(self) -> Optional[Path]:
        """Get the output directory."""
        return self._paths.output_path

    @output_path.setter
    def output_path(self, value: Optional[Path]) -> None:
        """Set the output directory."""
        self._paths.output_path = value

    @property
    def icons_source_path(self) -> Optional[Path]:
        """Get the raw icon directory."""
        return self._paths.icons_source_path

    @icons_source_path.setter
    def icons_source_path(self, value: Optional[Path]) -> None:
        """Set the raw icon directory."""
        self._paths.icons_source_path = value

    @property
    def icons_output_path(self) -> Optional[Path]:
        """Get the icon output directory (derived from output_path)."""
        return self._paths.icons_output_path

    @property
    def secondary_index_path(self) -> Optional[Path]:
        """Get the secondary index file."""
        return self._paths.secondary_index_path

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        """Check if the CSV build log is enabled."""
        return self._logging.file_logging

    @property
    def log_file_path(self) -> Path:
        """Build log location, under the output directory by default."""
        return self._logging.log_file_path(self.output_path)

    # === BUILD SETTINGS (DELEGATED) ===

    @property
    def locales(self) -> List[str]:
        """Get the locales copied by the localizer."""
        return self._build.locales

    @property
    def default_locale(self) -> str:
        """Get the locale used for display names."""
        return self._build.default_locale

    # === VALIDATION ===

    def validate(self, fetch_icons_only: bool = False) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate(fetch_icons_only)
