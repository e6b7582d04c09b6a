"""
Settings version stamping for contentgraph.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Stamps the configuration version and handles unknown versions.

    1.0 is the only released format, so there is no key migration yet. A
    store written under another version keeps its values and is restamped.
    """

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Ensure configuration version is set."""
        current_version = str(self.settings.value("app/version", ""))

        if not current_version:
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.setValue("app/first_run", True)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif current_version != ConfigVersion.CURRENT.value:
            self._restamp(current_version)

    def _restamp(self, from_version: str) -> None:
        logger.warning(
            f"Unknown configuration version {from_version}, "
            f"keeping values and stamping {ConfigVersion.CURRENT.value}"
        )
        self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
        self.settings.setValue("app/migrated_from", from_version)
        self.settings.sync()
