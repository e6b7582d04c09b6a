"""
Build-related settings for contentgraph.
"""

import logging
from typing import List, TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_LOCALES = ["en", "ja", "de", "fr"]


class BuildSettings:
    """Manages options that shape the built graph."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    @property
    def locales(self) -> List[str]:
        """Get the locales copied by the localizer (first one is the default)."""
        value = self.settings.value("build/locales", DEFAULT_LOCALES)
        if isinstance(value, list):
            locales = [str(item) for item in cast(list[object], value) if item]
            return locales or DEFAULT_LOCALES.copy()
        if isinstance(value, str) and value:
            # A single-element list comes back from INI files as a plain string
            return [value]
        return DEFAULT_LOCALES.copy()

    @locales.setter
    def locales(self, value: List[str]) -> None:
        """Set the locales copied by the localizer."""
        if not value:
            logger.warning(f"Empty locale list ignored, keeping current: {self.locales}")
            return
        self.settings.setValue("build/locales", list(value))
        self.settings.sync()

    @property
    def default_locale(self) -> str:
        """Locale used for display names and the alternates index."""
        return self.locales[0]

    @property
    def indent_output(self) -> bool:
        """Check if the written graph should be pretty-printed."""
        value = self.settings.value("build/indent_output", False)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    @indent_output.setter
    def indent_output(self, value: bool) -> None:
        """Set pretty-printing of the written graph."""
        self.settings.setValue("build/indent_output", value)
        self.settings.sync()
