"""
Path-related settings for contentgraph.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

SECONDARY_INDEX_FILE = "secondary_index.json"


class PathSettings:
    """Manages path-related settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_path(self, key: str) -> Optional[Path]:
        path_str = self._get_str(key, "")
        return Path(path_str) if path_str else None

    def _set_path(self, key: str, value: Optional[Path]) -> None:
        self.settings.setValue(key, str(value) if value else "")
        self.settings.sync()

    @property
    def data_path(self) -> Optional[Path]:
        """Get the directory holding the exported game tables."""
        return self._get_path("paths/data")

    @data_path.setter
    def data_path(self, value: Optional[Path]) -> None:
        """Set the directory holding the exported game tables."""
        self._set_path("paths/data", value)

    @property
    def output_path(self) -> Optional[Path]:
        """Get the directory the built graph is written to."""
        return self._get_path("paths/output")

    @output_path.setter
    def output_path(self, value: Optional[Path]) -> None:
        """Set the directory the built graph is written to."""
        self._set_path("paths/output", value)

    @property
    def icons_source_path(self) -> Optional[Path]:
        """Get the directory with raw icon images."""
        return self._get_path("paths/icons")

    @icons_source_path.setter
    def icons_source_path(self, value: Optional[Path]) -> None:
        """Set the directory with raw icon images."""
        self._set_path("paths/icons", value)

    @property
    def icons_output_path(self) -> Optional[Path]:
        """Get the icon output directory (derived from output_path)."""
        if self.output_path:
            return self.output_path / "icons"
        return None

    @property
    def secondary_index_path(self) -> Optional[Path]:
        """Get the secondary index file.

        Falls back to ``secondary_index.json`` inside the data directory.
        """
        explicit = self._get_path("paths/secondary_index")
        if explicit:
            return explicit
        if self.data_path:
            return self.data_path / SECONDARY_INDEX_FILE
        return None

    @secondary_index_path.setter
    def secondary_index_path(self, value: Optional[Path]) -> None:
        """Set an explicit secondary index file."""
        self._set_path("paths/secondary_index", value)
