"""
Settings validation system for contentgraph.
"""

import logging
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self, fetch_icons_only: bool = False) -> ValidationResult:
        """Validate current configuration.

        Args:
            fetch_icons_only: Validate for the icon-only run, which needs the
                icon source directory instead of an output graph location.
        """
        errors: List[str] = []
        warnings: List[str] = []

        data_path = self.settings.data_path
        if data_path:
            if not data_path.exists():
                errors.append(f"Data path does not exist: {data_path}")
            elif not any(data_path.rglob("*.json")):
                warnings.append(f"Data path contains no JSON tables: {data_path}")
        else:
            errors.append("Data path not set")

        if not self.settings.output_path:
            errors.append("Output path not set")

        icons_path = self.settings.icons_source_path
        if icons_path and not icons_path.exists():
            warnings.append(f"Icon source path does not exist: {icons_path}")
        elif not icons_path and fetch_icons_only:
            errors.append("Icon source path not set")

        index_path = self.settings.secondary_index_path
        if index_path and not index_path.exists():
            warnings.append(
                f"Secondary index not found, approximate coordinates disabled: {index_path}"
            )

        for warning in warnings:
            logger.debug(warning)

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
