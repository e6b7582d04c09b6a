"""
Main service for reading exported game tables.

Provides the high-level API the build uses to read rows by type, by id
and by display name.
"""

import logging
import re
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Iterable, List, Optional

from .loaders import TableFileLoader
from .managers import RowsManager
from .models import RawRow, RowCollection


class GameDataService:
    """Service for reading game tables.

    Responsible for reading the JSON table files under a data directory,
    grouping rows by type and indexing them by id. Files are read with a
    thread pool and parsed with orjson; the resulting indices are read-only
    once loading has finished.
    """

    def __init__(
        self,
        data_path: Optional[str | Path] = None,
        default_locale: str = "en",
        exclude: Iterable[Path] = (),
    ):
        """Initialize the table reader.

        Args:
            data_path: Directory containing the JSON table files. When None the
                service starts empty and rows can be added with `add_rows`.
            default_locale: Locale used to compare display names.
            exclude: JSON files under data_path that are not tables (e.g. the
                secondary index).
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.data_path = Path(data_path) if data_path is not None else None
        self.default_locale = default_locale
        self.exclude = {Path(p).resolve() for p in exclude}

        self.loader = TableFileLoader()
        self.manager = RowsManager()

        if self.data_path is not None:
            self.logger.info(f"Initializing GameDataService with path: {self.data_path}")
            self._load_data(self.data_path)

    @classmethod
    def from_rows(cls, rows: Iterable[RawRow], default_locale: str = "en") -> "GameDataService":
        """Build a service over in-memory rows."""
        service = cls(default_locale=default_locale)
        service.add_rows(list(rows))
        return service

    def add_rows(self, rows: List[RawRow], source: str = "<memory>") -> None:
        """Group and index rows that did not come from a file."""
        self.manager.add_rows(self.loader.group_rows(rows, source))
        self.manager.finalize_types()

    def _load_data(self, data_path: Path) -> None:
        """Load and group all JSON tables under the data directory."""
        self.logger.info("Starting table loading process...")

        json_files: List[Path] = sorted(
            p for p in data_path.rglob("*.json") if p.resolve() not in self.exclude
        )
        if not json_files:
            self.logger.warning(f"No JSON tables found in {data_path}")
            return

        self.logger.info(f"Found {len(json_files)} JSON table files")

        # Read in parallel, index in file-name order so row order is stable
        results: dict[Path, Any] = {}
        with ThreadPoolExecutor(max_workers=16) as executor:
            future_to_file = {
                executor.submit(self.loader.read_and_group_json_file, json_file): json_file
                for json_file in json_files
            }
            for future in as_completed(future_to_file):
                results[future_to_file[future]] = future.result()

        for json_file in json_files:
            self.manager.add_rows(results[json_file])

        self.manager.finalize_types()
        self.logger.info(
            f"Table loading completed. Found {len(self.manager.types)} row types"
        )

    # Public API methods - delegate to manager

    def get_rows(self, row_type: str) -> RowCollection:
        """Return all rows of the specified type."""
        return self.manager.get_rows_by_type(row_type)

    def get_row(self, row_type: str, row_id: Any) -> Optional[RawRow]:
        """Return the row of the given type and id."""
        return self.manager.get_row_by_id(row_type, row_id)

    def get_row_by_name(self, row_type: str, name: str) -> Optional[RawRow]:
        """Return the first row of the given type whose display name matches.

        Comparison is case-insensitive and uses the default locale.
        """
        wanted = name.strip().lower()
        for row in self.get_rows(row_type):
            if self.display_name(row).lower() == wanted:
                return row
        return None

    def get_types(self) -> List[str]:
        """Return a copy of the discovered row types list."""
        return self.manager.get_types()

    def display_name(self, row: RawRow) -> str:
        """Return the default-locale display name of a row ('' if none).

        NPC rows keep their name on the resident record.
        """
        if "name" in row:
            return self.extract_clean_name(row.get("name"), self.default_locale)
        resident = row.get("resident")
        if isinstance(resident, dict):
            return self.extract_clean_name(resident.get("singular"), self.default_locale)  # type: ignore
        return ""

    @staticmethod
    def extract_clean_name(name_field: Any, locale: str = "en") -> str:
        """Extract and clean a display name from a plain or localized field."""
        if not name_field:
            return ""
        if isinstance(name_field, dict):
            str_value = name_field.get(locale)  # type: ignore
            if not str_value:
                return ""
            name_str = str(str_value)  # type: ignore
        else:
            name_str = str(name_field)
        clean_name = re.sub(r"<[^>]*>", "", name_str)
        return clean_name.strip()
