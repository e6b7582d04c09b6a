"""
File loaders for exported game tables.

Handles reading and parsing JSON table files using orjson.
"""

import logging
from pathlib import Path
from collections import defaultdict
from typing import List

import orjson

from .models import (
    RawRow,
    TypedRowsMap,
    METADATA_SOURCE_FILE,
    ROW_TYPE_KEY,
    UNKNOWN_ROW_TYPE,
)


class TableFileLoader:
    """Loads and parses game table JSON files."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.logger.debug("TableFileLoader initialized")

    @staticmethod
    def group_rows(data: object, source: str = "<memory>") -> TypedRowsMap:
        """Group parsed rows by their 'type'.

        Rows without a 'type' field are placed under the 'unknown' key. Each
        row is copied and annotated with `_source_file` to track its origin.
        Non-object entries are dropped.
        """
        grouped: TypedRowsMap = defaultdict(list)
        rows: List[object] = data if isinstance(data, list) else [data]  # type: ignore

        for row in rows:
            if not isinstance(row, dict):
                continue
            row_type = row.get(ROW_TYPE_KEY) or UNKNOWN_ROW_TYPE  # type: ignore

            # Copy to avoid mutating shared structures returned by the parser
            annotated: RawRow = dict(row)  # type: ignore
            annotated[METADATA_SOURCE_FILE] = source
            grouped[str(row_type)].append(annotated)

        return grouped

    @staticmethod
    def read_and_group_json_file(json_file: Path) -> TypedRowsMap:
        """Read a JSON table file and group its rows by 'type'.

        Args:
            json_file: Path to the JSON file to read

        Returns:
            Dictionary mapping row types to lists of rows. Empty if the file
            cannot be read or parsed.
        """
        try:
            with json_file.open("rb") as f:  # orjson works with bytes
                data = orjson.loads(f.read())
        except (OSError, orjson.JSONDecodeError) as e:
            # Log parse/read errors but do not stop the whole loading process
            logger = logging.getLogger(f"{__name__}.TableFileLoader")
            logger.error(f"Error reading JSON file {json_file}: {e}")
            return defaultdict(list)

        return TableFileLoader.group_rows(data, str(json_file))
