"""
Managers for game table indexing and retrieval.

Provides RowsManager class that handles storage, indexing by type/id,
and efficient lookup operations for table rows.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional

from .models import RawRow, RowCollection, TypedRowsMap, ROW_ID_KEY


class RowsManager:
    """Manager for indexing and retrieving table rows.

    Maintains two main indices:
    - rows_by_type: type -> rows in load order
    - rows_by_id: (type, id) -> row for O(1) access

    Rows without an id are reachable through rows_by_type only. When two rows
    of one type share an id, the first loaded row wins the id index.
    """

    def __init__(self):
        self.rows_by_type: TypedRowsMap = defaultdict(list)
        self.rows_by_id: Dict[tuple[str, Any], RawRow] = {}

        # List of available types (sorted after finalize_types)
        self.types: List[str] = []
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.logger.debug("RowsManager initialized")

    def add_rows(self, grouped_rows: TypedRowsMap) -> None:
        """Add a batch of grouped rows.

        Args:
            grouped_rows: Dictionary mapping row types to lists of rows
        """
        for row_type, rows in grouped_rows.items():
            if not rows:
                continue
            self.rows_by_type[row_type].extend(rows)

            for row in rows:
                row_id = row.get(ROW_ID_KEY)
                if row_id is None:
                    continue
                key = (row_type, row_id)
                if key in self.rows_by_id:
                    self.logger.debug(f"Duplicate {row_type} row id {row_id} ignored in index")
                    continue
                self.rows_by_id[key] = row

    def finalize_types(self) -> None:
        """Finalize the list of discovered types (sorted)."""
        self.types = sorted(self.rows_by_type.keys())

    def get_rows_by_type(self, row_type: str) -> RowCollection:
        """Return all rows of the specified type."""
        return self.rows_by_type.get(row_type, [])

    def get_types(self) -> List[str]:
        """Return a copy of the discovered row types list."""
        return self.types.copy()

    def get_row_by_id(self, row_type: str, row_id: Any) -> Optional[RawRow]:
        """Return the row of the given type and id, or None if not found."""
        return self.rows_by_id.get((row_type, row_id))
