"""
Module for reading exported game tables.

Provides the data source the build reads rows from, plus the small
read-only collaborators built on top of it (secondary index, patch
lookup, localizer).
"""

from .service import GameDataService
from .models import (
    RawRow,
    RowCollection,
    TypedRowsMap,
    METADATA_SOURCE_FILE,
)
from .managers import RowsManager
from .loaders import TableFileLoader
from .secondary_index import SecondaryIndex
from .patches import PatchIndex
from .localize import Localizer, capitalize_words

# Public exports
__all__ = [
    # Main service
    "GameDataService",
    # Type aliases
    "RawRow",
    "RowCollection",
    "TypedRowsMap",
    # Constants
    "METADATA_SOURCE_FILE",
    # Component classes
    "RowsManager",
    "TableFileLoader",
    "SecondaryIndex",
    "PatchIndex",
    "Localizer",
    "capitalize_words",
]
