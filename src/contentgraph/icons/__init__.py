"""
Icon handling for contentgraph.

Tracks which icon each item uses and normalizes the raw icon images into
the output directory.
"""

from .store import IconStore, IconFetchReport

__all__ = ["IconStore", "IconFetchReport"]
