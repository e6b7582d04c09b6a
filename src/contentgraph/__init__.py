"""
contentgraph: builds a cross-referenced JSON entity graph from exported
game tables.
"""

__version__ = "0.1.0"
__author__ = "contentgraph Contributors"

from .build import BuildContext, StagePipeline, BuildOutcome, GraphWriter
from .build.stages import default_stages
from .game_data import GameDataService
from .utils.logging_config import setup_logging

__all__ = [
    "BuildContext",
    "StagePipeline",
    "BuildOutcome",
    "GraphWriter",
    "default_stages",
    "GameDataService",
    "setup_logging",
]
