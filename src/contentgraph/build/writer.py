"""
Graph persistence.

Writes a completed graph to the output directory with orjson.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import orjson

GRAPH_FILE = "graph.json"

logger = logging.getLogger(__name__)


class GraphWriter:
    """Writes built graphs as JSON files."""

    def __init__(self, output_dir: Path, indent: bool = False):
        self.output_dir = Path(output_dir)
        self.indent = indent

    def write(self, graph: Dict[str, Any]) -> Path:
        """Write the graph and return the written file.

        Numeric dict keys are stringified so id-keyed maps stay valid JSON.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        options = orjson.OPT_NON_STR_KEYS
        if self.indent:
            options |= orjson.OPT_INDENT_2

        target = self.output_dir / GRAPH_FILE
        with target.open("wb") as f:
            f.write(orjson.dumps(graph, option=options))

        logger.info(
            f"Wrote {len(graph.get('items', []))} items and "
            f"{len(graph.get('npcs', []))} NPCs to {target}"
        )
        return target

    def discard(self) -> bool:
        """Remove a graph left by an earlier build.

        Returns True if a file was removed.
        """
        target = self.output_dir / GRAPH_FILE
        if not target.exists():
            return False
        target.unlink()
        logger.warning(f"Removed stale graph {target}")
        return True
