"""
Item icon store.

Builds the item -> icon index from the item table and converts raw icon
images into RGBA PNG files named after their icon id.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from PIL import Image, UnidentifiedImageError

from ..game_data.models import RawRow

ICON_EXTENSIONS = (".png", ".tex.png", ".jpg", ".jpeg", ".bmp", ".tga", ".webp")


@dataclass
class IconFetchReport:
    """Outcome of an icon fetch run."""
    fetched: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    missing: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.fetched) + len(self.skipped) + len(self.missing) + len(self.failed)


class IconStore:
    """Item icon index plus the icon fetch side task."""

    def __init__(self, source_dir: Optional[Path] = None, output_dir: Optional[Path] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.source_dir = Path(source_dir) if source_dir else None
        self.output_dir = Path(output_dir) if output_dir else None
        self.icon_by_item_id: Dict[Any, int] = {}

    def initialize(self, item_rows: Iterable[RawRow]) -> None:
        """Index the icon of every item row that has one."""
        self.icon_by_item_id.clear()
        for row in item_rows:
            icon = row.get("icon")
            if icon:
                self.icon_by_item_id[row["id"]] = int(icon)
        self.logger.debug(f"Icon index initialized with {len(self.icon_by_item_id)} items")

    def icon_for_item(self, item_id: Any) -> Optional[int]:
        return self.icon_by_item_id.get(item_id)

    def icon_ids(self) -> List[int]:
        """Distinct icon ids in first-use order."""
        return list(dict.fromkeys(self.icon_by_item_id.values()))

    def output_file(self, icon_id: int) -> Path:
        if self.output_dir is None:
            raise ValueError("Icon output directory not configured")
        return self.output_dir / f"{icon_id}.png"

    def find_source_file(self, icon_id: int) -> Optional[Path]:
        """Locate the raw image for an icon id (zero-padded or plain name)."""
        if self.source_dir is None:
            return None
        for stem in (f"{icon_id:06d}", str(icon_id)):
            for extension in ICON_EXTENSIONS:
                candidate = self.source_dir / f"{stem}{extension}"
                if candidate.exists():
                    return candidate
        return None

    def fetch_icons(self) -> IconFetchReport:
        """Convert every indexed icon to PNG, skipping those already present."""
        report = IconFetchReport()
        if self.output_dir is None:
            raise ValueError("Icon output directory not configured")
        self.output_dir.mkdir(parents=True, exist_ok=True)

        for icon_id in self.icon_ids():
            target = self.output_file(icon_id)
            if target.exists():
                report.skipped.append(icon_id)
                continue

            source = self.find_source_file(icon_id)
            if source is None:
                report.missing.append(icon_id)
                self.logger.debug(f"No source image for icon {icon_id}")
                continue

            try:
                with Image.open(source) as image:
                    image.convert("RGBA").save(target, format="PNG")
            except (OSError, UnidentifiedImageError) as e:
                report.failed.append(icon_id)
                self.logger.error(f"Failed to convert icon {icon_id} from {source}: {e}")
                continue

            report.fetched.append(icon_id)

        self.logger.info(
            f"Icons: {len(report.fetched)} fetched, {len(report.skipped)} present, "
            f"{len(report.missing)} missing, {len(report.failed)} failed"
        )
        return report
