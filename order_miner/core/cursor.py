"""
Persisted sync watermark ("last update" date, e.g. ``2021-Jan-01``).
"""
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from config.settings import settings
from order_miner.parsing.dates import parse_cursor


class CursorStore:
    """Reads and writes the sync cursor file."""

    def __init__(self, path: Optional[Union[str, Path]] = None, default: Optional[str] = None):
        self.path = Path(path or settings.sync.cursor_file)
        self.default = default or settings.sync.default_cursor

    def load(self) -> str:
        """Return the stored cursor, or the default when none has been saved."""
        if not self.path.exists():
            logger.info(f"No sync cursor at {self.path}, using {self.default}")
            return self.default

        value = self.path.read_text(encoding="utf-8").strip()
        if not value:
            return self.default

        parse_cursor(value)
        return value

    def save(self, cursor: str) -> None:
        parse_cursor(cursor)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(cursor + "\n", encoding="utf-8")
        logger.info(f"Sync cursor saved: {cursor}")
