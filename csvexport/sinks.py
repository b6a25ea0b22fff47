"""
Delivery adapters for finished documents.

The encoder never performs I/O. A sink receives the document text together
with the suggested filename and media type and decides what to do with it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol, Tuple

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def deliver(self, text: str, filename: str, media_type: str) -> None:
        ...


class FileSink:
    """Writes each delivered document into a directory."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)
        self.written: List[Path] = []

    def deliver(self, text: str, filename: str, media_type: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        # The BOM, if any, is already the first character of the text
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        self.written.append(path)
        logger.info("Wrote %s (%d chars, %s)", path, len(text), media_type)


class MemorySink:
    """Keeps delivered documents in memory, in delivery order."""

    def __init__(self):
        self.deliveries: List[Tuple[str, str, str]] = []

    def deliver(self, text: str, filename: str, media_type: str) -> None:
        self.deliveries.append((text, filename, media_type))
