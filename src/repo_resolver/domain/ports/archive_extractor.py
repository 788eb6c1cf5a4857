"""Port: archive extractor — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ArchiveExtractor(Protocol):
    """Abstract contract for unpacking a downloaded archive."""

    def extract(self, archive_path: str | Path, destination: str | Path) -> None:
        """Unpack *archive_path* into the *destination* directory."""
        ...
