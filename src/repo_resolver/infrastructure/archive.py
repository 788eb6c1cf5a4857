"""Zip extraction — implements the ArchiveExtractor port."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


class ZipArchiveExtractor:
    """Unpacks zip archives, refusing members that would land outside the destination."""

    def extract(self, archive_path: str | Path, destination: str | Path) -> None:
        dest = Path(destination).resolve()
        dest.mkdir(parents=True, exist_ok=True)

        with zipfile.ZipFile(archive_path) as zf:
            for member in zf.infolist():
                target = (dest / member.filename).resolve()
                if target != dest and dest not in target.parents:
                    raise OSError(
                        f"Archive member '{member.filename}' escapes {dest}"
                    )
            zf.extractall(dest)
            logger.debug("Extracted %d members into %s", len(zf.infolist()), dest)
