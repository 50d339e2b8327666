"""Scanner reading a dpkg status database file directly.

Useful for inspecting another system's package database (a chroot or an
image) without running dpkg on it.
"""

import logging
from pathlib import Path
from typing import Optional

from dpkg_licenses.constants import DEFAULT_STATUS_FILE
from dpkg_licenses.deb822 import parse_paragraphs
from dpkg_licenses.exceptions import ScanError
from dpkg_licenses.models import PackageRecord
from dpkg_licenses.scanners.base import BaseScanner, is_installed

logger = logging.getLogger(__name__)

# dpkg abbreviations for the "want" and "status" words of the Status field
WANT_ABBREV = {
    "unknown": "u",
    "install": "i",
    "hold": "h",
    "deinstall": "r",
    "purge": "p",
}

STATE_ABBREV = {
    "not-installed": "n",
    "config-files": "c",
    "half-installed": "H",
    "unpacked": "U",
    "half-configured": "F",
    "triggers-awaited": "W",
    "triggers-pending": "t",
    "installed": "i",
}


def status_abbrev(status_field: str) -> Optional[str]:
    """Convert a Status field ("install ok installed") to its abbreviation ("ii").

    Returns:
        The two-letter abbreviation, or None if the field is malformed.
    """
    words = status_field.split()
    if len(words) != 3:
        return None
    want, _flag, state = words
    if want not in WANT_ABBREV or state not in STATE_ABBREV:
        return None
    return WANT_ABBREV[want] + STATE_ABBREV[state]


class StatusFileScanner(BaseScanner):
    """Scanner parsing a dpkg status file such as /var/lib/dpkg/status.

    Attributes:
        source_path: Path to the status file.
    """

    def __init__(self, source_path: Optional[Path] = None) -> None:
        self.source_path = Path(source_path) if source_path else DEFAULT_STATUS_FILE

    @property
    def source_name(self) -> str:
        return str(self.source_path)

    def scan(self) -> list[PackageRecord]:
        """Parse the status file.

        Returns:
            Installed-family packages sorted by name and architecture.

        Raises:
            ScanError: If the file cannot be read.
        """
        try:
            text = self.source_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ScanError(f"Cannot read status file {self.source_path}: {e}") from e

        records = []
        for paragraph in parse_paragraphs(text):
            name = paragraph.get("package")
            if not name:
                continue

            status = status_abbrev(paragraph.get("status", ""))
            if status is None:
                logger.debug("Skipping %s with malformed status", name)
                continue
            if not is_installed(status):
                continue

            records.append(
                PackageRecord(
                    status=status,
                    name=name,
                    version=paragraph.get("version", ""),
                    arch=paragraph.get("architecture", ""),
                    description=paragraph.get("description", "").split("\n", 1)[0],
                )
            )

        return sorted(records, key=lambda r: (r.name, r.arch))
