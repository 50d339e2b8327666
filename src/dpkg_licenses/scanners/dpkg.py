"""Scanner querying the live dpkg database with dpkg-query."""

import logging
import os
import subprocess

from dpkg_licenses.exceptions import ScanError
from dpkg_licenses.models import PackageRecord
from dpkg_licenses.scanners.base import BaseScanner, is_installed

logger = logging.getLogger(__name__)

QUERY_FORMAT = (
    "${db:Status-Abbrev}\t${Package}\t${Version}\t${Architecture}\t${binary:Summary}\n"
)


class DpkgQueryScanner(BaseScanner):
    """Scanner running ``dpkg-query -W`` over every known package.

    dpkg-query lists packages in name order; that order is kept.

    Attributes:
        executable: dpkg-query binary to run.
    """

    def __init__(self, executable: str = "dpkg-query") -> None:
        self.executable = executable

    @property
    def source_name(self) -> str:
        return "dpkg-query"

    def scan(self) -> list[PackageRecord]:
        """Run dpkg-query and parse its tab-separated output.

        Returns:
            Installed-family packages in dpkg-query order.

        Raises:
            ScanError: If dpkg-query is missing or exits non-zero.
        """
        command = [self.executable, "-W", "-f", QUERY_FORMAT]
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                env={**os.environ, "LC_ALL": "C.UTF-8"},
            )
        except OSError as e:
            raise ScanError(f"Cannot run {self.executable}: {e}") from e

        if completed.returncode != 0:
            raise ScanError(
                f"{self.executable} exited with status {completed.returncode}: "
                f"{completed.stderr.strip()}"
            )

        return self.parse(completed.stdout)

    @staticmethod
    def parse(output: str) -> list[PackageRecord]:
        """Parse dpkg-query output produced with QUERY_FORMAT.

        Args:
            output: Raw standard output of dpkg-query.

        Returns:
            Installed-family packages in output order.
        """
        records = []
        for line_num, line in enumerate(output.splitlines(), start=1):
            if not line.strip():
                continue

            fields = line.split("\t", 4)
            if len(fields) != 5:
                logger.debug("Could not parse dpkg-query line %d: %s", line_num, line)
                continue

            status, name, version, arch, description = fields
            status = status.strip()[:2]
            if not is_installed(status):
                continue

            records.append(
                PackageRecord(
                    status=status,
                    name=name.strip(),
                    version=version.strip(),
                    arch=arch.strip(),
                    description=description.strip(),
                )
            )

        return records
