"""Base interface for installed package scanners.

Scanners query the dpkg package database and return one PackageRecord per
installed package, in package-name order.
"""

from abc import ABC, abstractmethod

from dpkg_licenses.constants import INSTALLED_STATES
from dpkg_licenses.models import PackageRecord


def is_installed(status: str) -> bool:
    """Check whether a dpkg status abbreviation belongs to the installed family.

    The second letter of the abbreviation is the current package state
    (as in the second column of ``dpkg -l``). Packages that are not
    installed (``n``) or only have configuration files left (``c``) are
    excluded.

    Args:
        status: Status abbreviation such as "ii", "hi" or "rc".

    Returns:
        True if the package counts as installed.
    """
    return len(status) >= 2 and status[1].lower() in INSTALLED_STATES


class BaseScanner(ABC):
    """Abstract base class for package database scanners."""

    @abstractmethod
    def scan(self) -> list[PackageRecord]:
        """Enumerate installed packages.

        Returns:
            List of PackageRecord objects for installed-family packages.

        Raises:
            ScanError: If the package database cannot be read.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for this scanner's source.

        Returns:
            Name like "dpkg-query" or the status file path.
        """
        ...
