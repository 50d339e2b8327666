"""Base interface for report formatters.

Reporters turn (PackageRecord, LicenseResult) pairs into report lines. They
work line by line so the CLI can stream rows as soon as they are resolved.
"""

from abc import ABC, abstractmethod

from dpkg_licenses.models import LicenseResult, PackageRecord


def row_fields(record: PackageRecord, result: LicenseResult) -> list[str]:
    """Return the report field values of one row, in column order."""
    return [
        record.status,
        record.name,
        record.version,
        record.arch,
        record.description,
        result.normalized_license,
    ]


class BaseReporter(ABC):
    """Abstract base class for report formatters."""

    @abstractmethod
    def header_lines(self) -> list[str]:
        """Return the lines emitted before any data row.

        Returns:
            Header lines without trailing newlines.
        """
        ...

    @abstractmethod
    def format_row(self, record: PackageRecord, result: LicenseResult) -> str:
        """Render one resolved package as a single report line.

        Args:
            record: Package metadata.
            result: Resolved license for the package.

        Returns:
            The formatted line without a trailing newline.
        """
        ...

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            Format name like "table" or "csv".
        """
        ...

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the default file extension for this format.

        Returns:
            Extension like ".txt" or ".csv".
        """
        ...
