"""Report formatters.

This module provides reporters rendering resolved packages as a
fixed-width table or as CSV.
"""

from dpkg_licenses.models import LicenseResult, PackageRecord
from dpkg_licenses.reporters.base import BaseReporter
from dpkg_licenses.reporters.csv import CsvReporter
from dpkg_licenses.reporters.table import TableReporter

__all__ = [
    "BaseReporter",
    "CsvReporter",
    "TableReporter",
    "format_row",
    "get_reporter",
]

# Registry of available reporters by format name
_REPORTERS: dict[str, type[BaseReporter]] = {
    "table": TableReporter,
    "csv": CsvReporter,
}


def get_reporter(mode: str) -> BaseReporter:
    """Get the reporter for an output mode.

    Args:
        mode: "table" or "csv".

    Returns:
        Reporter instance for the mode.

    Raises:
        ValueError: If the mode is not supported.
    """
    try:
        return _REPORTERS[mode]()
    except KeyError:
        raise ValueError(
            f"Unsupported output mode '{mode}'. "
            f"Supported modes: {', '.join(_REPORTERS)}"
        ) from None


def format_row(record: PackageRecord, result: LicenseResult, mode: str) -> str:
    """Render one resolved package as a report line in the given mode."""
    return get_reporter(mode).format_row(record, result)
