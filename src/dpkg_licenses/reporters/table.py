"""Fixed-width table reporter, laid out like ``dpkg -l``."""

from typing import Optional

from dpkg_licenses.models import LicenseResult, PackageRecord
from dpkg_licenses.reporters.base import BaseReporter, row_fields

# (header, width) per column; None means the column is never truncated
TABLE_COLUMNS: list[tuple[str, Optional[int]]] = [
    ("St", 2),
    ("Name", 30),
    ("Version", 30),
    ("Arch", 6),
    ("Description", 60),
    ("License", None),
]


class TableReporter(BaseReporter):
    """Reporter producing left-aligned, space-padded fixed-width columns.

    Values longer than their column are cut to the column width; the
    license column is always printed in full.
    """

    @staticmethod
    def _format(values: list[str]) -> str:
        cells = []
        for value, (_, width) in zip(values, TABLE_COLUMNS):
            if width is None:
                cells.append(value)
            else:
                cells.append(f"{value[:width]:<{width}}")
        return " ".join(cells)

    def header_lines(self) -> list[str]:
        headers = [header for header, _ in TABLE_COLUMNS]
        separator = ["-" * (width or len(header)) for header, width in TABLE_COLUMNS]
        return [self._format(headers), self._format(separator)]

    def format_row(self, record: PackageRecord, result: LicenseResult) -> str:
        return self._format(row_fields(record, result))

    @property
    def format_name(self) -> str:
        return "table"

    @property
    def default_extension(self) -> str:
        return ".txt"
