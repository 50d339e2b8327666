"""CSV reporter.

Every field is double-quoted and embedded double quotes are doubled
(RFC 4180), so any standard CSV reader recovers the field values exactly.
"""

import csv
import io

from dpkg_licenses.models import LicenseResult, PackageRecord
from dpkg_licenses.reporters.base import BaseReporter, row_fields

CSV_HEADER = ["Status", "Name", "Version", "Arch", "Description", "License"]


def format_csv_line(values: list[str]) -> str:
    """Quote and join values as one CSV line without a line terminator."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="")
    writer.writerow(values)
    return buffer.getvalue()


class CsvReporter(BaseReporter):
    """Reporter producing one fully quoted CSV row per package."""

    def header_lines(self) -> list[str]:
        return [format_csv_line(CSV_HEADER)]

    def format_row(self, record: PackageRecord, result: LicenseResult) -> str:
        return format_csv_line(row_fields(record, result))

    @property
    def format_name(self) -> str:
        return "csv"

    @property
    def default_extension(self) -> str:
        return ".csv"
