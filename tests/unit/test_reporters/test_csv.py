"""Tests for the CSV reporter."""

import csv

import pytest

from dpkg_licenses.models import LicenseResult, PackageRecord
from dpkg_licenses.reporters import CsvReporter, format_row, get_reporter


@pytest.fixture
def reporter():
    """Create a CsvReporter instance."""
    return CsvReporter()


def test_every_field_quoted(reporter):
    """Test that all six fields are double-quoted, in column order."""
    record = PackageRecord("ii", "foo", "1.0-1", "amd64", "foo tool")
    result = LicenseResult("foo", normalized_license="MIT", resolved_by="dep5")

    row = reporter.format_row(record, result)

    assert row == '"ii","foo","1.0-1","amd64","foo tool","MIT"'


def test_header_quoted(reporter):
    """Test the quoted header row."""
    assert reporter.header_lines() == ['"Status","Name","Version","Arch","Description","License"']


def test_embedded_quotes_are_doubled(reporter):
    """Test RFC 4180 escaping of double quotes."""
    record = PackageRecord("ii", "foo", "1", "all", 'the "best" tool')

    row = reporter.format_row(record, LicenseResult.unknown("foo"))

    assert '"the ""best"" tool"' in row


def test_fields_round_trip_through_csv_reader(reporter):
    """Test that a CSV reader recovers the original values exactly."""
    record = PackageRecord(
        "hi",
        "libfoo:amd64",
        "1:2.3~rc1-4",
        "amd64",
        'Foo, "Bar" and, baz',
    )
    result = LicenseResult("libfoo:amd64", normalized_license="GPL-2+, MIT", resolved_by="dep5")

    parsed = next(csv.reader([reporter.format_row(record, result)]))

    assert parsed == [
        "hi",
        "libfoo:amd64",
        "1:2.3~rc1-4",
        "amd64",
        'Foo, "Bar" and, baz',
        "GPL-2+, MIT",
    ]


def test_fields_are_not_truncated(reporter):
    """Test that CSV keeps long values intact."""
    record = PackageRecord("ii", "a" * 40, "1", "amd64", "x" * 70)

    parsed = next(csv.reader([reporter.format_row(record, LicenseResult.unknown("a"))]))

    assert parsed[1] == "a" * 40
    assert parsed[4] == "x" * 70


def test_get_reporter():
    """Test reporter lookup by mode."""
    assert isinstance(get_reporter("csv"), CsvReporter)
    with pytest.raises(ValueError, match="Unsupported output mode"):
        get_reporter("pdf")


def test_format_row_by_mode():
    """Test the mode-based helper."""
    record = PackageRecord("ii", "foo", "1", "all", "")
    assert format_row(record, LicenseResult.unknown("foo"), "csv").endswith('"unknown"')


def test_reporter_metadata(reporter):
    """Test format name and extension."""
    assert reporter.format_name == "csv"
    assert reporter.default_extension == ".csv"
