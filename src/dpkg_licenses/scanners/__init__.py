"""Installed package scanners.

This module provides scanners enumerating installed packages from the live
dpkg database or from a status file.
"""

from pathlib import Path
from typing import Optional

from dpkg_licenses.scanners.base import BaseScanner, is_installed
from dpkg_licenses.scanners.dpkg import DpkgQueryScanner
from dpkg_licenses.scanners.status import StatusFileScanner

__all__ = [
    "BaseScanner",
    "DpkgQueryScanner",
    "StatusFileScanner",
    "get_scanner",
    "is_installed",
]


def get_scanner(status_file: Optional[Path] = None) -> BaseScanner:
    """Get the scanner for the requested package source.

    Args:
        status_file: Optional dpkg status file. When omitted, the live
            database is queried with dpkg-query.

    Returns:
        Scanner instance for the source.
    """
    if status_file is not None:
        return StatusFileScanner(status_file)
    return DpkgQueryScanner()
