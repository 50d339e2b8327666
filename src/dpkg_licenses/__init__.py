"""dpkg-licenses - License report for installed Debian packages.

This package resolves the license of every installed dpkg package through
an ordered chain of resolver strategies and renders the result as a table
or CSV report.
"""

__version__ = "0.1.0"

from dpkg_licenses.models import (
    ErrorPolicy,
    LicenseResult,
    PackageRecord,
    Probe,
    StrategyDescriptor,
)
from dpkg_licenses.normalize import normalize

__all__ = [
    "__version__",
    "ErrorPolicy",
    "LicenseResult",
    "PackageRecord",
    "Probe",
    "StrategyDescriptor",
    "normalize",
]
