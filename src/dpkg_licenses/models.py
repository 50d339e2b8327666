"""Core data models for dpkg_licenses.

This module defines the fundamental data structures used throughout the
license report: installed package records, resolution results, strategy
descriptors and the error policy applied to failing packages.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, NamedTuple, Optional

from dpkg_licenses.constants import ERROR_LICENSE, UNKNOWN_LICENSE


class ErrorPolicy(str, Enum):
    """How a strategy execution error affects the rest of the report.

    Attributes:
        STRICT: Abort the whole batch at the first failing package.
        LENIENT: Mark the failing package as ``unknown-error`` and continue.
    """

    STRICT = "strict"
    LENIENT = "lenient"


class Probe(NamedTuple):
    """Outcome of a single strategy probe.

    Attributes:
        license_text: Raw license text, or None when nothing was found.
        found: True if the strategy claims to have found license data.
    """

    license_text: Optional[str]
    found: bool

    @classmethod
    def not_found(cls) -> "Probe":
        """Return the canonical "nothing here" probe."""
        return cls(None, False)


@dataclass(frozen=True)
class PackageRecord:
    """Immutable record of one installed package.

    Produced by the package database query (``dpkg-query`` or the dpkg
    status file). Frozen for hashability.

    Attributes:
        status: Two-letter dpkg status abbreviation (e.g. "ii").
        name: Package name, optionally arch-qualified (e.g. "libc6:amd64").
        version: Installed version string.
        arch: Package architecture (e.g. "amd64", "all").
        description: One-line package summary.
    """

    status: str
    name: str
    version: str
    arch: str
    description: str


@dataclass(frozen=True)
class LicenseResult:
    """Resolved license for one package, with provenance.

    Attributes:
        package_name: Name of the resolved package.
        raw_license: Text exactly as the winning strategy returned it.
        normalized_license: Single-line license, "unknown" when no strategy
            matched, "unknown-error" when resolution failed in lenient mode.
        resolved_by: Name of the strategy that supplied the license.
        error: Failure description for lenient-mode error rows.
    """

    package_name: str
    raw_license: Optional[str] = None
    normalized_license: str = UNKNOWN_LICENSE
    resolved_by: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.normalized_license.strip():
            raise ValueError("normalized_license must not be empty")
        if "\n" in self.normalized_license:
            raise ValueError("normalized_license must be a single line")

    @classmethod
    def unknown(cls, package_name: str) -> "LicenseResult":
        """Return the result for a package no strategy could resolve."""
        return cls(package_name=package_name)

    @classmethod
    def failed(cls, package_name: str, error: str) -> "LicenseResult":
        """Return the lenient-mode result for a package whose resolution failed."""
        return cls(
            package_name=package_name,
            normalized_license=ERROR_LICENSE,
            error=error,
        )

    @property
    def is_unknown(self) -> bool:
        """True if no strategy produced a license and nothing failed."""
        return self.resolved_by is None and self.error is None

    @property
    def is_error(self) -> bool:
        """True if resolution failed and the row was kept in lenient mode."""
        return self.error is not None


@dataclass(frozen=True)
class StrategyDescriptor:
    """Registration entry of one strategy within a resolver chain.

    Attributes:
        identifier: Strategy name as reported in ``resolved_by``.
        priority: Zero-based position in the chain; lower runs first.
        probe: The strategy's probe coroutine function.
    """

    identifier: str
    priority: int
    probe: Callable[[str], Awaitable[Probe]]
