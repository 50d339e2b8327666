"""Custom exceptions for dpkg-licenses."""

from typing import Optional


class DpkgLicensesError(Exception):
    """Base exception for all dpkg-licenses errors."""

    pass


class InvalidInputError(DpkgLicensesError, ValueError):
    """Exception raised when a package identifier is empty or malformed."""

    pass


class StrategyExecutionError(DpkgLicensesError):
    """Exception raised when a resolver strategy cannot complete its probe.

    "Not found" is never signalled with this exception; it is reserved for
    genuine failures such as an unreadable copyright file or a plugin that
    exits non-zero.
    """

    pass


class ResolverFailedError(DpkgLicensesError):
    """Exception raised when the resolver chain cannot resolve a package.

    Attributes:
        package_name: Package whose resolution was aborted.
        strategy: Name of the strategy that failed, if known.
        reason: Human-readable cause.
    """

    def __init__(
        self, package_name: str, strategy: Optional[str], reason: str
    ) -> None:
        self.package_name = package_name
        self.strategy = strategy
        self.reason = reason
        if strategy:
            message = f"{package_name}: strategy '{strategy}' failed: {reason}"
        else:
            message = f"{package_name}: {reason}"
        super().__init__(message)


class ScanError(DpkgLicensesError):
    """Exception raised when the installed package list cannot be read."""

    pass
