"""Base interface for license resolver strategies.

Strategies are independent probes that try to determine the license of a
single installed package from one source such as its copyright file or an
external plugin command.
"""

import re
from abc import ABC, abstractmethod

from dpkg_licenses.exceptions import InvalidInputError
from dpkg_licenses.models import Probe

# Debian package name with an optional ":arch" multiarch qualifier
PACKAGE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9+._-]*(:[A-Za-z0-9-]+)?$")


def validate_package_name(package_name: str) -> str:
    """Check that a package identifier is usable by strategies.

    Args:
        package_name: Identifier to check.

    Returns:
        The identifier, unchanged.

    Raises:
        InvalidInputError: If the identifier is empty or malformed.
    """
    if not isinstance(package_name, str) or not package_name:
        raise InvalidInputError("Package name must be a non-empty string")
    if not PACKAGE_NAME_PATTERN.fullmatch(package_name):
        raise InvalidInputError(f"Malformed package name: {package_name!r}")
    return package_name


def strip_arch(package_name: str) -> str:
    """Return the package name without its ":arch" qualifier."""
    return package_name.split(":", 1)[0]


class BaseResolver(ABC):
    """Abstract base class for license resolver strategies.

    Strategies must be side-effect free: they only read from the filesystem
    or run read-only commands, hold no mutable state between calls, and may
    be probed concurrently for different packages.
    """

    @abstractmethod
    async def probe(self, package_name: str) -> Probe:
        """Try to determine the license of a package.

        Args:
            package_name: Validated package identifier.

        Returns:
            Probe with the raw license text and found=True, or
            ``Probe.not_found()`` if this strategy has nothing to say.

        Raises:
            InvalidInputError: If package_name is empty or malformed.
            StrategyExecutionError: If the probe could not be carried out.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the strategy identifier for logging and provenance.

        Returns:
            Name like "dep5", "common-licenses", etc.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
