"""License resolver strategies and the chain that orders them.

This module provides the built-in strategies reading Debian copyright
files, the external command plugin strategy, and the registry building
the default chain.
"""

from pathlib import Path
from typing import Optional, Sequence

from dpkg_licenses.constants import DEFAULT_PROBE_TIMEOUT
from dpkg_licenses.resolvers.base import BaseResolver, validate_package_name
from dpkg_licenses.resolvers.chain import ResolverChain
from dpkg_licenses.resolvers.command import CommandResolver
from dpkg_licenses.resolvers.common_licenses import CommonLicensesResolver
from dpkg_licenses.resolvers.copyright import CopyrightFileResolver
from dpkg_licenses.resolvers.dep5 import Dep5Resolver
from dpkg_licenses.resolvers.patterns import LicenseTextResolver

__all__ = [
    "BaseResolver",
    "CommandResolver",
    "CommonLicensesResolver",
    "CopyrightFileResolver",
    "Dep5Resolver",
    "LicenseTextResolver",
    "ResolverChain",
    "build_chain",
    "default_strategies",
    "validate_package_name",
]

# Built-in strategies in priority order: most specific source first
_BUILTIN_STRATEGIES: list[type[CopyrightFileResolver]] = [
    Dep5Resolver,
    CommonLicensesResolver,
    LicenseTextResolver,
]


def default_strategies(
    doc_root: Optional[Path] = None,
    plugins: Sequence[str] = (),
) -> list[BaseResolver]:
    """Build the default ordered strategy list.

    The built-in copyright file strategies come first, followed by the
    plugin commands in the order given.

    Args:
        doc_root: Documentation root for the copyright file strategies.
        plugins: Plugin command lines, highest priority first.

    Returns:
        Strategies in query order.
    """
    strategies: list[BaseResolver] = [cls(doc_root) for cls in _BUILTIN_STRATEGIES]
    strategies.extend(CommandResolver(command) for command in plugins)
    return strategies


def build_chain(
    doc_root: Optional[Path] = None,
    plugins: Sequence[str] = (),
    timeout: Optional[float] = DEFAULT_PROBE_TIMEOUT,
) -> ResolverChain:
    """Build a ResolverChain over the default strategies.

    Args:
        doc_root: Documentation root for the copyright file strategies.
        plugins: Plugin command lines appended after the built-ins.
        timeout: Per-probe time limit in seconds.

    Returns:
        Configured ResolverChain.

    Raises:
        ValueError: If a plugin command is empty or two strategies share a
            name.
    """
    return ResolverChain(default_strategies(doc_root, plugins), timeout=timeout)
