"""Shared base for strategies reading Debian copyright files."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from dpkg_licenses.constants import DEFAULT_DOC_ROOT
from dpkg_licenses.exceptions import StrategyExecutionError
from dpkg_licenses.resolvers.base import BaseResolver, strip_arch

logger = logging.getLogger(__name__)


class CopyrightFileResolver(BaseResolver):
    """Base class for resolvers that inspect ``<doc_root>/<pkg>/copyright``.

    A missing copyright file means "not found"; a file that exists but
    cannot be read is an execution error.

    Every subclass reads the file itself and nothing is shared between
    strategies, so a package no built-in strategy resolves has its copyright
    file read once per built-in strategy.

    Attributes:
        doc_root: Directory holding per-package documentation directories.
    """

    def __init__(self, doc_root: Optional[Path] = None) -> None:
        """Initialize the resolver.

        Args:
            doc_root: Documentation root. Defaults to /usr/share/doc.
        """
        self.doc_root = Path(doc_root) if doc_root is not None else DEFAULT_DOC_ROOT

    def copyright_path(self, package_name: str) -> Path:
        """Return the copyright file location for a package."""
        return self.doc_root / strip_arch(package_name) / "copyright"

    async def read_copyright(self, package_name: str) -> Optional[str]:
        """Read a package's copyright file without blocking the event loop.

        Args:
            package_name: Validated package identifier.

        Returns:
            File contents, or None if the package ships no copyright file.

        Raises:
            StrategyExecutionError: If the file exists but cannot be read.
        """
        path = self.copyright_path(package_name)
        try:
            return await asyncio.to_thread(
                path.read_text, encoding="utf-8", errors="replace"
            )
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("%s: no copyright file at %s", self.name, path)
            return None
        except OSError as e:
            raise StrategyExecutionError(f"Cannot read {path}: {e}") from e
