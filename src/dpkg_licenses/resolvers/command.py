"""Resolver delegating to an external plugin command.

Plugins are executables invoked as ``<command> <package>``. Whatever the
command prints on standard output is the license text; an empty output
means "not found". Exit code 0 means the plugin ran successfully, any
other exit code is a hard error.
"""

import asyncio
import logging
import shlex
from pathlib import Path
from typing import Optional, Sequence, Union

from dpkg_licenses.exceptions import StrategyExecutionError
from dpkg_licenses.models import Probe
from dpkg_licenses.resolvers.base import BaseResolver, validate_package_name

logger = logging.getLogger(__name__)


class CommandResolver(BaseResolver):
    """Resolver running an external license reader command.

    Attributes:
        argv: Command and fixed arguments; the package name is appended.
    """

    def __init__(
        self,
        command: Union[str, Sequence[str]],
        name: Optional[str] = None,
    ) -> None:
        """Initialize the command resolver.

        Args:
            command: Command line as a string (split with shell rules) or an
                argument list.
            name: Optional strategy identifier. Defaults to the executable's
                file name.

        Raises:
            ValueError: If the command is empty.
        """
        argv = shlex.split(command) if isinstance(command, str) else list(command)
        if not argv:
            raise ValueError("Plugin command must not be empty")
        self.argv = argv
        self._name = name or Path(argv[0]).name

    @property
    def name(self) -> str:
        return self._name

    async def probe(self, package_name: str) -> Probe:
        """Run the plugin for one package.

        Args:
            package_name: Package identifier passed as the sole extra argument.

        Returns:
            Probe with the command's standard output, or not found if the
            command printed nothing.

        Raises:
            InvalidInputError: If package_name is malformed.
            StrategyExecutionError: If the command cannot be started or exits
                with a non-zero status.
        """
        validate_package_name(package_name)

        try:
            process = await asyncio.create_subprocess_exec(
                *self.argv,
                package_name,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise StrategyExecutionError(
                f"Cannot run plugin {self.argv[0]}: {e}"
            ) from e

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            # Timed out or batch aborted; don't leave the plugin running
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            message = f"Plugin {self.argv[0]} exited with status {process.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise StrategyExecutionError(message)

        text = stdout.decode("utf-8", errors="replace")
        if not text.strip():
            logger.debug("%s: no output for %s", self.name, package_name)
            return Probe.not_found()
        return Probe(text, True)
