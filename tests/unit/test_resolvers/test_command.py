"""Tests for the external command plugin resolver."""

import stat
from pathlib import Path

import pytest

from dpkg_licenses.exceptions import (
    InvalidInputError,
    ResolverFailedError,
    StrategyExecutionError,
)
from dpkg_licenses.models import Probe
from dpkg_licenses.resolvers.chain import ResolverChain
from dpkg_licenses.resolvers.command import CommandResolver

READER_SCRIPT = """\
#!/bin/sh
case "$1" in
  foo) printf 'MIT\\n' ;;
  multi) printf 'GPL-2+\\nand LGPL-2.1+\\n' ;;
  broken) echo "database missing" >&2; exit 3 ;;
  slow) sleep 10 ;;
  *) ;;
esac
"""


@pytest.fixture
def reader(tmp_path: Path) -> Path:
    """Create an executable license reader plugin."""
    path = tmp_path / "reader-10-static"
    path.write_text(READER_SCRIPT, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class TestCommandResolver:
    """Test suite for CommandResolver."""

    def test_name_defaults_to_executable(self, reader):
        """Test that the plugin file name identifies the strategy."""
        assert CommandResolver(str(reader)).name == "reader-10-static"

    def test_name_override(self, reader):
        """Test that an explicit name wins."""
        assert CommandResolver([str(reader)], name="static").name == "static"

    def test_command_string_is_split(self):
        """Test that string commands are split with shell rules."""
        resolver = CommandResolver("/usr/bin/env 'my reader' --quiet")
        assert resolver.argv == ["/usr/bin/env", "my reader", "--quiet"]

    def test_empty_command_rejected(self):
        """Test that an empty command line is refused."""
        with pytest.raises(ValueError):
            CommandResolver("  ")

    @pytest.mark.asyncio
    async def test_probe_returns_stdout(self, reader):
        """Test that standard output is the raw license text."""
        probe = await CommandResolver(str(reader)).probe("foo")
        assert probe == Probe("MIT\n", True)

    @pytest.mark.asyncio
    async def test_probe_multiline_output(self, reader):
        """Test that multi-line output is passed through unmodified."""
        probe = await CommandResolver(str(reader)).probe("multi")
        assert probe == Probe("GPL-2+\nand LGPL-2.1+\n", True)

    @pytest.mark.asyncio
    async def test_probe_empty_output_not_found(self, reader):
        """Test that a silent successful plugin means not found."""
        assert await CommandResolver(str(reader)).probe("other") == Probe.not_found()

    @pytest.mark.asyncio
    async def test_probe_nonzero_exit_is_error(self, reader):
        """Test that a failing plugin raises with its stderr."""
        with pytest.raises(StrategyExecutionError, match="status 3: database missing"):
            await CommandResolver(str(reader)).probe("broken")

    @pytest.mark.asyncio
    async def test_probe_missing_executable(self, tmp_path):
        """Test that a plugin that cannot be started raises."""
        resolver = CommandResolver(str(tmp_path / "does-not-exist"))
        with pytest.raises(StrategyExecutionError, match="Cannot run plugin"):
            await resolver.probe("foo")

    @pytest.mark.asyncio
    async def test_probe_invalid_name_not_passed_to_plugin(self, reader):
        """Test that option-like names never reach the plugin."""
        with pytest.raises(InvalidInputError):
            await CommandResolver(str(reader)).probe("--help")

    @pytest.mark.asyncio
    async def test_slow_plugin_times_out_in_chain(self, reader):
        """Test that the chain timeout applies to plugins."""
        chain = ResolverChain([CommandResolver(str(reader))], timeout=0.5)

        with pytest.raises(ResolverFailedError, match="timed out"):
            await chain.resolve("slow")

    @pytest.mark.asyncio
    async def test_plugin_output_is_normalized_by_chain(self, reader):
        """Test the end-to-end result of a plugin-backed chain."""
        chain = ResolverChain([CommandResolver(str(reader))])

        result = await chain.resolve("multi")

        assert result.normalized_license == "GPL-2+ and LGPL-2.1+"
        assert result.resolved_by == "reader-10-static"
