"""Tests for the common-licenses reference resolver."""

import pytest

from dpkg_licenses.models import Probe
from dpkg_licenses.resolvers.common_licenses import (
    CommonLicensesResolver,
    find_common_licenses,
)


def test_find_common_licenses_strips_punctuation():
    """Test that sentence punctuation around the path is not part of the name."""
    text = (
        "see `/usr/share/common-licenses/GPL-2'.\n"
        "and /usr/share/common-licenses/LGPL-2.1.\n"
        "again /usr/share/common-licenses/GPL-2\n"
    )
    assert find_common_licenses(text) == ["GPL-2", "LGPL-2.1"]


def test_find_common_licenses_none():
    """Test text without any reference."""
    assert find_common_licenses("Copyright 2001 nobody") == []


class TestCommonLicensesResolver:
    """Tests for CommonLicensesResolver.probe()."""

    @pytest.fixture
    def resolver(self, doc_root):
        """Create a CommonLicensesResolver over the temporary doc root."""
        return CommonLicensesResolver(doc_root)

    def test_resolver_name(self, resolver):
        """Test that resolver returns correct name."""
        assert resolver.name == "common-licenses"

    @pytest.mark.asyncio
    async def test_probe_reference(self, resolver, write_copyright):
        """Test resolving a free-form file pointing at GPL-2."""
        write_copyright(
            "bar",
            "On Debian systems the full text is in /usr/share/common-licenses/GPL-2\n",
        )

        assert await resolver.probe("bar") == Probe("GPL-2", True)

    @pytest.mark.asyncio
    async def test_probe_multiple_references(self, resolver, write_copyright):
        """Test that every distinct reference is reported."""
        write_copyright(
            "perl-thing",
            "/usr/share/common-licenses/Artistic and /usr/share/common-licenses/GPL-1\n",
        )

        assert await resolver.probe("perl-thing") == Probe("Artistic, GPL-1", True)

    @pytest.mark.asyncio
    async def test_probe_no_reference(self, resolver, write_copyright):
        """Test that files without references are not found."""
        write_copyright("plain", "Copyright 2001 Nobody\n")

        assert await resolver.probe("plain") == Probe.not_found()

    @pytest.mark.asyncio
    async def test_probe_missing_file(self, resolver):
        """Test that missing copyright files are not found."""
        assert await resolver.probe("absent") == Probe.not_found()
