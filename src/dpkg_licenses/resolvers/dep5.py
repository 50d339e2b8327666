"""DEP-5 resolver for machine-readable Debian copyright files.

Packages following the machine-readable copyright format
(https://www.debian.org/doc/packaging-manuals/copyright-format/1.0/) declare
their licenses in ``License:`` fields. This is the most specific source of
license data on a Debian system and therefore runs first in the default
chain.
"""

import logging
import re

from license_expression import ExpressionError, get_spdx_licensing

from dpkg_licenses.deb822 import parse_paragraphs
from dpkg_licenses.models import Probe
from dpkg_licenses.resolvers.base import validate_package_name
from dpkg_licenses.resolvers.copyright import CopyrightFileResolver

logger = logging.getLogger(__name__)

# Initialize SPDX licensing library for canonical rendering
SPDX = get_spdx_licensing()

# Markers identifying the machine-readable format in the Format: header
FORMAT_MARKERS = ("copyright-format", "dep5", "dep-5")

LICENSE_SEPARATOR = ", "

# Debian GNU short names: "GPL-2", "GPL-2+", "LGPL-2.1+", "GFDL-1.2"
DEBIAN_GNU_NAME = re.compile(r"(AGPL|GPL|LGPL|GFDL)-(\d+)(?:\.(\d+))?(\+)?", re.IGNORECASE)

# Debian short names that differ from their SPDX id
DEBIAN_ALIASES = {
    "expat": "MIT",
}


def debian_to_spdx(short_name: str) -> str:
    """Translate a Debian short license name to its SPDX id.

    "GPL-2+" becomes "GPL-2.0-or-later" and "GPL-2" becomes "GPL-2.0-only",
    so Debian and SPDX spellings of the same license render identically.
    Names without a Debian-specific form are returned unchanged.
    """
    alias = DEBIAN_ALIASES.get(short_name.lower())
    if alias:
        return alias

    match = DEBIAN_GNU_NAME.fullmatch(short_name)
    if not match:
        return short_name
    family, major, minor, plus = match.groups()
    suffix = "or-later" if plus else "only"
    return f"{family.upper()}-{major}.{minor or '0'}-{suffix}"


def is_machine_readable(paragraphs: list[dict[str, str]]) -> bool:
    """Return True if the first paragraph is a DEP-5 header."""
    if not paragraphs:
        return False
    format_value = paragraphs[0].get("format", "").lower()
    return any(marker in format_value for marker in FORMAT_MARKERS)


def canonical_license_name(short_name: str) -> str:
    """Render a short license name in canonical SPDX form when possible.

    Debian short names are translated first (see debian_to_spdx). Names
    that are still not valid SPDX expressions, e.g. "GPL-2+ with OpenSSL
    exception" or vendor-specific names, are returned unchanged.
    """
    try:
        parsed = SPDX.parse(debian_to_spdx(short_name), validate=True)
    except ExpressionError:
        return short_name
    return str(parsed) if parsed is not None else short_name


def extract_licenses(paragraphs: list[dict[str, str]]) -> list[str]:
    """Collect the distinct short license names declared in a DEP-5 file.

    Names from the header and ``Files:`` paragraphs are preferred; when
    those carry none, standalone ``License:`` paragraphs are used instead.

    Args:
        paragraphs: Parsed paragraphs of a machine-readable copyright file.

    Returns:
        Unique license names in order of first appearance.
    """
    declared = [
        p["license"]
        for i, p in enumerate(paragraphs)
        if "license" in p and (i == 0 or "files" in p)
    ]
    if not declared:
        declared = [p["license"] for p in paragraphs if "license" in p]

    names: list[str] = []
    for value in declared:
        short_name = value.split("\n", 1)[0].strip()
        if not short_name:
            continue
        short_name = canonical_license_name(short_name)
        if short_name not in names:
            names.append(short_name)
    return names


class Dep5Resolver(CopyrightFileResolver):
    """Resolver reading ``License:`` fields of machine-readable copyright files.

    Free-form copyright files are left to the later strategies in the chain.
    """

    @property
    def name(self) -> str:
        """Return the resolver name.

        Returns:
            "dep5"
        """
        return "dep5"

    async def probe(self, package_name: str) -> Probe:
        """Extract declared licenses from a DEP-5 copyright file.

        Args:
            package_name: Package identifier.

        Returns:
            Probe with the comma-separated license names, or not found if the
            file is missing, free-form, or declares no license.

        Raises:
            InvalidInputError: If package_name is malformed.
            StrategyExecutionError: If the copyright file cannot be read.
        """
        validate_package_name(package_name)

        text = await self.read_copyright(package_name)
        if text is None:
            return Probe.not_found()

        paragraphs = parse_paragraphs(text)
        if not is_machine_readable(paragraphs):
            logger.debug("%s: copyright file is not machine-readable", package_name)
            return Probe.not_found()

        licenses = extract_licenses(paragraphs)
        if not licenses:
            return Probe.not_found()

        return Probe(LICENSE_SEPARATOR.join(licenses), True)
