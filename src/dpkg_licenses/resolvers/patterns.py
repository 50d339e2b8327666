"""Heuristic resolver matching well-known license phrases.

Last-resort built-in strategy: scans free-form copyright text for the
names and version statements of common licenses and reports them as
SPDX-style identifiers.
"""

import logging
import re

from dpkg_licenses.models import Probe
from dpkg_licenses.resolvers.base import validate_package_name
from dpkg_licenses.resolvers.copyright import CopyrightFileResolver

logger = logging.getLogger(__name__)

ANY_LATER_VERSION = r",?\s+or\s+(?:\(at\s+your\s+option\)\s+)?any\s+later\s+version"
# A trailing "+" or an "or later" clause after the version makes it or-later
LATER_CLAUSE = rf"(?:\+|-or-later|\s+or\s+(?:any\s+)?later|{ANY_LATER_VERSION})"


def _gnu_license(short: str, long_name: str, version: str) -> list[tuple[str, list[str]]]:
    """Return the or-later and -only table entries for one GNU license version.

    ``version`` is written as in the SPDX id ("2", "2.1"); a bare major
    version also matches its ".0" spelling. Version digits are anchored so
    "GPL-2" never matches "GPL-2.1" or "GPL-30".
    """
    spdx_id = f"{short}-{version if '.' in version else version + '.0'}"
    ver = re.escape(version) + ("" if "." in version else r"(?:\.0)?") + r"(?!\.?\d)"
    long_re = long_name.replace(" ", r"\s+")
    short_re = rf"\b{short}(?:-v?|\s*v|\s+version\s+)?{ver}"
    title_re = rf"{long_re},?\s+(?:version\s+|v\.?\s*){ver}"
    return [
        (f"{spdx_id}-or-later", [
            rf"{short_re}{LATER_CLAUSE}",
            rf"{title_re}{LATER_CLAUSE}",
            # FSF notice: "... as published by the Free Software Foundation;
            # either version 2 of the License, or (at your option) any later version."
            rf"{long_re}.{{0,160}}?either\s+version\s+{ver}"
            rf"(?:\s+of\s+the\s+License)?{ANY_LATER_VERSION}",
            rf"\bversion\s+{ver}\s+of\s+the\s+{long_re}{ANY_LATER_VERSION}",
        ]),
        (f"{spdx_id}-only", [
            rf"{short_re}(?:-only)?(?!{LATER_CLAUSE})",
            rf"{title_re}(?!{LATER_CLAUSE})",
            rf"\bversion\s+{ver}\s+of\s+the\s+{long_re}",
        ]),
    ]


# Ordered table of license id -> phrases identifying it.
# Lesser/Affero variants come first so they are reported under their own id;
# the \b anchors keep "GPL-2" from matching inside "LGPL-2.1".
LICENSE_PATTERNS: list[tuple[str, list[str]]] = [
    *_gnu_license("AGPL", "GNU Affero General Public License", "3"),
    *_gnu_license("LGPL", "GNU Lesser General Public License", "2.1"),
    *_gnu_license("LGPL", "GNU Library General Public License", "2"),
    *_gnu_license("LGPL", "GNU Lesser General Public License", "3"),
    *_gnu_license("GPL", "GNU General Public License", "2"),
    *_gnu_license("GPL", "GNU General Public License", "3"),
    ("Apache-2.0", [
        r"Apache\s+License,?\s+Version\s+2\.0",
        r"\bApache-2\.0",
    ]),
    ("MPL-2.0", [
        r"Mozilla\s+Public\s+License,?\s+(v\.?|version\s+)?2\.0",
        r"\bMPL-2\.0",
    ]),
    ("BSD-3-Clause", [
        r"\bBSD-3-clause",
        r"Neither\s+the\s+name\s+of\s+.{1,120}?\s+nor\s+the\s+names\s+of\s+its\s+contributors",
    ]),
    ("BSD-2-Clause", [
        r"\bBSD-2-clause",
        r"Simplified\s+BSD\s+License",
    ]),
    ("MIT", [
        r"\bMIT\s+License",
        r"\bExpat\s+License",
        r"Permission\s+is\s+hereby\s+granted,\s+free\s+of\s+charge,\s+to\s+any\s+person",
    ]),
    ("ISC", [
        r"\bISC\s+License",
        r"Permission\s+to\s+use,\s+copy,\s+modify,\s+and(/or)?\s+distribute\s+this\s+software\s+for\s+any\s+purpose",
    ]),
    ("Artistic", [
        r"\bArtistic\s+License",
    ]),
    ("Zlib", [
        r"\bzlib\s+License",
        r"This\s+software\s+is\s+provided\s+'as-is',\s+without\s+any\s+express\s+or\s+implied\s+warranty",
    ]),
    ("Unlicense", [
        r"This\s+is\s+free\s+and\s+unencumbered\s+software",
    ]),
    ("public-domain", [
        r"\bpublic\s+domain\b",
    ]),
]

COMPILED_PATTERNS = [
    (license_id, [re.compile(p, re.IGNORECASE | re.DOTALL) for p in patterns])
    for license_id, patterns in LICENSE_PATTERNS
]


def detect_licenses(text: str) -> list[str]:
    """Detect well-known licenses mentioned in text.

    Args:
        text: Copyright or license text to analyze.

    Returns:
        License identifiers in table order, each listed once. A "-only"
        id is dropped when the same version was also found as "-or-later".
    """
    if not text:
        return []

    found: list[str] = []
    for license_id, patterns in COMPILED_PATTERNS:
        # "GPL-2" in a header plus the "or later" notice is still or-later
        if license_id.endswith("-only") and license_id[:-5] + "-or-later" in found:
            continue
        if any(pattern.search(text) for pattern in patterns):
            found.append(license_id)
    return found


class LicenseTextResolver(CopyrightFileResolver):
    """Resolver detecting licenses from phrases in free-form copyright text."""

    @property
    def name(self) -> str:
        return "license-text"

    async def probe(self, package_name: str) -> Probe:
        """Match the copyright file against the known license phrases."""
        validate_package_name(package_name)

        text = await self.read_copyright(package_name)
        if text is None:
            return Probe.not_found()

        licenses = detect_licenses(text)
        if not licenses:
            logger.debug("%s: no known license phrase found", package_name)
            return Probe.not_found()
        return Probe(", ".join(licenses), True)
