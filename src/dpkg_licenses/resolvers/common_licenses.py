"""Resolver for references to /usr/share/common-licenses.

Free-form Debian copyright files usually point at the system copy of the
license text instead of including it, e.g. "the complete text of the GNU
General Public License version 2 can be found in
/usr/share/common-licenses/GPL-2".
"""

import re

from dpkg_licenses.constants import COMMON_LICENSES_DIR
from dpkg_licenses.models import Probe
from dpkg_licenses.resolvers.base import validate_package_name
from dpkg_licenses.resolvers.copyright import CopyrightFileResolver

COMMON_LICENSE_PATTERN = re.compile(
    re.escape(COMMON_LICENSES_DIR) + r"/([A-Za-z0-9][A-Za-z0-9.+_-]*)"
)


def find_common_licenses(text: str) -> list[str]:
    """Return the distinct common-licenses file names referenced in text.

    Trailing sentence punctuation is dropped ("GPL-2." becomes "GPL-2").
    """
    names: list[str] = []
    for match in COMMON_LICENSE_PATTERN.finditer(text):
        license_name = match.group(1).rstrip(".")
        if license_name and license_name not in names:
            names.append(license_name)
    return names


class CommonLicensesResolver(CopyrightFileResolver):
    """Resolver reporting licenses referenced under /usr/share/common-licenses."""

    @property
    def name(self) -> str:
        return "common-licenses"

    async def probe(self, package_name: str) -> Probe:
        validate_package_name(package_name)

        text = await self.read_copyright(package_name)
        if text is None:
            return Probe.not_found()

        names = find_common_licenses(text)
        if not names:
            return Probe.not_found()
        return Probe(", ".join(names), True)
