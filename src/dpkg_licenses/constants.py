"""Constants and defaults for dpkg-licenses."""

from pathlib import Path

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1

# License values that are not produced by any strategy
UNKNOWN_LICENSE = "unknown"
ERROR_LICENSE = "unknown-error"

# Filesystem locations used by the built-in strategies and scanners
DEFAULT_DOC_ROOT = Path("/usr/share/doc")
DEFAULT_STATUS_FILE = Path("/var/lib/dpkg/status")
COMMON_LICENSES_DIR = "/usr/share/common-licenses"

# Resolution limits
DEFAULT_JOBS = 8
DEFAULT_PROBE_TIMEOUT = 30.0

# dpkg current-state letters counted as "installed family" (dpkg -l column 2)
INSTALLED_STATES = frozenset("iufhwt")
