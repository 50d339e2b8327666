"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest

DEP5_MIT = """\
Format: https://www.debian.org/doc/packaging-manuals/copyright-format/1.0/
Upstream-Name: foo
Source: https://example.org/foo

Files: *
Copyright: 2020 Foo Authors
License: MIT

License: MIT
 Permission is hereby granted, free of charge, to any person obtaining a
 copy of this software and associated documentation files.
"""

FREEFORM_GPL2 = """\
This package was debianized by Jane Doe <jane@example.org>.

Copyright (C) 2001-2010 Bar Developers

On Debian systems, the complete text of the GNU General Public License
version 2 can be found in `/usr/share/common-licenses/GPL-2'.
"""

FREEFORM_EXPAT = """\
Copyright (c) 2015 Baz Authors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction.
"""

STATUS_FILE = """\
Package: foo
Status: install ok installed
Architecture: amd64
Version: 1.0-1
Description: foo utilities
 Long description of foo.

Package: bar
Status: hold ok installed
Architecture: all
Version: 2.3-4
Description: bar library

Package: oldpkg
Status: deinstall ok config-files
Architecture: amd64
Version: 0.9
Description: removed package

Package: baz
Status: install ok installed
Architecture: amd64
Version: 0.1
Description: baz tool

Package: qux
Status: install ok installed
Architecture: arm64
Version: 5
Description: qux without copyright
"""


@pytest.fixture
def doc_root(tmp_path: Path) -> Path:
    """Return an empty documentation root."""
    root = tmp_path / "doc"
    root.mkdir()
    return root


@pytest.fixture
def write_copyright(doc_root: Path) -> Callable[[str, str], Path]:
    """Return a helper writing ``<doc_root>/<package>/copyright``."""

    def _write(package: str, text: str) -> Path:
        path = doc_root / package / "copyright"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def populated_doc_root(doc_root: Path, write_copyright) -> Path:
    """Return a documentation root covering each built-in strategy.

    - foo: machine-readable copyright (dep5)
    - bar: free-form with a common-licenses reference
    - baz: free-form with the Expat permission notice (license-text)
    - qux: no copyright file
    """
    write_copyright("foo", DEP5_MIT)
    write_copyright("bar", FREEFORM_GPL2)
    write_copyright("baz", FREEFORM_EXPAT)
    return doc_root


@pytest.fixture
def status_file(tmp_path: Path) -> Path:
    """Return a dpkg status file with four installed packages and one removed."""
    path = tmp_path / "status"
    path.write_text(STATUS_FILE, encoding="utf-8")
    return path
