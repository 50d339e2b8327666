"""Minimal parser for deb822 control-style text.

Both dpkg status databases and machine-readable copyright files are
sequences of RFC 822-like paragraphs separated by blank lines.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


def parse_paragraphs(text: str) -> list[dict[str, str]]:
    """Split deb822 text into paragraphs of fields.

    Field names are lowercased. Continuation lines are joined to their
    field value with newlines, so the first line of a value is always the
    field's short form (e.g. the short license name or package summary).
    Lines starting with "#" are comments and ignored.

    Args:
        text: Raw file contents.

    Returns:
        List of paragraphs, each mapping field name to value.
    """
    paragraphs: list[dict[str, str]] = []
    current: dict[str, str] = {}
    key: Optional[str] = None

    for line in text.splitlines():
        if not line.strip():
            if current:
                paragraphs.append(current)
            current = {}
            key = None
            continue

        if line.startswith("#"):
            continue

        if line[0] in " \t":
            if key is not None:
                current[key] += "\n" + line.strip()
            continue

        field_name, sep, value = line.partition(":")
        if not sep:
            logger.debug("Skipping malformed deb822 line: %s", line)
            key = None
            continue
        key = field_name.strip().lower()
        current[key] = value.strip()

    if current:
        paragraphs.append(current)

    return paragraphs
