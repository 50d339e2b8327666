"""License text normalization.

Strategies return license text in whatever shape their source has it:
multi-line DEP-5 fields, plugin output with trailing newlines, stray tabs.
The chain collapses that into a single trimmed line before deciding
whether a strategy actually found something.
"""

from typing import Optional


def normalize(raw_text: Optional[str]) -> str:
    """Collapse raw license text into a single canonical line.

    Every run of whitespace, newlines included, becomes one ASCII space and
    leading/trailing whitespace is removed.

    Args:
        raw_text: License text as returned by a strategy. None is accepted
            and treated like an empty string.

    Returns:
        The canonical single-line form. An empty string means the input
        carried no license information.

    Example:
        >>> normalize("  GPL-2+\\n  and\\tMIT\\n")
        'GPL-2+ and MIT'
    """
    if not raw_text:
        return ""
    return " ".join(raw_text.split())
