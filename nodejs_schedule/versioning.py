"""Chronological ordering of Node.js release line identifiers.

Release lines are named by their significant version number ("0.8", "0.12",
"4", ...). A plain string sort would put "0.12" before "0.8" and "10" before
"4", so identifiers are compared as dotted numeric versions instead.
"""

from semantic_version import Version


def version_sort_key(version: str) -> Version:
    """
    Build a sortable key for a significant version number.

    Args:
        version: Identifier such as "4" or "0.12" (a leading "v" is tolerated)

    Returns:
        semantic_version.Version padded to three components (e.g. "0.12" -> 0.12.0)

    Raises:
        ValueError: If the identifier is not a dotted numeric version
    """
    return Version.coerce(version.removeprefix("v"))


def compare_versions(a: str, b: str) -> int:
    """Return a negative, zero or positive number as ``a`` sorts before, with, or after ``b``."""
    key_a, key_b = version_sort_key(a), version_sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0
