"""Safe navigation through untyped ORCID JSON documents."""

from collections.abc import Mapping, Sequence
from typing import Any


def dig(document: Any, *path: str | int) -> Any:
    """Follow a path of keys and indices into a JSON-like tree.

    String segments index mappings, integer segments index sequences.
    Returns None as soon as a segment is missing or the value at that
    point has the wrong type, so callers never need nested presence checks.

    Args:
        document: Parsed JSON value (dict, list or scalar)
        *path: Keys and indices to follow, outermost first

    Returns:
        The value at the end of the path, or None

    Example:
        >>> dig({"emails": {"email": [{"email": "a@b.org"}]}}, "emails", "email", 0, "email")
        'a@b.org'
    """
    current = document
    for segment in path:
        if current is None:
            return None

        if isinstance(segment, int):
            # Strings are sequences too, but never a JSON array
            if isinstance(current, (str, bytes)) or not isinstance(current, Sequence):
                return None
            if not -len(current) <= segment < len(current):
                return None
            current = current[segment]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(segment)

    return current
