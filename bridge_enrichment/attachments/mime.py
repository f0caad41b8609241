"""MIME type pattern matching."""

from __future__ import annotations


def normalize_mime_type(mime_type: str) -> str:
    """Lower-case *mime_type* and drop any parameters (``; charset=...``)."""
    return mime_type.split(";", 1)[0].strip().lower()


def mime_type_matches(mime_type: str, pattern: str) -> bool:
    """Check *mime_type* against an exact or wildcard *pattern*.

    ``image/*`` matches ``image/jpeg`` and ``image/png`` but not
    ``images/jpeg``.

    >>> mime_type_matches("image/jpeg", "image/*")
    True
    >>> mime_type_matches("video/mp4", "video/quicktime")
    False
    """
    mime_type = normalize_mime_type(mime_type)
    pattern = pattern.strip().lower()

    if pattern == mime_type:
        return True

    if pattern.endswith("/*"):
        return mime_type.startswith(pattern[:-1])

    return False
