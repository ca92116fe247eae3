"""Helpers for hiding sensitive values in output."""

from __future__ import annotations


def desensitize(s: str) -> str:
    """Show the first four characters of ``s`` and mask the rest.

    An empty string becomes ``"<empty>"``; strings of up to four characters
    are returned unchanged.
    """
    if not s:
        return "<empty>"
    if len(s) <= 4:
        return s
    return f"{s[:4]}***"