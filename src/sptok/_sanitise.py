"""
Utilities for rendering vocabulary pieces as displayable strings.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cn etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)


def render_piece(piece: str) -> str:
    """
    Escape control characters in a piece so it fits on one line.

    The word-boundary marker is kept as is; it is printable.
    """
    return _escape_ctrl_chars(piece)
