"""
Text normalization applied to every extraction result.

PDF line reflow in particular leaves trailing spaces before line breaks;
those runs are collapsed into a single newline and the document is trimmed.
Word spacing, casing and non-whitespace characters are never touched.
"""

import re

# Any whitespace run (newlines included) that ends in a line feed.
_BREAK_RE = re.compile(r"\s+\n")


def normalize(raw: str) -> str:
    """
    Normalize extracted text.

    Idempotent: ``normalize(normalize(s)) == normalize(s)`` for any string.

    Args:
        raw: Text as produced by a format handler.

    Returns:
        The canonical form of the text.
    """
    return _BREAK_RE.sub("\n", raw).strip()
