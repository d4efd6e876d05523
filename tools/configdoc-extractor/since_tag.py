"""
Extraction of the ``@since`` marker from documentation comments.

A documentation comment such as

    Request timeout in ms.
    @since 2.0

documents the version a configuration key was introduced in. The marker must
start a line (leading whitespace allowed, the first line included) and is
followed by the version text up to the end of that line.

When a comment carries the marker more than once, the first captured version
wins but every occurrence is removed from the description text. This mirrors
how the generated documentation has always been produced and is kept as is.
"""

import re
from typing import Optional, Tuple

# Compiled once and shared; the leading newline is consumed together with the marker line.
SINCE_TAG_PATTERN = re.compile(r"(?:\A|\n)\s*@since ([^\n]+)")


def extract_since(text: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Split a documentation comment into its description text and since-version.

    Args:
        text: Raw documentation comment (None is treated as empty)

    Returns:
        (remaining_text, since) where remaining_text has all marker lines
        removed and since is the first captured version, or None. If the
        text holds no marker it is returned unchanged.
    """
    if not text:
        return "", None

    match = SINCE_TAG_PATTERN.search(text)
    if not match:
        return text, None

    since = match.group(1).strip() or None
    return SINCE_TAG_PATTERN.sub("", text), since
