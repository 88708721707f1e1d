"""
Utilities for converting token symbols to displayable strings.
"""

import regex as re

# control, format, surrogate, private use and unassigned code points
_INVISIBLE = re.compile(r"\p{C}")


def render_symbol(s: str) -> str:
    """
    Replace all Unicode "other" category characters with their escape sequences.

    Merged symbols frequently contain newlines or tabs; escaping them keeps a
    token on a single display line.
    """
    return _INVISIBLE.sub(lambda m: f"\\u{ord(m.group(0)):04x}", s)
