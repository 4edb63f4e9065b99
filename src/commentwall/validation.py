"""Comment text allow-list.

Only ASCII letters, ASCII digits and whitespace are accepted. The empty
string is accepted too.
"""

import re

COMMENT_PATTERN = re.compile(r"[a-zA-Z0-9\s]*")


def validate(text: str) -> bool:
    """True if *text* consists solely of allowed characters."""
    return COMMENT_PATTERN.fullmatch(text) is not None
