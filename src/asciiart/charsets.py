import re

from asciiart.errors import CharsetSyntaxError

ASCII_PRINTABLE = "".join(chr(i) for i in range(32, 127))

ALL_KEYWORD = "all"
SPACE_KEYWORD = "space"

_RANGE = re.compile(r"(.)-(.)", re.DOTALL)


def char_range(a: str, b: str) -> str:
    """All characters between a and b inclusive, in either order."""
    start, end = sorted((ord(a), ord(b)))
    return "".join(chr(i) for i in range(start, end + 1))


def parse_charset(expr: str) -> str:
    """Expand a charset expression: 'all', 'space', a single character or a range like 'a-z'."""
    if expr == ALL_KEYWORD:
        return ASCII_PRINTABLE
    if expr == SPACE_KEYWORD:
        return " "
    if len(expr) == 1:
        return expr
    match = _RANGE.fullmatch(expr)
    if match:
        return char_range(match.group(1), match.group(2))
    raise CharsetSyntaxError(f"Not a charset expression: {expr!r}")
