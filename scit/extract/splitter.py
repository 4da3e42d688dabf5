"""
Depth-aware list splitting.

Splits a declaration body on its separators only where bracket nesting is
at zero, so `Map<Address, u64>` or `(u32, u32)` survive as a single item.
"""

import re

OPEN_BRACKETS = frozenset("<(")
CLOSE_BRACKETS = frozenset(">)")
DEFAULT_SEPARATORS = ",\n"

# Line comment, from its marker to the end of the line
_LINE_COMMENT = re.compile(r"//.*$")


def split_top_level(text: str, separators: str = DEFAULT_SEPARATORS) -> list[str]:
    """
    Split `text` on `separators` that sit at bracket depth zero.

    Items are trimmed and empty items dropped, so trailing separators and
    blank lines never produce entries.

    Example:
        >>> split_top_level("a: Map<K, V>, b: u32")
        ['a: Map<K, V>', 'b: u32']
    """
    items: list[str] = []
    current: list[str] = []
    depth = 0

    for char in text:
        if char in OPEN_BRACKETS:
            depth += 1
        elif char in CLOSE_BRACKETS:
            depth -= 1

        if char in separators and depth == 0:
            _push(items, current)
            current = []
        else:
            current.append(char)

    _push(items, current)
    return items


def strip_noise_lines(text: str, attribute_prefix: str = "#[") -> str:
    """
    Remove comments and attribute lines from a declaration body.

    A `//` comment is cut from its marker to the end of the line, so a
    trailing comment after a separator never becomes an item.
    """
    kept = []
    for line in text.split("\n"):
        line = _LINE_COMMENT.sub("", line)
        if attribute_prefix and line.lstrip().startswith(attribute_prefix):
            continue
        kept.append(line)
    return "\n".join(kept)


def _push(items: list[str], chars: list[str]) -> None:
    item = "".join(chars).strip()
    if item:
        items.append(item)
