"""
Mustache-style placeholder substitution

Replaces {{key}} placeholders in a section's program before it is handed
to the evaluator. Only the program that gets executed is templated; the
program text written back into the document keeps its placeholders.

Scanning is a two-cursor walk: find the next "{{", then the first "}}"
after it. That is the shortest-match rule, and a placeholder may span
lines. An unterminated "{{" is left untouched.

Example:
    >>> substitute("v{{version}}!", lambda key: "1.2.3")
    'v1.2.3!'
"""

from typing import Callable, List, Optional, Tuple

PLACEHOLDER_OPEN = "{{"
PLACEHOLDER_CLOSE = "}}"

KeyLookup = Callable[[str], str]


def placeholder_findNext(text: str, start: int) -> Optional[Tuple[int, int, str]]:
    """
    Find the next complete placeholder at or after start

    Args:
        text: Text to scan
        start: Offset to begin scanning from

    Returns:
        (begin, end, key) where text[begin:end] == "{{" + key + "}}",
        or None if no complete placeholder remains
    """
    begin = text.find(PLACEHOLDER_OPEN, start)
    if begin == -1:
        return None
    key_start = begin + len(PLACEHOLDER_OPEN)
    key_end = text.find(PLACEHOLDER_CLOSE, key_start)
    if key_end == -1:
        return None
    return begin, key_end + len(PLACEHOLDER_CLOSE), text[key_start:key_end]


def placeholders_find(text: str) -> List[str]:
    """
    List every placeholder key in text, in order of appearance

    Example:
        >>> placeholders_find("{{a}} and {{b}} and {{a}}")
        ['a', 'b', 'a']
    """
    keys = []
    pos = 0
    while True:
        found = placeholder_findNext(text, pos)
        if found is None:
            return keys
        _, pos, key = found
        keys.append(key)


def substitute(text: str, resolve: KeyLookup) -> str:
    """
    Replace each {{key}} in text with resolve(key)

    Args:
        text: Program text possibly containing placeholders
        resolve: Total lookup from key to replacement text

    Returns:
        text with every complete placeholder replaced; everything else
        copied verbatim
    """
    parts = []
    pos = 0
    while True:
        found = placeholder_findNext(text, pos)
        if found is None:
            break
        begin, end, key = found
        parts.append(text[pos:begin])
        parts.append(resolve(key))
        pos = end
    parts.append(text[pos:])
    return ''.join(parts)
