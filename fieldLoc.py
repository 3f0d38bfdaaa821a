"""
fieldLoc.py

This module finds the numeric counter field inside a profile record.

All lookups are pure functions over the record text. A hit is returned as a
NumField holding the half-open span of the number's text and its value; a
miss is returned as None.
"""

from dataclasses import dataclass
from typing import Optional

from tagTypes import COUNTER_LABELS

DIGITS = "0123456789"
SIGNS = "+-"


@dataclass(frozen=True)
class NumField:
    start: int
    end: int  # exclusive
    value: int


def _is_digit(text: str, ix: int) -> bool:
    # str.isdigit() would also take superscripts like '²'
    return ix < len(text) and text[ix] in DIGITS


def find_first_number(text: str, from_index: int = 0) -> Optional[NumField]:
    """
    Find the first integer at or after from_index.

    A number starts at an ASCII digit, or at a '+' or '-' directly followed by
    one. The sign is kept in the span and applied to the value.

    Args:
        text: Record text to scan.
        from_index: Where to start; negative values scan from 0.

    Returns:
        NumField for the first match, or None.
    """
    for i in range(max(from_index, 0), len(text)):
        ch = text[i]
        has_sign = ch in SIGNS
        if not (_is_digit(text, i) or (has_sign and _is_digit(text, i + 1))):
            continue

        j = i + 1 if has_sign else i
        value = 0
        while _is_digit(text, j):
            value = value * 10 + (ord(text[j]) - ord('0'))
            j += 1
        return NumField(i, j, -value if ch == '-' else value)

    return None


def find_labeled_number(text: str, label: str) -> Optional[NumField]:
    """
    Find the number that belongs to `label`.

    The scan starts after the first ':' at or after the label, or right after
    the label if no colon follows it. A missing label is a miss.
    """
    label_ix = text.find(label)
    if label_ix < 0:
        return None

    colon_ix = text.find(':', label_ix)
    start = colon_ix + 1 if colon_ix >= 0 else label_ix + len(label)
    return find_first_number(text, start)


def locate_counter_field(text: str) -> Optional[NumField]:
    """Try each counter label in priority order, then the first bare number."""
    for label in COUNTER_LABELS:
        field = find_labeled_number(text, label)
        if field is not None:
            return field
    return find_first_number(text, 0)
