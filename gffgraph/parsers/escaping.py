"""
URL-style percent escapes used throughout GFF3 columns.

GFF3 escapes reserved characters (";=&,", tab, newline and other control
characters) as a percent sign followed by two hexadecimal digits. Each escape
stands for exactly one character.
"""

import logging
import string
from typing import Tuple

_HEX_DIGITS = frozenset(string.hexdigits)

# Characters that may not appear literally inside a GFF3 column or attribute.
_RESERVED = frozenset(";=&,%\t\n\r")


def percent_decode_checked(value: str) -> Tuple[str, bool]:
    """
    Decode every well-formed %XX escape in value.

    Args:
        value: Raw column or attribute text

    Returns:
        Tuple of (decoded text, complete). complete is False when a percent sign
        had fewer than two characters after it; the decoded text then stops right
        before that percent sign.
    """
    if not value or '%' not in value:
        return value, True

    pieces = []
    next_pos = 0
    length = len(value)
    while True:
        pos = value.find('%', next_pos)
        if pos == -1:
            break
        pieces.append(value[next_pos:pos])
        if length - pos - 1 < 2:
            return ''.join(pieces), False

        hex_part = value[pos + 1:pos + 3]
        if hex_part[0] in _HEX_DIGITS and hex_part[1] in _HEX_DIGITS:
            pieces.append(chr(int(hex_part, 16)))
            next_pos = pos + 3
        else:
            # Not an escape; keep the percent sign as-is.
            pieces.append('%')
            next_pos = pos + 1

    pieces.append(value[next_pos:])
    return ''.join(pieces), True


def percent_decode(value: str) -> str:
    """Decode %XX escapes, logging a warning if the value ends in a truncated escape."""
    decoded, complete = percent_decode_checked(value)
    if not complete:
        logging.warning(f"Value {value!r} has a percent escape past the end of the string; truncated to {decoded!r}")
    return decoded


def percent_encode(value: str) -> str:
    """Escape the characters GFF3 reserves, so that percent_decode gives value back."""
    if not value:
        return value
    return ''.join(
        f"%{ord(ch):02X}" if ch in _RESERVED or ord(ch) < 0x20 or ord(ch) == 0x7F else ch
        for ch in value
    )
