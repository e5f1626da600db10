"""Byte/character conversion used by the `.` and `,` instructions.

The tape holds raw bytes while the terminal speaks text, so every byte is
rendered through a fixed 256-entry table laid out like ISO-8859-1. Control
codes (0x00-0x1F and 0x7F-0x9F) have no glyph and are shown as a blank.
"""

from __future__ import annotations

from typing import Dict, Tuple


def _build_table() -> Tuple[str, ...]:
    chars = []
    for b in range(256):
        if b < 0x20 or 0x7F <= b <= 0x9F:
            chars.append(' ')
        else:
            chars.append(bytes([b]).decode('latin-1'))
    return tuple(chars)


CHAR_TABLE: Tuple[str, ...] = _build_table()

# Glyph ranges are registered before the control rows, so the shared
# blank maps back to 0x20 rather than to a control code.
_BYTE_FOR_CHAR: Dict[str, int] = {}
for _b in [*range(0x20, 0x7F), *range(0xA0, 0x100), *range(0x00, 0x20), *range(0x7F, 0xA0)]:
    _BYTE_FOR_CHAR.setdefault(CHAR_TABLE[_b], _b)
del _b


def to_char(b: int) -> str:
    """Return the character shown for byte value `b`."""
    return CHAR_TABLE[b & 0xFF]


def from_char(c: str) -> int:
    """Return the byte value for character `c`, or 0 if it has none."""
    return _BYTE_FOR_CHAR.get(c, 0)
