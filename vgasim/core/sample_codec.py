"""
Sample codec -- turns raw simulation values into channel bytes and logic levels.

The hosting simulation hands over whatever is on a wire: a Python ``int``,
a ``bool``, a numpy integer or bool, a VCD-style bit string such as
``"0110x001"``, or ``None`` while the net is still undefined.  Nothing here
raises; every input resolves to a defined value.

=============  ==============  ============
raw            to_channel      to_level
=============  ==============  ============
None           0               False
-5             0               False
128            128             False
300            255             False
1 / True       1               True
"1010"         10              False
"10x0"         0               False
"1"            1               True
=============  ==============  ============
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Optional

import numpy as np

CHANNEL_MAX: int = 0xFF

# Digits that mark a bit string as not fully determined.
_UNDEFINED_DIGITS = frozenset("xXzZuUwW-")


def _parse_bits(raw: str) -> Optional[int]:
    """Parse a binary digit string, or ``None`` if any bit is undefined."""
    bits = raw.strip()
    if bits.startswith(("b", "B")):
        bits = bits[1:]
    if not bits or any(ch in _UNDEFINED_DIGITS for ch in bits):
        return None
    try:
        return int(bits, 2)
    except ValueError:
        return None


def to_magnitude(raw: Any) -> Optional[int]:
    """Return the integer carried by *raw*, or ``None`` when undefined."""
    if raw is None:
        return None
    if isinstance(raw, str):
        return _parse_bits(raw)
    # numpy bools are not registered as numbers.Integral.
    if isinstance(raw, (numbers.Integral, np.bool_)):
        return int(raw)
    if isinstance(raw, numbers.Real):
        if not math.isfinite(raw):
            return None
        return int(raw)
    return None


def to_channel(raw: Any) -> int:
    """Clamp a raw colour value into ``0..255``.

    Undefined values and values that are not fully determined yield 0.
    """
    n = to_magnitude(raw)
    if n is None or n < 0:
        return 0
    if n > CHANNEL_MAX:
        return CHANNEL_MAX
    return n


def to_level(raw: Any) -> bool:
    """Interpret a single-bit line.  Only a defined logic one is high."""
    return to_magnitude(raw) == 1


def pack_rgb(red: int, green: int, blue: int) -> int:
    """Pack three channel bytes into a 24-bit ``0xRRGGBB`` value."""
    return ((red & 0xFF) << 16) | ((green & 0xFF) << 8) | (blue & 0xFF)


def unpack_rgb(value: int) -> tuple[int, int, int]:
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
