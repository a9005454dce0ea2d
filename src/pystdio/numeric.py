# Copyright 2025 Dirk Pranke. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Radix-aware integer primitives shared by the output and input engines.

Values are Python ints, but the routines model C's fixed-width unsigned
arithmetic: `top_power()` finds the largest power of a radix that fits
in an unsigned machine word, and the parsers report overflow when the
accumulated value no longer fits in the requested number of bits.
"""

from typing import NamedTuple, Optional, Tuple

# The width of the unsigned word used to compute the top powers.
WORD_BITS = 64

RADIXES = (8, 10, 16)

DIGITS = '0123456789abcdef'


def digit_count(radix: int, value: int) -> int:
    """Returns the number of digits `value` needs in `radix`.

    The result is always at least 1, including for a value of 0.
    """
    p = radix
    cnt = 1
    while value >= p:
        p *= radix
        cnt += 1
    return cnt


def _find_top_power(radix: int, bits: int = WORD_BITS) -> int:
    mask = (1 << bits) - 1
    p = 1
    while True:
        nxt = (p * radix) & mask
        # The multiplication wrapped if dividing back doesn't give p.
        if nxt // radix != p:
            return p
        p = nxt


# The common radixes are filled in at import time.
TOP_POWERS = {radix: _find_top_power(radix) for radix in RADIXES}


def top_power(radix: int) -> int:
    """Returns the largest power of `radix` that fits in a machine word."""
    p = TOP_POWERS.get(radix)
    if p is None:
        p = _find_top_power(radix)
        TOP_POWERS[radix] = p
    return p


def emit_unsigned(
    sink,
    value: int,
    radix: int,
    power: Optional[int] = None,
    uppercase: bool = False,
):
    """Writes the digits of a non-negative `value` to `sink`.

    Digits are produced for each power of the radix from `power` (by
    default, the top power for the radix) down to 1, skipping leading
    zeros; the ones digit is always written, so 0 produces "0". No
    sign, prefix or padding is written.
    """
    if power is None:
        power = top_power(radix)
    if value >= power * radix:
        # Wider than a machine word (only possible for %f's whole part
        # or a caller-chosen bit width above WORD_BITS).
        power = radix ** (digit_count(radix, value) - 1)
    leading = True
    while power:
        d = value // power % radix
        if power == 1 or d != 0 or not leading:
            ch = DIGITS[d]
            sink.put(ch.upper() if uppercase else ch)
            leading = False
        power //= radix


def digit_value(ch: str, radix: int) -> Optional[int]:
    """Returns the value of `ch` as a digit in `radix`, or None."""
    if len(ch) != 1 or not ch.isascii():
        return None
    if ch.isdigit():
        d = ord(ch) - ord('0')
    elif ch.isalpha():
        d = ord(ch.lower()) - ord('a') + 10
    else:
        return None
    if d < radix:
        return d
    return None


def parse_unsigned(
    field, radix: int, bits: int = WORD_BITS
) -> Tuple[int, bool, int]:
    """Reads a run of digits in `radix` from `field`.

    Returns a tuple of (value, overflow, consumed). Reading stops at the
    first character that isn't a digit in the radix, or when the field
    is exhausted. If the value doesn't fit in `bits` bits it wraps
    around and `overflow` is set, but the rest of the digits are still
    consumed.
    """
    mask = (1 << bits) - 1
    value = 0
    overflow = False
    consumed = 0
    while True:
        d = digit_value(field.peek(), radix)
        if d is None:
            break
        field.read()
        consumed += 1
        value = value * radix + d
        if value > mask:
            overflow = True
            value &= mask
    return value, overflow, consumed


class ParsedNumber(NamedTuple):
    value: int
    sign: int
    overflow: bool
    malformed: bool
    consumed: int


def parse_signed_auto(field, base: int, bits: int = WORD_BITS) -> ParsedNumber:
    """Reads an optionally signed integer from `field`.

    Leading whitespace is skipped (and not charged to the field). If
    `base` is 0, the radix is detected from the number itself: a
    leading 0 means octal, and a 0 followed by `x` or `X` means
    hexadecimal; otherwise it is decimal. With an explicit base of 16 a
    `0x`/`0X` prefix is also accepted.

    `value` is the magnitude; the sign is returned separately as +1 or
    -1. `malformed` is set only if there were no digits at all.
    """
    consumed = field.skip_whitespace()
    sign = 1
    ch = field.peek()
    if ch in ('-', '+'):
        if ch == '-':
            sign = -1
        field.read()
        consumed += 1
        ch = field.peek()
    if digit_value(ch, base or 10) is None:
        return ParsedNumber(0, sign, False, True, consumed)

    if base == 0:
        radix = 8 if ch == '0' else 10
    else:
        radix = base
    value, overflow, n = parse_unsigned(field, radix, bits)
    consumed += n
    if value == 0 and base in (0, 16) and field.peek() in ('x', 'X'):
        field.read()
        consumed += 1
        value, overflow, n = parse_unsigned(field, 16, bits)
        consumed += n
    return ParsedNumber(value, sign, overflow, False, consumed)


def unsigned_max(bits: int) -> int:
    return (1 << bits) - 1


def signed_limits(bits: int) -> Tuple[int, int]:
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def to_unsigned(value: int, bits: int) -> int:
    """Converts `value` the way C converts an integer to an unsigned type."""
    return value & unsigned_max(bits)


def to_signed(value: int, bits: int) -> int:
    """Converts `value` to a two's complement signed integer of `bits`."""
    value &= unsigned_max(bits)
    if value >> (bits - 1):
        value -= 1 << bits
    return value
