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

"""Parsing of `%` directives in format strings.

An output directive has the form

    %[flags][width][.precision][length]conversion

and an input directive has the form

    %[*][width][length]conversion

where a width or precision of `*` is taken from the argument list (output
only). Directives are parsed one at a time, as the engines walk the format
string; a `Directive` records everything that was parsed along with the
span of the format string it came from.

If the character after the flags, width, precision and length isn't a
known conversion, the directive ends just before it (and has an empty
`conversion`), so that the engines go on to treat that character as
ordinary text.
"""

import dataclasses
from typing import Optional, Tuple, Union

from pystdio.errors import FormatParseError, UnsupportedFormatError


STAR = '*'

FLAG_CHARS = '-+ 0#'

LENGTH_CHARS = 'hlL'

INTEGER_CONVERSIONS = ('d', 'i', 'o', 'u', 'x', 'X', 'p')

UNSUPPORTED_CONVERSIONS = ('e', 'E', 'g', 'G')

PRINT_CONVERSIONS = INTEGER_CONVERSIONS + (
    'c',
    's',
    'f',
    'n',
    '%',
) + UNSUPPORTED_CONVERSIONS

SCAN_CONVERSIONS = INTEGER_CONVERSIONS + (
    'c',
    's',
    '[',
    'n',
    '%',
    'f',
) + UNSUPPORTED_CONVERSIONS


@dataclasses.dataclass
class Flags:
    left: bool = False  # '-'
    sign: bool = False  # '+'
    space: bool = False  # ' '
    zero: bool = False  # '0'
    alt: bool = False  # '#'


class ScanSet:
    """The set of characters matched by a `%[...]` directive.

    Membership is kept in a 256-entry table, one entry per possible
    byte; characters above U+00FF are never members. If `negated` is
    true (`%[^...]`), the set matches every character that isn't a
    member.
    """

    def __init__(self, negated: bool = False):
        self.table = bytearray(256)
        self.negated = negated

    def __contains__(self, ch: str) -> bool:
        if ch == '':
            return False
        o = ord(ch)
        member = o < 256 and self.table[o] == 1
        return member != self.negated

    def __repr__(self):
        neg = '^' if self.negated else ''
        return f'ScanSet({neg + self.members()!r})'

    def add(self, ch: str):
        if ord(ch) < 256:
            self.table[ord(ch)] = 1

    def add_range(self, lo: str, hi: str):
        for x in range(ord(lo), min(ord(hi), 255) + 1):
            self.table[x] = 1

    def members(self) -> str:
        return ''.join(chr(x) for x in range(256) if self.table[x])

    @classmethod
    def parse(cls, fmt: str, pos: int) -> Tuple['ScanSet', int]:
        """Parses the scan set that starts just after the `[` at `pos - 1`.

        Returns the set and the offset just past the closing `]`. A `]`
        right after the `[` (or `[^`) is a member rather than the end of
        the set. A `-` between two characters denotes the range between
        them; at the start or end of the set it is an ordinary member.
        """
        start = pos - 1
        i = pos
        ss = cls(negated=fmt[i : i + 1] == '^')
        if ss.negated:
            i += 1
        if fmt[i : i + 1] == ']':
            ss.add(']')
            i += 1
        last = None
        while True:
            if i >= len(fmt):
                raise FormatParseError(fmt, start, 'Unterminated scan set')
            ch = fmt[i]
            if ch == ']':
                return ss, i + 1
            if (
                ch == '-'
                and last is not None
                and i + 1 < len(fmt)
                and fmt[i + 1] != ']'
            ):
                ss.add_range(last, fmt[i + 1])
                last = None
                i += 2
            else:
                ss.add(ch)
                last = ch
                i += 1


@dataclasses.dataclass
class Directive:
    start: int  # offset of the '%'
    end: int  # offset just past the directive
    flags: Flags = dataclasses.field(default_factory=Flags)
    width: Union[int, str, None] = None
    precision: Union[int, str, None] = None
    length: str = ''
    conversion: str = ''
    suppress: bool = False
    scanset: Optional[ScanSet] = None


def _parse_count(fmt: str, i: int) -> Tuple[Union[int, str, None], int]:
    if i < len(fmt) and fmt[i] == STAR:
        return STAR, i + 1
    j = i
    while j < len(fmt) and '0' <= fmt[j] <= '9':
        j += 1
    if j == i:
        return None, i
    return int(fmt[i:j]), j


def parse_print_directive(fmt: str, pos: int) -> Directive:
    """Parses the output directive whose `%` is at `fmt[pos]`."""
    d = Directive(pos, pos)
    flags = d.flags
    i = pos + 1
    while i < len(fmt) and fmt[i] in FLAG_CHARS:
        ch = fmt[i]
        if ch == '-':
            flags.left = True
        elif ch == '+':
            flags.sign = True
        elif ch == ' ':
            flags.space = True
        elif ch == '0':
            flags.zero = True
        else:
            flags.alt = True
        i += 1

    # ISO C9899: '-' overrides '0', and '+' overrides ' '.
    if flags.left:
        flags.zero = False
    if flags.sign:
        flags.space = False

    d.width, i = _parse_count(fmt, i)
    if i < len(fmt) and fmt[i] == '.':
        d.precision, i = _parse_count(fmt, i + 1)
        if d.precision is None:
            d.precision = 0
    if i < len(fmt) and fmt[i] in LENGTH_CHARS:
        d.length = fmt[i]
        i += 1
    if i < len(fmt) and fmt[i] in PRINT_CONVERSIONS:
        d.conversion = fmt[i]
        i += 1
    d.end = i
    return d


def parse_scan_directive(fmt: str, pos: int) -> Directive:
    """Parses the input directive whose `%` is at `fmt[pos]`."""
    d = Directive(pos, pos)
    i = pos + 1
    if i < len(fmt) and fmt[i] == STAR:
        d.suppress = True
        i += 1
    j = i
    while j < len(fmt) and '0' <= fmt[j] <= '9':
        j += 1
    if j > i:
        d.width = int(fmt[i:j])
        i = j
    if i < len(fmt) and fmt[i] in LENGTH_CHARS:
        d.length = fmt[i]
        i += 1
    if i < len(fmt) and fmt[i] in SCAN_CONVERSIONS:
        d.conversion = fmt[i]
        i += 1
        if d.conversion == '[':
            d.scanset, i = ScanSet.parse(fmt, i)
    d.end = i
    return d


def iter_directives(fmt: str, scan: bool = False):
    """Yields each directive in `fmt`, in order."""
    parse = parse_scan_directive if scan else parse_print_directive
    i = fmt.find('%')
    while i != -1:
        d = parse(fmt, i)
        yield d
        i = fmt.find('%', d.end)


def argument_kinds(fmt: str, scan: bool = False) -> list[str]:
    """Returns the kinds of the arguments that `fmt` will consume, in order.

    The kinds are 'int', 'uint', 'char', 'str', 'double' and 'ref'.
    """
    kinds = []
    for d in iter_directives(fmt, scan):
        conv = d.conversion
        if conv in UNSUPPORTED_CONVERSIONS or (scan and conv == 'f'):
            raise UnsupportedFormatError(conv, fmt)
        if scan:
            if conv not in ('', '%') and not d.suppress:
                kinds.append('ref')
            continue
        if d.width == STAR:
            kinds.append('int')
        if d.precision == STAR:
            kinds.append('int')
        if conv in ('d', 'i'):
            kinds.append('int')
        elif conv in INTEGER_CONVERSIONS:
            kinds.append('uint')
        elif conv == 'c':
            kinds.append('char')
        elif conv == 's':
            kinds.append('str')
        elif conv == 'f':
            kinds.append('double')
        elif conv == 'n':
            kinds.append('ref')
    return kinds
