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

"""The input engine: extracts values from text under control of a format
string.

`Scanner.scan()` walks the format string, matching whitespace and
ordinary characters against the source and, for each `%` directive,
reading a field and storing its value into the next `Ref` argument
(unless the directive is suppressed with `*`). The supported conversions
are:

    d        signed decimal
    i        signed integer, radix detected from a 0 or 0x prefix
    u        unsigned decimal
    o        unsigned octal
    x, X, p  unsigned hexadecimal (an optional 0x prefix is skipped)
    c        exactly `width` characters (1 by default), no skipping
    s        a run of non-whitespace characters
    [...]    a run of characters in (or, with ^, not in) a scan set
    n        store the number of characters consumed so far
    %        a literal '%'

Scanning stops at the first directive or character that fails to match;
the return value is the number of values assigned, or EOF if the input
ran out before the first conversion.
"""

import logging
from typing import Any, Callable, Optional, Sequence, Union

from pystdio import numeric
from pystdio.args import Arguments, Ref
from pystdio.directive import (
    UNSUPPORTED_CONVERSIONS,
    Directive,
    parse_scan_directive,
)
from pystdio.errors import UnsupportedFormatError
from pystdio.options import FormatOptions
from pystdio.streams import EOF, Field, Source, isspace, skip_whitespace


logger = logging.getLogger(__name__)

_UNSIGNED_RADIXES = {'u': 10, 'o': 8, 'x': 16, 'X': 16, 'p': 16}


class Scanner:
    def __init__(self, source: Source, options: Optional[FormatOptions] = None):
        self.source = source
        self.options = options or FormatOptions()
        self.assigned = 0
        self.converted = 0
        self.start_count = source.count

    def scan(self, fmt: str, args: Union[Arguments, Sequence[Any]] = ()) -> int:
        """Reads values described by `fmt` into the `Ref`s in `args`.

        Returns the number of values assigned (suppressed fields, `%n`
        and `%%` don't count), or EOF if the input was exhausted before
        any conversion completed.
        """
        if not isinstance(args, Arguments):
            args = Arguments(args, fmt)
        self.assigned = 0
        self.converted = 0
        self.start_count = self.source.count
        source = self.source
        i = 0
        end = len(fmt)
        while i < end:
            ch = fmt[i]
            if ch == '%':
                d = parse_scan_directive(fmt, i)
                i = d.end
                if not self._scan_directive(fmt, d, args):
                    return self._stop(fmt, d.start)
            elif isspace(ch):
                skip_whitespace(source)
                i += 1
            else:
                if source.peek() != ch:
                    return self._stop(fmt, i)
                source.read()
                i += 1
        return self.assigned

    def _stop(self, fmt: str, pos: int) -> int:
        if self.converted == 0 and self.source.at_end():
            logger.debug('input exhausted at offset %d of %r', pos, fmt)
            return EOF
        logger.debug(
            'scan of %r stopped at offset %d after %d assignments',
            fmt,
            pos,
            self.assigned,
        )
        return self.assigned

    def _scan_directive(self, fmt: str, d: Directive, args: Arguments) -> bool:
        conv = d.conversion
        if conv in ('d', 'i'):
            return self._scan_signed(d, args, 10 if conv == 'd' else 0)
        if conv in _UNSIGNED_RADIXES:
            return self._scan_unsigned(d, args, _UNSIGNED_RADIXES[conv])
        if conv == 'c':
            return self._scan_chars(d, args)
        if conv == 's':
            return self._scan_string(d, args)
        if conv == '[':
            return self._scan_set(d, args)
        if conv == 'n':
            if not d.suppress:
                ref = args.next_ref(conv)
                ref.set_int(self.source.count - self.start_count)
            return True
        if conv == '%':
            skip_whitespace(self.source)
            if self.source.peek() != '%':
                return False
            self.source.read()
            return True
        if conv == 'f' or conv in UNSUPPORTED_CONVERSIONS:
            logger.debug('unsupported conversion %%%s in %r', conv, fmt)
            raise UnsupportedFormatError(conv, fmt)

        # No conversion; whatever follows is matched as ordinary text.
        return True

    def _scan_signed(self, d: Directive, args: Arguments, base: int) -> bool:
        bits = self.options.bits(d.length)
        num = numeric.parse_signed_auto(Field(self.source, d.width), base, bits)
        if num.malformed:
            return False
        lo, hi = numeric.signed_limits(bits)
        value = num.value * num.sign
        overflow = num.overflow or not lo <= value <= hi
        if overflow:
            value = hi if num.sign > 0 else lo
            logger.debug('signed overflow, saturated to %d', value)
        self._assign(d, args, lambda ref: ref.set_int(value, overflow))
        return True

    def _scan_unsigned(self, d: Directive, args: Arguments, radix: int) -> bool:
        bits = self.options.bits(d.length)
        num = numeric.parse_signed_auto(
            Field(self.source, d.width), radix, bits
        )
        if num.malformed:
            return False
        if num.overflow:
            value = numeric.unsigned_max(bits)
            logger.debug('unsigned overflow, saturated to %d', value)
        else:
            value = numeric.to_unsigned(num.value * num.sign, bits)
        self._assign(d, args, lambda ref: ref.set_int(value, num.overflow))
        return True

    def _scan_chars(self, d: Directive, args: Arguments) -> bool:
        n = 1 if d.width is None else d.width
        chars = []
        for _ in range(n):
            ch = self.source.read()
            if ch == '':
                return False
            chars.append(ch)
        text = ''.join(chars)
        self._assign(d, args, lambda ref: ref.set_text(text, terminated=False))
        return True

    def _scan_string(self, d: Directive, args: Arguments) -> bool:
        skip_whitespace(self.source)
        field = Field(self.source, d.width)
        chars = []
        while field.peek() != '' and not isspace(field.peek()):
            chars.append(field.read())
        if not chars:
            return False
        text = ''.join(chars)
        self._assign(d, args, lambda ref: ref.set_text(text))
        return True

    def _scan_set(self, d: Directive, args: Arguments) -> bool:
        field = Field(self.source, d.width)
        chars = []
        while field.peek() in d.scanset:
            chars.append(field.read())
        if not chars:
            return False
        text = ''.join(chars)
        self._assign(d, args, lambda ref: ref.set_text(text))
        return True

    def _assign(
        self, d: Directive, args: Arguments, store: Callable[[Ref], None]
    ):
        self.converted += 1
        if d.suppress:
            return
        store(args.next_ref(d.conversion))
        self.assigned += 1
