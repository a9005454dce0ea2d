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

"""The output engine: converts arguments to text under control of a
format string.

`Printer.format()` copies ordinary characters from the format string to
the sink and, for each `%` directive, pulls the argument(s) the directive
needs and writes their converted form. The supported conversions are:

    d, i     signed decimal
    u        unsigned decimal
    o        unsigned octal
    x, X     unsigned hexadecimal, lower or upper case
    p        pointer (hexadecimal, always in alternate form)
    c        character
    s        string (None prints as "(null)")
    f        fixed-point decimal, truncated to the precision
    n        store the number of characters written so far
    %        a literal '%'

The exponential and general floating point conversions (e, E, g, G) are
not implemented and raise `UnsupportedFormatError`.
"""

import dataclasses
from fractions import Fraction
import logging
import math
from typing import Any, Optional, Sequence, Union

from pystdio import numeric
from pystdio.args import Arguments
from pystdio.directive import (
    INTEGER_CONVERSIONS,
    STAR,
    UNSUPPORTED_CONVERSIONS,
    Directive,
    Flags,
    parse_print_directive,
)
from pystdio.errors import FormatError, UnsupportedFormatError
from pystdio.options import FormatOptions
from pystdio.streams import Sink


logger = logging.getLogger(__name__)

NULL_TEXT = '(null)'


class Printer:
    def __init__(self, sink: Sink, options: Optional[FormatOptions] = None):
        self.sink = sink
        self.options = options or FormatOptions()

    def format(
        self, fmt: str, args: Union[Arguments, Sequence[Any]] = ()
    ) -> int:
        """Writes `args` formatted by `fmt` to the sink.

        Returns the number of characters written (not counting the NUL
        that terminates buffer output).
        If a directive fails, the output written so far is terminated
        before the error is raised.
        """
        if not isinstance(args, Arguments):
            args = Arguments(args, fmt)
        i = 0
        end = len(fmt)
        try:
            while i < end:
                if fmt[i] != '%':
                    self.sink.put(fmt[i])
                    i += 1
                    continue
                d = parse_print_directive(fmt, i)
                self._format_directive(fmt, d, args)
                i = d.end
        except FormatError:
            self.sink.abort()
            raise
        self.sink.finish()
        return self.sink.count

    def _format_directive(self, fmt: str, d: Directive, args: Arguments):
        flags = dataclasses.replace(d.flags)
        width = d.width
        if width == STAR:
            width = args.next_int('*')
            if width < 0:
                flags.left = True
                flags.zero = False
                width = -width
        width = width or 0
        precision = d.precision
        if precision == STAR:
            precision = args.next_int('.*')
            if precision < 0:
                precision = None

        conv = d.conversion
        if conv in INTEGER_CONVERSIONS:
            self._format_integer(conv, flags, width, precision, d.length, args)
        elif conv == 'c':
            self._pad(args.next_char(conv), flags, width)
        elif conv == 's':
            self._format_string(args.next_str(conv), flags, width, precision)
        elif conv == 'f':
            self._format_fixed(args.next_double(conv), flags, width, precision)
        elif conv in UNSUPPORTED_CONVERSIONS:
            logger.debug('unsupported conversion %%%s in %r', conv, fmt)
            raise UnsupportedFormatError(conv, fmt)
        elif conv == 'n':
            args.next_ref(conv).set_int(self.sink.count)
        elif conv == '%':
            self.sink.put('%')

    def _format_integer(
        self,
        conv: str,
        flags: Flags,
        width: int,
        precision: Optional[int],
        length: str,
        args: Arguments,
    ):
        sink = self.sink
        bits = self.options.bits(length)

        # ISO C9899: if a precision is given, the '0' flag is ignored.
        if precision is not None:
            flags.zero = False
        negative = False
        if conv in ('d', 'i'):
            v = args.next_int(conv, bits)
            if v < 0:
                negative = True
                v = -v
        else:
            v = args.next_uint(conv, bits)
            flags.sign = False
            flags.space = False
        if conv not in ('o', 'x', 'X'):
            flags.alt = False
        if conv == 'p':
            flags.alt = True

        if conv == 'o':
            radix = 8
        elif conv in ('x', 'X', 'p'):
            radix = 16
        else:
            radix = 10

        dg = numeric.digit_count(radix, v)
        pre = 1 if precision is None else precision
        if radix == 8 and flags.alt and v != 0 and pre <= dg:
            # Force a leading zero.
            pre = dg + 1
        if v == 0 and pre == 0 and not (radix == 8 and flags.alt):
            # A zero with zero precision has no digits at all.
            dg = 0

        ndg = max(pre, dg)
        extra = ndg - dg
        if negative or flags.sign or flags.space:
            ndg += 1
        prefix = ''
        if flags.alt and radix == 16:
            prefix = '0X' if conv == 'X' else '0x'
            ndg += 2

        if not flags.left and not flags.zero:
            sink.put_repeated(' ', width - ndg)
        if negative:
            sink.put('-')
        elif flags.sign:
            sink.put('+')
        elif flags.space:
            sink.put(' ')
        sink.put_str(prefix)
        if not flags.left and flags.zero:
            sink.put_repeated('0', width - ndg)
        sink.put_repeated('0', extra)
        if dg:
            numeric.emit_unsigned(
                sink, v, radix, numeric.top_power(radix), conv == 'X'
            )
        if flags.left:
            sink.put_repeated(' ', width - ndg)

    def _format_string(
        self,
        s: Optional[str],
        flags: Flags,
        width: int,
        precision: Optional[int],
    ):
        if s is None:
            # Printed as is, regardless of width and precision.
            self.sink.put_str(NULL_TEXT)
            return
        if precision is not None:
            s = s[:precision]
        self._pad(s, flags, width)

    def _format_fixed(
        self,
        d: float,
        flags: Flags,
        width: int,
        precision: Optional[int],
    ):
        sink = self.sink
        pre = 6 if precision is None else precision
        negative = math.copysign(1.0, d) < 0 and not math.isnan(d)
        d = abs(d)
        sign = ''
        if negative:
            sign = '-'
        elif flags.sign:
            sign = '+'
        elif flags.space:
            sign = ' '

        if math.isinf(d) or math.isnan(d):
            self._pad(sign + ('inf' if math.isinf(d) else 'nan'), flags, width)
            return

        scale = 10**pre
        # Digits past the precision are dropped, not rounded.
        whole, frac = divmod(math.floor(Fraction(d) * scale), scale)
        point = pre > 0 or flags.alt
        ndg = len(sign) + numeric.digit_count(10, whole) + pre
        if point:
            ndg += 1

        if not flags.left and not flags.zero:
            sink.put_repeated(' ', width - ndg)
        sink.put_str(sign)
        if not flags.left and flags.zero:
            sink.put_repeated('0', width - ndg)
        numeric.emit_unsigned(sink, whole, 10)
        if point:
            sink.put('.')
        if pre:
            sink.put_repeated('0', pre - numeric.digit_count(10, frac))
            numeric.emit_unsigned(sink, frac, 10)
        if flags.left:
            sink.put_repeated(' ', width - ndg)

    def _pad(self, s: str, flags: Flags, width: int):
        if not flags.left:
            self.sink.put_repeated(' ', width - len(s))
        self.sink.put_str(s)
        if flags.left:
            self.sink.put_repeated(' ', width - len(s))
