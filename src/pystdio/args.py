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

"""Argument handling for the formatting and scanning engines.

Arguments are passed as an ordered sequence, and the Python type of each
argument acts as its tag:

- `int`: a signed or unsigned integer (or a `*` width or precision, or
  a character code for `%c`).
- `str`: a string (a one-character string is also accepted for `%c`).
- `None`: a null string; `%s` prints it as "(null)".
- `float`: a double (ints are accepted too).
- `Ref`: an output cell, for `%n` and for every assigning scan
  directive.

`Arguments` hands the values out one at a time, in order, checking each
one against what the current directive needs.
"""

from typing import Any, Optional, Sequence

from pystdio import numeric
from pystdio.errors import ArgumentError, DestinationOverflowError


class Ref:
    """A mutable cell that a directive can store a result into.

    `capacity`, if given, is the size of the destination in characters
    (including the terminating NUL for `%s` and `%[`); storing text that
    doesn't fit raises `DestinationOverflowError`. `overflow` is set
    when a scanned integer had to be saturated.
    """

    def __init__(self, value: Any = None, capacity: Optional[int] = None):
        self.value = value
        self.capacity = capacity
        self.overflow = False

    def __repr__(self):
        if self.capacity is None:
            return f'Ref({self.value!r})'
        return f'Ref({self.value!r}, capacity={self.capacity})'

    def __eq__(self, other):
        if isinstance(other, Ref):
            return self.value == other.value
        return NotImplemented

    def set_text(self, text: str, terminated: bool = True):
        if self.capacity is not None:
            needed = len(text) + (1 if terminated else 0)
            if needed > self.capacity:
                raise DestinationOverflowError(self.capacity, needed)
        self.value = text

    def set_int(self, value: int, overflow: bool = False):
        self.value = value
        self.overflow = overflow


class Arguments:
    """A sequential (not random-access) cursor over format arguments."""

    def __init__(self, args: Sequence[Any], fmt: Optional[str] = None):
        self.args = list(args)
        self.fmt = fmt
        self.cur = 0

    def __len__(self):
        return len(self.args)

    @property
    def remaining(self) -> int:
        return len(self.args) - self.cur

    def next_int(self, conv: str, bits: Optional[int] = None) -> int:
        arg = self._next(conv, 'an int')
        if not isinstance(arg, int):
            self._wrong_type(conv, 'an int', arg)
        if bits is not None:
            return numeric.to_signed(arg, bits)
        return arg

    def next_uint(self, conv: str, bits: int) -> int:
        arg = self._next(conv, 'an int')
        if not isinstance(arg, int):
            self._wrong_type(conv, 'an int', arg)
        return numeric.to_unsigned(arg, bits)

    def next_char(self, conv: str) -> str:
        arg = self._next(conv, 'a character')
        if isinstance(arg, str) and len(arg) == 1:
            return arg
        if isinstance(arg, int):
            # Like C, the value is converted to an unsigned char.
            return chr(numeric.to_unsigned(arg, 8))
        return self._wrong_type(conv, 'a one-character str or an int', arg)

    def next_str(self, conv: str) -> Optional[str]:
        arg = self._next(conv, 'a str')
        if arg is None or isinstance(arg, str):
            return arg
        return self._wrong_type(conv, 'a str or None', arg)

    def next_double(self, conv: str) -> float:
        arg = self._next(conv, 'a float')
        if isinstance(arg, (float, int)):
            return float(arg)
        return self._wrong_type(conv, 'a float', arg)

    def next_ref(self, conv: str) -> Ref:
        arg = self._next(conv, 'a Ref')
        if isinstance(arg, Ref):
            return arg
        return self._wrong_type(conv, 'a Ref', arg)

    def _next(self, conv: str, kind: str) -> Any:
        if self.cur >= len(self.args):
            raise ArgumentError(
                f'Not enough arguments for format {self.fmt!r}: '
                f'"%{conv}" needs {kind} for argument {self.cur + 1}'
            )
        arg = self.args[self.cur]
        self.cur += 1
        return arg

    def _wrong_type(self, conv: str, kind: str, arg: Any) -> Any:
        raise ArgumentError(
            f'Argument {self.cur} for "%{conv}" must be {kind}, '
            f'not {type(arg).__name__}'
        )
