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

"""Exceptions raised by the formatted I/O routines.

Every exception is a subclass of `FormatError`, which is itself a
subclass of ValueError, and so can be caught by code that catches
ValueError.

Malformed numeric input and numeric overflow during a scan are *not*
errors; they are reported through the return value of the scanning
functions (and `Ref.overflow`) instead.
"""

from typing import Optional


class FormatError(ValueError):
    """Base class for all errors raised by pystdio."""


class FormatParseError(FormatError):
    """Exception raised when a format string is syntactically invalid."""

    def __init__(self, fmt: str, pos: int, msg: str):
        self.fmt = fmt
        self.pos = pos
        self.msg = msg
        super().__init__(f'{msg} at offset {pos} in format {fmt!r}')


class UnsupportedFormatError(FormatError):
    """Exception raised for conversions that are not implemented.

    The exponential and general floating point conversions (`e`, `E`,
    `g`, `G`) are not supported by either engine, and the scanner does
    not support `f` either.
    """

    def __init__(self, conversion: str, fmt: Optional[str] = None):
        self.conversion = conversion
        self.fmt = fmt
        super().__init__(f'Unsupported conversion "%{conversion}"')


class ArgumentError(FormatError):
    """Exception raised when the arguments don't match the format.

    This covers both running out of arguments and supplying an argument
    of the wrong type for a directive.
    """


class BufferOverflowError(FormatError):
    """Exception raised when formatted output doesn't fit in a bounded
    `CharBuffer`.

    `count` is the number of characters that were written before the
    buffer filled up.
    """

    def __init__(self, size: int, count: int):
        self.size = size
        self.count = count
        super().__init__(
            f'Output does not fit in a buffer of {size} characters '
            f'({count} characters written)'
        )


class DestinationOverflowError(FormatError):
    """Exception raised when scanned text doesn't fit in a bounded `Ref`."""

    def __init__(self, capacity: int, needed: int):
        self.capacity = capacity
        self.needed = needed
        super().__init__(
            f'Scanned field needs {needed} characters but the destination '
            f'only holds {capacity}'
        )


class FormatIOError(FormatError):
    """Exception raised when the underlying sink or source fails.

    `count` is the number of characters emitted (or consumed) before the
    failure. The underlying OSError, if any, is chained as `__cause__`.
    """

    def __init__(self, msg: str, count: int = 0):
        self.count = count
        super().__init__(msg)
