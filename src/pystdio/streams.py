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

"""Character sinks and sources.

The output engine writes through a `Sink`, which is either a
`BufferSink` wrapping a caller-owned `CharBuffer` or a `StreamSink`
wrapping a text file object. The input engine reads through a `Source`,
which is either a `StringSource` (a cursor over a string, optionally
bounded) or a `StreamSource` (a text file object with exactly one
character of pushback).

End of input is represented by the empty string, the same way
`io.TextIOBase.read(1)` reports it.
"""

import abc
from typing import IO, Optional

from pystdio.errors import BufferOverflowError, FormatIOError


# Returned by the scanning functions when input runs out before the
# first conversion.
EOF = -1

WHITESPACE = ' \t\n\v\f\r'


def isspace(ch: str) -> bool:
    """Returns whether `ch` is a C whitespace character (never for '')."""
    return ch != '' and ch in WHITESPACE


class CharBuffer:
    """A caller-owned character buffer.

    `size` is the total number of characters the buffer can hold,
    including the trailing NUL that terminates formatted output. If
    `size` is None, the buffer grows as needed.
    """

    def __init__(self, size: Optional[int] = None):
        if size is not None and size < 0:
            raise ValueError(f'Buffer size must be non-negative, not {size}')
        self.size = size
        self.chars: list[str] = []

    def __len__(self):
        return len(self.chars)

    def __repr__(self):
        return f'CharBuffer({self.size!r}, value={self.value!r})'

    def __str__(self):
        return self.value

    @property
    def value(self) -> str:
        """The contents of the buffer up to (not including) the first NUL."""
        s = ''.join(self.chars)
        nul = s.find('\0')
        if nul == -1:
            return s
        return s[:nul]

    def store(self, pos: int, ch: str):
        if pos < len(self.chars):
            self.chars[pos] = ch
        else:
            self.chars.append(ch)


class Sink(abc.ABC):
    """Where the output engine writes characters.

    `count` is the number of characters emitted so far.
    """

    def __init__(self):
        self.count = 0

    def put(self, ch: str):
        self._write(ch)
        self.count += 1

    def put_repeated(self, ch: str, n: int):
        # A negative count writes nothing.
        for _ in range(n):
            self.put(ch)

    def put_str(self, s: str):
        for ch in s:
            self.put(ch)

    def finish(self):
        """Called once after the whole format string has been processed."""

    def abort(self):
        """Called instead of `finish()` when formatting fails partway."""

    @abc.abstractmethod
    def _write(self, ch: str):
        raise NotImplementedError


class BufferSink(Sink):
    """Writes into a `CharBuffer`, starting at position 0.

    If `bounded` is true and the buffer has a size, writing past the
    end of the buffer (leaving room for the NUL terminator) raises a
    `BufferOverflowError`; the buffer is left holding the truncated,
    terminated output. If `bounded` is false, the buffer just grows,
    which is how C's `sprintf` behaves when the buffer is big enough.
    """

    def __init__(self, buf: CharBuffer, bounded: bool = True):
        super().__init__()
        self.buf = buf
        self.bounded = bounded and buf.size is not None

    def _write(self, ch: str):
        if self.bounded and self.count >= self.buf.size - 1:
            if self.buf.size > 0:
                self.buf.store(self.count, '\0')
            raise BufferOverflowError(self.buf.size, self.count)
        self.buf.store(self.count, ch)

    def finish(self):
        if self.bounded and self.count >= self.buf.size:
            raise BufferOverflowError(self.buf.size, self.count)
        self.buf.store(self.count, '\0')

    def abort(self):
        # The buffer ends with this call's partial output.
        pos = self.count
        if self.bounded:
            if self.buf.size == 0:
                return
            pos = min(pos, self.buf.size - 1)
        self.buf.store(pos, '\0')


class StreamSink(Sink):
    """Writes each character to a text file object."""

    def __init__(self, fp: IO[str]):
        super().__init__()
        self.fp = fp

    def _write(self, ch: str):
        try:
            self.fp.write(ch)
        except OSError as e:
            raise FormatIOError(
                f'Error writing to stream: {e}', self.count
            ) from e


class Source(abc.ABC):
    """Where the input engine reads characters from.

    `count` is the number of characters consumed so far.
    """

    def __init__(self):
        self.count = 0

    @abc.abstractmethod
    def peek(self) -> str:
        """Returns the next character without consuming it, or ''."""
        raise NotImplementedError

    def read(self) -> str:
        """Consumes and returns the next character, or '' at the end."""
        ch = self._read()
        if ch:
            self.count += 1
        return ch

    def at_end(self) -> bool:
        return self.peek() == ''

    @abc.abstractmethod
    def _read(self) -> str:
        raise NotImplementedError


class StringSource(Source):
    """Reads from `s[start:end]`; `end` is None for the whole string."""

    def __init__(self, s: str, start: int = 0, end: Optional[int] = None):
        super().__init__()
        self.s = s
        self.pos = start
        self.end = len(s) if end is None else min(end, len(s))

    @property
    def remaining(self) -> str:
        return self.s[self.pos : self.end]

    def peek(self) -> str:
        if self.pos < self.end:
            return self.s[self.pos]
        return ''

    def _read(self) -> str:
        ch = self.peek()
        if ch:
            self.pos += 1
        return ch


class StreamSource(Source):
    """Reads from a text file object, one character at a time.

    `peek()` holds the next character of the stream in `lookahead`.
    Characters pushed back with `unread()` go in `pushback`, in front of
    any look-ahead, and only one of those may be pending at a time. Once
    the stream reports end of file, the source keeps reporting it until
    `clear_eof()` is called.
    """

    def __init__(self, fp: IO[str]):
        super().__init__()
        self.fp = fp
        self.lookahead: Optional[str] = None
        self.pushback: Optional[str] = None
        self.eof = False

    def peek(self) -> str:
        if self.pushback is not None:
            return self.pushback
        if self.lookahead is None:
            ch = self._fetch()
            if ch == '':
                return ''
            self.lookahead = ch
        return self.lookahead

    def unread(self, ch: str):
        """Pushes `ch` back onto the stream (like C's `ungetc`)."""
        if self.pushback is not None:
            raise FormatIOError(
                'Only one character of pushback is supported', self.count
            )
        self.pushback = ch
        self.eof = False
        self.count = max(self.count - 1, 0)

    def clear_eof(self):
        self.eof = False

    def _read(self) -> str:
        if self.pushback is not None:
            ch = self.pushback
            self.pushback = None
            return ch
        if self.lookahead is not None:
            ch = self.lookahead
            self.lookahead = None
            return ch
        return self._fetch()

    def _fetch(self) -> str:
        if self.eof:
            return ''
        try:
            ch = self.fp.read(1)
        except OSError as e:
            raise FormatIOError(
                f'Error reading from stream: {e}', self.count
            ) from e
        if ch == '':
            self.eof = True
        return ch


class Field:
    """A view of a source limited to a maximum number of characters.

    This is the remaining width budget for a single scan directive:
    every character read through the field decrements `limit`, and
    once it reaches zero the field looks like the end of input. A
    `limit` of None means the field is unlimited.
    """

    def __init__(self, source: Source, limit: Optional[int] = None):
        self.source = source
        self.limit = limit

    def peek(self) -> str:
        if self.limit == 0:
            return ''
        return self.source.peek()

    def read(self) -> str:
        if self.limit == 0:
            return ''
        ch = self.source.read()
        if ch and self.limit is not None:
            self.limit -= 1
        return ch

    def skip_whitespace(self) -> int:
        """Skips leading whitespace without charging it to the field."""
        return skip_whitespace(self.source)


def skip_whitespace(source: Source) -> int:
    n = 0
    while isspace(source.peek()):
        source.read()
        n += 1
    return n
