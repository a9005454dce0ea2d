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

"""The C-style entry points: the printf and scanf families plus simple
character I/O.

The `v` variants take their arguments as a sequence; the others take
them as positional arguments. Streams are ordinary text file objects.

The scanning functions and the character input functions share a
`StreamSource` per stream (see `stream_source()`), so that a character
peeked at by one call (or pushed back with `ungetc()`) is seen by the
next, as with C's `FILE`.
"""

import sys
from typing import IO, Any, Optional, Sequence, Union
import weakref

from pystdio.args import Arguments
from pystdio.options import FormatOptions
from pystdio.printf import Printer
from pystdio.scanf import Scanner
from pystdio.streams import (
    BufferSink,
    CharBuffer,
    Source,
    StreamSink,
    StreamSource,
    StringSource,
)


_sources: 'weakref.WeakKeyDictionary[Any, StreamSource]' = (
    weakref.WeakKeyDictionary()
)


def stream_source(fp: Union[IO[str], Source]) -> Source:
    """Returns the `Source` to use for reading from `fp`.

    If `fp` is already a `Source` it is returned as is. Otherwise the
    same `StreamSource` is returned each time for a given file object,
    as long as the file object can be weakly referenced.
    """
    if isinstance(fp, Source):
        return fp
    try:
        src = _sources.get(fp)
    except TypeError:
        # Not weakly referenceable; the pushback slot won't persist
        # between calls.
        return StreamSource(fp)
    if src is None:
        src = StreamSource(fp)
        _sources[fp] = src
    return src


def sprintf(fmt: str, *args: Any, options: Optional[FormatOptions] = None) -> str:
    """Returns `args` formatted according to `fmt`."""
    buf = CharBuffer()
    n = vsprintf(buf, fmt, args, options=options)
    return ''.join(buf.chars[:n])


def vsprintf(
    buf: CharBuffer,
    fmt: str,
    args: Union[Arguments, Sequence[Any]],
    options: Optional[FormatOptions] = None,
) -> int:
    """Formats `args` into `buf`, followed by a NUL.

    Returns the number of characters written, not counting the NUL. If
    `buf` has a size and `options.bounded` is true (the default), output
    that doesn't fit raises `BufferOverflowError`; otherwise the buffer
    grows to hold it.
    """
    options = options or FormatOptions()
    sink = BufferSink(buf, bounded=options.bounded)
    return Printer(sink, options).format(fmt, args)


def fprintf(
    fp: IO[str], fmt: str, *args: Any, options: Optional[FormatOptions] = None
) -> int:
    return vfprintf(fp, fmt, args, options=options)


def vfprintf(
    fp: IO[str],
    fmt: str,
    args: Union[Arguments, Sequence[Any]],
    options: Optional[FormatOptions] = None,
) -> int:
    """Writes `args` formatted by `fmt` to `fp`, one character at a time.

    Returns the number of characters written.
    """
    return Printer(StreamSink(fp), options).format(fmt, args)


def printf(fmt: str, *args: Any, options: Optional[FormatOptions] = None) -> int:
    return vfprintf(sys.stdout, fmt, args, options=options)


def vprintf(
    fmt: str,
    args: Union[Arguments, Sequence[Any]],
    options: Optional[FormatOptions] = None,
) -> int:
    return vfprintf(sys.stdout, fmt, args, options=options)


def sscanf(
    s: Union[str, Source],
    fmt: str,
    *args: Any,
    options: Optional[FormatOptions] = None,
) -> int:
    """Scans `s` according to `fmt`, storing results into the `Ref`s in
    `args`.

    Returns the number of values assigned, or EOF if the input ran out
    before the first conversion.
    """
    return vsscanf(s, fmt, args, options=options)


def vsscanf(
    s: Union[str, Source],
    fmt: str,
    args: Union[Arguments, Sequence[Any]],
    options: Optional[FormatOptions] = None,
) -> int:
    source = s if isinstance(s, Source) else StringSource(s)
    return Scanner(source, options).scan(fmt, args)


def fscanf(
    fp: Union[IO[str], Source],
    fmt: str,
    *args: Any,
    options: Optional[FormatOptions] = None,
) -> int:
    return vfscanf(fp, fmt, args, options=options)


def vfscanf(
    fp: Union[IO[str], Source],
    fmt: str,
    args: Union[Arguments, Sequence[Any]],
    options: Optional[FormatOptions] = None,
) -> int:
    return Scanner(stream_source(fp), options).scan(fmt, args)


def scanf(fmt: str, *args: Any, options: Optional[FormatOptions] = None) -> int:
    return vfscanf(sys.stdin, fmt, args, options=options)


def vscanf(
    fmt: str,
    args: Union[Arguments, Sequence[Any]],
    options: Optional[FormatOptions] = None,
) -> int:
    return vfscanf(sys.stdin, fmt, args, options=options)


def fgetc(fp: Union[IO[str], Source]) -> str:
    """Returns the next character from `fp`, or '' at end of file."""
    return stream_source(fp).read()


def getc(fp: Union[IO[str], Source]) -> str:
    return fgetc(fp)


def getchar() -> str:
    """Returns the next character from stdin, or '' at end of file."""
    return fgetc(sys.stdin)


def ungetc(ch: str, fp: Union[IO[str], StreamSource]) -> str:
    """Pushes `ch` back onto `fp`; only one character may be pending."""
    stream_source(fp).unread(ch)
    return ch


def fgets(fp: Union[IO[str], Source], n: int) -> Optional[str]:
    """Reads a line of at most `n - 1` characters from `fp`.

    The newline, if one is read, is kept. Returns None if end of file
    is reached before any characters are read. If `n` is 1, nothing is
    read and the result is ''.
    """
    src = stream_source(fp)
    chars: list[str] = []
    while len(chars) < n - 1:
        ch = src.read()
        if ch == '':
            break
        chars.append(ch)
        if ch == '\n':
            break
    if not chars and n > 1:
        return None
    return ''.join(chars)


def fputc(ch: str, fp: IO[str]) -> str:
    StreamSink(fp).put(ch)
    return ch


def putc(ch: str, fp: IO[str]) -> str:
    return fputc(ch, fp)


def putchar(ch: str) -> str:
    """Writes `ch` to stdout."""
    return fputc(ch, sys.stdout)


def fputs(s: str, fp: IO[str]) -> int:
    """Writes `s` to `fp` (no newline is added)."""
    StreamSink(fp).put_str(s)
    return 0


def puts(s: str) -> int:
    """Writes `s` and a newline to stdout."""
    sink = StreamSink(sys.stdout)
    sink.put_str(s)
    sink.put('\n')
    return 0
