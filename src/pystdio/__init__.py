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

"""A pure Python implementation of C's formatted I/O routines.

This module follows the C standard library's naming where possible. As
such, it provides the following functions:

- printf, fprintf, sprintf (and vprintf, vfprintf, vsprintf)
    - Format values as text according to a format string.
- scanf, fscanf, sscanf (and vscanf, vfscanf, vsscanf)
    - Extract values from text according to a format string.
- fgetc, getc, getchar, ungetc, fgets, fputc, putc, putchar, fputs, puts
    - Simple character I/O over the same streams.

Because Python has no pointers, values produced by `%n` and by the scanf
family are stored into `Ref` objects passed as arguments:

    >>> import pystdio
    >>> n, word = pystdio.Ref(), pystdio.Ref()
    >>> pystdio.sscanf('42 apples', '%d %s', n, word)
    2
    >>> n.value, word.value
    (42, 'apples')
    >>> pystdio.sprintf('%-6s|%05d|%#x', word.value, n.value, 255)
    'apples|00042|0xff'

The engines themselves are implemented by the `Printer` and `Scanner`
classes, which write to a `Sink` and read from a `Source` respectively;
these can be used directly for finer-grained control.
"""

import types

from .api import (  # noqa: F401 (unused-import)
    fgetc,
    fgets,
    fprintf,
    fputc,
    fputs,
    fscanf,
    getc,
    getchar,
    printf,
    putc,
    putchar,
    puts,
    scanf,
    sprintf,
    sscanf,
    stream_source,
    ungetc,
    vfprintf,
    vfscanf,
    vprintf,
    vscanf,
    vsprintf,
    vsscanf,
)
from .args import Arguments, Ref  # noqa: F401 (unused-import)
from .errors import (  # noqa: F401 (unused-import)
    ArgumentError,
    BufferOverflowError,
    DestinationOverflowError,
    FormatError,
    FormatIOError,
    FormatParseError,
    UnsupportedFormatError,
)
from .options import FormatOptions  # noqa: F401 (unused-import)
from .printf import Printer  # noqa: F401 (unused-import)
from .scanf import Scanner  # noqa: F401 (unused-import)
from .streams import (  # noqa: F401 (unused-import)
    EOF,
    BufferSink,
    CharBuffer,
    Field,
    Sink,
    Source,
    StreamSink,
    StreamSource,
    StringSource,
)
from .version import __version__  # noqa: F401 (unused-import)


__all__ = []
for _k in list(globals()):
    if not _k.startswith('_') and not isinstance(
        globals()[_k], types.ModuleType
    ):
        __all__.append(_k)
__all__.append('__version__')
