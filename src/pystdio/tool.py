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

"""Formats or scans text using C-style format strings.

Usage:

    $ pystdio '%-6s|%05d|%#x' apples 42 255
    apples|00042|0xff
    $ echo '42 apples' | pystdio --scan '%d %s'
    {"count": 2, "values": [42, "apples"]}

When formatting, each ARG is converted to the type its directive needs:
integers are read like C's "%i" (so 0x and leading-0 prefixes select
hexadecimal and octal), doubles with Python's float(), and anything else
is passed through as a string. Use `--` before ARGs that start with `-`.
"""

import argparse
import json
import logging
import pdb
import sys
import traceback

from pystdio import api, directive, numeric
from pystdio import options as opts
from pystdio import support
from pystdio.args import Ref
from pystdio.errors import ArgumentError, FormatError
from pystdio.streams import Field, StringSource
from pystdio.version import __version__


def main(argv=None, host=None):
    host = host or support.Host()

    args = None
    try:
        args = _parse_args(host, argv)

        if args.version:
            host.print(__version__)
            return 0

        if args.format is None:
            host.print('You must specify a format.', file=host.stderr)
            return 2

        if args.debug:
            logging.basicConfig(
                level=logging.DEBUG,
                stream=host.stderr,
                format='%(name)s: %(message)s',
                force=True,
            )

        options = opts.options_from_args(args)
        if args.scan:
            return _scan(host, args, options)
        return _print(host, args, options)

    except KeyboardInterrupt:  # pragma: no cover
        host.print('Interrupted, exiting.', file=host.stderr)
        return 130  # SIGINT
    except FormatError as exc:
        if args and args.post_mortem:  # pragma: no cover
            traceback.print_exception(exc)
            pdb.post_mortem()
        host.print(str(exc), file=host.stderr)
        return 1


def _print(host, args, options):
    values = _convert_args(args.format, args.args, options)
    api.vfprintf(host.stdout, args.format, values, options=options)
    return 0


def _scan(host, args, options):
    if args.args:
        host.print('--scan does not take any ARGs.', file=host.stderr)
        return 2

    refs = [Ref() for _ in directive.argument_kinds(args.format, scan=True)]
    if args.cmd is not None:
        n = api.vsscanf(args.cmd, args.format, refs, options=options)
    elif args.input == '-':
        n = api.vfscanf(host.stdin, args.format, refs, options=options)
    else:
        if not host.exists(args.input):
            host.print(f'Error: no such file: "{args.input}"', file=host.stderr)
            return 1
        contents = host.read_text_file(args.input)
        n = api.vsscanf(contents, args.format, refs, options=options)
    host.print(json.dumps({'count': n, 'values': [r.value for r in refs]}))
    return 0


def _convert_args(fmt, strs, options):
    kinds = directive.argument_kinds(fmt)
    strs = list(strs)
    values = []
    for kind in kinds:
        if kind == 'ref':
            # %n stores into a cell the tool supplies itself.
            values.append(Ref())
        elif strs:
            values.append(_convert(kind, strs.pop(0), options))
    return values


def _convert(kind, s, options):
    if kind in ('int', 'uint'):
        return _parse_int(s, options)
    if kind == 'double':
        try:
            return float(s)
        except ValueError:
            raise ArgumentError(f'Invalid number: "{s}"') from None
    if kind == 'char':
        if not s:
            raise ArgumentError('An empty string is not a character')
        return s[0]
    return s


def _parse_int(s, options):
    field = Field(StringSource(s))
    num = numeric.parse_signed_auto(field, 0, options.long_bits)
    if num.malformed or not field.source.at_end():
        raise ArgumentError(f'Invalid integer: "{s}"')
    if num.overflow:
        raise ArgumentError(f'Integer out of range: "{s}"')
    return num.value * num.sign


class _HostedArgumentParser(argparse.ArgumentParser):
    """An argument parser that plays nicely w/ host objects."""

    def __init__(self, host, **kwargs):
        self.host = host
        super().__init__(**kwargs)

    def exit(self, status=0, message=None):
        if message:
            self._print_message(message, self.host.stderr)
        sys.exit(status)

    def error(self, message):
        self.host.print(f'usage: {self.usage}', end='', file=self.host.stderr)
        self.host.print('    -h/--help for help\n', file=self.host.stderr)
        self.exit(2, f'error: {message}\n')

    def print_help(self, file=None):
        self.host.print(self.format_help(), file=file)


def _parse_args(host, argv):
    usage = 'pystdio [options] FORMAT [ARG ...]\n'

    parser = _HostedArgumentParser(
        host,
        prog='pystdio',
        usage=usage,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '-V',
        '--version',
        action='store_true',
        help=f'show version ({__version__})',
    )
    parser.add_argument(
        '-s',
        '--scan',
        action='store_true',
        help='scan input with FORMAT and print the values as JSON',
    )
    parser.add_argument(
        '-c',
        metavar='STR',
        dest='cmd',
        help='inline string to scan instead of reading from a file',
    )
    parser.add_argument(
        '-i',
        '--input',
        metavar='FILE',
        default='-',
        help='file to scan (default is stdin)',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='log debugging information to stderr',
    )
    parser.add_argument('--post-mortem', '--pm', action='store_true')
    opts.add_arguments(parser)
    parser.add_argument('format', metavar='FORMAT', nargs='?')
    parser.add_argument('args', metavar='ARG', nargs='*')
    return parser.parse_args(argv)


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
