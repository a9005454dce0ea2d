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

import argparse
from typing import Any


class FormatOptions(dict):
    """Options controlling the formatting and scanning engines.

    This is a dict whose keys can also be referred to as attributes, so
    `opts.int_bits` and `opts['int_bits']` are the same thing.

    - bounded: if true (the default), formatting into a `CharBuffer`
      that has a size raises an error rather than growing the buffer.
    - short_bits, int_bits, long_bits: the widths of the C integer
      types selected by the `h`, (no), and `l`/`L` length modifiers.
    """

    def __init__(self, *args, **kwargs):
        self.bounded = True
        self.short_bits = 16
        self.int_bits = 32
        self.long_bits = 64
        super().__init__(*args, **kwargs)

    def __getattr__(self, name):
        try:
            return self.__getitem__(name)
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        return self.__setitem__(name, value)

    def bits(self, length: str) -> int:
        """Returns the integer width for a length modifier."""
        if length == 'h':
            return self.short_bits
        if length in ('l', 'L'):
            return self.long_bits
        return self.int_bits


def default_options(*args, **kwargs) -> FormatOptions:
    return FormatOptions(*args, **kwargs)


def add_arguments(parser: argparse.ArgumentParser):
    default = default_options()
    parser.add_argument(
        '--bounded',
        action=argparse.BooleanOptionalAction,
        default=default.bounded,
        help='treat overflowing a sized output buffer as an error '
        '(on by default)',
    )
    parser.add_argument(
        '--short-bits',
        type=int,
        metavar='N',
        default=default.short_bits,
        help=f'width of an "h" integer (default is {default.short_bits})',
    )
    parser.add_argument(
        '--int-bits',
        type=int,
        metavar='N',
        default=default.int_bits,
        help=f'width of a plain integer (default is {default.int_bits})',
    )
    parser.add_argument(
        '--long-bits',
        type=int,
        metavar='N',
        default=default.long_bits,
        help=f'width of an "l" integer (default is {default.long_bits})',
    )


def options_from_args(args: Any) -> FormatOptions:
    """Returns the options set in a parsed argparse namespace."""
    d = default_options()
    vs = vars(args)
    for name in d:
        if name in vs:
            d[name] = vs[name]
    return d
