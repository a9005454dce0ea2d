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

import io
import unittest
from unittest import mock

import pystdio
from pystdio import (
    FormatIOError,
    Ref,
    StringSource,
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
    stream_source,
    ungetc,
    vprintf,
    vscanf,
)


class CharacterIOTest(unittest.TestCase):
    def test_fgetc(self):
        fp = io.StringIO('ab')
        self.assertEqual(fgetc(fp), 'a')
        self.assertEqual(fgetc(fp), 'b')
        self.assertEqual(fgetc(fp), '')
        self.assertEqual(fgetc(fp), '')

    def test_ungetc(self):
        fp = io.StringIO('ab')
        self.assertEqual(fgetc(fp), 'a')
        self.assertEqual(ungetc('z', fp), 'z')
        self.assertEqual(fgetc(fp), 'z')
        self.assertEqual(fgetc(fp), 'b')

    def test_only_one_pushback(self):
        fp = io.StringIO('ab')
        ungetc('x', fp)
        self.assertRaises(FormatIOError, ungetc, 'y', fp)

    def test_ungetc_after_eof(self):
        fp = io.StringIO('')
        self.assertEqual(fgetc(fp), '')
        ungetc('q', fp)
        self.assertEqual(fgetc(fp), 'q')
        self.assertEqual(fgetc(fp), '')

    def test_fgets(self):
        fp = io.StringIO('abcdefg\nxyz')
        self.assertEqual(fgets(fp, 5), 'abcd')
        self.assertEqual(fgets(fp, 100), 'efg\n')
        self.assertEqual(fgets(fp, 100), 'xyz')
        self.assertIsNone(fgets(fp, 100))

    def test_fgets_tiny_buffer(self):
        fp = io.StringIO('abc')
        self.assertEqual(fgets(fp, 1), '')
        self.assertEqual(fgets(fp, 2), 'a')

    def test_fgets_empty_line(self):
        fp = io.StringIO('\n\n')
        self.assertEqual(fgets(fp, 10), '\n')
        self.assertEqual(fgets(fp, 10), '\n')
        self.assertIsNone(fgets(fp, 10))

    def test_fgets_from_string_source(self):
        self.assertEqual(fgets(StringSource('one\ntwo'), 80), 'one\n')

    def test_output(self):
        fp = io.StringIO()
        self.assertEqual(fputc('a', fp), 'a')
        self.assertEqual(fputs('bc', fp), 0)
        self.assertEqual(fp.getvalue(), 'abc')

    def test_getc_and_putc(self):
        fp = io.StringIO('xy')
        self.assertEqual(getc(fp), 'x')
        ungetc('w', fp)
        self.assertEqual(getc(fp), 'w')
        self.assertEqual(fgetc(fp), 'y')
        out = io.StringIO()
        self.assertEqual(putc('z', out), 'z')
        self.assertEqual(out.getvalue(), 'z')

    def test_getchar_and_putchar(self):
        with mock.patch('sys.stdin', new=io.StringIO('ab')):
            self.assertEqual(getchar(), 'a')
            self.assertEqual(getchar(), 'b')
            self.assertEqual(getchar(), '')
        with mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(putchar('q'), 'q')
        self.assertEqual(out.getvalue(), 'q')

    def test_puts(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(puts('hello'), 0)
        self.assertEqual(out.getvalue(), 'hello\n')


class SharedStreamTest(unittest.TestCase):
    def test_stream_source_is_reused(self):
        fp = io.StringIO()
        self.assertIs(stream_source(fp), stream_source(fp))
        self.assertIsNot(stream_source(fp), stream_source(io.StringIO()))

    def test_source_is_returned_as_is(self):
        src = StringSource('x')
        self.assertIs(stream_source(src), src)

    def test_fscanf_then_fgetc(self):
        fp = io.StringIO('12abc')
        r = Ref()
        self.assertEqual(fscanf(fp, '%d', r), 1)
        self.assertEqual(r.value, 12)
        self.assertEqual(fgetc(fp), 'a')
        self.assertEqual(fgets(fp, 10), 'bc')

    def test_fgetc_then_fscanf(self):
        fp = io.StringIO('x42')
        self.assertEqual(fgetc(fp), 'x')
        r = Ref()
        self.assertEqual(fscanf(fp, '%d', r), 1)
        self.assertEqual(r.value, 42)

    def test_ungetc_after_fscanf(self):
        fp = io.StringIO('12abc')
        r = Ref()
        self.assertEqual(fscanf(fp, '%d', r), 1)
        self.assertEqual(ungetc('2', fp), '2')
        self.assertEqual(fgetc(fp), '2')
        self.assertEqual(fgetc(fp), 'a')
        self.assertEqual(fgets(fp, 10), 'bc')

    def test_second_ungetc_after_fscanf(self):
        fp = io.StringIO('12abc')
        fscanf(fp, '%d', Ref())
        ungetc('2', fp)
        self.assertRaises(FormatIOError, ungetc, '1', fp)

    def test_ungetc_then_fscanf(self):
        fp = io.StringIO('23')
        ungetc('1', fp)
        r = Ref()
        self.assertEqual(fscanf(fp, '%d', r), 1)
        self.assertEqual(r.value, 123)


class StandardStreamsTest(unittest.TestCase):
    def test_printf(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            self.assertEqual(printf('%s-%d\n', 'a', 1), 4)
            self.assertEqual(vprintf('%x', [255]), 2)
        self.assertEqual(out.getvalue(), 'a-1\nff')

    def test_scanf(self):
        with mock.patch('sys.stdin', new=io.StringIO('7 8')):
            a, b = Ref(), Ref()
            self.assertEqual(scanf('%d', a), 1)
            self.assertEqual(vscanf('%d', [b]), 1)
        self.assertEqual((a.value, b.value), (7, 8))

    def test_fprintf(self):
        fp = io.StringIO()
        self.assertEqual(fprintf(fp, '[%5s]', 'ab'), 7)
        self.assertEqual(fp.getvalue(), '[   ab]')


class PackageTest(unittest.TestCase):
    def test_all(self):
        for name in ('sprintf', 'sscanf', 'Ref', 'FormatError', 'EOF'):
            self.assertIn(name, pystdio.__all__)
        self.assertIn('__version__', pystdio.__all__)
        self.assertNotIn('types', pystdio.__all__)

    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(pystdio.FormatError, ValueError))
        for name in (
            'ArgumentError',
            'BufferOverflowError',
            'DestinationOverflowError',
            'FormatIOError',
            'FormatParseError',
            'UnsupportedFormatError',
        ):
            self.assertTrue(
                issubclass(getattr(pystdio, name), pystdio.FormatError), name
            )


if __name__ == '__main__':
    unittest.main()
