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

import unittest

from pystdio import directive
from pystdio.directive import (
    STAR,
    Flags,
    ScanSet,
    argument_kinds,
    iter_directives,
    parse_print_directive,
    parse_scan_directive,
)
from pystdio.errors import FormatParseError, UnsupportedFormatError


class PrintDirectiveTest(unittest.TestCase):
    def test_everything(self):
        d = parse_print_directive('%-+ 0#10.5ld', 0)
        self.assertEqual(
            d.flags,
            Flags(left=True, sign=True, space=False, zero=False, alt=True),
        )
        self.assertEqual(d.width, 10)
        self.assertEqual(d.precision, 5)
        self.assertEqual(d.length, 'l')
        self.assertEqual(d.conversion, 'd')
        self.assertEqual((d.start, d.end), (0, 12))

    def test_offset(self):
        d = parse_print_directive('ab%5sc', 2)
        self.assertEqual((d.start, d.end), (2, 5))
        self.assertEqual(d.width, 5)
        self.assertIsNone(d.precision)

    def test_bare_precision_is_zero(self):
        d = parse_print_directive('%.d', 0)
        self.assertEqual(d.precision, 0)

    def test_stars(self):
        d = parse_print_directive('%*.*s', 0)
        self.assertEqual(d.width, STAR)
        self.assertEqual(d.precision, STAR)

    def test_zero_flag_kept_without_minus(self):
        d = parse_print_directive('%05d', 0)
        self.assertTrue(d.flags.zero)
        self.assertEqual(d.width, 5)

    def test_unknown_conversion(self):
        d = parse_print_directive('%5k', 0)
        self.assertEqual(d.conversion, '')
        self.assertEqual(d.end, 2)

    def test_truncated(self):
        d = parse_print_directive('%', 0)
        self.assertEqual(d.conversion, '')
        self.assertEqual(d.end, 1)


class ScanDirectiveTest(unittest.TestCase):
    def test_suppress_width_length(self):
        d = parse_scan_directive('%*10lx', 0)
        self.assertTrue(d.suppress)
        self.assertEqual(d.width, 10)
        self.assertEqual(d.length, 'l')
        self.assertEqual(d.conversion, 'x')
        self.assertEqual(d.end, 6)

    def test_scanset(self):
        d = parse_scan_directive('%[a-c]x', 0)
        self.assertEqual(d.conversion, '[')
        self.assertEqual(d.scanset.members(), 'abc')
        self.assertEqual(d.end, 6)

    def test_scan_has_no_flags_or_precision(self):
        d = parse_scan_directive('%-5d', 0)
        self.assertEqual(d.conversion, '')
        self.assertEqual(d.end, 1)


class ScanSetTest(unittest.TestCase):
    def parse(self, text):
        ss, end = ScanSet.parse(text, 1)
        self.assertEqual(end, len(text))
        return ss

    def test_range(self):
        ss = self.parse('[0-9]')
        self.assertEqual(ss.members(), '0123456789')
        self.assertIn('5', ss)
        self.assertNotIn('a', ss)
        self.assertNotIn('', ss)

    def test_negated(self):
        ss = self.parse('[^,]')
        self.assertTrue(ss.negated)
        self.assertIn('a', ss)
        self.assertIn('€', ss)
        self.assertNotIn(',', ss)
        self.assertNotIn('', ss)

    def test_leading_bracket(self):
        self.assertEqual(self.parse('[]a]').members(), ']a')
        ss = self.parse('[^]]')
        self.assertNotIn(']', ss)
        self.assertIn('a', ss)

    def test_literal_dashes(self):
        self.assertEqual(self.parse('[-a]').members(), '-a')
        self.assertEqual(self.parse('[a-]').members(), '-a')

    def test_reversed_range(self):
        self.assertEqual(self.parse('[z-a]').members(), 'z')

    def test_wide_characters(self):
        ss = self.parse('[€x]')
        self.assertEqual(ss.members(), 'x')
        self.assertNotIn('€', ss)

    def test_unterminated(self):
        with self.assertRaises(FormatParseError) as cm:
            ScanSet.parse('%[abc', 2)
        self.assertEqual(cm.exception.pos, 1)
        self.assertRaises(FormatParseError, ScanSet.parse, '%[]', 2)

    def test_repr(self):
        self.assertEqual(repr(self.parse('[^ab]')), "ScanSet('^ab')")


class ArgumentKindsTest(unittest.TestCase):
    def test_print(self):
        self.assertEqual(
            argument_kinds('%*.*d %s %c %f %n %u %x %% %k'),
            ['int', 'int', 'int', 'str', 'char', 'double', 'ref', 'uint',
             'uint'],
        )

    def test_scan(self):
        self.assertEqual(
            argument_kinds('%d %*s %[a-z] %% %n %c', scan=True),
            ['ref', 'ref', 'ref', 'ref'],
        )

    def test_unsupported(self):
        self.assertRaises(UnsupportedFormatError, argument_kinds, '%e')
        self.assertRaises(UnsupportedFormatError, argument_kinds, '%10.2G')
        self.assertEqual(argument_kinds('%f'), ['double'])
        self.assertRaises(
            UnsupportedFormatError, argument_kinds, '%f', scan=True
        )

    def test_iter_directives(self):
        spans = [(d.start, d.end) for d in iter_directives('a%db%%c%5s')]
        self.assertEqual(spans, [(1, 3), (4, 6), (7, 10)])

    def test_conversion_tables(self):
        self.assertNotIn('[', directive.PRINT_CONVERSIONS)
        self.assertIn('[', directive.SCAN_CONVERSIONS)


if __name__ == '__main__':
    unittest.main()
