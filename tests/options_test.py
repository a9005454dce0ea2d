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
import unittest

from pystdio import options


class FormatOptionsTest(unittest.TestCase):
    def test_defaults(self):
        opts = options.FormatOptions()
        self.assertTrue(opts.bounded)
        self.assertEqual(opts['int_bits'], 32)
        self.assertEqual(
            (opts.bits('h'), opts.bits(''), opts.bits('l'), opts.bits('L')),
            (16, 32, 64, 64),
        )

    def test_overrides(self):
        opts = options.FormatOptions(int_bits=16, bounded=False)
        self.assertEqual(opts.int_bits, 16)
        self.assertFalse(opts.bounded)
        opts.long_bits = 128
        self.assertEqual(opts['long_bits'], 128)

    def test_missing_attribute(self):
        self.assertRaises(
            AttributeError, getattr, options.FormatOptions(), 'nonexistent'
        )

    def test_from_args(self):
        parser = argparse.ArgumentParser()
        options.add_arguments(parser)
        args = parser.parse_args(['--no-bounded', '--short-bits', '8'])
        opts = options.options_from_args(args)
        self.assertFalse(opts.bounded)
        self.assertEqual(opts.short_bits, 8)
        self.assertEqual(opts.int_bits, 32)


if __name__ == '__main__':
    unittest.main()
