# Copyright 2017 Google Inc. All rights reserved.
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

"""Host objects that the command-line tool does its I/O through.

`Host` talks to the real process and file system; `FakeHost` keeps
everything in memory so that tests can drive `tool.main()` directly and
inspect what it printed.
"""

import io
import os
import subprocess
import sys
from typing import Callable, Optional
import unittest


class Host:
    def __init__(self):
        self.stdin = sys.stdin
        self.stdout = sys.stdout
        self.stderr = sys.stderr

    def exists(self, path):
        return os.path.exists(path)

    def print(self, *args, end='\n', file=None, flush=True):
        file = file or self.stdout
        print(*args, end=end, file=file, flush=flush)

    def read_text_file(self, path):
        with open(path, encoding='utf-8') as f:
            return f.read()


class FakeHost:
    def __init__(self):
        self.stderr = io.StringIO()
        self.stdin = io.StringIO()
        self.stdout = io.StringIO()
        self.files = {}
        self.cwd = '/tmp'

    def abspath(self, path):
        if path.startswith('/'):
            return path
        return self.cwd + '/' + path

    def exists(self, path):
        return self.abspath(path) in self.files

    def print(self, *args, end='\n', file=None, flush=True):
        del flush
        file = file or self.stdout
        print(*args, end=end, file=file)

    def read_text_file(self, path):
        return self.files[self.abspath(path)]

    def write_text_file(self, path, contents):
        self.files[self.abspath(path)] = contents


class _BaseTestCase(unittest.TestCase):
    maxDiff: Optional[int] = None

    def call(self, args, stdin, files):
        raise NotImplementedError

    # pylint: disable=too-many-positional-arguments
    def check(
        self, args, stdin=None, files=None, returncode=0, out=None, err=None
    ):
        actual_ret, actual_out, actual_err = self.call(args, stdin, files)
        if returncode is not None:
            self.assertEqual(returncode, actual_ret)
        if out is not None:
            self.assertMultiLineEqual(out, actual_out)
        if err is not None:
            self.assertMultiLineEqual(err, actual_err)
        return actual_ret, actual_out, actual_err

    # pylint: enable=too-many-positional-arguments


class InlineTestCase(_BaseTestCase):
    """Runs `main` in-process against a `FakeHost`."""

    main: Optional[Callable[..., int]] = None

    def call(self, args, stdin, files):
        self.assertIsNotNone(self.__class__.main, '__class__.main is not set')
        host = FakeHost()
        for path, contents in (files or {}).items():
            host.write_text_file(path, contents)
        if stdin:
            host.stdin.write(stdin)
            host.stdin.seek(0)

        try:
            # pylint: disable=not-callable
            actual_ret = self.__class__.main(args, host)
        except SystemExit as e:
            actual_ret = e.code

        return actual_ret, host.stdout.getvalue(), host.stderr.getvalue()


class ModuleTestCase(_BaseTestCase):
    """Runs `python -m <module>` in a subprocess."""

    module: Optional[str] = None

    def call(self, args, stdin, files):
        self.assertIsNotNone(self.module, 'self.module is not set')
        self.assertFalse(files, 'files are not supported by ModuleTestCase')
        with subprocess.Popen(
            [sys.executable, '-m', self.module] + args,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding='utf-8',
        ) as proc:
            actual_out, actual_err = proc.communicate(input=stdin)
            actual_ret = proc.returncode
        return actual_ret, actual_out, actual_err
