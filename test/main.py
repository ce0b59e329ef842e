"""
Front end tests (exit codes, stdout shell code, stderr diagnostics, debug trace).

Conventions
- Test method names follow CamelCase per project convention.
- stdout and stderr are captured with contextlib redirection.
"""

from __future__ import annotations

import contextlib
import io
import logging
import unittest
from unittest import TestCase, mock

from rich.console import Console
from rich.logging import RichHandler

from argshell import faults
from argshell.__main__ import main


class TestMain(TestCase):
    """argshell console script."""

    def setUp(self):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        stack = contextlib.ExitStack()
        stack.enter_context(contextlib.redirect_stdout(self.stdout))
        stack.enter_context(contextlib.redirect_stderr(self.stderr))
        self.addCleanup(stack.close)

    def testAssignments(self):
        code = main(["--bool", "verbose", "v", "--int", "count", "c", "--default", "1", "--", "-v"])
        self.assertEqual(code, 0)
        self.assertEqual(self.stdout.getvalue(), "VERBOSE=true\nCOUNT=1\n")

    def testPrefixExportAndRepeat(self):
        code = main(["--export", "--prefix", "APP_", "--str", "tag", "t", "--repeated", "--", "-t", "a", "-t", "b c"])
        self.assertEqual(code, 0)
        self.assertEqual(
            self.stdout.getvalue().splitlines(),
            ["export APP_TAG=2", "export APP_TAG_0=a", "export APP_TAG_1='b c'"],
        )

    def testDefinitionError(self):
        self.assertEqual(main(["--bogus"]), 2)
        self.assertIn("( exit 2 )", self.stdout.getvalue())
        self.assertIn("unrecognized option: --bogus", self.stdout.getvalue())
        self.assertIn("21111", self.stderr.getvalue())

    def testUserError(self):
        self.assertEqual(main(["--int", "count", "--", "--count", "many"]), 3)
        self.assertIn("( exit 3 )", self.stdout.getvalue())
        self.assertIn("31112", self.stderr.getvalue())

    def testUserErrorUsesProgramName(self):
        self.assertEqual(main(["--program-name", "demo", "--", "stray"]), 3)
        self.assertIn("!!! demo error: extra argument", self.stdout.getvalue())

    def testFancyFaults(self):
        self.assertEqual(main(["--fancy", "--int", "count", "--", "--count", "many"]), 3)
        self.assertIn("╭", self.stderr.getvalue())
        self.assertIn("31112", self.stderr.getvalue())

    def testColorFaults(self):
        terminal = Console(file=self.stderr, width=120, force_terminal=True, color_system="truecolor")
        with mock.patch.object(faults, "console", terminal):
            self.assertEqual(main(["--color", "--int", "count", "--", "--count", "many"]), 3)
        self.assertIn("\x1b[", self.stderr.getvalue())
        self.assertNotIn("\x1b[", self.stdout.getvalue())

    def testPlainFaultsByDefault(self):
        terminal = Console(file=self.stderr, width=120, force_terminal=True, color_system="truecolor")
        with mock.patch.object(faults, "console", terminal):
            self.assertEqual(main(["--int", "count", "--", "--count", "many"]), 3)
        self.assertNotIn("\x1b[", self.stderr.getvalue())
        self.assertNotIn("╭", self.stderr.getvalue())

    def testHelp(self):
        code = main(["--auto-help", "--program-name", "demo", "--bool", "verbose", "--", "--help"])
        self.assertEqual(code, 1)
        output = self.stdout.getvalue()
        self.assertIn("$HELP_PAGER <<'ARGSHELL_HELP'", output)
        self.assertIn("       --verbose[=<true|false>]", output)
        self.assertTrue(output.endswith("( exit 1 )\n"))
        self.assertNotIn("VERBOSE=", output)

    def testHelpFunction(self):
        code = main(["--help-function", "show_help", "--bool", "verbose", "--", "--verbose"])
        self.assertEqual(code, 0)
        lines = self.stdout.getvalue().splitlines()
        self.assertEqual(lines[0], "VERBOSE=true")
        self.assertEqual(lines[1], "show_help () {")
        self.assertEqual(lines[-1], "}")

    def testDebugInstallsRichHandler(self):
        logger = logging.getLogger("argshell")
        self.addCleanup(logger.setLevel, logger.level)
        self.addCleanup(lambda: [logger.removeHandler(handler) for handler in list(logger.handlers)
                                 if isinstance(handler, RichHandler)])
        self.assertEqual(main(["--debug", "--bool", "verbose", "--", "--verbose"]), 0)
        self.assertTrue(any(isinstance(handler, RichHandler) for handler in logger.handlers))
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(self.stdout.getvalue(), "VERBOSE=true\n")

    def testDebugAfterSeparatorIsRuntimeInput(self):
        logger = logging.getLogger("argshell")
        self.assertEqual(main(["--", "--debug"]), 3)
        self.assertFalse(any(isinstance(handler, RichHandler) for handler in logger.handlers))


if __name__ == "__main__":
    unittest.main()
