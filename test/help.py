"""
Help renderer tests (sections, option entries, wrapping).

Conventions
- Test method names follow CamelCase per project convention.
- Pages are rendered at an explicit width so results do not depend on the terminal.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argshell import parse
from argshell.help import details, flags, paragraphs, render


def page(*tokens, width=80):
    return render(parse(tokens), width=width)


class TestParagraphs(TestCase):
    """Free text normalization."""

    def testJoinsLinesAndSplitsParagraphs(self):
        self.assertEqual(paragraphs("one\ntwo  \n\n\nthree\n"), ["one two", "three"])

    def testBlankText(self):
        self.assertEqual(paragraphs("  \n "), [])


class TestSections(TestCase):
    """NAME / SUMMARY / DESCRIPTION headings."""

    def testNameWithSummary(self):
        lines = page("--program-name", "demo", "--program-summary", "does things").splitlines()
        self.assertEqual(lines[:2], ["NAME", "       demo - does things"])

    def testNameAlone(self):
        self.assertEqual(page("--program-name", "demo").splitlines()[:2], ["NAME", "       demo"])

    def testSummaryAlone(self):
        self.assertEqual(page("--program-summary", "does things").splitlines()[:2], ["SUMMARY", "       does things"])

    def testDescriptionParagraphs(self):
        lines = page("--program-description", "First\nline.\n\nSecond.").splitlines()
        self.assertEqual(lines[:4], ["DESCRIPTION", "       First line.", "", "       Second."])

    def testEmptyDefinition(self):
        self.assertEqual(page(), "\n")


class TestOptions(TestCase):
    """Per-argument entries."""

    def testBooleanEntry(self):
        text = page("--bool", "verbose", "v", "--negative-flag", "quiet")
        self.assertIn("OPTIONS", text)
        self.assertIn("       --verbose[=<true|false>], -v[=<true|false>], --quiet\n", text)
        self.assertIn("           No details available.\n", text)
        self.assertIn("When this option is not provided it will default to false.", text)

    def testValueEntry(self):
        text = page("--int", "count", "c", "--default", "1", "--desc", "Number of runs.")
        self.assertIn("       --count <count>, -c <count>\n", text)
        self.assertIn("           Number of runs.\n", text)
        self.assertIn("           When this option is not provided it will default to '1'.\n", text)

    def testChoiceEntry(self):
        text = page("--choice", "mode", "--option", "fast", "Quick mode", "--option", "slow", "--map", "quick", "fast")
        self.assertIn("           The possible options are:\n", text)
        self.assertIn("           •   fast - Quick mode\n", text)
        self.assertIn("           •   slow - No details available.\n", text)
        self.assertIn("           •   quick - Identical to 'fast'\n", text)

    def testPositionalLabels(self):
        self.assertEqual(flags(parse(["--str", "file", "--ordinal", "0"]).arguments[0]), ["--file <file>", "<file>"])
        self.assertEqual(flags(parse(["--str", "--name", "rest", "--catch-all"]).arguments[0]), ["<rest>..."])

    def testSecretArgumentsHidden(self):
        text = page("--str", "token", "--secret", "--str", "user")
        self.assertNotIn("--token", text)
        self.assertIn("--user <user>", text)

    def testDetailsWithoutDefault(self):
        self.assertEqual(list(details(parse(["--str", "user"]).arguments[0])), [("No details available.", False)])


class TestWrapping(TestCase):
    """Width handling."""

    def testDescriptionsWrapWithinWidth(self):
        description = " ".join(["word"] * 60)
        text = page("--str", "note", "--desc", description, width=40)
        lines = text.splitlines()
        self.assertTrue(all(len(line) <= 40 for line in lines))
        body = [line for line in lines if line.startswith("           word")]
        self.assertGreater(len(body), 1)

    def testColumnsSetting(self):
        description = " ".join(["word"] * 60)
        narrow = page("--cols", "40", "--str", "note", "--desc", description, width=None)
        self.assertTrue(all(len(line) <= 40 for line in narrow.splitlines()))

    def testWideFlagsMeasuredInCells(self):
        text = page("--str", "--name", "label", "--flag", "--名前名前名前", "--flag", "--設定設定設定", width=50)
        self.assertIn("       --名前名前名前 <label>,\n       --設定設定設定 <label>\n", text)

    def testLongFlagListsBreak(self):
        text = page("--str", "alpha", "--flag", "--bravo", "--flag", "--charlie", "--flag", "--delta", width=50)
        self.assertIn("       --alpha <alpha>, --bravo <alpha>,\n       --charlie <alpha>, --delta <alpha>\n", text)


if __name__ == "__main__":
    unittest.main()
