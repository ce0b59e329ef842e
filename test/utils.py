"""
Utility helpers tests (sentinel, mirrors, name derivation, ordinals).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from collections import namedtuple
from types import MappingProxyType
from unittest import TestCase

from argshell.utils import Unset, UnsetType, coalesce, constantize, mirror, ordinal, rename


class TestUnset(TestCase):
    """The Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopiesKeepIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testSubclassingRejected(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)


class TestMirror(TestCase):
    """Read-only mirrored properties."""

    def setUp(self):
        Pair = namedtuple("Pair", ("left", "right"))

        class Holder:
            items = mirror("items")
            table = mirror("table")
            pair = mirror("pair")

            def __init__(self):
                self._items = [1, [2, 3]]
                self._table = {"a": [1]}
                self._pair = Pair(1, 2)

        self.holder = Holder()
        self.Pair = Pair

    def testSequencesBecomeTuples(self):
        self.assertEqual(self.holder.items, (1, (2, 3)))

    def testMappingsBecomeProxies(self):
        self.assertIsInstance(self.holder.table, MappingProxyType)
        self.assertEqual(self.holder.table["a"], (1,))

    def testNamedTuplesPreserved(self):
        self.assertIsInstance(self.holder.pair, self.Pair)

    def testPropertyIsReadOnly(self):
        with self.assertRaises(AttributeError):
            self.holder.items = ()

    def testRename(self):
        def function():
            pass

        self.assertEqual(rename(function, "other").__name__, "other")
        with self.assertRaises(TypeError):
            rename(1, "other")


class TestConstantize(TestCase):
    """Shell variable names derived from flags."""

    def testLongFlag(self):
        self.assertEqual(constantize("--verbose"), "VERBOSE")

    def testDashesCollapse(self):
        self.assertEqual(constantize("--dry-run"), "DRY_RUN")
        self.assertEqual(constantize("kinda----rainy"), "KINDA_RAINY")

    def testShortFlag(self):
        self.assertEqual(constantize("-u"), "U")

    def testNoAlphanumerics(self):
        self.assertEqual(constantize("---"), "")


class TestOrdinal(TestCase):
    """Human-friendly position labels."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")


if __name__ == "__main__":
    unittest.main()
