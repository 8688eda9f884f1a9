"""
Utils module behavioral tests (sentinel, name normalization, helpers).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from simplecli.utils import (
    Unset,
    UnsetType,
    coalesce,
    freeze,
    iscomposite,
    normalize,
    ordinal,
    titlecase,
)


class TestUnset(TestCase):

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):
                pass

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, None, 1), None)
        self.assertEqual(coalesce(Unset, 0), 0)
        self.assertIsNone(coalesce(Unset, Unset))


class TestNames(TestCase):

    def testNormalize(self):
        for name in ("dry_run", "Dry_Run", "dry-run", "DRY-RUN"):
            with self.subTest(name=name):
                self.assertEqual(normalize(name), "dry-run")

    def testTitlecase(self):
        self.assertEqual(titlecase("port"), "Port")
        self.assertEqual(titlecase("Port"), "Port")
        self.assertEqual(titlecase("dry-run"), "Dry_run")
        self.assertEqual(titlecase("pORT"), "PORT")
        self.assertEqual(titlecase(""), "")

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(112), "112th")


class TestHelpers(TestCase):

    def testFreeze(self):
        self.assertEqual(freeze([1, 2]), (1, 2))
        self.assertIsInstance(freeze({"a": 1}), MappingProxyType)
        self.assertEqual(freeze({1}), frozenset({1}))
        self.assertEqual(freeze("text"), "text")

    def testIscomposite(self):
        class Plain:
            pass

        class Slotted:
            __slots__ = ("x",)

        class Callable:
            def __call__(self):
                pass

        self.assertTrue(iscomposite(Plain()))
        self.assertTrue(iscomposite(Slotted()))
        for value in (1, "x", None, [], {}, Plain, print, Callable(), unittest):
            with self.subTest(value=value):
                self.assertFalse(iscomposite(value))


if __name__ == "__main__":
    unittest.main()
