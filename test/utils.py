# python
"""
Utilities behavioral tests.

Scope
- Unset/coalesce sentinel semantics.
- hierarchy(): most derived first, universal root excluded.
- iscollection()/stringify(): what counts as a collection of option values.
"""
import unittest
from unittest import TestCase

from optionary.utils import *


class Root:
    pass


class Middle(Root):
    pass


class Leaf(Middle):
    pass


class Mixin:
    pass


class Diamond(Leaf, Mixin):
    pass


class TestUnset(TestCase):
    """Sentinel semantics."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestHierarchy(TestCase):
    """Class walk used by the scanners."""

    def testMostDerivedFirst(self):
        self.assertEqual(list(hierarchy(Leaf())), [Leaf, Middle, Root])

    def testRootExcluded(self):
        self.assertEqual(list(hierarchy(object())), [])

    def testFollowsResolutionOrder(self):
        self.assertEqual(list(hierarchy(Diamond())), [Diamond, Leaf, Middle, Root, Mixin])


class TestCollections(TestCase):
    """Collections of option values."""

    def testCollections(self):
        for object in ([], (), set(), frozenset(), {}, range(2), list, tuple, dict):
            self.assertTrue(iscollection(object), object)

    def testNonCollections(self):
        for object in ("abc", b"abc", bytearray(), None, 1, str, bytes, iter([])):
            self.assertFalse(iscollection(object), object)

    def testStringify(self):
        self.assertEqual(stringify((1, "a", 2.5)), ["1", "a", "2.5"])


if __name__ == "__main__":
    unittest.main()
