"""
Descriptor module behavioral tests.

Scope
- Validate OptionDescriptor construction, sanitization and read-only fields.
- Validate Kind helpers (textual, takes_argument).
- Validate DescriptorIndex counts, traversal, name lookup and short-flag mapping.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from confline import Component, DescriptorIndex, Kind, OptionDescriptor


class TestKind(TestCase):
    def testTextualKinds(self):
        for kind in (Kind.STRING, Kind.PASSWORD, Kind.FILE, Kind.DIRECTORY,
                     Kind.MODULE, Kind.MODULE_LIST, Kind.MODULE_LIST_CAT, Kind.MODULE_CAT):
            self.assertTrue(kind.textual, kind)
        for kind in (Kind.INTEGER, Kind.FLOAT, Kind.KEY, Kind.BOOL, Kind.HINT):
            self.assertFalse(kind.textual, kind)

    def testTakesArgument(self):
        self.assertFalse(Kind.BOOL.takes_argument)
        self.assertFalse(Kind.HINT.takes_argument)
        self.assertTrue(Kind.INTEGER.takes_argument)
        self.assertTrue(Kind.STRING.takes_argument)


class TestOptionDescriptor(TestCase):
    def testDefaults(self):
        descriptor = OptionDescriptor("intf")
        self.assertEqual(descriptor.name, "intf")
        self.assertIs(descriptor.kind, Kind.STRING)
        self.assertIsNone(descriptor.short)
        self.assertIsNone(descriptor.replacement)
        self.assertFalse(descriptor.strict)
        self.assertIsNone(descriptor.text)
        self.assertFalse(descriptor.deprecated)

    def testNameIsTrimmed(self):
        self.assertEqual(OptionDescriptor("  zoom ", Kind.FLOAT).name, "zoom")

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            OptionDescriptor(3)

    def testNameCannotBeEmpty(self):
        with self.assertRaises(ValueError):
            OptionDescriptor("   ")

    def testNameCannotContainWhitespace(self):
        with self.assertRaises(ValueError):
            OptionDescriptor("video filter")

    def testKindMustBeKind(self):
        with self.assertRaises(TypeError):
            OptionDescriptor("fullscreen", "bool")

    def testShortMustBeSingleCharacter(self):
        with self.assertRaises(ValueError):
            OptionDescriptor("fullscreen", Kind.BOOL, short="fs")

    def testShortMustFitInAByte(self):
        with self.assertRaises(ValueError):
            OptionDescriptor("fullscreen", Kind.BOOL, short="Ā")

    def testShortRejectsReservedCharacters(self):
        for short in ("-", ":", " "):
            with self.assertRaises(ValueError):
                OptionDescriptor("fullscreen", Kind.BOOL, short=short)

    def testHintCannotHaveShort(self):
        with self.assertRaises(ValueError):
            OptionDescriptor("interface", Kind.HINT, short="i")

    def testReplacementCannotBeEmpty(self):
        with self.assertRaises(ValueError):
            OptionDescriptor("vout-filter", Kind.MODULE_LIST, replacement=" ")

    def testDeprecated(self):
        descriptor = OptionDescriptor("vout-filter", Kind.MODULE_LIST, replacement="video-filter")
        self.assertTrue(descriptor.deprecated)
        self.assertEqual(descriptor.replacement, "video-filter")

    def testFieldsAreReadOnly(self):
        descriptor = OptionDescriptor("fullscreen", Kind.BOOL, short="f")
        with self.assertRaises(AttributeError):
            descriptor.name = "windowed"
        with self.assertRaises(AttributeError):
            descriptor._name = "windowed"
        self.assertEqual(descriptor.name, "fullscreen")

    def testRepr(self):
        descriptor = OptionDescriptor("fullscreen", Kind.BOOL, short="f")
        self.assertTrue(repr(descriptor).startswith("option-descriptor(name='fullscreen', short='f'"))


class TestDescriptorIndex(TestCase):
    def setUp(self):
        self.descriptors = [
            OptionDescriptor("interface", Kind.HINT, text="Interface"),
            OptionDescriptor("fullscreen", Kind.BOOL, short="f"),
            OptionDescriptor("width", Kind.INTEGER, short="w"),
            OptionDescriptor("quiet", Kind.BOOL, short="q"),
            OptionDescriptor("width", Kind.FLOAT, short="W"),
            OptionDescriptor("wide", Kind.STRING, short="w"),
        ]
        self.index = DescriptorIndex(self.descriptors)

    def testCounts(self):
        self.assertEqual(self.index.options, 5)
        self.assertEqual(self.index.booleans, 2)
        self.assertEqual(len(self.index), 5)

    def testTraversalSkipsHintsAndKeepsOrder(self):
        self.assertEqual(list(self.index), self.descriptors[1:])

    def testFindFirstRegistrationWins(self):
        self.assertIs(self.index.find("width"), self.descriptors[2])

    def testFindNeverReturnsHints(self):
        self.assertIsNone(self.index.find("interface"))
        self.assertNotIn("interface", self.index)

    def testFindUnknown(self):
        self.assertIsNone(self.index.find("bogus"))

    def testFindIsCaseSensitive(self):
        self.assertIsNone(self.index.find("Fullscreen"))

    def testShortsLastWriterWins(self):
        shorts = self.index.shorts()
        self.assertIs(shorts["w"], self.descriptors[5])
        self.assertIs(shorts["f"], self.descriptors[1])
        self.assertEqual(set(shorts), {"f", "w", "q", "W"})

    def testEmptyIndex(self):
        index = DescriptorIndex()
        self.assertEqual(index.options, 0)
        self.assertEqual(index.booleans, 0)
        self.assertEqual(list(index), [])
        self.assertEqual(index.shorts(), {})

    def testRejectsNonDescriptors(self):
        with self.assertRaises(TypeError):
            DescriptorIndex(["fullscreen"])

    def testFromComponents(self):
        index = DescriptorIndex.from_components([
            Component("core", (self.descriptors[1],)),
            Component("empty"),
            Component("video", (self.descriptors[3], self.descriptors[0])),
        ])
        self.assertEqual(list(index), [self.descriptors[1], self.descriptors[3]])
        self.assertEqual(index.booleans, 2)

    def testFromComponentsRejectsOtherItems(self):
        with self.assertRaises(TypeError):
            DescriptorIndex.from_components([self.descriptors])


if __name__ == "__main__":
    unittest.main()
