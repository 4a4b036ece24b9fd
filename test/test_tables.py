"""
Option table behavioral tests.

Scope
- Validate long-option table sizing, ordering, negation forms and terminator.
- Validate the packed short-option spec and last-writer-wins registration.
- Validate degraded builds (unusable names are skipped, nothing else).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from confline import (
    Argument,
    DescriptorIndex,
    Kind,
    LongOptionEntry,
    LongOptionTable,
    OptionDescriptor,
    ShortOptionTable,
    build_long_options,
    build_short_options,
    parse_spec,
)


class TestLongOptions(TestCase):
    def setUp(self):
        self.descriptors = [
            OptionDescriptor("interface", Kind.HINT),
            OptionDescriptor("audio", Kind.BOOL),
            OptionDescriptor("intf", Kind.MODULE),
            OptionDescriptor("fullscreen", Kind.BOOL, short="f"),
            OptionDescriptor("verbose", Kind.INTEGER, short="v"),
            OptionDescriptor("sout", Kind.STRING, short="s"),
        ]
        self.index = DescriptorIndex(self.descriptors)
        self.table = build_long_options(self.index)

    def testLiveEntryCount(self):
        self.assertEqual(len(self.table), self.index.options + 2 * self.index.booleans)
        self.assertEqual(self.table.capacity, self.index.options + 2 * self.index.booleans + 1)
        self.assertIsNone(self.table.terminator)

    def testEntriesInTraversalOrder(self):
        self.assertEqual([entry.name for entry in self.table], [
            "audio", "noaudio", "no-audio",
            "intf",
            "fullscreen", "nofullscreen", "no-fullscreen",
            "verbose",
            "sout",
        ])

    def testNoHintEntry(self):
        self.assertIsNone(self.table.lookup("interface"))

    def testArgumentPolicy(self):
        self.assertIs(self.table.lookup("intf")[1].argument, Argument.REQUIRED)
        self.assertIs(self.table.lookup("verbose")[1].argument, Argument.REQUIRED)
        self.assertIs(self.table.lookup("fullscreen")[1].argument, Argument.NONE)

    def testNegationForms(self):
        for name in ("nofullscreen", "no-fullscreen"):
            index, entry = self.table.lookup(name)
            self.assertTrue(entry.negated)
            self.assertIs(entry.argument, Argument.NONE)
            self.assertEqual(entry.base, "fullscreen")
        self.assertFalse(self.table.lookup("fullscreen")[1].negated)

    def testLookupReturnsSlot(self):
        index, entry = self.table.lookup("nofullscreen")
        self.assertEqual(index, 5)
        self.assertIs(self.table[index], entry)

    def testLookupIsExact(self):
        self.assertIsNone(self.table.lookup("full"))
        self.assertIsNone(self.table.lookup("FULLSCREEN"))

    def testEmptyIndex(self):
        table = build_long_options(DescriptorIndex())
        self.assertEqual(len(table), 0)
        self.assertEqual(table.capacity, 1)

    def testUnusableNamesAreSkipped(self):
        index = DescriptorIndex([
            OptionDescriptor("a=b", Kind.BOOL),
            OptionDescriptor("-dash", Kind.STRING),
            OptionDescriptor("zoom", Kind.FLOAT),
        ])
        table = build_long_options(index)
        self.assertEqual([entry.name for entry in table], ["zoom"])
        self.assertEqual(table.capacity, 3 + 2 + 1)

    def testRelease(self):
        self.table.release()
        self.assertEqual(len(self.table), 0)
        self.assertEqual(list(self.table), [])
        self.assertIsNone(self.table.lookup("intf"))


class TestLongOptionTable(TestCase):
    def testNeedsTerminatorSlot(self):
        with self.assertRaises(ValueError):
            LongOptionTable(0)

    def testTerminatorSlotStaysEmpty(self):
        table = LongOptionTable(2)
        table.append(LongOptionEntry("zoom", Argument.REQUIRED))
        with self.assertRaises(OverflowError):
            table.append(LongOptionEntry("intf", Argument.REQUIRED))

    def testFirstDuplicateWins(self):
        table = LongOptionTable(3)
        first = LongOptionEntry("nofoo", Argument.REQUIRED)
        table.append(first)
        table.append(LongOptionEntry("nofoo", Argument.NONE, True))
        self.assertEqual(table.lookup("nofoo"), (0, first))

    def testRejectsOtherItems(self):
        with self.assertRaises(TypeError):
            LongOptionTable(2).append(("zoom", Argument.REQUIRED, False, None))

    def testBaseOfNegationForms(self):
        self.assertEqual(LongOptionEntry("nonotify", Argument.NONE, True).base, "notify")
        self.assertEqual(LongOptionEntry("no-notify", Argument.NONE, True).base, "notify")
        self.assertEqual(LongOptionEntry("nothing", Argument.REQUIRED).base, "nothing")


class TestShortOptions(TestCase):
    def testPackedSpec(self):
        index = DescriptorIndex([
            OptionDescriptor("fullscreen", Kind.BOOL, short="f"),
            OptionDescriptor("intf", Kind.MODULE, short="I"),
            OptionDescriptor("verbose", Kind.INTEGER, short="v"),
            OptionDescriptor("zoom", Kind.FLOAT),
            OptionDescriptor("width", Kind.INTEGER, short="W"),
        ])
        table = build_short_options(index)
        self.assertEqual(table.spec, "fI:v::W:")

    def testVerbosityNeedsIntegerKind(self):
        self.assertEqual(build_short_options(DescriptorIndex([
            OptionDescriptor("video", Kind.STRING, short="v"),
        ])).spec, "v:")
        self.assertEqual(build_short_options(DescriptorIndex([
            OptionDescriptor("video", Kind.BOOL, short="v"),
        ])).spec, "v")

    def testLastWriterWins(self):
        first = OptionDescriptor("alpha", Kind.BOOL, short="x")
        second = OptionDescriptor("beta", Kind.STRING, short="x")
        table = build_short_options(DescriptorIndex([first, second]))
        self.assertIs(table["x"], second)
        self.assertEqual(table.spec, "x:")
        self.assertIs(parse_spec(table.spec)["x"], Argument.REQUIRED)

    def testTableOverwritesEarlierClaim(self):
        first = OptionDescriptor("alpha", Kind.BOOL, short="x")
        second = OptionDescriptor("beta", Kind.STRING, short="x")
        table = ShortOptionTable()
        table.register(first)
        table.register(second)
        self.assertIs(table["x"], second)
        self.assertEqual(table.spec, "xx:")

    def testLookups(self):
        descriptor = OptionDescriptor("fullscreen", Kind.BOOL, short="f")
        table = build_short_options(DescriptorIndex([descriptor]))
        self.assertIn("f", table)
        self.assertNotIn("g", table)
        self.assertIsNone(table.get("ff"))
        with self.assertRaises(KeyError):
            table["g"]

    def testRelease(self):
        table = build_short_options(DescriptorIndex([OptionDescriptor("fullscreen", Kind.BOOL, short="f")]))
        table.release()
        self.assertEqual(table.spec, "")
        self.assertNotIn("f", table)


class TestParseSpec(TestCase):
    def testArities(self):
        self.assertEqual(parse_spec("ab:v::"), {
            "a": Argument.NONE,
            "b": Argument.REQUIRED,
            "v": Argument.OPTIONAL,
        })

    def testLaterOccurrenceOverrides(self):
        self.assertEqual(parse_spec("x:x"), {"x": Argument.NONE})

    def testEmpty(self):
        self.assertEqual(parse_spec(""), {})


if __name__ == "__main__":
    unittest.main()
