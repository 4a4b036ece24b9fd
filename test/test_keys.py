"""
Key-name translation tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from confline.keys import *


class TestStringToKey(TestCase):
    def testNamedKeys(self):
        self.assertEqual(string_to_key("Space"), 0x250000)
        self.assertEqual(string_to_key("F1"), 0x270000)
        self.assertEqual(string_to_key("F12"), 0x320000)
        self.assertEqual(string_to_key("Page Down"), 0x380000)

    def testPrintableCharacters(self):
        self.assertEqual(string_to_key("q"), ord("q"))
        self.assertEqual(string_to_key("-"), ord("-"))

    def testModifiers(self):
        self.assertEqual(string_to_key("Ctrl-q"), KEY_MODIFIER_CTRL | ord("q"))
        self.assertEqual(string_to_key("ctrl-SHIFT-Left"), KEY_MODIFIER_CTRL | KEY_MODIFIER_SHIFT | KEYS["Left"])
        self.assertEqual(string_to_key("Alt--"), KEY_MODIFIER_ALT | ord("-"))

    def testUnknownNames(self):
        self.assertEqual(string_to_key("Hyper-q"), 0)
        self.assertEqual(string_to_key("space"), 0)
        self.assertEqual(string_to_key(""), 0)
        self.assertEqual(string_to_key("Ctrl-"), 0)
        self.assertEqual(string_to_key("Ctrl-Unset"), 0)

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            string_to_key(32)


if __name__ == "__main__":
    unittest.main()
