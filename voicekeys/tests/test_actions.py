#!/usr/bin/env python3
"""
Unit tests for key actions and the character key map.
"""

import unittest

from voicekeys.core.actions import SPACE, Chord, Tap, key_for_char, type_text_actions


class TestKeyMap(unittest.TestCase):
    """Test character to key mapping."""

    def test_printable_characters_map_to_themselves(self):
        for char in "az09.,'?!-":
            with self.subTest(char=char):
                self.assertEqual(key_for_char(char), char)

    def test_space(self):
        self.assertEqual(key_for_char(" "), SPACE)

    def test_unmapped_characters(self):
        for char in ("é", "\n", "\t", "", "ab", "日"):
            with self.subTest(char=char):
                self.assertIsNone(key_for_char(char))

    def test_type_text_actions(self):
        self.assertEqual(
            type_text_actions("hi there"),
            [Tap("h"), Tap("i"), Tap(SPACE), Tap("t"), Tap("h"), Tap("e"), Tap("r"), Tap("e")],
        )

    def test_type_text_skips_unmapped(self):
        self.assertEqual(type_text_actions("né\n"), [Tap("n")])
        self.assertEqual(type_text_actions(""), [])

    def test_actions_are_values(self):
        self.assertEqual(Tap("a"), Tap("a"))
        self.assertNotEqual(Tap("a"), Chord("ctrl", "a"))
        self.assertEqual(len({Chord("ctrl", "backspace"), Chord("ctrl", "backspace")}), 1)


if __name__ == '__main__':
    unittest.main()
