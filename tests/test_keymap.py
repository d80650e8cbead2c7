"""Tests for key-token to action mapping and search-input focus."""

from __future__ import annotations

import unittest

from millercd import actions
from millercd.actions import Action
from millercd.keymap import KeyComboBinding, KeyComboRegistry, KeyMap


class KeyComboRegistryTests(unittest.TestCase):
    def test_later_binding_overrides_earlier(self) -> None:
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("x", "y"), Action(actions.NEXT)),
            KeyComboBinding(("y",), Action(actions.PREVIOUS)),
        )
        self.assertEqual(registry.lookup("x"), Action(actions.NEXT))
        self.assertEqual(registry.lookup("y"), Action(actions.PREVIOUS))
        self.assertIsNone(registry.lookup("z"))

    def test_lookup_is_exact_match(self) -> None:
        registry = KeyComboRegistry().register_binding(KeyComboBinding(("q",), Action(actions.ABORT)))
        self.assertEqual(registry.lookup("q"), Action(actions.ABORT))
        self.assertIsNone(registry.lookup("Q"))


class KeyMapTests(unittest.TestCase):
    def test_normal_bindings(self) -> None:
        keymap = KeyMap()
        expected = {
            "q": actions.ABORT,
            "ESC": actions.ABORT,
            "CTRL_C": actions.ABORT,
            "c": actions.COMMIT,
            ";": actions.COMMIT,
            "ENTER": actions.COMMIT,
            "j": actions.NEXT,
            "DOWN": actions.NEXT,
            "k": actions.PREVIOUS,
            "h": actions.ASCEND,
            "l": actions.DESCEND,
            "PAGE_DOWN": actions.PAGE_DOWN,
            "HOME": actions.HOME,
            "INSERT": actions.TOGGLE_SEARCH_MODE,
            "CTRL_S": actions.TOGGLE_SEARCH_MODE,
            "BACKSPACE": actions.BACKSPACE_SEARCH,
            "DELETE": actions.CLEAR_SEARCH,
            "V": actions.OPEN_EDITOR,
        }
        for key, name in expected.items():
            self.assertEqual(keymap.action_for_key(key), Action(name), key)
        self.assertIsNone(keymap.action_for_key("x"))
        self.assertIsNone(keymap.action_for_key(""))

    def test_search_input_types_letters(self) -> None:
        keymap = KeyMap()
        keymap.toggle_search_input()

        self.assertEqual(keymap.action_for_key("q"), Action(actions.APPEND_SEARCH_CHAR, char="q"))
        self.assertEqual(keymap.action_for_key("j"), Action(actions.APPEND_SEARCH_CHAR, char="j"))
        self.assertEqual(keymap.action_for_key(" "), Action(actions.APPEND_SEARCH_CHAR, char=" "))
        self.assertEqual(keymap.action_for_key("ENTER"), Action(actions.COMMIT))
        self.assertEqual(keymap.action_for_key("ESC"), Action(actions.ABORT))
        self.assertEqual(keymap.action_for_key("LEFT"), Action(actions.ASCEND))
        self.assertIsNone(keymap.action_for_key("TAB"))

    def test_toggle_flips_focus(self) -> None:
        keymap = KeyMap()
        self.assertFalse(keymap.search_input)
        keymap.toggle_search_input()
        self.assertTrue(keymap.search_input)
        keymap.toggle_search_input()
        self.assertFalse(keymap.search_input)


if __name__ == "__main__":
    unittest.main()
