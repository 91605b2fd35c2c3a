"""Tests for add-form input fields."""

from __future__ import annotations

from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from cmd_keeper.tui.input import InputField


def _type(field: InputField, text: str) -> None:
    for ch in text:
        field.handle_key(KeyPress(ch))


class TestInputField:
    def test_starts_empty(self):
        field = InputField("Enter command...")
        assert field.is_empty()
        assert field.placeholder == "Enter command..."

    def test_typing(self):
        field = InputField()
        _type(field, "git log")
        assert field.text == "git log"
        assert field.cursor_position == 7

    def test_cursor_movement_and_insert(self):
        field = InputField()
        _type(field, "ac")
        field.handle_key(KeyPress(Keys.Left))
        _type(field, "b")
        assert field.text == "abc"

        field.handle_key(KeyPress(Keys.Home))
        assert field.cursor_position == 0
        field.handle_key(KeyPress(Keys.End))
        assert field.cursor_position == 3

    def test_backspace_and_delete(self):
        field = InputField()
        _type(field, "abcd")
        field.handle_key(KeyPress(Keys.Backspace))
        assert field.text == "abc"
        field.handle_key(KeyPress(Keys.Home))
        field.handle_key(KeyPress(Keys.Delete))
        assert field.text == "bc"

    def test_backspace_at_start_is_noop(self):
        field = InputField()
        assert field.handle_key(KeyPress(Keys.Backspace))
        assert field.text == ""

    def test_newline(self):
        field = InputField()
        _type(field, "for f in *")
        field.handle_key(KeyPress(Keys.ControlJ))
        _type(field, "do")
        assert field.text == "for f in *\ndo"

    def test_paste_normalizes_line_endings(self):
        field = InputField()
        field.handle_key(KeyPress(Keys.BracketedPaste, "a\r\nb\rc"))
        assert field.text == "a\nb\nc"

    def test_unhandled_key(self):
        field = InputField()
        assert field.handle_key(KeyPress(Keys.F5)) is False
        assert field.is_empty()

    def test_clear(self):
        field = InputField()
        _type(field, "abc")
        field.clear()
        assert field.is_empty()
        assert field.cursor_position == 0
