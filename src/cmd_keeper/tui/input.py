"""Editable text fields for the add form."""

from __future__ import annotations

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys


class InputField:
    """A multi-line text buffer with a placeholder shown while it is empty."""

    def __init__(self, placeholder: str = "") -> None:
        self.placeholder = placeholder
        self.buffer = Buffer(multiline=True)

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor_position(self) -> int:
        return self.buffer.cursor_position

    def is_empty(self) -> bool:
        return not self.buffer.text

    def clear(self) -> None:
        self.buffer.reset()

    def insert(self, text: str) -> None:
        self.buffer.insert_text(text)

    def handle_key(self, key_press: KeyPress) -> bool:
        """Apply an editing keystroke. Returns False if the key does nothing here."""
        key = key_press.key
        buf = self.buffer
        doc = buf.document

        if key in (Keys.Backspace, Keys.ControlH):
            buf.delete_before_cursor()
        elif key == Keys.Delete:
            buf.delete()
        elif key == Keys.Left:
            buf.cursor_left()
        elif key == Keys.Right:
            buf.cursor_right()
        elif key == Keys.Up:
            buf.cursor_up()
        elif key == Keys.Down:
            buf.cursor_down()
        elif key == Keys.Home:
            buf.cursor_position += doc.get_start_of_line_position()
        elif key == Keys.End:
            buf.cursor_position += doc.get_end_of_line_position()
        elif key == Keys.ControlJ:
            buf.newline(copy_margin=False)
        elif key == Keys.BracketedPaste:
            buf.insert_text(key_press.data.replace("\r\n", "\n").replace("\r", "\n"))
        elif len(key) == 1 and key.isprintable():
            buf.insert_text(key)
        else:
            return False
        return True
