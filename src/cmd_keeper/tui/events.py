"""Translate key presses into state-machine messages."""

from __future__ import annotations

from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from cmd_keeper.tui.app import Adding, AddingField, AppState, ConfirmDelete, Message, Normal

NORMAL_KEYS: dict[str, Message] = {
    "q": Message.QUIT,
    Keys.Escape: Message.QUIT,
    "j": Message.MOVE_DOWN,
    Keys.Down: Message.MOVE_DOWN,
    "k": Message.MOVE_UP,
    Keys.Up: Message.MOVE_UP,
    "g": Message.MOVE_TO_TOP,
    Keys.Home: Message.MOVE_TO_TOP,
    "G": Message.MOVE_TO_BOTTOM,
    Keys.End: Message.MOVE_TO_BOTTOM,
    "a": Message.START_ADDING,
    "d": Message.START_DELETE,
    "y": Message.COPY_TO_CLIPBOARD,
    "x": Message.EXECUTE_COMMAND,
    Keys.Enter: Message.EXECUTE_COMMAND,
}

CONFIRM_DELETE_KEYS: dict[str, Message] = {
    "y": Message.CONFIRM_DELETE,
    "Y": Message.CONFIRM_DELETE,
    "n": Message.CANCEL_DELETE,
    "N": Message.CANCEL_DELETE,
    Keys.Escape: Message.CANCEL_DELETE,
}


def translate(state: AppState, key_press: KeyPress) -> Message | None:
    """Map a key press to a message for the current mode.

    In the add form, keys without a binding are fed to the active input
    field and no message is produced.
    """
    key = key_press.key
    if key == Keys.ControlC:
        return Message.QUIT

    mode = state.mode
    if isinstance(mode, Normal):
        return NORMAL_KEYS.get(key)
    if isinstance(mode, ConfirmDelete):
        return CONFIRM_DELETE_KEYS.get(key)
    if isinstance(mode, Adding):
        return _translate_adding(state, mode, key_press)
    return None


def _translate_adding(state: AppState, mode: Adding, key_press: KeyPress) -> Message | None:
    key = key_press.key
    if key == Keys.Escape:
        return Message.CANCEL_ADDING
    if key == Keys.ControlS:
        return Message.CONFIRM_ADD
    if key == Keys.Tab:
        return Message.NEXT_FIELD
    if key == Keys.BackTab:
        return Message.PREV_FIELD
    if key == Keys.Enter:
        if mode.field is AddingField.TAGS:
            return Message.CONFIRM_ADD
        return Message.NEXT_FIELD

    field = state.active_input()
    if field is not None:
        field.handle_key(key_press)
    return None
