"""Application state and the transition function of the interactive UI.

Key handling produces :class:`Message` values; :meth:`AppState.update` is the
only place that changes the state. Transitions are listed in one table keyed
by ``(mode variant, message)`` so every reachable edge is visible at a glance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from cmd_keeper.errors import ClipboardError
from cmd_keeper.services.clipboard import copy_to_clipboard
from cmd_keeper.storage.database import Storage
from cmd_keeper.storage.models import CommandDatabase, CommandEntry
from cmd_keeper.tui.input import InputField

logger = logging.getLogger(__name__)


class AddingField(Enum):
    COMMAND = "command"
    DESCRIPTION = "description"
    TAGS = "tags"

    def next(self) -> AddingField:
        order = list(AddingField)
        return order[(order.index(self) + 1) % len(order)]

    def prev(self) -> AddingField:
        order = list(AddingField)
        return order[(order.index(self) - 1) % len(order)]


@dataclass(frozen=True)
class Normal:
    """Browsing the list."""


@dataclass(frozen=True)
class Adding:
    """Composing a new entry; ``field`` receives keystrokes."""

    field: AddingField = AddingField.COMMAND


@dataclass(frozen=True)
class ConfirmDelete:
    """Waiting for y/n on deleting the selected entry."""


Mode = Normal | Adding | ConfirmDelete


class Message(Enum):
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_TO_TOP = auto()
    MOVE_TO_BOTTOM = auto()

    START_ADDING = auto()
    CANCEL_ADDING = auto()
    CONFIRM_ADD = auto()
    NEXT_FIELD = auto()
    PREV_FIELD = auto()

    START_DELETE = auto()
    CANCEL_DELETE = auto()
    CONFIRM_DELETE = auto()

    COPY_TO_CLIPBOARD = auto()
    EXECUTE_COMMAND = auto()

    QUIT = auto()


PLACEHOLDERS = {
    AddingField.COMMAND: "Enter command...",
    AddingField.DESCRIPTION: "Enter description...",
    AddingField.TAGS: "Enter tags (comma-separated)...",
}


def parse_tags(text: str) -> list[str]:
    """Split a comma-separated tag string, trimming each tag."""
    text = text.strip()
    if not text:
        return []
    return [t.strip() for t in text.split(",")]


class AppState:
    """Everything the interactive UI knows.

    Persistence errors raised while adding or deleting propagate out of
    :meth:`update`; the caller ends the session on them.
    """

    def __init__(
        self,
        db: CommandDatabase,
        storage: Storage,
        copy_fn: Callable[[str], None] = copy_to_clipboard,
    ) -> None:
        self.db = db
        self.storage = storage
        self.copy_fn = copy_fn

        self.mode: Mode = Normal()
        self.selected_index = 0
        self.inputs = {f: InputField(PLACEHOLDERS[f]) for f in AddingField}
        self.status_message: str | None = None
        self.should_quit = False
        self.execute_requested = False

    @classmethod
    def load(cls, storage: Storage, **kwargs) -> AppState:
        return cls(storage.load(), storage, **kwargs)

    # -- views ---------------------------------------------------------

    def entry_count(self) -> int:
        return len(self.db.entries)

    def selected_entry(self) -> CommandEntry | None:
        if 0 <= self.selected_index < self.entry_count():
            return self.db.entries[self.selected_index]
        return None

    def active_field(self) -> AddingField | None:
        if isinstance(self.mode, Adding):
            return self.mode.field
        return None

    def active_input(self) -> InputField | None:
        """The field that receives keystrokes, or None outside the add form."""
        field = self.active_field()
        if field is None:
            return None
        return self.inputs[field]

    # -- transitions ---------------------------------------------------

    def update(self, message: Message) -> None:
        """Apply one message. The status line only shows what this step reported."""
        self.status_message = None
        if message is Message.QUIT:
            self.should_quit = True
            return
        handler = _TRANSITIONS.get((type(self.mode), message))
        if handler is None:
            logger.debug("Ignoring %s in %s", message.name, self.mode)
            return
        self.mode = handler(self, self.mode)

    def clear_inputs(self) -> None:
        for field in self.inputs.values():
            field.clear()

    def clamp_selection(self) -> None:
        count = self.entry_count()
        if count == 0:
            self.selected_index = 0
        elif self.selected_index >= count:
            self.selected_index = count - 1

    def _move_up(self, mode: Mode) -> Mode:
        if self.selected_index > 0:
            self.selected_index -= 1
        return mode

    def _move_down(self, mode: Mode) -> Mode:
        if self.selected_index + 1 < self.entry_count():
            self.selected_index += 1
        return mode

    def _move_to_top(self, mode: Mode) -> Mode:
        self.selected_index = 0
        return mode

    def _move_to_bottom(self, mode: Mode) -> Mode:
        self.selected_index = max(self.entry_count() - 1, 0)
        return mode

    def _start_adding(self, mode: Mode) -> Mode:
        self.clear_inputs()
        return Adding(AddingField.COMMAND)

    def _start_delete(self, mode: Mode) -> Mode:
        if self.selected_entry() is None:
            return mode
        return ConfirmDelete()

    def _copy(self, mode: Mode) -> Mode:
        entry = self.selected_entry()
        if entry is None:
            return mode
        try:
            self.copy_fn(entry.command)
        except ClipboardError as e:
            logger.warning("Clipboard copy failed: %s", e)
            self.status_message = f"✗ Clipboard error: {e}"
        else:
            self.status_message = "✓ Copied to clipboard"
        return mode

    def _request_execute(self, mode: Mode) -> Mode:
        if self.selected_entry() is not None:
            self.execute_requested = True
        return mode

    def _next_field(self, mode: Adding) -> Mode:
        return Adding(mode.field.next())

    def _prev_field(self, mode: Adding) -> Mode:
        return Adding(mode.field.prev())

    def _confirm_add(self, mode: Adding) -> Mode:
        command = self.inputs[AddingField.COMMAND].text.strip()
        if not command:
            self.status_message = "Command cannot be empty"
            return Normal()

        description = self.inputs[AddingField.DESCRIPTION].text.strip()
        tags = parse_tags(self.inputs[AddingField.TAGS].text)

        entry_id = self.db.add(command, description, tags)
        self.storage.save(self.db)
        logger.info("Added command %d", entry_id)

        self.status_message = f"✓ Command added (ID: {entry_id})"
        self.clear_inputs()
        self.selected_index = self.entry_count() - 1
        return Normal()

    def _cancel_adding(self, mode: Adding) -> Mode:
        self.clear_inputs()
        return Normal()

    def _confirm_delete(self, mode: ConfirmDelete) -> Mode:
        entry = self.selected_entry()
        if entry is not None:
            self.db.remove_by_id(entry.id)
            self.storage.save(self.db)
            logger.info("Deleted command %d", entry.id)
            self.status_message = f"✓ Command {entry.id} deleted"
            self.clamp_selection()
        return Normal()

    def _cancel_delete(self, mode: ConfirmDelete) -> Mode:
        return Normal()


_Handler = Callable[[AppState, Mode], Mode]

_TRANSITIONS: dict[tuple[type, Message], _Handler] = {
    (Normal, Message.MOVE_UP): AppState._move_up,
    (Normal, Message.MOVE_DOWN): AppState._move_down,
    (Normal, Message.MOVE_TO_TOP): AppState._move_to_top,
    (Normal, Message.MOVE_TO_BOTTOM): AppState._move_to_bottom,
    (Normal, Message.START_ADDING): AppState._start_adding,
    (Normal, Message.START_DELETE): AppState._start_delete,
    (Normal, Message.COPY_TO_CLIPBOARD): AppState._copy,
    (Normal, Message.EXECUTE_COMMAND): AppState._request_execute,
    (Adding, Message.NEXT_FIELD): AppState._next_field,
    (Adding, Message.PREV_FIELD): AppState._prev_field,
    (Adding, Message.CONFIRM_ADD): AppState._confirm_add,
    (Adding, Message.CANCEL_ADDING): AppState._cancel_adding,
    (ConfirmDelete, Message.CONFIRM_DELETE): AppState._confirm_delete,
    (ConfirmDelete, Message.CANCEL_DELETE): AppState._cancel_delete,
}
