"""Tests for UI rendering helpers."""

from __future__ import annotations

from prompt_toolkit.layout import Layout

from cmd_keeper.config import TuiConfig
from cmd_keeper.tui.app import AddingField, Message
from cmd_keeper.tui.view import (
    HELP_TEXT,
    build_layout,
    confirm_delete_fragments,
    detail_fragments,
    field_fragments,
    field_title,
    help_fragments,
    list_fragments,
    status_fragments,
)


def text_of(fragments) -> str:
    return "".join(fragment[1] for fragment in fragments)


ROWS = [
    ("git status", "Show status", ["git", "vcs"]),
    ("ls -la", "List files", []),
]


class TestList:
    def test_empty(self, make_state):
        assert text_of(list_fragments(make_state())) == " No commands yet."

    def test_rows_and_selection(self, make_state):
        state = make_state(*ROWS)
        state.update(Message.MOVE_DOWN)
        fragments = list_fragments(state)
        assert text_of(fragments) == "   1 │ git status\n   2 │ ls -la"
        selected = [text for style, text in fragments if style == "class:list.selected"]
        assert selected == ["   2 │ ls -la"]

    def test_long_command_truncated(self, make_state):
        state = make_state(("echo " + "z" * 100, "", []))
        line = text_of(list_fragments(state, width=20))
        assert line.endswith("...")
        assert len(line) == len("   1 │ ") + 20


class TestDetail:
    def test_empty(self, make_state):
        assert "Press 'a' to add one" in text_of(detail_fragments(make_state()))

    def test_selected_entry(self, make_state):
        text = text_of(detail_fragments(make_state(*ROWS)))
        assert "git status" in text
        assert "Show status" in text
        assert "git, vcs" in text

    def test_no_tags(self, make_state):
        state = make_state(*ROWS)
        state.update(Message.MOVE_DOWN)
        assert "Tags:\n-" in text_of(detail_fragments(state))


class TestStatusAndHelp:
    def test_default_status(self, make_state):
        state = make_state(*ROWS)
        assert text_of(status_fragments(state)) == " 2 command(s) │ Selected: 1/2"

    def test_empty_status(self, make_state):
        assert text_of(status_fragments(make_state())) == " 0 command(s) │ Selected: 0/0"

    def test_status_message(self, make_state):
        state = make_state(*ROWS)
        state.update(Message.COPY_TO_CLIPBOARD)
        assert text_of(status_fragments(state)) == " ✓ Copied to clipboard"

    def test_help_follows_mode(self, make_state):
        state = make_state(*ROWS)
        assert text_of(help_fragments(state)) == HELP_TEXT["normal"]
        state.update(Message.START_DELETE)
        assert text_of(help_fragments(state)) == HELP_TEXT["confirm_delete"]
        state.update(Message.CANCEL_DELETE)
        state.update(Message.START_ADDING)
        assert text_of(help_fragments(state)) == HELP_TEXT["adding"]


class TestForm:
    def test_placeholder_when_empty(self, make_state):
        state = make_state()
        state.update(Message.START_ADDING)
        assert "Enter description..." in text_of(field_fragments(state, AddingField.DESCRIPTION))

    def test_cursor_on_active_field(self, make_state):
        state = make_state()
        state.update(Message.START_ADDING)
        state.inputs[AddingField.COMMAND].insert("ls")
        fragments = field_fragments(state, AddingField.COMMAND)
        assert ("class:field.cursor", " ") in fragments
        assert text_of(fragments) == "ls "

    def test_inactive_field_has_no_cursor(self, make_state):
        state = make_state()
        state.update(Message.START_ADDING)
        state.inputs[AddingField.TAGS].insert("a,b")
        fragments = field_fragments(state, AddingField.TAGS)
        assert fragments == [("", "a,b")]

    def test_active_title_marked(self, make_state):
        state = make_state()
        state.update(Message.START_ADDING)
        assert text_of(field_title(state, AddingField.COMMAND)).startswith("▶ ")
        assert text_of(field_title(state, AddingField.TAGS)) == "Tags (comma-separated)"


class TestConfirmDelete:
    def test_prompt(self, make_state):
        state = make_state(*ROWS)
        text = text_of(confirm_delete_fragments(state))
        assert text.startswith("Delete command #1?")
        assert '"git status"' in text
        assert "[y] Yes  [n] No" in text

    def test_long_command_truncated(self, make_state):
        state = make_state(("x" * 80, "", []))
        text = text_of(confirm_delete_fragments(state, width=30))
        assert '"' + "x" * 27 + '..."' in text


class TestLayout:
    def test_builds(self, make_state):
        layout = build_layout(make_state(*ROWS), TuiConfig())
        assert isinstance(layout, Layout)
