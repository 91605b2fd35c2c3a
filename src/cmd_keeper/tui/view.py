"""Drawing the interactive UI.

The ``*_fragments`` functions turn an :class:`AppState` into prompt_toolkit
formatted text and never modify it. :func:`build_layout` wires them into
windows that re-read the state on every redraw.
"""

from __future__ import annotations

from prompt_toolkit.data_structures import Point
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.layout import (
    ConditionalContainer,
    Float,
    FloatContainer,
    HSplit,
    Layout,
    VSplit,
    Window,
)
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from cmd_keeper.config import TuiConfig
from cmd_keeper.tui.app import Adding, AddingField, AppState, ConfirmDelete
from cmd_keeper.utils.formatting import truncate

STYLE = Style.from_dict(
    {
        "frame.border": "#606060",
        "frame.label": "#00afd7 bold",
        "list.row": "",
        "list.selected": "bg:#00afd7 #000000 bold",
        "list.empty": "#808080 italic",
        "detail.label": "#00afd7 bold",
        "detail.id": "#d7d700",
        "detail.tags": "#5faf5f",
        "detail.dim": "#808080",
        "status": "#ffffff",
        "help": "bg:#000000 #808080",
        "form": "bg:#1c1c1c",
        "form frame.border": "#5faf5f",
        "form frame.label": "#5faf5f bold",
        "field": "",
        "field.active": "bg:#303030",
        "field.label.active": "#d7d700 bold",
        "field.placeholder": "#808080 italic",
        "field.cursor": "reverse",
        "confirm": "bg:#1c1c1c #ffffff",
        "confirm frame.border": "#d70000",
        "confirm frame.label": "#d70000 bold",
    }
)

HELP_TEXT = {
    "normal": " q: Quit │ a: Add │ d: Delete │ y: Copy │ Enter/x: Run │ j/↓: Down │ k/↑: Up │ g: Top │ G: Bottom ",
    "adding": " Tab: Next Field │ Shift+Tab: Prev │ Enter: Next/Save │ Ctrl+J: Newline │ Ctrl+S: Save │ Esc: Cancel ",
    "confirm_delete": " y: Confirm Delete │ n/Esc: Cancel ",
}

FIELD_TITLES = {
    AddingField.COMMAND: "Command",
    AddingField.DESCRIPTION: "Description",
    AddingField.TAGS: "Tags (comma-separated)",
}


def list_fragments(state: AppState, width: int = 40) -> StyleAndTextTuples:
    if state.entry_count() == 0:
        return [("class:list.empty", " No commands yet.")]

    result: StyleAndTextTuples = []
    for i, entry in enumerate(state.db.entries):
        style = "class:list.selected" if i == state.selected_index else "class:list.row"
        command = truncate(entry.command.replace("\n", " "), width)
        result.append((style, f" {entry.id:>3} │ {command}"))
        result.append(("", "\n"))
    result.pop()
    return result


def detail_fragments(state: AppState) -> StyleAndTextTuples:
    entry = state.selected_entry()
    if entry is None:
        return [("class:list.empty", "No commands yet. Press 'a' to add one.")]

    return [
        ("class:detail.dim", "ID: "),
        ("class:detail.id", str(entry.id)),
        ("", "\n\n"),
        ("class:detail.label", "Command:\n"),
        ("", entry.command),
        ("", "\n\n"),
        ("class:detail.label", "Description:\n"),
        ("", entry.description),
        ("", "\n\n"),
        ("class:detail.label", "Tags:\n"),
        ("class:detail.tags", entry.tags_display()),
        ("", "\n\n"),
        ("class:detail.dim", "Created: " + entry.created_at.astimezone().strftime("%Y-%m-%d %H:%M")),
    ]


def status_fragments(state: AppState) -> StyleAndTextTuples:
    if state.status_message:
        return [("class:status", f" {state.status_message}")]
    count = state.entry_count()
    position = state.selected_index + 1 if count else 0
    return [("class:status", f" {count} command(s) │ Selected: {position}/{count}")]


def help_fragments(state: AppState) -> StyleAndTextTuples:
    if isinstance(state.mode, Adding):
        text = HELP_TEXT["adding"]
    elif isinstance(state.mode, ConfirmDelete):
        text = HELP_TEXT["confirm_delete"]
    else:
        text = HELP_TEXT["normal"]
    return [("class:help", text)]


def field_fragments(state: AppState, field: AddingField) -> StyleAndTextTuples:
    """Field text, or its placeholder, with a block cursor when active."""
    input_field = state.inputs[field]
    active = state.active_field() is field

    if input_field.is_empty():
        if active:
            return [("class:field.cursor", " "), ("class:field.placeholder", input_field.placeholder)]
        return [("class:field.placeholder", input_field.placeholder)]

    text = input_field.text
    if not active:
        return [("", text)]

    pos = input_field.cursor_position
    under = text[pos : pos + 1]
    if under in ("", "\n"):
        # Cursor sits at a line end; draw it as an extra cell.
        return [("", text[:pos]), ("class:field.cursor", " "), ("", text[pos:])]
    return [("", text[:pos]), ("class:field.cursor", under), ("", text[pos + 1 :])]


def field_title(state: AppState, field: AddingField) -> StyleAndTextTuples:
    if state.active_field() is field:
        return [("class:field.label.active", f"▶ {FIELD_TITLES[field]}")]
    return [("", FIELD_TITLES[field])]


def confirm_delete_fragments(state: AppState, width: int = 30) -> StyleAndTextTuples:
    entry = state.selected_entry()
    if entry is None:
        return [("", "No command selected")]
    return [
        ("", f"Delete command #{entry.id}?\n\n"),
        ("bold", f'"{truncate(entry.command, width)}"'),
        ("", "\n\n[y] Yes  [n] No"),
    ]


def _selected_row(state: AppState) -> Point:
    return Point(x=0, y=state.selected_index)


def _field_frame(state: AppState, field: AddingField) -> Frame:
    body = Window(
        FormattedTextControl(lambda: field_fragments(state, field)),
        height=Dimension(min=1, max=3),
        wrap_lines=True,
        style=lambda: "class:field.active" if state.active_field() is field else "class:field",
    )
    return Frame(body, title=lambda: field_title(state, field))


def build_layout(state: AppState, tui_config: TuiConfig | None = None) -> Layout:
    tui_config = tui_config or TuiConfig()

    list_window = Window(
        FormattedTextControl(
            lambda: list_fragments(state, tui_config.list_width),
            focusable=True,
            get_cursor_position=lambda: _selected_row(state),
        ),
        always_hide_cursor=True,
    )
    detail_window = Window(FormattedTextControl(lambda: detail_fragments(state)), wrap_lines=True)

    body = HSplit(
        [
            VSplit(
                [
                    Frame(list_window, title="Commands"),
                    Frame(detail_window, title="Details"),
                ]
            ),
            Frame(Window(FormattedTextControl(lambda: status_fragments(state)), height=1)),
            Window(FormattedTextControl(lambda: help_fragments(state)), height=1, style="class:help"),
        ]
    )

    add_form = Frame(
        HSplit([_field_frame(state, f) for f in AddingField]),
        title="Add New Command",
        style="class:form",
        width=Dimension(preferred=70, max=90),
    )
    confirm_box = Frame(
        Window(
            FormattedTextControl(lambda: confirm_delete_fragments(state, tui_config.confirm_width)),
            wrap_lines=True,
            height=Dimension(min=5),
        ),
        title="Confirm Delete",
        style="class:confirm",
        width=Dimension(preferred=44),
    )

    root = FloatContainer(
        content=body,
        floats=[
            Float(ConditionalContainer(add_form, filter=Condition(lambda: isinstance(state.mode, Adding)))),
            Float(ConditionalContainer(confirm_box, filter=Condition(lambda: isinstance(state.mode, ConfirmDelete)))),
        ],
    )
    return Layout(root, focused_element=list_window)
