"""Interactive terminal UI for browsing, adding, deleting and running commands."""

from __future__ import annotations

import functools
import logging

from prompt_toolkit.application import Application, run_in_terminal
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.keys import Keys
from rich.console import Console

from cmd_keeper.config import AppConfig
from cmd_keeper.errors import CmdKeeperError
from cmd_keeper.services.clipboard import copy_to_clipboard
from cmd_keeper.services.shell import ShellRunner
from cmd_keeper.storage.database import Storage
from cmd_keeper.tui.app import AppState
from cmd_keeper.tui.events import translate
from cmd_keeper.tui.runner import execute_selected
from cmd_keeper.tui.view import STYLE, build_layout

logger = logging.getLogger(__name__)

# Keys that prompt_toolkit's default bindings would otherwise swallow before
# they reach the catch-all binding.
DISPATCHED_KEYS = [
    "up",
    "down",
    "left",
    "right",
    "home",
    "end",
    "enter",
    "tab",
    "s-tab",
    "backspace",
    "delete",
    "c-c",
    "c-j",
    "c-s",
    Keys.BracketedPaste,
]


def create_application(
    state: AppState,
    config: AppConfig,
    shell_runner: ShellRunner | None = None,
    console: Console | None = None,
) -> Application:
    """Build the full-screen application around ``state``.

    Every key press goes through :func:`translate` and :meth:`AppState.update`.
    A :class:`CmdKeeperError` raised by a transition ends the application with
    that exception, after prompt_toolkit has restored the terminal.
    """
    shell_runner = shell_runner or ShellRunner()
    console = console or Console()
    kb = KeyBindings()

    def dispatch(event: KeyPressEvent) -> None:
        message = translate(state, event.key_sequence[0])
        if message is None:
            return
        try:
            state.update(message)
        except CmdKeeperError as e:
            logger.error("Ending session: %s", e)
            event.app.exit(exception=e)
            return

        if state.should_quit:
            event.app.exit()
        elif state.execute_requested:
            run_in_terminal(
                functools.partial(
                    execute_selected,
                    state,
                    shell_runner,
                    console,
                    config.shell.wait_for_enter,
                )
            )

    kb.add("escape", eager=True)(dispatch)
    for key in DISPATCHED_KEYS:
        kb.add(key)(dispatch)
    kb.add(Keys.Any)(dispatch)

    application: Application = Application(
        layout=build_layout(state, config.tui),
        key_bindings=kb,
        style=STYLE,
        full_screen=True,
        mouse_support=False,
    )
    # Bounded wait before a lone Escape (or a key-sequence prefix) is resolved.
    application.ttimeoutlen = config.tui.poll_interval
    application.timeoutlen = config.tui.poll_interval
    return application


def run_tui(storage: Storage, config: AppConfig) -> None:
    """Load the database and run the interactive UI until the user quits."""
    state = AppState.load(
        storage,
        copy_fn=functools.partial(copy_to_clipboard, backend=config.clipboard.backend),
    )
    logger.info("Interactive session started with %d command(s)", state.entry_count())
    create_application(state, config).run()
    logger.info("Interactive session ended")
