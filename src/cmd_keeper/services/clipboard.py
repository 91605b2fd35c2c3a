"""Clipboard access through pyperclip."""

from __future__ import annotations

import logging

import pyperclip

from cmd_keeper.errors import ClipboardError

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str, backend: str = "") -> None:
    """Put ``text`` on the system clipboard.

    ``backend`` is a pyperclip clipboard name (e.g. "xclip", "wl-clipboard");
    empty means pyperclip picks one for the platform.
    """
    try:
        if backend:
            pyperclip.set_clipboard(backend)
        pyperclip.copy(text)
    except ValueError as e:
        raise ClipboardError(f"Unknown clipboard backend: {backend}") from e
    except (pyperclip.PyperclipException, OSError) as e:
        logger.warning("Clipboard copy failed: %s", e)
        raise ClipboardError(str(e)) from e
