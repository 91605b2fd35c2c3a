"""Exception types shared across cmd-keeper."""

from __future__ import annotations


class CmdKeeperError(Exception):
    """Base class for errors reported to the user."""


class ConfigDirNotFoundError(CmdKeeperError):
    def __init__(self) -> None:
        super().__init__("Could not determine config directory. Please set HOME environment variable.")


class ConfigError(CmdKeeperError):
    """The configuration file exists but cannot be used."""


class StorageError(CmdKeeperError):
    """Reading or writing the command database failed."""


class EntryNotFoundError(CmdKeeperError):
    def __init__(self, entry_id: int) -> None:
        self.entry_id = entry_id
        super().__init__(f"Command with ID {entry_id} not found")


class ClipboardError(CmdKeeperError):
    """No usable clipboard tool, or the tool failed."""
