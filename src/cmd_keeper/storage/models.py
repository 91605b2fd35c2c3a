"""Data models for cmd-keeper."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CommandEntry:
    """A single saved command."""

    id: int
    command: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)

    def tags_display(self) -> str:
        """Comma-separated tags, or '-' when there are none."""
        if not self.tags:
            return "-"
        return ", ".join(self.tags)


@dataclass
class CommandDatabase:
    """All saved commands plus the ID allocator.

    ``next_id`` is always greater than every ID ever handed out, so IDs of
    deleted entries are never reused.
    """

    next_id: int = 1
    entries: list[CommandEntry] = field(default_factory=list)

    def add(self, command: str, description: str, tags: list[str] | None = None) -> int:
        """Append a new entry and return its ID."""
        entry_id = self.next_id
        self.next_id += 1
        self.entries.append(CommandEntry(entry_id, command, description, list(tags or [])))
        return entry_id

    def find_by_id(self, entry_id: int) -> CommandEntry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def remove_by_id(self, entry_id: int) -> bool:
        """Remove every entry with this ID. Returns True if anything was removed."""
        original_len = len(self.entries)
        self.entries = [e for e in self.entries if e.id != entry_id]
        return len(self.entries) < original_len

    def update(
        self,
        entry_id: int,
        command: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> bool:
        """Replace only the given fields. Returns False if the ID does not exist."""
        entry = self.find_by_id(entry_id)
        if entry is None:
            return False
        if command is not None:
            entry.command = command
        if description is not None:
            entry.description = description
        if tags is not None:
            entry.tags = list(tags)
        return True

    def search(self, keyword: str) -> list[CommandEntry]:
        """Case-insensitive substring match on command, description or any tag."""
        needle = keyword.lower()
        return [
            e
            for e in self.entries
            if needle in e.command.lower()
            or needle in e.description.lower()
            or any(needle in t.lower() for t in e.tags)
        ]

    def list_all(self) -> list[CommandEntry]:
        return self.entries


@dataclass
class ExecutionResult:
    """Outcome of running a saved command in the foreground."""

    exit_code: int = 0
    execution_time_ms: int = 0
    launched: bool = True
    reason: str = ""
