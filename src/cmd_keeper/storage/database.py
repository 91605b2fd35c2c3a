"""JSON file storage for the command database."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from cmd_keeper.errors import StorageError
from cmd_keeper.storage.models import CommandDatabase, CommandEntry

logger = logging.getLogger(__name__)

# Fractional seconds beyond microseconds (e.g. nanoseconds) are cut to six digits.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with a 'Z' suffix."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(r"\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def entry_to_dict(entry: CommandEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "command": entry.command,
        "description": entry.description,
        "tags": list(entry.tags),
        "created_at": format_timestamp(entry.created_at),
    }


def entry_from_dict(data: dict[str, Any]) -> CommandEntry:
    tags = data.get("tags") or []
    if not isinstance(tags, list):
        raise ValueError(f"tags must be a list, got {type(tags).__name__}")
    created_at = data["created_at"]
    if not isinstance(created_at, str):
        raise ValueError(f"created_at must be a string, got {type(created_at).__name__}")
    return CommandEntry(
        id=int(data["id"]),
        command=str(data["command"]),
        description=str(data.get("description", "")),
        tags=[str(t) for t in tags],
        created_at=parse_timestamp(created_at),
    )


def database_to_dict(db: CommandDatabase) -> dict[str, Any]:
    return {
        "next_id": db.next_id,
        "entries": [entry_to_dict(e) for e in db.entries],
    }


def database_from_dict(data: dict[str, Any]) -> CommandDatabase:
    entries = [entry_from_dict(e) for e in data.get("entries", [])]
    next_id = int(data.get("next_id", 1))
    # Keep the allocator ahead of every stored ID even if the file disagrees.
    if entries:
        next_id = max(next_id, max(e.id for e in entries) + 1)
    return CommandDatabase(next_id=max(next_id, 1), entries=entries)


class Storage:
    """Loads and saves the command database at a fixed path."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def load(self) -> CommandDatabase:
        """Load the database; a missing file yields an empty one."""
        if not self._db_path.exists():
            logger.info("No database at %s, starting empty", self._db_path)
            return CommandDatabase()

        try:
            content = self._db_path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self._db_path}: {e}") from e

        try:
            data = json.loads(content)
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            db = database_from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Malformed database file {self._db_path}: {e}") from e

        logger.info("Loaded %d command(s) from %s", len(db.entries), self._db_path)
        return db

    def save(self, db: CommandDatabase) -> None:
        """Overwrite the database file, creating its directory if needed."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            content = json.dumps(database_to_dict(db), indent=2, ensure_ascii=False)
            self._db_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {self._db_path}: {e}") from e
        logger.info("Saved %d command(s) to %s", len(db.entries), self._db_path)
