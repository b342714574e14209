"""Sinks that persist exported archive documents."""

import asyncio
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import DEFAULT_ARCHIVE_DIR, resolve_db_path
from ..logging_config import get_logger

logger = get_logger(__name__)


class ISink(Protocol):
    """Destination for export documents ("write these bytes under this name")."""

    async def write(self, filename_hint: str, document_text: str) -> None:
        """Persist one export document."""
        ...


@dataclass
class StoredArchive:
    """An export document kept by SqliteSink."""

    name: str
    document: str
    message_count: int
    created_at: datetime


class FileSink:
    """Writes each export document as a file in a directory."""

    def __init__(self, directory: str | Path | None = None):
        self._directory = Path(directory) if directory else DEFAULT_ARCHIVE_DIR

    @property
    def directory(self) -> Path:
        return self._directory

    async def write(self, filename_hint: str, document_text: str) -> None:
        """Write document_text to <directory>/<filename_hint>."""
        # Hints are file names, never paths
        path = self._directory / Path(filename_hint).name
        await asyncio.to_thread(self._write_file, path, document_text)
        logger.info("Archive written to %s", path)

    @staticmethod
    def _write_file(path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def _message_count(document_text: str) -> int:
    try:
        return int(json.loads(document_text)["metadata"]["messageCount"])
    except (ValueError, KeyError, TypeError):
        return 0


class SqliteSink:
    """SQLite-backed archive sink."""

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Open the database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def write(self, filename_hint: str, document_text: str) -> None:
        """Store an export document under filename_hint (replacing any previous one)."""
        if not self._conn:
            raise RuntimeError("Sink not initialized")

        await self._conn.execute(
            """
            INSERT OR REPLACE INTO archives (name, document, message_count, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (
                filename_hint,
                document_text,
                _message_count(document_text),
                datetime.now(timezone.utc).isoformat(),
            ),
        )
        await self._conn.commit()

    async def list_archives(self, limit: int = 100) -> list[StoredArchive]:
        """List stored archives, newest first."""
        if not self._conn:
            raise RuntimeError("Sink not initialized")

        cursor = await self._conn.execute(
            """
            SELECT name, document, message_count, created_at
            FROM archives
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
            """,
            (limit,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_archive(row) for row in rows]

    async def get_archive(self, name: str) -> StoredArchive | None:
        """Get one stored archive by name."""
        if not self._conn:
            raise RuntimeError("Sink not initialized")

        cursor = await self._conn.execute(
            """
            SELECT name, document, message_count, created_at
            FROM archives
            WHERE name = ?
            """,
            (name,),
        )
        row = await cursor.fetchone()

        if not row:
            return None
        return self._row_to_archive(row)

    async def clear(self) -> None:
        """Delete all stored archives."""
        if not self._conn:
            raise RuntimeError("Sink not initialized")

        await self._conn.execute("DELETE FROM archives")
        await self._conn.commit()

    @staticmethod
    def _row_to_archive(row) -> StoredArchive:
        created_at = datetime.fromisoformat(row[3])
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return StoredArchive(
            name=row[0],
            document=row[1],
            message_count=row[2],
            created_at=created_at,
        )
