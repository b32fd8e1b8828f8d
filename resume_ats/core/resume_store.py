from __future__ import annotations

import os
import sqlite3
import threading
from datetime import datetime, timezone
from functools import lru_cache
from typing import Protocol

from resume_ats.core.config import settings
from resume_ats.schemas.resume import ResumeDocument


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResumeStore(Protocol):
    def save(self, resume_id: str, document: ResumeDocument) -> None: ...

    def load(self, resume_id: str) -> ResumeDocument | None: ...

    def delete(self, resume_id: str) -> bool: ...


class SQLiteResumeStore:
    """Résumé documents stored as JSON rows keyed by caller-chosen id."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _connection(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is not None:
                return self._conn

            if self._db_path != ":memory:":
                directory = os.path.dirname(self._db_path)
                if directory:
                    os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            if self._db_path != ":memory:":
                conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS resumes (
                    resume_id TEXT PRIMARY KEY,
                    document_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            self._conn = conn
            return conn

    def init(self) -> None:
        self._connection()

    def save(self, resume_id: str, document: ResumeDocument) -> None:
        conn = self._connection()
        payload_json = document.model_dump_json(by_alias=True)
        with self._lock:
            conn.execute(
                """
                INSERT INTO resumes (resume_id, document_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(resume_id) DO UPDATE SET
                    document_json = excluded.document_json,
                    updated_at = excluded.updated_at
                """,
                (resume_id, payload_json, _utc_now().isoformat()),
            )

    def load(self, resume_id: str) -> ResumeDocument | None:
        conn = self._connection()
        with self._lock:
            row = conn.execute(
                "SELECT document_json FROM resumes WHERE resume_id = ?",
                (resume_id,),
            ).fetchone()
        if not row:
            return None
        return ResumeDocument.model_validate_json(row[0])

    def delete(self, resume_id: str) -> bool:
        conn = self._connection()
        with self._lock:
            cur = conn.execute("DELETE FROM resumes WHERE resume_id = ?", (resume_id,))
        return cur.rowcount > 0

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None


@lru_cache(maxsize=1)
def get_resume_store() -> SQLiteResumeStore:
    return SQLiteResumeStore(settings.resume_store_db_path)
