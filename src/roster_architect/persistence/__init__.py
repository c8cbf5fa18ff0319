"""Namespaced key/document stores backing roster snapshots."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from contextlib import closing
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Tuple

import anyio.to_thread

from .http import HttpDocumentStore


DEFAULT_DB_PATH = Path(__file__).resolve().parents[2] / "roster_architect.sqlite"

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class DocumentStore(Protocol):
    """Key -> JSON document interface scoped by a namespace."""

    async def put(self, namespace: str, key: str, document: Document) -> None: ...

    async def get(self, namespace: str, key: str) -> Optional[Document]: ...


class InMemoryDocumentStore:
    """Process-local store; documents are copied in and out."""

    def __init__(self) -> None:
        self._documents: Dict[Tuple[str, str], Document] = {}

    def __len__(self) -> int:
        return len(self._documents)

    async def put(self, namespace: str, key: str, document: Document) -> None:
        self._documents[(namespace, key)] = json.loads(json.dumps(document))

    async def get(self, namespace: str, key: str) -> Optional[Document]:
        document = self._documents.get((namespace, key))
        return deepcopy(document) if document is not None else None


class SqliteDocumentStore:
    """SQLite-backed document store.

    The path comes from ``ROSTER_ARCHITECT_DB_PATH`` when set (a ``file:``
    value is opened as a URI), then ``db_path``. Without either, tests get a
    throwaway file in the temp dir and everything else uses ``DEFAULT_DB_PATH``.
    """

    def __init__(self, db_path: Path | str | None = None):
        self._use_uri = False
        env_db = os.getenv("ROSTER_ARCHITECT_DB_PATH")
        if env_db and env_db.startswith("file:"):
            self.db_path: Path | str = env_db
            self._use_uri = True
        elif env_db:
            self.db_path = Path(env_db)
        elif db_path is not None:
            self.db_path = Path(db_path)
        elif os.getenv("PYTEST_CURRENT_TEST"):
            self.db_path = Path(tempfile.gettempdir()) / "roster-architect-test" / "roster_architect.sqlite"
        else:
            self.db_path = DEFAULT_DB_PATH
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.OperationalError as exc:
            fallback = Path(tempfile.gettempdir()) / "roster-architect-runtime" / "roster_architect.sqlite"
            logger.warning("Cannot open %s (%s); using %s", self.db_path, exc, fallback)
            fallback.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS documents (
                namespace TEXT NOT NULL,
                key TEXT NOT NULL,
                body_json TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (namespace, key)
            )
            """
        )
        conn.commit()

    def put_sync(self, namespace: str, key: str, document: Document) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with closing(self._connect()) as conn, conn:
            conn.execute(
                """
                INSERT INTO documents (namespace, key, body_json, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(namespace, key) DO UPDATE SET
                    body_json = excluded.body_json,
                    updated_at = excluded.updated_at
                """,
                (namespace, key, json.dumps(document), now),
            )

    def get_sync(self, namespace: str, key: str) -> Optional[Document]:
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT body_json FROM documents WHERE namespace = ? AND key = ?",
                (namespace, key),
            ).fetchone()
        if row is None:
            return None
        return json.loads(row["body_json"])

    async def put(self, namespace: str, key: str, document: Document) -> None:
        await anyio.to_thread.run_sync(self.put_sync, namespace, key, document)

    async def get(self, namespace: str, key: str) -> Optional[Document]:
        return await anyio.to_thread.run_sync(self.get_sync, namespace, key)


__all__ = [
    "DEFAULT_DB_PATH",
    "Document",
    "DocumentStore",
    "HttpDocumentStore",
    "InMemoryDocumentStore",
    "SqliteDocumentStore",
]
