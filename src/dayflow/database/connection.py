from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional


@dataclass
class DBConfig:
    path: str
    timeout: float = 5.0


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    Inside :meth:`transaction` every operation on the same thread shares one
    connection, committed or rolled back when the block exits.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.path != config.path:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def path(self) -> str:
        return self._config.path

    def connect(self) -> sqlite3.Connection:
        if self._config.path != ":memory:":
            Path(self._config.path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._config.path, timeout=float(self._config.timeout))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @property
    def active(self) -> Optional[sqlite3.Connection]:
        """Connection of the transaction open on this thread, if any."""
        return getattr(self._local, "conn", None)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        outer = self.active
        if outer is not None:
            # Nested blocks join the outer transaction.
            yield outer
            return

        conn = self.connect()
        self._local.conn = conn
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            conn.close()
