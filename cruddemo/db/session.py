from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.sql import TextClause

Params = Mapping[str, Any]


class DbSession:
    """
    One transaction on one pooled connection.

    Leaving the block commits; leaving it through an exception rolls back.
    The connection goes back to the pool either way. A session cannot be
    re-entered while it is open.

    Use as:
        with DbSession(engine) as session:
            new_id = session.execute_insert(...)
            row = session.fetch_one(...)
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._conn: Connection | None = None
        self._tx = None

    def __enter__(self) -> "DbSession":
        if self._conn is not None:
            raise RuntimeError("DbSession is already active; nested sessions are not allowed")
        self._conn = self.engine.connect()
        self._tx = self._conn.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        conn, tx = self._conn, self._tx
        self._conn = None
        self._tx = None
        try:
            if tx is not None:
                if exc_type:
                    tx.rollback()
                else:
                    tx.commit()
        finally:
            if conn is not None:
                conn.close()

        return False

    def _run(self, sql: str | TextClause, params: Params | None) -> CursorResult:
        if self._conn is None:
            raise RuntimeError("DbSession is not active; use within a context manager")
        stmt = text(sql) if isinstance(sql, str) else sql
        return self._conn.execute(stmt, params or {})

    def execute(self, sql: str | TextClause, params: Params | None = None) -> int:
        """Run an UPDATE/DELETE (or DDL) and return the affected row count."""
        rowcount = self._run(sql, params).rowcount
        if rowcount is None:
            raise RuntimeError(f"Driver reported no rowcount for statement: {sql}")
        return int(rowcount)

    def execute_insert(self, sql: str | TextClause, params: Params | None = None) -> int:
        """
        Run a single-row INSERT and return the key the store generated.

        Relies on the driver's lastrowid, which both SQLite and MySQL
        report for autoincrement keys.
        """
        new_id = self._run(sql, params).lastrowid
        if new_id is None:
            raise RuntimeError(f"Driver reported no generated key for statement: {sql}")
        return int(new_id)

    def fetch_one(self, sql: str | TextClause, params: Params | None = None) -> dict[str, Any] | None:
        """Return the single matching row as a dict, or None. More than one row raises."""
        row = self._run(sql, params).mappings().one_or_none()
        return None if row is None else dict(row)

    def fetch_all(self, sql: str | TextClause, params: Params | None = None) -> list[dict[str, Any]]:
        return [dict(row) for row in self._run(sql, params).mappings()]
