"""
Oracle driver built on ``python-oracledb``.

The descriptor ``user/password@host:port/service`` is valid Easy Connect
syntax, so it is handed to ``oracledb.connect`` unchanged.  The driver
runs in thin mode; no Oracle client libraries are required.

Example usage::

    from obping.infra.db.oracle import OracleDriver
    conn = OracleDriver().open("scott/tiger@db.local:1521/ORCLPDB1")
    conn.ping()
    conn.close()
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import oracledb  # type: ignore[import-not-found]


class OracleCursor:
    """Row-at-a-time view over an executed ``oracledb`` cursor."""

    def __init__(self, cursor: Any) -> None:
        self._cursor: Optional[Any] = cursor
        self._row: Optional[tuple] = None
        self._columns: List[str] = [col[0] for col in cursor.description] if cursor.description else []

    def next(self) -> bool:
        if self._cursor is None:
            return False
        self._row = self._cursor.fetchone()
        return self._row is not None

    def scan(self) -> Dict[str, Any]:
        """Decode the current row into a dict keyed by column name.

        LOB columns are read eagerly so the value survives the cursor.
        """
        if self._row is None:
            raise RuntimeError("scan called without a current row")
        values = [_read_lob(value) for value in self._row]
        return dict(zip(self._columns, values))

    def close(self) -> None:
        if self._cursor is None:
            return
        cursor, self._cursor = self._cursor, None
        self._row = None
        cursor.close()


class OracleConnection:
    def __init__(self, conn: Any) -> None:
        self._conn: Optional[Any] = conn

    def _require_open(self) -> Any:
        if self._conn is None:
            raise RuntimeError("connection is closed")
        return self._conn

    def ping(self) -> None:
        self._require_open().ping()

    def query(self, statement: str) -> OracleCursor:
        cursor = self._require_open().cursor()
        try:
            cursor.execute(statement)
        except Exception:
            cursor.close()
            raise
        return OracleCursor(cursor)

    def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        conn.close()


class OracleDriver:
    name = "oracle"

    def open(self, descriptor: str) -> OracleConnection:
        logging.debug("[oracle] connecting", extra={"thin": oracledb.is_thin_mode()})
        return OracleConnection(oracledb.connect(dsn=descriptor))


def _read_lob(value: Any) -> Any:
    if isinstance(value, oracledb.LOB):
        return value.read()
    return value
