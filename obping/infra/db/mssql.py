"""
SQL Server driver.

The descriptor is split back into its components and a connection is
made with ``pymssql``, or with ``pyodbc`` when ``pymssql`` is not
installed.  If neither driver is available, ``MssqlDriver.open`` raises
an ``ImportError``.

Rows are decoded into dicts keyed by column name for both libraries:
``pymssql`` cursors are opened with ``as_dict=True`` and ``pyodbc`` rows
are zipped with ``cursor.description``.

Example usage::

    from obping.infra.db.mssql import MssqlDriver
    conn = MssqlDriver().open("sa/secret@localhost:1433/master")
    cursor = conn.query("SELECT 1 AS ok")
    while cursor.next():
        print(cursor.scan())
    cursor.close()
    conn.close()
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

DEFAULT_PORT = 1433
ODBC_DRIVER = "ODBC Driver 17 for SQL Server"


def parse_descriptor(descriptor: str) -> Dict[str, Any]:
    """Split ``user/password@host:port/database`` into its components.

    The password may itself contain ``/`` or ``@``: the user ends at the
    first ``/`` and the endpoint starts after the last ``@``.

    Args:
        descriptor: The descriptor built by the harness.

    Returns:
        A dictionary with ``user``, ``password``, ``server``, ``port``
        and ``database`` keys.  ``port`` is ``None`` when absent.

    Raises:
        ValueError: If the descriptor has no ``@`` or a non-numeric port.
    """
    credentials, sep, endpoint = (descriptor or "").rpartition("@")
    if not sep:
        raise ValueError("Descriptor must look like user/password@host:port/database")
    user, _, password = credentials.partition("/")
    address, _, database = endpoint.partition("/")
    server, colon, port_raw = address.rpartition(":")
    if not colon:
        server, port_raw = port_raw, ""
    port: Optional[int] = None
    if port_raw:
        if not port_raw.isdigit():
            raise ValueError(f"Invalid port in descriptor: {port_raw!r}")
        port = int(port_raw)
    return {
        "user": user,
        "password": password,
        "server": server,
        "port": port,
        "database": database,
    }


class MssqlCursor:
    def __init__(self, cursor: Any, driver: str) -> None:
        self._cursor: Optional[Any] = cursor
        self._driver = driver
        self._row: Any = None
        self._columns: List[str] = []
        if driver == "pyodbc" and cursor.description:
            self._columns = [col[0] for col in cursor.description]

    def next(self) -> bool:
        if self._cursor is None:
            return False
        self._row = self._cursor.fetchone()
        return self._row is not None

    def scan(self) -> Dict[str, Any]:
        if self._row is None:
            raise RuntimeError("scan called without a current row")
        if self._driver == "pymssql":
            return dict(self._row)
        return dict(zip(self._columns, self._row))

    def close(self) -> None:
        if self._cursor is None:
            return
        cursor, self._cursor = self._cursor, None
        self._row = None
        cursor.close()


class MssqlConnection:
    """Lightweight wrapper around a ``pymssql`` or ``pyodbc`` connection."""

    def __init__(self, conn: Any, driver: str) -> None:
        self._conn: Optional[Any] = conn
        self._driver = driver

    def _cursor(self) -> Any:
        if self._conn is None:
            raise RuntimeError("connection is closed")
        if self._driver == "pymssql":
            return self._conn.cursor(as_dict=True)
        return self._conn.cursor()

    def ping(self) -> None:
        cursor = self._cursor()
        try:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        finally:
            cursor.close()

    def query(self, statement: str) -> MssqlCursor:
        cursor = self._cursor()
        try:
            cursor.execute(statement)
        except Exception:
            cursor.close()
            raise
        return MssqlCursor(cursor, self._driver)

    def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        conn.close()


class MssqlDriver:
    name = "mssql"

    def open(self, descriptor: str) -> MssqlConnection:
        """Connect to a SQL Server database.

        Connection pooling is left to the underlying library.

        Raises:
            ValueError: If the descriptor cannot be parsed.
            ImportError: If neither ``pymssql`` nor ``pyodbc`` is installed.
        """
        cfg = parse_descriptor(descriptor)
        # Try pymssql first
        try:
            import pymssql  # type: ignore[import]
        except ImportError:
            pass
        else:
            logging.debug("[mssql] connecting with pymssql", extra={"server": cfg["server"]})
            # Note: ``autocommit`` is enabled by default in pymssql
            conn = pymssql.connect(
                server=cfg["server"],
                user=cfg["user"],
                password=cfg["password"],
                database=cfg["database"],
                port=cfg["port"] or DEFAULT_PORT,
            )
            return MssqlConnection(conn, "pymssql")
        # Fallback to pyodbc
        try:
            import pyodbc  # type: ignore[import]
        except ImportError:
            raise ImportError(
                "Neither pymssql nor pyodbc is installed. Install one of them to connect to SQL Server."
            ) from None
        logging.debug("[mssql] connecting with pyodbc", extra={"server": cfg["server"]})
        server_expr = f"{cfg['server']},{cfg['port']}" if cfg["port"] else cfg["server"]
        conn_str = (
            f"DRIVER={{{ODBC_DRIVER}}};"
            f"SERVER={server_expr};"
            f"DATABASE={cfg['database']};"
            f"UID={cfg['user']};PWD={cfg['password']};"
            "Encrypt=yes;TrustServerCertificate=yes;"
        )
        return MssqlConnection(pyodbc.connect(conn_str, autocommit=True), "pyodbc")
