"""
Connectivity harness.

A run opens a connection through a registered driver, pings it and,
when a statement is configured, runs it and writes every decoded row to
the output sink.  The first failing phase aborts the run with one of
the errors from ``obping.infra.db.driver``; the cursor and connection
that were acquired are closed exactly once on every path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from ..config import ConnectionConfig
from ..infra.db import (
    Connection,
    DatabaseConnectionError,
    DecodeError,
    DriverRegistry,
    LivenessError,
    QueryError,
    ResultCursor,
    RowValue,
    get_registry,
)
from ..infra.reporting.row_writer import RowWriter


class HarnessState(str, Enum):
    INIT = "INIT"
    OPENING = "OPENING"
    OPENED = "OPENED"
    VERIFYING = "VERIFYING"
    VERIFIED = "VERIFIED"
    QUERYING = "QUERYING"
    ITERATING = "ITERATING"
    DONE = "DONE"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class HarnessResult:
    descriptor: str
    queried: bool
    rows: int


def build_descriptor(config: ConnectionConfig) -> str:
    """Format ``config`` as ``user/password@host:port/database``."""
    return f"{config.user}/{config.password}@{config.host}:{config.port}/{config.database}"


def mask_descriptor(descriptor: str) -> str:
    """Replace the password in a descriptor with ``***`` for logging."""
    credentials, sep, endpoint = descriptor.rpartition("@")
    if not sep:
        return descriptor
    user = credentials.partition("/")[0]
    return f"{user}/***@{endpoint}"


class ConnectivityHarness:
    """Runs open, verify and the optional query phase against one driver.

    Args:
        driver: Name of the driver in ``registry``.
        statement: Statement for the query phase; ``None`` skips it.
        registry: Driver registry. Defaults to the process-wide one.
        sink: Receives decoded rows. Defaults to a text ``RowWriter``
            on standard output.
    """

    def __init__(
        self,
        driver: str,
        statement: Optional[str] = None,
        registry: Optional[DriverRegistry] = None,
        sink: Optional[RowWriter] = None,
    ) -> None:
        self.driver = driver
        self.statement = statement
        self._registry = registry
        self.sink = sink if sink is not None else RowWriter()
        self.state = HarnessState.INIT

    def _transition(self, state: HarnessState) -> None:
        logging.debug("[harness] %s -> %s", self.state.value, state.value)
        self.state = state

    def open(self, descriptor: str) -> Connection:
        self._transition(HarnessState.OPENING)
        registry = self._registry if self._registry is not None else get_registry()
        masked = mask_descriptor(descriptor)
        try:
            conn = registry.get(self.driver).open(descriptor)
        except Exception as exc:
            raise DatabaseConnectionError(
                f"Could not open {self.driver} connection to {masked}: {exc}"
            ) from exc
        self._transition(HarnessState.OPENED)
        logging.info("[harness] connection opened", extra={"driver": self.driver, "descriptor": masked})
        return conn

    def verify(self, conn: Connection) -> None:
        self._transition(HarnessState.VERIFYING)
        try:
            conn.ping()
        except Exception as exc:
            raise LivenessError(f"Ping error: {exc}") from exc
        self._transition(HarnessState.VERIFIED)
        logging.info("[harness] ping ok", extra={"driver": self.driver})

    def query(self, conn: Connection, statement: str) -> ResultCursor:
        self._transition(HarnessState.QUERYING)
        try:
            return conn.query(statement)
        except Exception as exc:
            raise QueryError(f"Query error: {exc}") from exc

    def iterate_rows(self, cursor: ResultCursor) -> Iterator[RowValue]:
        """Yield decoded rows lazily, stopping at the first failure."""
        self._transition(HarnessState.ITERATING)
        position = 0
        while True:
            try:
                if not cursor.next():
                    return
                value = cursor.scan()
            except Exception as exc:
                raise DecodeError(f"Could not decode row {position}: {exc}", position) from exc
            yield value
            position += 1

    def run(self, config: ConnectionConfig) -> HarnessResult:
        descriptor = build_descriptor(config)
        conn = self.open(descriptor)
        rows = 0
        try:
            self.verify(conn)
            if self.statement is not None:
                cursor = self.query(conn, self.statement)
                try:
                    for value in self.iterate_rows(cursor):
                        self.sink.write(value)
                        rows += 1
                finally:
                    self._release(cursor, "cursor")
                self._transition(HarnessState.DONE)
                logging.info("[harness] query done", extra={"rows": rows})
        finally:
            self._release(conn, "connection")
            self._transition(HarnessState.CLOSED)
        return HarnessResult(
            descriptor=mask_descriptor(descriptor),
            queried=self.statement is not None,
            rows=rows,
        )

    @staticmethod
    def _release(resource, kind: str) -> None:
        try:
            resource.close()
        except Exception as exc:
            logging.warning("[harness] failed to close %s", kind, exc_info=exc)
