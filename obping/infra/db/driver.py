"""
Driver capability contract and the harness error taxonomy.

A driver is anything exposing ``open(descriptor)``; the connection it
returns exposes ``ping``, ``query`` and ``close``, and the cursor
returned by ``query`` exposes ``next``, ``scan`` and ``close``.  The
built-in drivers in ``obping.infra.db.oracle`` and
``obping.infra.db.mssql`` adapt DB-API libraries to this shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Protocol

# Decoded row of unknown shape. Built-in drivers produce a dict keyed by
# column name; the harness only forwards it.
RowValue = Any


class ResultCursor(Protocol):
    def next(self) -> bool: ...

    def scan(self) -> RowValue: ...

    def close(self) -> None: ...


class Connection(Protocol):
    def ping(self) -> None: ...

    def query(self, statement: str) -> ResultCursor: ...

    def close(self) -> None: ...


class Driver(Protocol):
    def open(self, descriptor: str) -> Connection: ...


class Phase(str, Enum):
    OPEN = "open"
    VERIFY = "verify"
    QUERY = "query"
    DECODE = "decode"


class HarnessError(Exception):
    """Base class for failures that abort a harness run."""

    phase: Phase

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DatabaseConnectionError(HarnessError):
    """The driver could not establish a connection."""

    phase = Phase.OPEN


class LivenessError(HarnessError):
    """The connection was opened but the ping failed."""

    phase = Phase.VERIFY


class QueryError(HarnessError):
    """The driver rejected the statement."""

    phase = Phase.QUERY


class DecodeError(HarnessError):
    """A result row could not be fetched or decoded."""

    phase = Phase.DECODE

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position
