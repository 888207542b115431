"""
Driver contract, error taxonomy and the driver registry.

Concrete drivers live in ``oracle`` and ``mssql`` and are registered by
name in the process-wide registry returned by ``get_registry``.
"""

from .driver import (  # noqa: F401
    Connection,
    DatabaseConnectionError,
    DecodeError,
    Driver,
    HarnessError,
    LivenessError,
    Phase,
    QueryError,
    ResultCursor,
    RowValue,
)
from .registry import DriverRegistry, UnknownDriverError, get_registry  # noqa: F401
