"""
Fixed statements run by the optional query phase.

Each registered driver gets a trivial statement in its own SQL dialect.
Statements are never taken from user input.
"""

from __future__ import annotations

from typing import Dict

DEFAULT_STATEMENT = "SELECT 1 AS ok"

queries: Dict[str, str] = {
    "oracle": "SELECT 1 AS ok FROM DUAL",
    "mssql": DEFAULT_STATEMENT,
}


def statement_for(driver: str) -> str:
    return queries.get(driver, DEFAULT_STATEMENT)
