"""Unit tests for config.env and config.queries."""

from obping.config import Config, ConnectionConfig, load_config
from obping.config.queries import DEFAULT_STATEMENT, statement_for


def test_load_config_reads_variables() -> None:
    cfg = load_config({
        "USERNAME": "scott",
        "PASSWORD": "tiger",
        "OBIP": "10.0.0.5",
        "OBPORT": "2881",
        "OBDATABASE": "ORCL",
        "OBDRIVER": "mssql",
    })

    assert cfg.OBDRIVER == "mssql"
    assert cfg.connection() == ConnectionConfig(
        user="scott",
        password="tiger",
        host="10.0.0.5",
        port="2881",
        database="ORCL",
    )


def test_missing_variables_are_empty_strings() -> None:
    cfg = load_config({})

    assert cfg == Config()
    assert cfg.connection() == ConnectionConfig("", "", "", "", "")
    assert cfg.OBDRIVER == "oracle"


def test_load_config_defaults_to_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("OBIP", "db.internal")
    monkeypatch.delenv("OBDRIVER", raising=False)

    cfg = load_config()

    assert cfg.OBIP == "db.internal"
    assert cfg.OBDRIVER == "oracle"


def test_statement_for_known_and_unknown_drivers() -> None:
    assert statement_for("oracle") == "SELECT 1 AS ok FROM DUAL"
    assert statement_for("mssql") == "SELECT 1 AS ok"
    assert statement_for("somethingelse") == DEFAULT_STATEMENT
