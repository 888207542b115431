import pytest

from obping.config import ConnectionConfig


@pytest.fixture
def connection_config() -> ConnectionConfig:
    return ConnectionConfig(
        user="scott",
        password="tiger",
        host="10.0.0.5",
        port="2881",
        database="ORCL",
    )
