"""Unit tests for infra.db.registry."""

import threading
from unittest.mock import MagicMock

import pytest

from obping.infra.db import DriverRegistry, UnknownDriverError, get_registry
from obping.infra.db.mssql import MssqlDriver
from obping.infra.db.oracle import OracleDriver


def test_factory_runs_once_per_name() -> None:
    registry = DriverRegistry()
    factory = MagicMock(return_value=object())
    registry.register("x", factory)

    first = registry.get("x")
    second = registry.get("x")

    assert first is second
    factory.assert_called_once_with()


def test_register_replaces_existing_driver() -> None:
    registry = DriverRegistry()
    old, new = object(), object()
    registry.register("x", lambda: old)
    assert registry.get("x") is old

    registry.register("x", lambda: new)

    assert registry.get("x") is new


def test_unknown_driver_lists_known_names() -> None:
    registry = DriverRegistry()
    registry.register("b", object)
    registry.register("a", object)

    with pytest.raises(UnknownDriverError, match="known: a, b"):
        registry.get("nope")
    assert registry.names() == ["a", "b"]
    assert "a" in registry
    assert "nope" not in registry


def test_default_registry_is_shared_and_has_builtin_drivers() -> None:
    registry = get_registry()

    assert get_registry() is registry
    assert registry.names() == ["mssql", "oracle"]
    assert isinstance(registry.get("oracle"), OracleDriver)
    assert isinstance(registry.get("mssql"), MssqlDriver)


def test_concurrent_lookups_share_one_instance() -> None:
    registry = DriverRegistry()
    registry.register("x", object)
    seen = []

    def lookup() -> None:
        seen.append(registry.get("x"))

    threads = [threading.Thread(target=lookup) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 8
    assert all(driver is seen[0] for driver in seen)


def test_factory_may_look_up_the_registry() -> None:
    registry = DriverRegistry()
    base = object()
    registry.register("base", lambda: base)
    registry.register("alias", lambda: registry.get("base"))

    assert registry.get("alias") is base
