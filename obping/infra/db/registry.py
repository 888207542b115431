"""
Driver registry.

Maps driver names to zero-argument factories returning a ``Driver``.
The process-wide registry returned by ``get_registry`` has the built-in
drivers registered exactly once, the first time it is requested.
Lookups are safe from several threads.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional

from .driver import Driver

DriverFactory = Callable[[], Driver]


class UnknownDriverError(KeyError):
    """Raised when no driver is registered under the requested name."""


class DriverRegistry:
    def __init__(self) -> None:
        self._factories: Dict[str, DriverFactory] = {}
        self._drivers: Dict[str, Driver] = {}
        self._lock = threading.Lock()

    def register(self, name: str, factory: DriverFactory) -> None:
        """Register ``factory`` under ``name``, replacing any previous entry."""
        with self._lock:
            self._factories[name] = factory
            self._drivers.pop(name, None)
        logging.debug("[registry] driver registered", extra={"driver": name})

    def get(self, name: str) -> Driver:
        """Return the driver registered under ``name``.

        The factory runs on the first lookup and its driver is cached;
        every lookup returns that same instance. The factory may call
        back into the registry.

        Raises:
            UnknownDriverError: If the name is not registered.
        """
        with self._lock:
            driver = self._drivers.get(name)
            if driver is not None:
                return driver
            try:
                factory = self._factories[name]
            except KeyError:
                known = ", ".join(sorted(self._factories)) or "none"
                raise UnknownDriverError(
                    f"No driver registered as {name!r} (known: {known})"
                ) from None
        # Built outside the lock; the first instance stored wins.
        driver = factory()
        with self._lock:
            if self._factories.get(name) is factory:
                return self._drivers.setdefault(name, driver)
        return driver

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._factories


_default: Optional[DriverRegistry] = None
_default_lock = threading.Lock()


def _register_builtin(registry: DriverRegistry) -> None:
    from .mssql import MssqlDriver
    from .oracle import OracleDriver

    registry.register("oracle", OracleDriver)
    registry.register("mssql", MssqlDriver)


def get_registry() -> DriverRegistry:
    """Return the process-wide registry, initialising it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            registry = DriverRegistry()
            _register_builtin(registry)
            _default = registry
            logging.debug("[registry] built-in drivers ready", extra={"drivers": registry.names()})
        return _default
