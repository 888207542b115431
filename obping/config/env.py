"""
Environment configuration loader.

This module reads the connection settings from environment variables
(optionally seeded from a ``.env`` file) and exposes them via a simple
``Config`` class. None of the variables are required: a missing value
is read as an empty string and the driver rejects the resulting
descriptor when the connection is opened.

Supported variables:

* ``USERNAME`` – database user.
* ``PASSWORD`` – database password.
* ``OBIP`` – database host.
* ``OBPORT`` – database port.
* ``OBDATABASE`` – database (service) name.
* ``OBDRIVER`` – registered driver name (default ``'oracle'``).

The resulting ``config`` instance can be imported from
``obping.config``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from dotenv import load_dotenv
load_dotenv()

DEFAULT_DRIVER = "oracle"


@dataclass(frozen=True)
class ConnectionConfig:
    """Credentials and endpoint used to build a connection descriptor."""

    user: str
    password: str
    host: str
    port: str
    database: str


@dataclass(frozen=True)
class Config:
    """Holds environment configuration for the application."""

    USERNAME: str = ""
    PASSWORD: str = ""
    OBIP: str = ""
    OBPORT: str = ""
    OBDATABASE: str = ""
    OBDRIVER: str = DEFAULT_DRIVER

    def connection(self) -> ConnectionConfig:
        return ConnectionConfig(
            user=self.USERNAME,
            password=self.PASSWORD,
            host=self.OBIP,
            port=self.OBPORT,
            database=self.OBDATABASE,
        )


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Config: A populated configuration dataclass.
    """
    env = os.environ if environ is None else environ

    def _optional(name: str) -> str:
        return env.get(name) or ""

    return Config(
        USERNAME=_optional("USERNAME"),
        PASSWORD=_optional("PASSWORD"),
        OBIP=_optional("OBIP"),
        OBPORT=_optional("OBPORT"),
        OBDATABASE=_optional("OBDATABASE"),
        OBDRIVER=env.get("OBDRIVER") or DEFAULT_DRIVER,
    )


# Create a single configuration instance when this module is imported.
config: Config = load_config()
