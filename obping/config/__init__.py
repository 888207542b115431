"""
Expose the loaded configuration as ``config``.

Importing from this module will load environment variables and
populate a singleton ``Config`` instance. Example:

    from obping.config import config
    print(config.connection())
"""

from .env import config, Config, ConnectionConfig, load_config  # noqa: F401
