"""
Check database connectivity from the command line.

Builds the descriptor from ``USERNAME``, ``PASSWORD``, ``OBIP``,
``OBPORT`` and ``OBDATABASE``, opens a connection with the configured
driver and pings it.  With ``--query`` the driver's fixed statement is
also run and each row is printed on its own line.

Exit status is 0 on success and 2 when any phase fails.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ..config import config
from ..config.queries import statement_for
from ..infra.db import HarnessError
from ..infra.reporting.row_writer import FORMATS, RowWriter
from ..services.harness import ConnectivityHarness


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Check database connectivity')
    parser.add_argument('--query', action='store_true', help='Also run a trivial query and print its rows')
    parser.add_argument('--driver', type=str, default=config.OBDRIVER, help='Registered driver name (default: OBDRIVER or "oracle")')
    parser.add_argument('--format', type=str, choices=FORMATS, default='text', help='Row output format')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    statement = statement_for(args.driver) if args.query else None
    harness = ConnectivityHarness(
        args.driver,
        statement=statement,
        sink=RowWriter(fmt=args.format),
    )
    try:
        result = harness.run(config.connection())
    except HarnessError as err:
        logging.error('[cli/ping] %s phase failed', err.phase.value, exc_info=err)
        return 2
    except OSError as err:
        logging.error('[cli/ping] could not write rows', exc_info=err)
        return 2
    logging.info('[cli/ping] %s OK', result.descriptor, extra={'rows': result.rows, 'queried': result.queried})
    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except Exception as err:
        logging.error('Error executing cli/ping', exc_info=err)
        sys.exit(2)
