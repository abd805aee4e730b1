"""
CLI entry point for the finance tracker MCP server.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from finance_tracker_mcp.core.database import DEFAULT_DB_PATH
from finance_tracker_mcp.server import run_server

DB_PATH_ENV = "FINANCE_TRACKER_DB_PATH"


def resolve_db_path(cli_value: Optional[Path]) -> Path:
    """
    Pick the database path: --db-path, then $FINANCE_TRACKER_DB_PATH, then the default.

    The default directory is created if missing.
    """
    if cli_value is not None:
        return cli_value
    env_value = os.getenv(DB_PATH_ENV)
    if env_value:
        return Path(env_value)
    DEFAULT_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    return DEFAULT_DB_PATH


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Finance Tracker MCP Server - record and report income and expenses"
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        help=f"Path to SQLite database (default: ${DB_PATH_ENV} or {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Do not create the default categories on startup",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # MCP uses stdout for protocol, so log to stderr
    )

    # Run the server
    try:
        asyncio.run(run_server(db_path=resolve_db_path(args.db_path), seed=not args.no_seed))
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logging.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
