"""
Command line entry point: ``python -m syndication``.
"""

import argparse
import signal
import sys
import threading
from typing import Optional

from syndication.config import reload_config
from syndication.errors import SyncError
from syndication.logger import get_logger, setup_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="syndication", description="RSS/Atom feed synchronization")
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML configuration file (used when it exists)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_db = subparsers.add_parser("init-db", help="Create database tables")
    init_db.add_argument(
        "--drop", action="store_true", help="Drop existing tables before creating new ones"
    )

    subparsers.add_parser("sync", help="Sync every feed of every user once")
    subparsers.add_parser("run", help="Sync periodically until interrupted")

    return parser


def cmd_init_db(app, args: argparse.Namespace) -> int:
    print("Initializing database...")
    app.init_db(drop_all=args.drop)
    print("Database initialized successfully!")
    return 0


def cmd_sync(app, args: argparse.Namespace) -> int:
    app.init_db()
    report = app.sync_service.sync_all_users()
    print(report.summary())

    for outcome in report.failed:
        print(f"  feed {outcome.feed_id} ({outcome.subscription}): {outcome.error}")
    for user_id, error in report.user_errors.items():
        print(f"  user {user_id}: {error}")

    return 0 if report.ok else 1


def cmd_run(app, args: argparse.Namespace) -> int:
    stop_event = threading.Event()

    def _handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        stop_event.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    app.start()
    try:
        stop_event.wait()
    finally:
        app.stop()

    return 0


COMMANDS = {
    "init-db": cmd_init_db,
    "sync": cmd_sync,
    "run": cmd_run,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments (defaults to sys.argv)

    Returns:
        Process exit code
    """
    from syndication.app import SyndicationApp

    args = build_parser().parse_args(argv)

    config = reload_config(args.config)
    setup_logger(log_config=config.logging)

    app = SyndicationApp(config=config)
    try:
        return COMMANDS[args.command](app, args)
    except SyncError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    finally:
        app.db_manager.close()


if __name__ == "__main__":
    sys.exit(main())
