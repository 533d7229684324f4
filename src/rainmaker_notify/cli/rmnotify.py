#!/usr/bin/env python3
"""
rmnotify - RainMaker local notification store CLI

A lightweight CLI for inspecting and maintaining the shared local storage:
- List notification history (rmnotify list)
- Feed a push payload through the classifier (rmnotify ingest)
- Clear stored data (rmnotify cleanup)
- Version info (rmnotify version)
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from rainmaker_notify import __version__
from rainmaker_notify.core.config import StorageConfig, get_config
from rainmaker_notify.core.logging import setup_logging
from rainmaker_notify.notifications import (
    NotificationClassifier,
    NotificationService,
    date_time_strings,
)
from rainmaker_notify.storage import LocalStorageHandler, StorageError

logger = logging.getLogger(__name__)


class Colors:
    """ANSI color codes for terminal output."""
    
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colorize(text: str, color: str) -> str:
    """Colorize text if stdout is a TTY."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def build_storage_config(args) -> StorageConfig:
    """Storage config from the environment, overridden by CLI flags."""
    config = get_config().storage
    overrides = {}
    if args.suite:
        overrides["app_group"] = args.suite
    if args.storage_dir:
        overrides["base_dir"] = str(Path(args.storage_dir).expanduser())
    if args.limit:
        overrides["notification_limit"] = args.limit
    return config.model_copy(update=overrides)


def cmd_list(args) -> int:
    """
    Print notification history, most recent first.
    
    Returns:
        Exit code (always 0)
    """
    handler = LocalStorageHandler(build_storage_config(args))
    notifications = handler.get_delivered_notifications() or []
    
    if args.json:
        print(json.dumps([n.model_dump() for n in notifications], indent=2))
        return 0
    
    if not notifications:
        print("No notifications.")
        return 0
    
    for notification in notifications:
        date, time_of_day = date_time_strings(notification.timestamp)
        print(colorize(notification.title or "(no title)", Colors.BOLD))
        print(f"  {notification.body}")
        print(f"  {date} {time_of_day}")
    
    print(f"\n{len(notifications)} notification(s)")
    return 0


def cmd_ingest(args) -> int:
    """
    Classify a push payload from a JSON file and save it to history.
    
    Returns:
        Exit code (0 on success, 1 if the file is unreadable)
    """
    try:
        with open(args.file, "r") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        print(colorize(f"✗ Cannot read payload: {e}", Colors.RED), file=sys.stderr)
        return 1
    
    handler = LocalStorageHandler(build_storage_config(args))
    service = NotificationService(
        handler.notification_handler,
        NotificationClassifier(handler.nodes_handler),
    )
    notification = service.handle(payload)
    
    if notification is None:
        print(colorize("Payload dropped (unknown event type)", Colors.YELLOW))
        return 0
    
    print(colorize(f"✓ {notification.title}", Colors.GREEN))
    print(f"  {notification.body}")
    return 0


def cmd_cleanup(args) -> int:
    """
    Remove notification history, or all local user data with --all.
    
    Returns:
        Exit code (always 0)
    """
    handler = LocalStorageHandler(build_storage_config(args))
    if args.all:
        handler.cleanup_data()
        print(colorize("✓ All local data removed", Colors.GREEN))
    else:
        handler.cleanup_notifications()
        print(colorize("✓ Notification history removed", Colors.GREEN))
    return 0


def cmd_version(args) -> int:
    """
    Print version information.
    
    Returns:
        Exit code (always 0)
    """
    print(f"rmnotify version {__version__}")
    print("RainMaker Notify - local notification store for RainMaker devices")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for rmnotify."""
    parser = argparse.ArgumentParser(
        description="RainMaker local notification store CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rmnotify list                      # Show notification history
  rmnotify ingest payload.json       # Classify and store a push payload
  rmnotify cleanup --all             # Remove all local user data
  rmnotify version                   # Show version information

Environment variables:
  RAINMAKER_STORAGE_BASE_DIR         # Storage directory (default: ~/.rainmaker/storage)
  RAINMAKER_STORAGE_APP_GROUP        # Shared suite name
  RAINMAKER_STORAGE_NOTIFICATION_LIMIT  # History size (default: 200)
  RAINMAKER_LOG_LEVEL                # Log level (default: INFO)
        """
    )
    parser.add_argument("--suite", help="Shared storage suite (app group)")
    parser.add_argument("--storage-dir", help="Directory holding suite databases")
    parser.add_argument("--limit", type=int, help="Notification history size")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
    
    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    
    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="Show stored notifications"
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Print notifications as JSON"
    )
    
    # ingest command
    ingest_parser = subparsers.add_parser(
        "ingest",
        help="Classify a push payload JSON file and store the result"
    )
    ingest_parser.add_argument("file", help="Path to the push payload JSON file")
    
    # cleanup command
    cleanup_parser = subparsers.add_parser(
        "cleanup",
        help="Remove stored notifications"
    )
    cleanup_parser.add_argument(
        "--all",
        action="store_true",
        help="Also remove cached nodes and node groups"
    )
    
    # version command
    subparsers.add_parser(
        "version",
        help="Show version information"
    )
    
    return parser


def main(argv=None):
    """Main entry point for rmnotify CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 0
    
    setup_logging(args.log_level)
    
    # Dispatch to command handlers
    try:
        if args.command == "list":
            return cmd_list(args)
        elif args.command == "ingest":
            return cmd_ingest(args)
        elif args.command == "cleanup":
            return cmd_cleanup(args)
        elif args.command == "version":
            return cmd_version(args)
    except StorageError as e:
        print(colorize(f"✗ Storage error: {e}", Colors.RED), file=sys.stderr)
        return 1
    
    print(f"Unknown command: {args.command}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
