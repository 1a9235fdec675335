"""CLI entry point for Crashlytics Teams Notifier.

This module forwards a single Firebase Alerts CloudEvent, read from a file
or stdin, to the configured Teams webhook.

Usage:
    python -m crashlytics_teams_notifier [options] EVENT
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from typing import Any, NoReturn

from pydantic import ValidationError

from crashlytics_teams_notifier import __version__
from crashlytics_teams_notifier.config import (
    Settings,
    clear_settings_cache,
    get_settings,
    teams_webhook_url,
)
from crashlytics_teams_notifier.events.models import (
    ALERT_TYPE_NEW_NONFATAL_ISSUE,
    ALERT_TYPE_VELOCITY,
)
from crashlytics_teams_notifier.handlers import CrashlyticsAlertHandler, UnsupportedAlertTypeError
from crashlytics_teams_notifier.notifier.card import build_test_card
from crashlytics_teams_notifier.notifier.channels.teams import TeamsChannel
from crashlytics_teams_notifier.notifier.errors import DeliveryError, WebhookNotConfiguredError

APP_NAME = "Crashlytics Teams Notifier"
APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INPUT_ERROR = 3


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="crashlytics-teams-notifier",
        description="Forward Firebase Crashlytics alerts to a Microsoft Teams channel.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m crashlytics_teams_notifier event.json          Send an alert card
  cat event.json | python -m crashlytics_teams_notifier -   Read the event from stdin
  python -m crashlytics_teams_notifier --dry-run event.json Print the card, don't send
  python -m crashlytics_teams_notifier --test-card          Send a webhook test card
  python -m crashlytics_teams_notifier --config-check       Validate config and exit
        """,
    )

    parser.add_argument(
        "event",
        nargs="?",
        default=None,
        help="Path to a CloudEvent JSON file, or - for stdin",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    parser.add_argument(
        "--alert-type",
        choices=[ALERT_TYPE_VELOCITY, ALERT_TYPE_NEW_NONFATAL_ISSUE],
        default=None,
        help="Override the event's alerttype attribute",
    )

    parser.add_argument(
        "--config-check",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--test-card",
        action="store_true",
        help="Send a minimal test card to the webhook and exit",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the card and log it without sending",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        # httpx logs request URLs, which would expose the webhook secret
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def run_config_check(settings: Settings) -> int:
    """Print a configuration summary.

    Args:
        settings: Validated settings.

    Returns:
        Exit code, EXIT_CONFIG_ERROR when no webhook is configured.
    """
    summary = settings.redacted_summary()
    print(f"{APP_NAME} v{APP_VERSION}")
    print("Configuration:")
    print(f"  Teams Webhook: {summary['teams_webhook_url']}")
    print(f"  Log Level: {summary['log_level']}")
    print(f"  Dry Run: {summary['dry_run']}")
    print()

    if not settings.teams.enabled:
        print("TEAMS_WEBHOOK_URL is not set.", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print("All checks passed. Ready to run.")
    return EXIT_SUCCESS


def load_event(source: str) -> dict[str, Any]:
    """Load a CloudEvent JSON document.

    Args:
        source: File path, or ``-`` for stdin.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the document is not a JSON object.
    """
    if source == "-":
        data = json.load(sys.stdin)
    else:
        with open(source, encoding="utf-8") as f:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")
    return data


async def run_event(
    cloud_event: dict[str, Any],
    *,
    alert_type: str | None,
    dry_run: bool,
) -> int:
    """Forward one CloudEvent to Teams.

    Returns:
        Exit code.
    """
    logger = logging.getLogger(__name__)
    handler = CrashlyticsAlertHandler(TeamsChannel(teams_webhook_url), dry_run=dry_run)

    try:
        await handler.handle_cloud_event(cloud_event, alert_type=alert_type)
    except UnsupportedAlertTypeError as e:
        logger.error(str(e))
        return EXIT_INPUT_ERROR
    except WebhookNotConfiguredError as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR
    except DeliveryError as e:
        logger.error(f"Delivery failed: {e}")
        return EXIT_ERROR

    return EXIT_SUCCESS


async def run_test_card() -> int:
    """Send the webhook test card.

    Returns:
        Exit code.
    """
    logger = logging.getLogger(__name__)
    channel = TeamsChannel(teams_webhook_url)

    try:
        await channel.send(build_test_card())
    except WebhookNotConfiguredError as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR
    except DeliveryError as e:
        logger.error(f"Delivery failed: {e}")
        return EXIT_ERROR

    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    configure_logging(args.log_level or settings.log_level)

    if args.config_check:
        sys.exit(run_config_check(settings))

    if args.test_card:
        sys.exit(asyncio.run(run_test_card()))

    if args.event is None:
        parser.error("an EVENT file is required unless --config-check or --test-card is given")

    try:
        cloud_event = load_event(args.event)
    except (OSError, ValueError) as e:
        print(f"Could not read event: {e}", file=sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)

    dry_run = args.dry_run or settings.dry_run
    exit_code = asyncio.run(run_event(cloud_event, alert_type=args.alert_type, dry_run=dry_run))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
