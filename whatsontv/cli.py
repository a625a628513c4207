"""Command-line entry point.

Usage:
    whatsontv                              # today's US schedule, grouped by network
    whatsontv -d 2025-03-14 -c GB -t Scripted,Reality
    whatsontv --fetch web --time-sort
    whatsontv --slack                      # post to Slack once
    whatsontv --slack --schedule           # post to Slack daily at NOTIFICATION_TIME
"""
from __future__ import annotations

import argparse
import asyncio
import sys

import structlog
from pydantic import ValidationError

from whatsontv import (
    SlackTarget,
    create_slack_client,
    create_tvmaze_client,
    resolve_slack_target,
)
from whatsontv.config import AppConfig, Settings, get_settings, load_app_config, merge_show_options
from whatsontv.formatters.slack_formatter import SlackShowFormatter
from whatsontv.formatters.text_formatter import TextShowFormatter
from whatsontv.models.shows import ShowOptions
from whatsontv.services.output_service import ConsoleOutputService, SlackOutputService
from whatsontv.services.scheduler import run_daily
from whatsontv.services.show_service import TVShowService
from whatsontv.utils.exceptions import ConfigurationError, WhatsOnTVError
from whatsontv.utils.logger import setup_logging
from whatsontv.utils.style import detect_style

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whatsontv",
        description="Show what's on TV today, from the TVMaze schedule.",
    )
    parser.add_argument("-d", "--date", help="Date to get the schedule for (YYYY-MM-DD, default: today).")
    parser.add_argument("-c", "--country", help="Country code for the network schedule (e.g., US, GB).")
    parser.add_argument("-t", "--types", help="Show types to include (e.g., Scripted,Reality).")
    parser.add_argument("-n", "--networks", help="Networks to include (e.g., CBS,HBO).")
    parser.add_argument("-g", "--genres", help="Genres to include (e.g., Drama,Comedy).")
    parser.add_argument("-L", "--languages", help="Languages to include (e.g., English,Spanish).")
    parser.add_argument(
        "-f", "--fetch",
        choices=["all", "network", "web", "tv"],
        help="Which schedule to fetch (default: all).",
    )
    parser.add_argument("--time-sort", action="store_true", help="List shows by airtime instead of by network.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    parser.add_argument("-D", "--debug", action="store_true", help="Print available networks and totals.")
    parser.add_argument("--config", help="Path to the JSON config file (default: CONFIG_FILE or config.json).")
    parser.add_argument("--slack", action="store_true", help="Post the schedule to Slack instead of printing it.")
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="With --slack: keep running and post daily at the notification time.",
    )
    return parser


def _cli_values(args: argparse.Namespace) -> dict[str, object]:
    return {
        "date": args.date,
        "country": args.country,
        "types": args.types,
        "networks": args.networks,
        "genres": args.genres,
        "languages": args.languages,
        "fetch_source": args.fetch,
    }


async def print_schedule(
    settings: Settings,
    options: ShowOptions,
    sort_by_time: bool = False,
    debug: bool = False,
    no_color: bool = False,
) -> None:
    """Fetch the schedule and print it to stdout."""
    async with create_tvmaze_client(settings) as tvmaze:
        service = ConsoleOutputService(
            TVShowService(tvmaze),
            TextShowFormatter(detect_style(no_color)),
        )
        await service.render(options, sort_by_time=sort_by_time, debug=debug)


async def send_to_slack(
    settings: Settings,
    target: SlackTarget,
    options: ShowOptions,
    sort_by_time: bool = False,
    debug: bool = False,
) -> None:
    """Fetch the schedule and post it to Slack."""
    async with create_tvmaze_client(settings) as tvmaze, create_slack_client(settings, target) as slack:
        service = SlackOutputService(
            TVShowService(tvmaze),
            SlackShowFormatter(),
            slack,
            channel=target.channel,
        )
        await service.render(options, sort_by_time=sort_by_time, debug=debug)


async def _run(args: argparse.Namespace, settings: Settings, app_config: AppConfig) -> None:
    cli_values = _cli_values(args)

    if not args.slack:
        options = merge_show_options(cli_values, app_config)
        await print_schedule(settings, options, args.time_sort, args.debug, args.no_color)
        return

    target = resolve_slack_target(settings, app_config)
    if not args.schedule:
        options = merge_show_options(cli_values, app_config)
        await send_to_slack(settings, target, options, args.time_sort, args.debug)
        return

    # Options are rebuilt on every run so an unset date means "today" each day
    async def job() -> None:
        await send_to_slack(
            settings, target, merge_show_options(cli_values, app_config), args.time_sort, args.debug
        )

    at = settings.NOTIFICATION_TIME or app_config.notification_time
    print(f"WhatsOnTV is running. Posting to Slack daily at {at}.", file=sys.stderr)
    await run_daily(job, at)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit code."""
    args = build_parser().parse_args(argv)
    if args.schedule and not args.slack:
        build_parser().error("--schedule requires --slack")

    try:
        try:
            settings = get_settings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment settings: {e}") from e

        setup_logging(
            log_level="DEBUG" if args.debug else settings.LOG_LEVEL,
            log_format=settings.LOG_FORMAT,
        )
        app_config = load_app_config(args.config or settings.CONFIG_FILE)
        asyncio.run(_run(args, settings, app_config))
    except WhatsOnTVError as e:
        logger.error("run_failed", error=e.message, error_type=type(e).__name__)
        print(f"Error: {e.message}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
