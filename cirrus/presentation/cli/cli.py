"""
CLI Module

Architectural Intent:
- Command-line entry point for Cirrus
- Loads configuration once, applies flag overrides, wires the container via
  the composition root and hands it to the Textual app
- Supports --verbose/--debug flags for log level control; logs go to a file
  when one is configured since the TUI owns the terminal
"""

import argparse
import asyncio
import logging
import sys
import traceback
from typing import Optional, Sequence

from botocore.exceptions import BotoCoreError

from cirrus.domain.errors import UnknownServiceError
from cirrus.infrastructure.config import load_config, with_overrides
from cirrus.infrastructure.logging import configure_logging, level_from_name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cirrus",
        description="Cirrus: browse AWS resources from the terminal",
    )
    parser.add_argument("--config", "-c", default=None, help="Path to JSON config file")
    parser.add_argument("--region", "-r", default=None, help="AWS region")
    parser.add_argument("--profile", "-p", default=None, help="AWS profile name")
    parser.add_argument(
        "--endpoint-url", default=None, help="Custom AWS endpoint (e.g. LocalStack)"
    )
    parser.add_argument("--log-file", default=None, help="Write logs to this file")
    parser.add_argument(
        "--service", "-s", default=None, help="Open directly on one service (e.g. EC2)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    return parser


def resolve_log_level(args: argparse.Namespace, configured: str) -> int:
    if args.debug:
        return logging.DEBUG
    if args.verbose:
        return logging.INFO
    return level_from_name(configured)


async def async_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    config = with_overrides(
        config,
        region=args.region,
        profile=args.profile,
        endpoint_url=args.endpoint_url,
    )

    log_file = args.log_file or config.log_file
    level = resolve_log_level(args, config.log_level)
    if log_file:
        configure_logging(level=level, log_file=log_file)
    else:
        configure_logging(level=max(level, logging.WARNING))

    from cirrus.composition_root import create_container

    try:
        container = create_container(config)
    except BotoCoreError as e:
        print(f"[-] AWS configuration error: {e}")
        if args.debug:
            traceback.print_exc()
        sys.exit(1)

    if args.service:
        try:
            container.catalog.entry(args.service)
        except UnknownServiceError:
            print(f"[-] Unknown service: {args.service}")
            print(f"    Available: {', '.join(container.catalog.names)}")
            sys.exit(1)

    from cirrus.presentation.tui.app import CirrusApp

    app = CirrusApp(container, initial_service=args.service)
    try:
        await app.run_async()
    except KeyboardInterrupt:
        return 0
    return app.return_code or 0


def main():
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
