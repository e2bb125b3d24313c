"""Command-line interface for postgang.

Usage:
    postgang --code 0357 api --api-uid ID --api-key KEY
    postgang --code 0357 --output postgang.ics file delivery_dates.json
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from postgang import __version__
from postgang.config.constants import (
    DEFAULT_LOG_LEVEL,
    ENV_API_KEY,
    ENV_API_UID,
    ENV_LOG_LEVEL,
    LOG_FORMAT,
    STDIN_PATH,
)
from postgang.config.settings import APIConfig
from postgang.core.date_source import from_api, from_file
from postgang.core.ics_builder import render_calendar
from postgang.core.models import ApiCredentials, DeliveryDateSet, PostalCode
from postgang.exceptions.errors import CredentialsError, InvalidPostalCodeError, SourceError
from postgang.storage.credentials import load_api_credentials

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _postal_code(value: str) -> PostalCode:
    try:
        return PostalCode.parse(value)
    except InvalidPostalCodeError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="postgang",
        description="Create iCalendar for Norwegian postcode delivery days.",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--code",
        required=True,
        type=_postal_code,
        help="Postal code (4 digits)",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        help="File path (default: standard output)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    api = subparsers.add_parser("api", help="Get delivery dates from Bring API")
    api.add_argument(
        "--api-uid",
        metavar="ID",
        help=f"Bring API user id (env: {ENV_API_UID})",
    )
    api.add_argument(
        "--api-key",
        metavar="KEY",
        help=f"Bring API key (env: {ENV_API_KEY})",
    )

    file_cmd = subparsers.add_parser("file", help="Get delivery dates from JSON file")
    file_cmd.add_argument(
        "input",
        metavar="INPUT_PATH",
        help=f"File path ('{STDIN_PATH}' for standard input)",
    )

    return parser


def setup_logging(level_name: Optional[str] = None) -> None:
    """Configure logging on standard error.

    Args:
        level_name: Logging level name (default: POSTGANG_LOG_LEVEL or WARNING).
    """
    name = (level_name or os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def resolve_credentials(
    args: argparse.Namespace, parser: argparse.ArgumentParser
) -> Optional[ApiCredentials]:
    """Resolve API credentials for the ``api`` command, None for ``file``.

    Missing credentials are reported as a usage error.
    """
    if args.command != "api":
        return None
    try:
        return load_api_credentials(uid=args.api_uid, key=args.api_key)
    except CredentialsError as e:
        parser.error(str(e))


def fetch_delivery_dates(
    args: argparse.Namespace, credentials: Optional[ApiCredentials]
) -> DeliveryDateSet:
    """Read delivery dates from the source selected on the command line."""
    if args.command == "api":
        return from_api(args.code, credentials, config=APIConfig.from_env())
    return from_file(args.input)


def write_stdout(text: str) -> None:
    """Write calendar text to standard output as UTF-8 bytes.

    Bypasses the text layer so the locale encoding and newline translation
    cannot alter the output.
    """
    sys.stdout.flush()
    sys.stdout.buffer.write(text.encode("utf-8"))
    sys.stdout.buffer.flush()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line tool.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:]).

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()
    logger.debug(
        "Got CLI args: command=%s code=%s output=%s",
        args.command, args.code, args.output
    )
    credentials = resolve_credentials(args, parser)

    if args.output is None:
        try:
            calendar_text = render_calendar(args.code, fetch_delivery_dates(args, credentials))
        except SourceError as e:
            logger.error("%s", e)
            return EXIT_FAILURE
        write_stdout(calendar_text)
        return EXIT_SUCCESS

    # Create the output file before doing any network requests
    try:
        output = open(args.output, "w", encoding="utf-8", newline="")
    except OSError as e:
        logger.error("%s: %s", args.output, e.strerror or e)
        return EXIT_FAILURE

    with output:
        try:
            calendar_text = render_calendar(args.code, fetch_delivery_dates(args, credentials))
        except SourceError as e:
            logger.error("%s", e)
            return EXIT_FAILURE
        try:
            output.write(calendar_text)
        except OSError as e:
            logger.error("%s: %s", args.output, e.strerror or e)
            return EXIT_FAILURE

    logger.info("Wrote calendar to %s", args.output)
    return EXIT_SUCCESS
