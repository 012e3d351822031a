"""Command-line entry point.

Usage:
    python -m evatr --own DE115235681 --check CZ00177041
    python -m evatr --own DE115235681 --check CZ00177041 --company "Firma s.r.o." --city Praha

Runs a qualified check when both --company and --city are given, a simple check
otherwise, and prints the result as JSON.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import structlog
from pydantic import ValidationError

from evatr.config import settings
from evatr.errors import EvatrError
from evatr.schemas import ValidationRequest
from evatr.service import check_qualified, check_simple

logger = logging.getLogger(__name__)

_PROG = "evatr"

# flag → description, shown when the required flags are missing
_PARAMS = {
    "--own": "(required) own German VAT number, e.g. “DE115235681”",
    "--check": "(required) foreign VAT number to check, e.g. “CZ00177041”",
    "--company": "(extended, required) company name with legal form",
    "--city": "(extended, required) city",
    "--zip": "(extended, optional) zip code",
    "--street": "(extended, optional) street",
    "--raw": "include the raw XML response in the output",
}


def configure_logging() -> None:
    """Stdlib logging on stderr plus structlog bound to it."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=_PROG, add_help=True)
    parser.add_argument("--own", help=_PARAMS["--own"])
    parser.add_argument("--check", help=_PARAMS["--check"])
    parser.add_argument("--company", help=_PARAMS["--company"])
    parser.add_argument("--city", help=_PARAMS["--city"])
    parser.add_argument("--zip", help=_PARAMS["--zip"])
    parser.add_argument("--street", help=_PARAMS["--street"])
    parser.add_argument("--raw", action="store_true", help=_PARAMS["--raw"])
    return parser


def print_usage() -> None:
    print(f"Example: {_PROG} --own DE115235681 --check CZ00177041")
    print("Params:")
    width = max(len(flag) for flag in _PARAMS)
    print(f"{'ARGUMENTS'.ljust(width)}  DESCRIPTION")
    for flag, description in _PARAMS.items():
        print(f"{flag.ljust(width)}  {description}")


def request_from_args(args: argparse.Namespace) -> ValidationRequest:
    return ValidationRequest(
        own_vat_number=args.own,
        foreign_vat_number=args.check,
        company_name=args.company,
        city=args.city,
        zip=args.zip,
        street=args.street,
        include_raw_response=args.raw,
    )


async def run(args: argparse.Namespace) -> str:
    """Run the check selected by ``args`` and return the result as JSON."""
    request = request_from_args(args)
    if request.is_qualified:
        result = await check_qualified(request)
    else:
        result = await check_simple(request)
    return result.model_dump_json(indent=2, exclude_none=True)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.own or not args.check:
        print_usage()
        return 1

    configure_logging()
    try:
        output = asyncio.run(run(args))
    except (EvatrError, ValidationError) as exc:
        logger.debug("Check failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(output)
    return 0
