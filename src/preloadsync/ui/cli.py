from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from preloadsync.app import (
    all_states,
    check_domain,
    domain_status,
    pending_entries,
    reconcile_preload_list,
    submit_domain,
)
from preloadsync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track HSTS preload list submissions")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "reconcile",
        help="Update recorded states from the upstream preload list",
    )

    for command, help_text in (
        ("submit", "Submit a domain for preloading"),
        ("status", "Show the recorded state of a domain"),
        ("preloadable", "Check whether a domain may be preloaded"),
        ("removable", "Check whether a domain may be removed"),
    ):
        domain_parser = subparsers.add_parser(command, help=help_text)
        domain_parser.add_argument("domain", type=_parse_domain, help="Domain name")

    subparsers.add_parser("pending", help="List pending submissions as preload list entries")
    subparsers.add_parser("states", help="List every recorded domain state")

    return parser.parse_args(list(argv))


def _parse_domain(value: str) -> str:
    domain = value.strip()
    if not domain:
        raise argparse.ArgumentTypeError("Domain must not be empty")
    return domain


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))  # noqa: T201


def _write_transcript(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _run(args: argparse.Namespace) -> None:
    match args.command:
        case "reconcile":
            reconcile_preload_list(report=_write_transcript)
        case "submit":
            _print_json(submit_domain(args.domain).to_json())
        case "status":
            _print_json(domain_status(args.domain).to_json())
        case "preloadable" | "removable":
            _print_json(check_domain(args.domain, kind=args.command).to_json())
        case "pending":
            _print_json([entry.to_json() for entry in pending_entries()])
        case "states":
            _print_json([state.to_json() for state in all_states()])
        case _:
            raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _run(parsed_args)
    except Exception:
        log.exception("Fatal error while running %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
