"""Readmap CLI entry points.

This module exposes operator commands for payload validation,
event replay, and country lookups. It maps argparse commands onto
the pipeline modules.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Sequence

from cli.replay_command import add_replay_command, run_replay_command
from core.country_codes import resolve_iso3
from core.errors import ReadmapPayloadError
from core.timestamps import utc_now
from core.types import ProcessingMeta
from handlers.bootstrap import get_runtime_context
from ingest.payload_codec import parse_webhook_payload
from ingest.webhook_receiver import validate_payload
from transforms.desafio_processor import prepare_reading

_DRY_RUN_UUID = "dry-run"


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="readmap", description="Readmap operator CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_validate_command(subparsers)
    add_replay_command(subparsers)
    _add_resolve_country_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Readmap CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "validate":
        return _run_validate_command(args)
    if args.command == "replay":
        return run_replay_command(get_runtime_context(), args)
    if args.command == "resolve-country":
        return _run_resolve_country_command(args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_validate_command(args: argparse.Namespace) -> int:
    """Handle validate command.

    Parses a payload file and transforms each Desafio without writing.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    try:
        payload = parse_webhook_payload(Path(args.payload_file).read_bytes())
    except (OSError, ReadmapPayloadError) as error:
        print(f"invalid_payload={error}")
        return 1
    validation_message = validate_payload(payload)
    if validation_message:
        print(f"invalid_payload={validation_message}")
        return 1
    meta = ProcessingMeta(
        event_uuid=_DRY_RUN_UUID,
        user=payload.profile.name,
        avatar_url=payload.profile.avatar_url,
        timestamp=utc_now(),
    )
    for index, desafio in enumerate(payload.desafios):
        reading, result = prepare_reading(desafio, index, meta)
        if reading is not None:
            print(f"{index}\tready\t{reading.iso3}\t{reading.progress}\t{reading.country}")
        elif result.error is not None:
            print(f"{index}\t{result.error.kind.value}\t-\t-\t{result.country}")
        else:
            print(f"{index}\tskipped\t-\t-\t{desafio.description}")
    return 0


def _run_resolve_country_command(args: argparse.Namespace) -> int:
    """Handle resolve-country command."""
    iso3 = resolve_iso3(args.name)
    if iso3 is None:
        print(f"country_not_found={args.name}")
        return 1
    print(iso3)
    return 0


def _add_validate_command(subparsers: Any) -> None:
    """Register validate subcommand."""
    parser = subparsers.add_parser(
        "validate",
        help="Parse a webhook payload file and dry-run its transformation",
    )
    parser.add_argument("payload_file", help="Path to a webhook JSON payload")


def _add_resolve_country_command(subparsers: Any) -> None:
    """Register resolve-country subcommand."""
    parser = subparsers.add_parser("resolve-country", help="Print the ISO3 code of a country")
    parser.add_argument("name", help="Country name as sent upstream")
