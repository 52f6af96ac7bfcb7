"""Replay command wiring for Readmap CLI."""

from __future__ import annotations

import argparse
from typing import Any

from consumer.event_consumer import consume_message
from core.runtime_context import RuntimeContext
from core.timestamps import utc_now
from core.types import ConsumeOutcome, MessageStatus, QueueMessage
from ingest.queue_message import encode_queue_message


def add_replay_command(subparsers: Any) -> None:
    """Register replay subcommand."""
    parser = subparsers.add_parser(
        "replay",
        help="Re-run the consumer for a stored payload",
    )
    parser.add_argument("uuid", help="Event UUID of the stored payload")
    parser.add_argument(
        "--user",
        default="",
        help="User name carried in the replayed message (defaults to the payload's)",
    )


def run_replay_command(context: RuntimeContext, args: argparse.Namespace) -> int:
    """Replay one stored event through the consumer and print its outcome."""
    message = QueueMessage(event_uuid=args.uuid, user=args.user, timestamp=utc_now())
    outcome = consume_message(encode_queue_message(message), context)
    print(render_outcome(outcome))
    succeeded = outcome.status is MessageStatus.ACKNOWLEDGED and outcome.processed_count > 0
    return 0 if succeeded else 1


def render_outcome(outcome: ConsumeOutcome) -> str:
    """Render a consume outcome as tab-separated lines."""
    lines = [
        f"status={outcome.status.value}",
        f"stage={outcome.stage.value}",
        f"processed={outcome.processed_count}",
        f"errors={outcome.error_count}",
    ]
    if outcome.error is not None:
        lines.append(f"error={outcome.error}")
    for index, result in enumerate(outcome.results):
        kind = result.error.kind.value if result.error is not None else "-"
        lines.append(
            f"{index}\t{'ok' if result.processed else kind}\t{result.iso3 or '-'}\t{result.country}"
        )
    return "\n".join(lines)
