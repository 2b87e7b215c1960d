from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from catalog_merge.app import check_merge_plans, merge_entities
from catalog_merge.config import configure_logging
from catalog_merge.domain.model import EntityKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merge duplicate catalog records")
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge = subparsers.add_parser("merge", help="Merge a duplicate record into its survivor")
    merge.add_argument(
        "--kind",
        type=str,
        required=True,
        choices=[kind.value for kind in EntityKind],
        help="Entity kind of both records",
    )
    merge.add_argument(
        "--source",
        type=str,
        required=True,
        help="Id of the duplicate record that will be destroyed",
    )
    merge.add_argument(
        "--target",
        type=str,
        required=True,
        help="Id of the record that survives the merge",
    )

    subparsers.add_parser(
        "check-plans",
        help="Report schema attachments that no merge plan handles",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _merge_ids(args: argparse.Namespace) -> tuple[UUID, UUID]:
    return _parse_uuid(args.source), _parse_uuid(args.target)


def _run_merge(kind: str, source_id: UUID, target_id: UUID) -> int:
    result = merge_entities(kind, source_id, target_id)
    if result.error is not None:
        log.error("Merge failed (%s): %s", result.error.kind, result.error.message)
        return 1
    log.info("Merged %s %s into %s", kind, source_id, result.survivor)
    return 0


def _run_check_plans() -> int:
    gaps = check_merge_plans()
    if gaps:
        log.error("Merge plans incomplete for: %s", ", ".join(sorted(gaps)))
        return 1
    log.info("Every merge plan covers its schema attachments")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        merge_ids = _merge_ids(parsed_args) if parsed_args.command == "merge" else None
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if merge_ids is not None:
            status = _run_merge(parsed_args.kind, *merge_ids)
        elif parsed_args.command == "check-plans":
            status = _run_check_plans()
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)

    if status:
        sys.exit(status)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
