"""Application entry point.

Usage:
    python main.py sweep [--as-of 2024-03-02]
    python main.py pay 7 100000 --date 2024-03-02 --type monthly_fee --method card
    python main.py daily 2024-03-02
    python main.py monthly 2024 3
    python main.py participants --status lapsed --page 2
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import date
from typing import Any, Optional, Sequence

from config import load_config
from core import (
    ApplicationError,
    ConfigurationError,
    PagingDefaults,
    ParticipantStatus,
    PaymentMethod,
    PaymentType,
    get_logger,
    setup_logger,
)
from core.app_initializer import ApplicationInitializer
from database import ParticipantQuery, PaymentRecord
from utils.dates import as_date

logger = get_logger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Club membership dues and settlement")
    parser.add_argument("--no-sweep", action="store_true",
                        help="skip the start-of-session overdue sweep")
    commands = parser.add_subparsers(dest="command", required=True)

    sweep = commands.add_parser("sweep", help="mark overdue participants as lapsed")
    sweep.add_argument("--as-of", type=as_date, default=None)

    pay = commands.add_parser("pay", help="record a payment")
    pay.add_argument("participant_id", type=int)
    pay.add_argument("amount", type=int)
    pay.add_argument("--date", type=as_date, default=None)
    pay.add_argument("--type", choices=[t.value for t in PaymentType], default=PaymentType.MONTHLY_FEE.value)
    pay.add_argument("--method", choices=[m.value for m in PaymentMethod], default=PaymentMethod.CASH.value)
    pay.add_argument("--settled", type=as_date, default=None, help="settlement date")

    daily = commands.add_parser("daily", help="paid and outstanding participants for a day")
    daily.add_argument("day", type=as_date)

    monthly = commands.add_parser("monthly", help="monthly settlement summary")
    monthly.add_argument("year", type=int)
    monthly.add_argument("month", type=int)

    roster = commands.add_parser("participants", help="list participants")
    roster.add_argument("--status", choices=[s.value for s in ParticipantStatus], default=None)
    roster.add_argument("--page", type=int, default=1)
    roster.add_argument("--per-page", type=int, default=PagingDefaults.PER_PAGE)

    return parser


def _print(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


async def run_command(app: ApplicationInitializer, args: argparse.Namespace) -> None:
    if args.command == "sweep":
        changed = await app.startup_sweep(args.as_of)
        _print({"changed": changed})
    elif args.command == "pay":
        payment_id = await app.payment_recorder.record_payment(PaymentRecord(
            participant_id=args.participant_id,
            date=args.date or date.today(),
            amount=args.amount,
            type=args.type,
            method=args.method,
            settlement_date=args.settled,
        ))
        _print({"payment_id": payment_id})
    elif args.command == "daily":
        result = await app.settlement.get_payments_by_date(args.day)
        _print(result.to_dict())
    elif args.command == "monthly":
        summary = await app.settlement.get_monthly_settlement_summary(args.year, args.month)
        _print(summary.to_dict())
    elif args.command == "participants":
        page = await app.participants.list_participants(ParticipantQuery(
            status=ParticipantStatus(args.status) if args.status else None,
            page=args.page,
            per_page=args.per_page,
        ))
        _print(page.to_dict())


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    try:
        config = load_config()
    except ConfigurationError as e:
        setup_logger(stream=sys.stderr)
        logger.error(f"ConfigurationError: {e}")
        return 1
    # Results go to stdout as JSON, so logs use stderr
    setup_logger(level=config.log_level, log_file=config.log_file,
                 colored=sys.stderr.isatty(), stream=sys.stderr)

    try:
        async with ApplicationInitializer(config) as app:
            if not args.no_sweep and args.command != "sweep":
                await app.startup_sweep()
            await run_command(app, args)
    except ApplicationError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    try:
        run()
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
