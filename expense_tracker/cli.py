"""
Command-Line Interface for Expense Tracker

Maps each command to one ExpenseService flow:

    expense-tracker about
    expense-tracker add --description <text> --amount <number>
    expense-tracker update <id> --description <text> --amount <number>
    expense-tracker delete <id>
    expense-tracker summary [--month <1-12>]

Exit status is 0 on success and 1 on any handled failure, with a
one-line "Error: ..." message on stderr. argparse usage errors keep
argparse's own status (2).
"""

import argparse
import logging
import sys
from typing import Callable, Optional

from pydantic import ValidationError as SettingsError

from expense_tracker import __version__
from expense_tracker.audit import configure_logging
from expense_tracker.config import get_settings
from expense_tracker.models.expense import SummaryFilter
from expense_tracker.orchestrator import ExpenseService, create_app_components
from expense_tracker.services.storage import StorageError
from expense_tracker.validation import (
    ValidationError,
    parse_amount,
    parse_expense_id,
    parse_month,
)


PROG = "expense-tracker"

ABOUT_TEXT = f"""
Available commands:
add\t\t\tAdd an expense with a description and amount.
update\t\t\tUpdate the description and amount of an expense.
delete\t\t\tDelete an expense.
summary\t\t\tView all expenses and their total.
summary --month\t\tView expenses for a specific month (of the current year).

Usage: {PROG} add --description <description> --amount <amount>
       {PROG} update <id> --description <description> --amount <amount>
       {PROG} delete <id>
       {PROG} summary [--month <month number>]"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Track personal expenses in a local JSON file.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Write the audit log (DEBUG level) to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_subparsers(dest="command", metavar="<command>")

    commands.add_parser("about", help="Show the available commands")

    add = commands.add_parser("add", help="Add an expense")
    add.add_argument("--description", required=True)
    add.add_argument("--amount", required=True)

    update = commands.add_parser("update", help="Update an expense")
    update.add_argument("id")
    update.add_argument("--description", required=True)
    update.add_argument("--amount", required=True)

    delete = commands.add_parser("delete", help="Delete an expense")
    delete.add_argument("id")

    summary = commands.add_parser("summary", help="Show expenses and their total")
    summary.add_argument("--month", default=None, help="Month 1-12 of the current year")

    return parser


def _run_add(service: ExpenseService, args: argparse.Namespace) -> None:
    amount = parse_amount(args.amount)
    expense = service.add(args.description, amount)
    print(f"Expense added successfully (ID: {expense.id})")


def _run_update(service: ExpenseService, args: argparse.Namespace) -> None:
    expense_id = parse_expense_id(args.id)
    amount = parse_amount(args.amount)
    service.update(expense_id, args.description, amount)
    print(f"Expense {expense_id} updated successfully")


def _run_delete(service: ExpenseService, args: argparse.Namespace) -> None:
    expense_id = parse_expense_id(args.id)
    service.delete(expense_id)
    print(f"Expense {expense_id} deleted successfully")


def _run_summary(service: ExpenseService, args: argparse.Namespace) -> None:
    month = parse_month(args.month) if args.month is not None else None
    service.summary(SummaryFilter(month=month))


COMMANDS: dict[str, Callable[[ExpenseService, argparse.Namespace], None]] = {
    "add": _run_add,
    "update": _run_update,
    "delete": _run_delete,
    "summary": _run_summary,
}


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        return _fail(f'Usage: {PROG} <command>\nUse: "{PROG} about" to know all commands')

    try:
        settings = get_settings()
        app_settings = settings.app
        # Reject a bad storage environment before any command runs
        settings.storage
    except SettingsError as e:
        first = e.errors()[0]
        return _fail(f"invalid configuration for {first['loc'][0]}: {first['msg']}")

    level = logging.DEBUG if args.verbose else app_settings.log_level_number
    configure_logging(level, json_output=app_settings.log_json)

    if args.command == "about":
        print(ABOUT_TEXT)
        return 0

    service, audit_logger = create_app_components()
    try:
        COMMANDS[args.command](service, args)
    except (ValidationError, StorageError) as e:
        audit_logger.log_command_failed(args.command, e)
        return _fail(str(e))

    return 0
