"""
Command-line interface for peopledb.

This module provides the `peopledb` command:

    peopledb people.csv new --first-name John --last-name Smith \\
        --date-of-birth 1960-10-10 --favorite-sport football
    peopledb people.csv print
    peopledb people.csv edit            (prompts for index and fields)
    peopledb people.csv delete          (prompts for index)
    peopledb people.csv                 (interactive shell)

Exit codes: 0 on success, 1 on any data or file error, 2 on usage errors.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from ..config.settings import get_settings
from ..core.commands import RecordRef, bind_command, execute
from ..core.errors import PeopleDBError
from ..core.models import FIELD_NAMES, PersonFields
from ..core.store import PeopleStore
from ..infrastructure.logging_config import setup_logging, get_logger
from .console import ask_fields, ask_index, confirm, format_table, report_error
from .shell import PeopleShell


logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--first-name", help="First name")
    parser.add_argument("--last-name", help="Last name")
    parser.add_argument("--date-of-birth", help="Date of birth (YYYY-MM-DD)")
    parser.add_argument("--favorite-sport", help="Favorite sport, e.g. football")


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--index", type=int, help="1-based position as shown by 'print'")
    target.add_argument("--id", type=int, dest="record_id", help="Person id")


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="peopledb",
        description="Manage a personal records database stored as CSV"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"peopledb {__version__}"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument("file", type=Path, help="Path to the CSV file containing the database")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    new_parser = subparsers.add_parser("new", help="Add a new person")
    _add_field_arguments(new_parser)

    subparsers.add_parser("print", aliases=["list"], help="Display all people")

    edit_parser = subparsers.add_parser("edit", help="Edit a person (prompts for missing values)")
    _add_target_arguments(edit_parser)
    _add_field_arguments(edit_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a person (prompts for the index)")
    _add_target_arguments(delete_parser)
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    subparsers.add_parser("help", help="Show the command summary and valid sports")

    return parser


def _fields_from_args(args: argparse.Namespace) -> dict[str, Optional[str]]:
    return {name: getattr(args, name, None) for name in FIELD_NAMES}


def _target_from_args(args: argparse.Namespace, action: str) -> RecordRef:
    if args.record_id is not None:
        return RecordRef.by_id(args.record_id)
    if args.index is not None:
        return RecordRef.by_index(args.index)
    return RecordRef.by_index(ask_index(action))


def cmd_new(store: PeopleStore, args: argparse.Namespace) -> int:
    """
    Add a person from the field flags.

    Args:
        store: Loaded store.
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success).
    """
    command = bind_command("new", _fields_from_args(args))
    result = execute(store, command)
    print(result.message)
    return EXIT_OK


def cmd_print(store: PeopleStore, args: argparse.Namespace) -> int:
    result = execute(store, bind_command("print"))
    print(format_table(result.records))
    return EXIT_OK


def cmd_edit(store: PeopleStore, args: argparse.Namespace) -> int:
    """
    Edit a person.

    Without --index/--id the index is asked for. Without any field flag every
    field is asked for, showing the current value; blank answers keep it.

    Returns:
        Exit code (0 for success).
    """
    target = _target_from_args(args, "edit")
    fields = _fields_from_args(args)

    if all(value is None for value in fields.values()):
        current = store.get(target.resolve(store))
        print(f"Editing person {current.id}: {current.full_name}")
        fields = ask_fields(PersonFields.from_person(current)).as_dict()

    result = execute(store, bind_command("edit", dict(fields, target=target)))
    print(result.message)
    return EXIT_OK


def cmd_delete(store: PeopleStore, args: argparse.Namespace) -> int:
    """
    Delete a person, asking for confirmation unless --yes is given.

    Returns:
        Exit code (0 for success, also when the user declines).
    """
    target = _target_from_args(args, "delete")

    if not args.yes:
        person = store.get(target.resolve(store))
        if not confirm(f"Are you sure you want to delete {person.full_name}?"):
            print("Nothing deleted")
            return EXIT_OK

    result = execute(store, bind_command("delete", {"target": target}))
    print(result.message)
    return EXIT_OK


def cmd_help(store: PeopleStore, args: argparse.Namespace) -> int:
    print(execute(store, bind_command("help")).message)
    return EXIT_OK


COMMANDS = {
    "new": cmd_new,
    "print": cmd_print,
    "list": cmd_print,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "help": cmd_help,
}


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Console shows warnings only unless --verbose; the log file keeps INFO
    settings = get_settings()
    setup_logging(
        level=logging.DEBUG if args.verbose else settings.log_level,
        log_file=settings.log_file_path,
        log_to_file=settings.log_to_file,
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        store = PeopleStore.load(args.file)
    except PeopleDBError as e:
        report_error(e)
        return EXIT_ERROR

    try:
        if args.command is None:
            PeopleShell(store).cmdloop()
            return EXIT_OK
        return COMMANDS[args.command](store, args)
    except PeopleDBError as e:
        logger.debug(f"Command {args.command} failed: {e}")
        report_error(e)
        return EXIT_ERROR
    except (EOFError, KeyboardInterrupt):
        print("\nAborted", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
