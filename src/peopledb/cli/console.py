"""
Console helpers shared by the command-line entry point and the shell.

Prompting and table formatting live here so both front-ends ask the same
questions and print the same tables.
"""

import sys
from datetime import date
from typing import Callable, Optional, Sequence, TextIO

from ..core.errors import CommandError, PeopleDBError
from ..core.models import Person, PersonFields
from ..core.sports import all_sports

InputFunc = Callable[[str], str]

TABLE_COLUMNS = ["#", "ID", "First Name", "Last Name", "Age", "Favorite Sport"]


def format_table(records: Sequence[Person], today: Optional[date] = None) -> str:
    """
    Render records as a plain-text table.

    The first column is the 1-based index used by the edit and delete commands.

    Args:
        records: Records in display order.
        today: Reference date for ages.

    Returns:
        The table, or a short notice when there are no records.
    """
    if not records:
        return "No people loaded"

    rows = [
        [
            str(position),
            str(person.id),
            person.first_name,
            person.last_name,
            str(person.age(today)),
            person.display_sport,
        ]
        for position, person in enumerate(records, start=1)
    ]

    widths = [len(title) for title in TABLE_COLUMNS]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def render(cells: list[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [render(TABLE_COLUMNS), render(["-" * width for width in widths])]
    lines.extend(render(row) for row in rows)
    return "\n".join(lines)


def report_error(error: PeopleDBError, stream: Optional[TextIO] = None) -> None:
    """Print an error, one line per field problem."""
    stream = stream if stream is not None else sys.stderr
    messages = error.messages if isinstance(error, CommandError) else [str(error)]
    for message in messages:
        print(f"Error: {message}", file=stream)


def ask(label: str, default: Optional[str] = None, input_func: InputFunc = input) -> str:
    """
    Ask for one value.

    Args:
        label: Prompt text.
        default: Shown in brackets; returned by the caller's own logic when
            the answer is blank.
        input_func: Replacement for input() (tests).

    Returns:
        The answer with surrounding whitespace removed.
    """
    suffix = f" [{default}]" if default else ""
    return input_func(f"{label}{suffix}: ").strip()


def ask_index(action: str, input_func: InputFunc = input) -> int:
    """
    Ask for the 1-based index of the person to act on.

    Raises:
        CommandError: If the answer is not a whole number.
    """
    answer = ask(f"Index of the person to {action}", input_func=input_func)
    try:
        return int(answer)
    except ValueError:
        raise CommandError(f"Invalid index: {answer!r}") from None


def ask_fields(current: Optional[PersonFields] = None, input_func: InputFunc = input) -> PersonFields:
    """
    Ask for every person field.

    When editing, the current values are shown and a blank answer keeps them
    (the returned field is None).

    Args:
        current: Existing values, or None when adding.
        input_func: Replacement for input() (tests).

    Returns:
        PersonFields with the answers, None for blank ones.
    """
    current = current or PersonFields()
    sports = ", ".join(sport.value for sport in all_sports())

    answers = {
        "first_name": ask("First name", current.first_name, input_func),
        "last_name": ask("Last name", current.last_name, input_func),
        "date_of_birth": ask("Date of birth (YYYY-MM-DD)", current.date_of_birth, input_func),
        "favorite_sport": ask(f"Favorite sport ({sports})", current.favorite_sport, input_func),
    }
    return PersonFields(**{name: (value or None) for name, value in answers.items()})


def confirm(question: str, input_func: InputFunc = input) -> bool:
    answer = input_func(f"{question} (y/N): ").strip().lower()
    return answer in ("y", "yes")
