"""
Command layer shared by the CLI, the interactive shell and the GUI.

Front-ends turn user input into one of the typed commands defined here and
hand it to execute(). Argument requirements are declared once, in OPERATIONS,
and checked by bind_command() before the store is touched.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Optional, Union

from .errors import (
    CommandError,
    IndexOutOfRangeError,
    MissingArgumentError,
    StoreError,
    UnknownOperationError,
    ValidationError,
)
from .models import FIELD_NAMES, Person, PersonFields
from .sports import all_sports
from .store import PeopleStore
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class RecordRef:
    """
    Reference to a record, either by id or by 1-based display index.

    Ids are stable; display indexes shift when records before them are
    deleted, so an index is resolved to an id right before use.
    """

    ID: ClassVar[str] = "id"
    INDEX: ClassVar[str] = "index"

    value: int
    kind: str = ID

    @classmethod
    def by_id(cls, record_id: int) -> "RecordRef":
        return cls(record_id, cls.ID)

    @classmethod
    def by_index(cls, index: int) -> "RecordRef":
        """Reference the record shown at `index` (1-based) in the listing."""
        return cls(index, cls.INDEX)

    def resolve(self, store: PeopleStore) -> int:
        """
        Get the id this reference points to.

        Args:
            store: Store whose current order defines display indexes.

        Returns:
            The record id.

        Raises:
            NotFoundError: If referencing by id and the id does not exist.
            IndexOutOfRangeError: If referencing by index and it is out of range.
        """
        if self.kind == self.ID:
            return store.get(self.value).id
        try:
            return store.find_by_index(self.value - 1).id
        except IndexOutOfRangeError as e:
            # Report the index the user typed, not the 0-based position
            raise IndexOutOfRangeError(self.value, e.size) from None

    def __str__(self) -> str:
        if self.kind == self.ID:
            return f"id {self.value}"
        return f"#{self.value}"


@dataclass(frozen=True)
class NewCommand:
    name: ClassVar[str] = "new"
    fields: PersonFields


@dataclass(frozen=True)
class PrintCommand:
    name: ClassVar[str] = "print"


@dataclass(frozen=True)
class EditCommand:
    """
    Edit a record.

    By default `fields` is the complete new record. With `partial` set,
    fields left as None keep their current value.
    """

    name: ClassVar[str] = "edit"
    target: RecordRef
    fields: PersonFields = field(default_factory=PersonFields)
    partial: bool = False


@dataclass(frozen=True)
class DeleteCommand:
    name: ClassVar[str] = "delete"
    target: RecordRef


@dataclass(frozen=True)
class HelpCommand:
    name: ClassVar[str] = "help"


Command = Union[NewCommand, PrintCommand, EditCommand, DeleteCommand, HelpCommand]


@dataclass(frozen=True)
class OperationSpec:
    """Declares an operation's name, arguments and help text."""

    name: str
    command_type: type
    summary: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()


OPERATIONS: dict[str, OperationSpec] = {
    "new": OperationSpec(
        name="new",
        command_type=NewCommand,
        summary="Add a new person",
        required=FIELD_NAMES,
        aliases=("n",),
    ),
    "print": OperationSpec(
        name="print",
        command_type=PrintCommand,
        summary="Display all people",
        aliases=("list", "p"),
    ),
    "edit": OperationSpec(
        name="edit",
        command_type=EditCommand,
        summary="Edit the person at a given index",
        required=("target",),
        optional=FIELD_NAMES,
        aliases=("e",),
    ),
    "delete": OperationSpec(
        name="delete",
        command_type=DeleteCommand,
        summary="Delete the person at a given index",
        required=("target",),
        aliases=("d",),
    ),
    "help": OperationSpec(
        name="help",
        command_type=HelpCommand,
        summary="Show this help",
        aliases=("h",),
    ),
}


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a successfully executed command."""

    operation: str
    message: str
    record: Optional[Person] = None
    """The record that was added, edited or deleted."""

    records: tuple[Person, ...] = ()
    """Snapshot of the store after the command."""


def lookup_operation(name: str) -> OperationSpec:
    """
    Find an operation by name or alias (case-insensitive).

    Raises:
        UnknownOperationError: If nothing matches.
    """
    key = name.strip().lower()
    if key in OPERATIONS:
        return OPERATIONS[key]
    for operation in OPERATIONS.values():
        if key in operation.aliases:
            return operation
    raise UnknownOperationError(name)


def bind_command(name: str, arguments: Optional[Mapping[str, Any]] = None) -> Command:
    """
    Build a typed command from an operation name and named arguments.

    Edit commands built here are partial: fields not supplied keep their
    current value.

    Args:
        name: Operation name or alias.
        arguments: Named arguments. Field values are strings; `target` is a
            RecordRef, or an int taken as a 1-based display index. A blank
            string counts as supplied and is left to field validation.

    Returns:
        The typed command.

    Raises:
        UnknownOperationError: If the operation does not exist.
        MissingArgumentError: Naming every required argument not supplied.
    """
    operation = lookup_operation(name)
    arguments = dict(arguments or {})

    missing = [required for required in operation.required if arguments.get(required) is None]
    if missing:
        raise MissingArgumentError(missing)

    if operation.command_type is NewCommand:
        return NewCommand(PersonFields.from_mapping(arguments))
    if operation.command_type is PrintCommand:
        return PrintCommand()
    if operation.command_type is EditCommand:
        return EditCommand(
            _coerce_target(arguments["target"]), PersonFields.from_mapping(arguments), partial=True
        )
    if operation.command_type is DeleteCommand:
        return DeleteCommand(_coerce_target(arguments["target"]))
    return HelpCommand()


def _coerce_target(target: Union[RecordRef, int, str]) -> RecordRef:
    if isinstance(target, RecordRef):
        return target
    try:
        return RecordRef.by_index(int(target))
    except (TypeError, ValueError):
        raise CommandError(f"Invalid index: {target!r}") from None


def execute(store: PeopleStore, command: Command) -> CommandResult:
    """
    Run one command against a store.

    At most one store mutation happens per call.

    Args:
        store: The store to operate on.
        command: A command built by bind_command() or directly.

    Returns:
        CommandResult describing what happened.

    Raises:
        CommandError: Wrapping any store or validation failure.
    """
    logger.debug(f"Executing {command!r}")

    try:
        if isinstance(command, NewCommand):
            person = store.add(command.fields)
            return CommandResult("new", f"Added person {person.id}", person, store.list_records())

        if isinstance(command, PrintCommand):
            records = store.list_records()
            noun = "person" if len(records) == 1 else "people"
            return CommandResult("print", f"{len(records)} {noun}", records=records)

        if isinstance(command, EditCommand):
            record_id = command.target.resolve(store)
            fields = command.fields
            if command.partial:
                fields = fields.merged_over(PersonFields.from_person(store.get(record_id)))
            person = store.edit(record_id, fields)
            return CommandResult("edit", f"Updated person {person.id}", person, store.list_records())

        if isinstance(command, DeleteCommand):
            record_id = command.target.resolve(store)
            person = store.delete(record_id)
            return CommandResult("delete", f"Deleted person {person.id}", person, store.list_records())

        if isinstance(command, HelpCommand):
            return CommandResult("help", usage_text(), records=store.list_records())

    except ValidationError as e:
        raise CommandError("Invalid person data", e) from e
    except StoreError as e:
        raise CommandError(str(e), e) from e

    raise UnknownOperationError(type(command).__name__)


def usage_text() -> str:
    """Help text listing every operation and the valid sports."""
    lines = ["Available commands:"]
    for operation in OPERATIONS.values():
        names = ", ".join((operation.name,) + operation.aliases)
        arguments = ["<index>" for arg in operation.required if arg == "target"]
        label = f"{names} {' '.join(arguments)}".strip()
        lines.append(f"  {label:<24} - {operation.summary}")
    lines.append("  Note: favorite_sport only accepts known values.")
    lines.append("  Valid options: " + ", ".join(sport.value for sport in all_sports()))
    return "\n".join(lines)
