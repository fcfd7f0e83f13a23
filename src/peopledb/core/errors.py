"""
Exception taxonomy for the people database.

Field errors are user-correctable problems with a single input value.
Store errors describe failures of the record collection or its CSV file.
Command errors are raised by the command layer, wrapping the other two.

Every exception derives from PeopleDBError so front-ends can catch one type
and render the message.
"""

from pathlib import Path
from typing import Optional


class PeopleDBError(Exception):
    """Base class for all people database errors."""


class FieldError(PeopleDBError):
    """A single field failed validation."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class EmptyFieldError(FieldError):
    """A required text field was blank."""

    def __init__(self, field: str):
        super().__init__(field, "must not be empty")


class BadFormatError(FieldError):
    """A value could not be parsed."""

    def __init__(self, field: str, value: str, expected: str):
        super().__init__(field, f"invalid value {value!r}, expected {expected}")
        self.value = value


class FutureDateError(FieldError):
    """A date lies after the current date."""

    def __init__(self, field: str, value):
        super().__init__(field, f"{value} is in the future")
        self.value = value


class UnknownSportError(FieldError):
    """A sport name is not part of the known set."""

    def __init__(self, field: str, value: str):
        super().__init__(field, f"unknown sport {value!r}")
        self.value = value


class ValidationError(PeopleDBError):
    """
    One or more fields failed validation.

    Carries every field error found, never just the first one.
    """

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    @property
    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]


class StoreError(PeopleDBError):
    """Base class for record store failures."""


class NotFoundError(StoreError):
    """No record has the requested id."""

    def __init__(self, record_id: int):
        super().__init__(f"No person with id {record_id}")
        self.record_id = record_id


class IndexOutOfRangeError(StoreError):
    """A positional index does not address a record."""

    def __init__(self, index: int, size: int):
        super().__init__(f"Index {index} out of range ({size} records)")
        self.index = index
        self.size = size


class CorruptRowError(StoreError):
    """A row of the CSV file could not be parsed into a record."""

    def __init__(self, line: int, cause: str):
        super().__init__(f"Corrupt row at line {line}: {cause}")
        self.line = line
        self.cause = cause


class StoreIOError(StoreError):
    """Reading or writing the backing file failed."""

    def __init__(self, path: Path, cause: Exception):
        super().__init__(f"I/O error on {path}: {cause}")
        self.path = path
        self.cause = cause


class CommandError(PeopleDBError):
    """
    A command could not be carried out.

    When raised for a store or validation failure, the underlying exception is
    available as `cause` (and as __cause__).
    """

    def __init__(self, message: str, cause: Optional[PeopleDBError] = None):
        super().__init__(message)
        self.cause = cause

    @property
    def messages(self) -> list[str]:
        """All user-facing messages, one per field error where applicable."""
        if isinstance(self.cause, ValidationError):
            return self.cause.messages
        return [str(self)]


class MissingArgumentError(CommandError):
    """One or more required arguments were not supplied."""

    def __init__(self, names: list[str]):
        self.names = list(names)
        super().__init__("; ".join(self.messages))

    @property
    def messages(self) -> list[str]:
        return [f"Missing required argument: {name}" for name in self.names]


class UnknownOperationError(CommandError):
    """The operation name is not part of the command vocabulary."""

    def __init__(self, name: str):
        super().__init__(f"Unknown operation: {name}")
        self.name = name
