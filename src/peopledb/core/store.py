"""
CSV-backed store of person records.

This module provides the single owner of the record collection. The store
keeps records in memory in file order and writes the whole file after every
change, so the file on disk always matches what the store reports.
"""

from contextlib import closing
from datetime import date
from pathlib import Path
from typing import Iterator, Mapping, Optional, Union

from .errors import (
    CorruptRowError,
    IndexOutOfRangeError,
    NotFoundError,
    StoreIOError,
    ValidationError,
)
from .models import CSV_HEADERS, LEGACY_CSV_HEADERS, Person, PersonFields
from .validation import validate_fields
from ..infrastructure.csv_io import CsvReadError, iter_csv_rows, write_csv_atomic
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)

FieldsLike = Union[PersonFields, Mapping[str, Optional[str]]]


def _plural(count: int) -> str:
    return "person" if count == 1 else "people"


class PeopleStore:
    """
    Ordered collection of Person records bound to one CSV file.

    Ids are assigned by the store and never change. New ids are one more than
    the highest id this store has ever held, so an id freed by delete() is not
    handed out again while the store is open.

    Every mutating method validates first, writes the file, and only then
    updates the in-memory collection. If writing fails the store is unchanged.
    """

    def __init__(self, path: Path, records: tuple[Person, ...] = (), *, today: Optional[date] = None):
        """
        Initialize a store.

        Most callers want PeopleStore.load() or PeopleStore.create() instead.

        Args:
            path: The CSV file this store reads and writes.
            records: Initial records, in display order.
            today: Reference date for the future-date check. None means the
                current date at validation time.

        Raises:
            ValueError: If two records share an id.
        """
        self.path = Path(path)
        self._records: list[Person] = list(records)
        self._today = today

        ids = [person.id for person in self._records]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate person ids")
        self._highest_id = max(ids, default=0)

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path, today: Optional[date] = None) -> "PeopleStore":
        """
        Load a store from a CSV file.

        A missing or empty file gives an empty store bound to `path`; the file
        is created by the first save. Any bad row fails the whole load.

        Files in the older four-column format (no id column) are accepted and
        get ids 1..N in file order.

        Args:
            path: Path to the CSV file.
            today: Reference date for the future-date check.

        Returns:
            The loaded store.

        Raises:
            CorruptRowError: If the header or any row is invalid.
            StoreIOError: If the file exists but cannot be read.
        """
        path = Path(path)

        if not path.exists():
            logger.info(f"CSV file {path} does not exist yet, starting empty")
            return cls(path, today=today)

        records: list[Person] = []
        seen_ids: dict[int, int] = {}

        try:
            with closing(iter_csv_rows(path)) as rows:
                # First non-blank row is the header
                header = next(rows, None)
                if header is None:
                    logger.info(f"CSV file {path} is empty, starting empty")
                    return cls(path, today=today)

                line, row = header
                row = [value.strip() for value in row]
                if row == CSV_HEADERS:
                    has_ids = True
                elif row == LEGACY_CSV_HEADERS:
                    has_ids = False
                    logger.info(f"{path} has no id column, assigning ids in file order")
                else:
                    raise CorruptRowError(line, f"unexpected header {','.join(row)!r}")

                expected = len(CSV_HEADERS) if has_ids else len(LEGACY_CSV_HEADERS)

                for line, row in rows:
                    if len(row) != expected:
                        raise CorruptRowError(line, f"expected {expected} columns, found {len(row)}")

                    if has_ids:
                        record_id = _parse_id(row[0], line)
                        if record_id in seen_ids:
                            raise CorruptRowError(
                                line, f"duplicate id {record_id} (first used on line {seen_ids[record_id]})"
                            )
                        values = row[1:]
                    else:
                        record_id = len(records) + 1
                        values = row

                    try:
                        first_name, last_name, date_of_birth, sport = validate_fields(
                            PersonFields(*values), today
                        )
                    except ValidationError as e:
                        raise CorruptRowError(line, str(e)) from e

                    seen_ids[record_id] = line
                    records.append(Person(record_id, first_name, last_name, date_of_birth, sport))

        except CsvReadError as e:
            raise CorruptRowError(e.line, e.message) from e
        except (OSError, UnicodeDecodeError) as e:
            raise StoreIOError(path, e) from e

        logger.info(f"Read {len(records)} {_plural(len(records))} from CSV file: {path}")
        return cls(path, tuple(records), today=today)

    @classmethod
    def create(cls, path: Path, today: Optional[date] = None) -> "PeopleStore":
        """
        Create a new, empty people file (header only), replacing any existing one.

        Raises:
            StoreIOError: If the file cannot be written.
        """
        store = cls(path, today=today)
        store.save()
        logger.info(f"Created new CSV file: {path}")
        return store

    def save(self) -> None:
        """
        Write all records, in current order, to the bound file.

        Raises:
            StoreIOError: If writing fails. The previous file is left intact.
        """
        self._write(self._records)

    def _write(self, records: list[Person]) -> None:
        try:
            count = write_csv_atomic(self.path, CSV_HEADERS, (person.to_row() for person in records))
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            raise StoreIOError(self.path, e) from e
        logger.info(f"Wrote {count} {_plural(count)} to CSV file: {self.path}")

    def _commit(self, records: list[Person]) -> None:
        """Persist `records` and make them the current collection."""
        self._write(records)
        self._records = records

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_records(self) -> tuple[Person, ...]:
        """
        Get a snapshot of all records in display order.

        Returns:
            Tuple of immutable Person records.
        """
        return tuple(self._records)

    def get(self, record_id: int) -> Person:
        """
        Look up a record by id.

        Raises:
            NotFoundError: If no record has that id.
        """
        return self._records[self._position_of(record_id)]

    def find_by_index(self, index: int) -> Person:
        """
        Look up a record by its 0-based position in display order.

        Negative indexes are rejected rather than counted from the end.

        Raises:
            IndexOutOfRangeError: If the index addresses no record.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._records):
            raise IndexOutOfRangeError(index, len(self._records))
        return self._records[index]

    @property
    def next_id(self) -> int:
        """The id the next added record will receive."""
        return self._highest_id + 1

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Person]:
        return iter(self.list_records())

    def _position_of(self, record_id: int) -> int:
        for position, person in enumerate(self._records):
            if person.id == record_id:
                return position
        raise NotFoundError(record_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, fields: FieldsLike) -> Person:
        """
        Validate and append a new person, then save.

        Args:
            fields: Raw field values.

        Returns:
            The new record with its assigned id.

        Raises:
            ValidationError: With every invalid field.
            StoreIOError: If saving fails.
        """
        fields = _coerce_fields(fields)
        first_name, last_name, date_of_birth, sport = validate_fields(fields, self._today)

        person = Person(self.next_id, first_name, last_name, date_of_birth, sport)
        self._commit(self._records + [person])
        self._highest_id = person.id

        logger.debug(f"Added person {person.id}: {person.full_name}")
        return person

    def edit(self, record_id: int, fields: FieldsLike) -> Person:
        """
        Replace every field of an existing person, keeping its id and position.

        Args:
            record_id: Id of the person to edit.
            fields: Complete set of new field values.

        Returns:
            The updated record.

        Raises:
            NotFoundError: If no record has that id.
            ValidationError: With every invalid field.
            StoreIOError: If saving fails.
        """
        position = self._position_of(record_id)
        fields = _coerce_fields(fields)
        first_name, last_name, date_of_birth, sport = validate_fields(fields, self._today)

        updated = self._records[position].with_values(first_name, last_name, date_of_birth, sport)
        records = list(self._records)
        records[position] = updated
        self._commit(records)

        logger.debug(f"Edited person {record_id}")
        return updated

    def delete(self, record_id: int) -> Person:
        """
        Remove a person, then save.

        Returns:
            The removed record.

        Raises:
            NotFoundError: If no record has that id.
            StoreIOError: If saving fails.
        """
        position = self._position_of(record_id)
        removed = self._records[position]
        self._commit(self._records[:position] + self._records[position + 1:])

        logger.debug(f"Deleted person {record_id}")
        return removed


def _coerce_fields(fields: FieldsLike) -> PersonFields:
    if isinstance(fields, PersonFields):
        return fields
    return PersonFields.from_mapping(dict(fields))


def _parse_id(text: str, line: int) -> int:
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise CorruptRowError(line, f"invalid id {text!r}")
    record_id = int(text)
    if record_id < 1:
        raise CorruptRowError(line, f"invalid id {text!r}")
    return record_id
