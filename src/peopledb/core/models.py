"""
Core domain models for the people database.

This module contains the person record and the raw input used to create or
edit one. These models are GUI-agnostic and should not import any UI frameworks.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from .errors import BadFormatError, ValidationError
from .sports import Sport
from .validation import validate_fields


CSV_HEADERS = ["id", "first_name", "last_name", "date_of_birth", "favorite_sport"]

# Header of files written before ids were persisted
LEGACY_CSV_HEADERS = ["first_name", "last_name", "date_of_birth", "favorite_sport"]

FIELD_NAMES = ("first_name", "last_name", "date_of_birth", "favorite_sport")


@dataclass(frozen=True)
class PersonFields:
    """
    Raw, unvalidated field values for a person.

    Front-ends fill this from form widgets or command-line arguments and pass
    it to the store, which validates it.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    """Date of birth as YYYY-MM-DD text."""

    favorite_sport: Optional[str] = None
    """Sport token or display label."""

    @classmethod
    def from_person(cls, person: "Person") -> "PersonFields":
        """Build fields holding the current values of a person."""
        return cls(
            first_name=person.first_name,
            last_name=person.last_name,
            date_of_birth=person.date_of_birth.isoformat(),
            favorite_sport=person.favorite_sport.value,
        )

    @classmethod
    def from_mapping(cls, values: dict) -> "PersonFields":
        """Build fields from a mapping, ignoring unrelated keys."""
        return cls(**{name: values.get(name) for name in FIELD_NAMES})

    def as_dict(self) -> dict[str, Optional[str]]:
        return {name: getattr(self, name) for name in FIELD_NAMES}

    def merged_over(self, base: "PersonFields") -> "PersonFields":
        """
        Fill the fields missing here with the values from `base`.

        A field counts as missing only when it is None. Blank strings are
        kept so that validation rejects them.

        Args:
            base: Fields providing the fallback values.

        Returns:
            New PersonFields with every supplied value kept.
        """
        merged = {}
        for name in FIELD_NAMES:
            value = getattr(self, name)
            if value is None:
                value = getattr(base, name)
            merged[name] = value
        return PersonFields(**merged)


@dataclass(frozen=True)
class Person:
    """
    A single person record.

    Instances are immutable and always valid: construction runs every field
    validator and raises ValidationError on bad data.
    """

    id: int
    """Unique identifier assigned by the store, starting at 1."""

    first_name: str
    last_name: str
    date_of_birth: date
    favorite_sport: Sport

    def __post_init__(self):
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id < 1:
            raise ValidationError([BadFormatError("id", str(self.id), "a positive integer")])

        first_name, last_name, date_of_birth, favorite_sport = validate_fields(self)

        # Store normalized values (trimmed names, parsed date, Sport member)
        object.__setattr__(self, "first_name", first_name)
        object.__setattr__(self, "last_name", last_name)
        object.__setattr__(self, "date_of_birth", date_of_birth)
        object.__setattr__(self, "favorite_sport", favorite_sport)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def display_sport(self) -> str:
        """Sport label with its icon, as shown in tables."""
        return self.favorite_sport.display

    def age(self, today: Optional[date] = None) -> int:
        """
        Age in completed years.

        Args:
            today: Reference date. Defaults to date.today().

        Returns:
            Number of full years since the date of birth.
        """
        if today is None:
            today = date.today()
        dob = self.date_of_birth
        had_birthday = (today.month, today.day) >= (dob.month, dob.day)
        return today.year - dob.year - (0 if had_birthday else 1)

    def with_values(self, first_name: str, last_name: str, date_of_birth: date,
                    favorite_sport: Sport) -> "Person":
        """Return a copy with every field replaced and the same id."""
        return replace(
            self,
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            favorite_sport=favorite_sport,
        )

    def to_row(self) -> list[str]:
        """Serialize to a CSV row in CSV_HEADERS order."""
        return [
            str(self.id),
            self.first_name,
            self.last_name,
            self.date_of_birth.isoformat(),
            self.favorite_sport.value,
        ]
