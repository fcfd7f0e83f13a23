"""
Field validation for person records.

Pure functions: each validator either returns the normalized value or raises
a FieldError subclass. validate_fields() runs all of them and reports every
failure at once.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from .errors import (
    BadFormatError,
    EmptyFieldError,
    FieldError,
    FutureDateError,
    UnknownSportError,
    ValidationError,
)
from .sports import Sport

DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_name(value: Optional[str], field: str = "first_name") -> str:
    """
    Validate a first or last name.

    Args:
        value: Raw input.
        field: Field name used in the error.

    Returns:
        The name with surrounding whitespace removed.

    Raises:
        EmptyFieldError: If the value is None or blank.
    """
    if value is None or not str(value).strip():
        raise EmptyFieldError(field)
    return str(value).strip()


def validate_date(
    value: Union[str, date, None],
    field: str = "date_of_birth",
    today: Optional[date] = None,
) -> date:
    """
    Validate a date of birth.

    Strings must be exactly YYYY-MM-DD and name a real calendar day.

    Args:
        value: A date, or its YYYY-MM-DD text.
        field: Field name used in errors.
        today: Reference date for the future check. Defaults to date.today().

    Returns:
        The parsed date.

    Raises:
        BadFormatError: If the text is not a valid date.
        FutureDateError: If the date is after `today`.
    """
    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        text = "" if value is None else str(value).strip()
        if not _DATE_PATTERN.match(text):
            raise BadFormatError(field, text, "YYYY-MM-DD")
        try:
            parsed = date.fromisoformat(text)
        except ValueError:
            # e.g. 2023-02-30
            raise BadFormatError(field, text, "a valid calendar date")

    if today is None:
        today = date.today()
    if parsed > today:
        raise FutureDateError(field, parsed.isoformat())
    return parsed


def validate_sport(value: Union[str, Sport, None], field: str = "favorite_sport") -> Sport:
    """
    Validate a favorite sport.

    Matching is case-insensitive and accepts both tokens and display labels.

    Raises:
        UnknownSportError: If the value names no known sport.
    """
    if isinstance(value, Sport):
        return value
    text = "" if value is None else str(value)
    sport = Sport.lookup(text)
    if sport is None:
        raise UnknownSportError(field, text.strip())
    return sport


def validate_fields(fields, today: Optional[date] = None) -> tuple[str, str, date, Sport]:
    """
    Validate all fields of a person at once.

    Args:
        fields: A PersonFields (or any object with the four field attributes).
        today: Reference date for the future check.

    Returns:
        Tuple of (first_name, last_name, date_of_birth, favorite_sport).

    Raises:
        ValidationError: With one FieldError per invalid field.
    """
    errors: list[FieldError] = []
    results = {}

    checks = (
        ("first_name", lambda v: validate_name(v, "first_name")),
        ("last_name", lambda v: validate_name(v, "last_name")),
        ("date_of_birth", lambda v: validate_date(v, "date_of_birth", today)),
        ("favorite_sport", lambda v: validate_sport(v, "favorite_sport")),
    )
    for name, check in checks:
        try:
            results[name] = check(getattr(fields, name))
        except FieldError as e:
            errors.append(e)

    if errors:
        raise ValidationError(errors)

    return (
        results["first_name"],
        results["last_name"],
        results["date_of_birth"],
        results["favorite_sport"],
    )
