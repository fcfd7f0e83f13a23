"""
Tests for core domain models.

These tests verify the Person record and the PersonFields input type.
"""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from peopledb.core.errors import ValidationError
from peopledb.core.models import CSV_HEADERS, Person, PersonFields
from peopledb.core.sports import Sport


def make_person(**overrides) -> Person:
    values = dict(
        id=1,
        first_name="John",
        last_name="Smith",
        date_of_birth=date(1960, 10, 10),
        favorite_sport=Sport.FOOTBALL,
    )
    values.update(overrides)
    return Person(**values)


class TestPerson:
    """Test Person model."""

    def test_create_person(self):
        person = make_person()

        assert person.id == 1
        assert person.full_name == "John Smith"
        assert person.favorite_sport == Sport.FOOTBALL

    def test_normalizes_raw_values(self):
        person = make_person(first_name=" John ", date_of_birth="1960-10-10", favorite_sport="Football")

        assert person.first_name == "John"
        assert person.date_of_birth == date(1960, 10, 10)
        assert person.favorite_sport is Sport.FOOTBALL

    def test_is_immutable(self):
        person = make_person()

        with pytest.raises(FrozenInstanceError):
            person.first_name = "Jack"

    def test_invalid_person_cannot_exist(self):
        with pytest.raises(ValidationError) as exc_info:
            make_person(first_name="", favorite_sport="chess")

        assert len(exc_info.value.errors) == 2

    @pytest.mark.parametrize("bad_id", [0, -1, True, "1"])
    def test_id_must_be_positive_integer(self, bad_id):
        with pytest.raises(ValidationError):
            make_person(id=bad_id)

    def test_age(self):
        person = make_person()

        assert person.age(date(2024, 10, 9)) == 63
        assert person.age(date(2024, 10, 10)) == 64

    def test_age_leap_day_birthday(self):
        person = make_person(date_of_birth=date(2000, 2, 29))

        assert person.age(date(2023, 2, 28)) == 22
        assert person.age(date(2023, 3, 1)) == 23

    def test_display_sport(self):
        assert make_person(favorite_sport=Sport.OTHER).display_sport == "Other"
        assert make_person(favorite_sport=Sport.GOLF).display_sport.endswith(" Golf")

    def test_to_row_matches_header(self):
        row = make_person(favorite_sport=Sport.WATER_POLO).to_row()

        assert len(row) == len(CSV_HEADERS)
        assert row == ["1", "John", "Smith", "1960-10-10", "water_polo"]

    def test_with_values_keeps_id(self):
        person = make_person(id=7)
        updated = person.with_values("Jack", "Smith", date(1961, 1, 1), Sport.GOLF)

        assert updated.id == 7
        assert updated.first_name == "Jack"
        assert person.first_name == "John"


class TestPersonFields:
    """Test PersonFields model."""

    def test_from_person(self):
        fields = PersonFields.from_person(make_person())

        assert fields.as_dict() == {
            "first_name": "John",
            "last_name": "Smith",
            "date_of_birth": "1960-10-10",
            "favorite_sport": "football",
        }

    def test_from_mapping_ignores_other_keys(self):
        fields = PersonFields.from_mapping({"first_name": "Ada", "target": 3})

        assert fields.first_name == "Ada"
        assert fields.last_name is None

    def test_merged_over_keeps_supplied_values(self):
        base = PersonFields.from_person(make_person())
        partial = PersonFields(last_name="Jones")

        merged = partial.merged_over(base)

        assert merged.first_name == "John"
        assert merged.last_name == "Jones"
        assert merged.date_of_birth == "1960-10-10"
        assert merged.favorite_sport == "football"

    def test_merged_over_keeps_blank_values(self):
        base = PersonFields.from_person(make_person())

        merged = PersonFields(first_name="", favorite_sport="  ").merged_over(base)

        assert merged.first_name == ""
        assert merged.favorite_sport == "  "
        assert merged.last_name == "Smith"
