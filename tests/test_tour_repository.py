"""
Tests for the SQL tour repository.

Uses an in-memory SQLite database. Verifies CRUD behavior and that
driver failures are classified where they happen.
"""

import pytest

from app.domain.tours.entities import Difficulty
from app.shared.errors.failures import CastFailure, DuplicateKeyFailure

BASE_FIELDS = {
    "name": "The Sea Explorer",
    "duration": 7,
    "max_group_size": 15,
    "difficulty": Difficulty.MEDIUM,
    "price": 497.0,
    "summary": "Exploring the jaw-dropping US east coast by foot and by boat",
    "image_cover": "tour-2-cover.jpg",
}


def _fields(**overrides):
    fields = dict(BASE_FIELDS)
    fields.update(overrides)
    return fields


class TestCreateAndRead:
    """Tests for inserting and reading tours."""

    def test_create_applies_defaults(self, repository) -> None:
        tour = repository.create(_fields())

        assert tour.name == "The Sea Explorer"
        assert tour.difficulty is Difficulty.MEDIUM
        assert tour.ratings_average == 4.5
        assert tour.ratings_quantity == 0
        assert tour.price_discount is None
        assert tour.created_at.tzinfo is not None

    def test_get_by_id_round_trip(self, repository) -> None:
        created = repository.create(_fields())

        assert repository.get_by_id(created.id) == created

    def test_get_unknown_id_returns_none(self, repository) -> None:
        assert repository.get_by_id("00000000-0000-0000-0000-000000000000") is None

    def test_malformed_id_raises_cast_failure(self, repository) -> None:
        with pytest.raises(CastFailure) as excinfo:
            repository.get_by_id("abc")

        assert excinfo.value.path == "id"
        assert excinfo.value.value == "abc"

    def test_duplicate_name_raises_duplicate_key(self, repository) -> None:
        repository.create(_fields())

        with pytest.raises(DuplicateKeyFailure) as excinfo:
            repository.create(_fields(duration=3))

        assert dict(excinfo.value.key_value) == {"name": "The Sea Explorer"}


class TestFind:
    """Tests for equality filtering."""

    def test_filters_by_equality(self, repository) -> None:
        repository.create(_fields(name="The Forest Hiker", duration=5, difficulty=Difficulty.EASY))
        repository.create(_fields(name="The Snow Adventurer", duration=4, difficulty=Difficulty.DIFFICULT))
        repository.create(_fields(name="The City Wanderer", duration=5, difficulty=Difficulty.MEDIUM))

        tours = repository.find({"duration": 5, "difficulty": Difficulty.EASY})

        assert [t.name for t in tours] == ["The Forest Hiker"]

    def test_no_filters_returns_all(self, repository) -> None:
        repository.create(_fields(name="The Forest Hiker"))
        repository.create(_fields(name="The Park Camper"))

        assert len(repository.find({})) == 2

    def test_unknown_filter_ignored(self, repository) -> None:
        repository.create(_fields())

        assert len(repository.find({"summary": "nothing matches"})) == 1


class TestUpdateAndDelete:
    """Tests for changing and removing tours."""

    def test_update_changes_only_given_fields(self, repository) -> None:
        created = repository.create(_fields())

        updated = repository.update(created.id, {"price": 450.0})

        assert updated.price == 450.0
        assert updated.name == created.name
        assert updated.created_at == created.created_at

    def test_update_missing_tour_returns_none(self, repository) -> None:
        assert repository.update("00000000-0000-0000-0000-000000000000", {"price": 1.0}) is None

    def test_update_to_taken_name_raises_duplicate_key(self, repository) -> None:
        repository.create(_fields(name="The Forest Hiker"))
        other = repository.create(_fields(name="The Park Camper"))

        with pytest.raises(DuplicateKeyFailure):
            repository.update(other.id, {"name": "The Forest Hiker"})

    def test_update_malformed_id(self, repository) -> None:
        with pytest.raises(CastFailure):
            repository.update("abc", {"price": 1.0})

    def test_delete(self, repository) -> None:
        created = repository.create(_fields())

        assert repository.delete(created.id) is True
        assert repository.delete(created.id) is False
        assert repository.get_by_id(created.id) is None

    def test_delete_malformed_id(self, repository) -> None:
        with pytest.raises(CastFailure):
            repository.delete("not-an-id")
