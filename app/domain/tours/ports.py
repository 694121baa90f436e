"""
Port interfaces (ABCs) for the tours bounded context.

The tour repository is the resource store behind the tour routes.
Adapters must classify their own failures: malformed identifiers raise
CastFailure and uniqueness violations raise DuplicateKeyFailure.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional

from app.domain.tours.entities import Tour


class TourRepository(ABC):
    """Port for persisting and querying tours."""

    @abstractmethod
    def create(self, fields: Mapping[str, Any]) -> Tour:
        """Insert a new tour and return it with its generated ID."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, tour_id: str) -> Optional[Tour]:
        """Return a tour by its ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def find(self, filters: Mapping[str, Any]) -> list[Tour]:
        """Return tours whose fields equal every given filter value.

        Results are ordered by creation time, newest first.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, tour_id: str, changes: Mapping[str, Any]) -> Optional[Tour]:
        """Apply changes to a tour and return it, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, tour_id: str) -> bool:
        """Delete a tour. Return False if it did not exist."""
        raise NotImplementedError
