"""
Use case: List tours, optionally filtered by field equality.

Input: ListToursQuery
Output: list[Tour]
"""

import logging

from app.application.tours.dtos import ListToursQuery
from app.domain.tours.entities import Tour
from app.domain.tours.ports import TourRepository

logger = logging.getLogger(__name__)


class ListToursUseCase:
    """Returns every tour matching the query filters."""

    def __init__(self, tour_repo: TourRepository) -> None:
        self._tour_repo = tour_repo

    def execute(self, query: ListToursQuery) -> list[Tour]:
        logger.debug("Listing tours with filters=%s", query.filters)
        return self._tour_repo.find(query.filters)
