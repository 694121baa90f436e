"""
Use case: Get a single tour.

Input: GetTourQuery
Output: Tour
Failure cases: CastFailure (malformed ID), TourNotFoundError.
"""

from app.application.tours.dtos import GetTourQuery
from app.domain.tours.entities import Tour
from app.domain.tours.errors import TourNotFoundError
from app.domain.tours.ports import TourRepository


class GetTourUseCase:
    """Looks up one tour by ID."""

    def __init__(self, tour_repo: TourRepository) -> None:
        self._tour_repo = tour_repo

    def execute(self, query: GetTourQuery) -> Tour:
        """Return the tour.

        Raises:
            TourNotFoundError: If no tour has this ID.
        """
        tour = self._tour_repo.get_by_id(query.tour_id)
        if tour is None:
            raise TourNotFoundError(query.tour_id)
        return tour
