"""
Use case: Delete a tour.

Input: DeleteTourCommand
Output: None
Failure cases: CastFailure, TourNotFoundError.
"""

import logging

from app.application.tours.dtos import DeleteTourCommand
from app.domain.tours.errors import TourNotFoundError
from app.domain.tours.ports import TourRepository

logger = logging.getLogger(__name__)


class DeleteTourUseCase:
    """Removes a tour from the repository."""

    def __init__(self, tour_repo: TourRepository) -> None:
        self._tour_repo = tour_repo

    def execute(self, command: DeleteTourCommand) -> None:
        if not self._tour_repo.delete(command.tour_id):
            raise TourNotFoundError(command.tour_id)
        logger.info("Deleted tour id=%s", command.tour_id)
