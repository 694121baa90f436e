"""
Use case: Create a tour.

Input: CreateTourCommand
Output: Tour
Failure cases: DuplicateKeyFailure (tour name already taken).
"""

import logging

from app.application.tours.dtos import CreateTourCommand
from app.domain.tours.entities import Tour
from app.domain.tours.ports import TourRepository

logger = logging.getLogger(__name__)


class CreateTourUseCase:
    """Persists a new tour through the repository."""

    def __init__(self, tour_repo: TourRepository) -> None:
        self._tour_repo = tour_repo

    def execute(self, command: CreateTourCommand) -> Tour:
        tour = self._tour_repo.create(command.fields)
        logger.info("Created tour id=%s name=%s", tour.id, tour.name)
        return tour
