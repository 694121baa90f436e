"""
Use case: Partially update a tour.

Input: UpdateTourCommand
Output: Tour
Failure cases: CastFailure, TourNotFoundError, DuplicateKeyFailure,
SchemaValidationFailure (discount not below the resulting price).
"""

import logging

from app.application.tours.dtos import UpdateTourCommand
from app.domain.tours.entities import Tour
from app.domain.tours.errors import TourNotFoundError
from app.domain.tours.ports import TourRepository
from app.shared.errors.failures import SchemaValidationFailure

logger = logging.getLogger(__name__)


class UpdateTourUseCase:
    """Applies a partial update after checking cross-field rules.

    The price discount rule spans the stored tour and the incoming
    changes, so it cannot be checked by the request schema alone.
    """

    def __init__(self, tour_repo: TourRepository) -> None:
        self._tour_repo = tour_repo

    def execute(self, command: UpdateTourCommand) -> Tour:
        """Run the update.

        Raises:
            TourNotFoundError: If no tour has this ID.
            SchemaValidationFailure: If the discount would not be below the price.
        """
        current = self._tour_repo.get_by_id(command.tour_id)
        if current is None:
            raise TourNotFoundError(command.tour_id)
        if not command.changes:
            return current

        price = command.changes.get("price", current.price)
        discount = command.changes.get("price_discount", current.price_discount)
        if discount is not None and discount >= price:
            raise SchemaValidationFailure(
                {
                    "price_discount": (
                        f"Discount price ({discount}) should be below regular price"
                    )
                }
            )

        updated = self._tour_repo.update(command.tour_id, command.changes)
        if updated is None:
            raise TourNotFoundError(command.tour_id)
        logger.info("Updated tour id=%s fields=%s", updated.id, sorted(command.changes))
        return updated
