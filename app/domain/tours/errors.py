"""
Domain-specific errors for the tours bounded context.

These are operational AppErrors and are rendered by the centralized
error handlers.
"""

from app.shared.errors.app_error import AppError

HTTP_404 = 404


class TourNotFoundError(AppError):
    """Raised when no tour exists with the requested ID."""

    def __init__(self, tour_id: str) -> None:
        super().__init__("No tour found with that ID", HTTP_404)
        self.tour_id = tour_id
