"""
Dependency injection for the tours bounded context.

Provides FastAPI dependency functions that wire the repository stored
on the application into use cases via constructor injection.
"""

from typing import Any, Optional

from fastapi import Depends, Header, Request

from app.application.tours.create_tour import CreateTourUseCase
from app.application.tours.delete_tour import DeleteTourUseCase
from app.application.tours.get_tour import GetTourUseCase
from app.application.tours.list_tours import ListToursUseCase
from app.application.tours.update_tour import UpdateTourUseCase
from app.core.config import Settings
from app.domain.tours.ports import TourRepository
from app.shared.errors.app_error import AppError
from app.shared.security.tokens import decode_token, extract_bearer_token

HTTP_401 = 401


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_tour_repository(request: Request) -> TourRepository:
    """Return the tour repository created at application start."""
    return request.app.state.tour_repository


def require_bearer_token(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> Optional[dict[str, Any]]:
    """Verify the bearer token when token protection is configured.

    Returns:
        The token claims, or None when no JWT secret is configured.

    Raises:
        AppError: If no bearer token was sent.
        MalformedTokenFailure: If the token is invalid.
        ExpiredTokenFailure: If the token has expired.
    """
    if not settings.jwt_secret:
        return None
    token = extract_bearer_token(authorization)
    if token is None:
        raise AppError("You are not logged in! Please log in to get access.", HTTP_401)
    return decode_token(token, settings.jwt_secret, settings.jwt_algorithm)


def get_create_tour_use_case(
    repo: TourRepository = Depends(get_tour_repository),
) -> CreateTourUseCase:
    return CreateTourUseCase(tour_repo=repo)


def get_get_tour_use_case(
    repo: TourRepository = Depends(get_tour_repository),
) -> GetTourUseCase:
    return GetTourUseCase(tour_repo=repo)


def get_list_tours_use_case(
    repo: TourRepository = Depends(get_tour_repository),
) -> ListToursUseCase:
    return ListToursUseCase(tour_repo=repo)


def get_update_tour_use_case(
    repo: TourRepository = Depends(get_tour_repository),
) -> UpdateTourUseCase:
    return UpdateTourUseCase(tour_repo=repo)


def get_delete_tour_use_case(
    repo: TourRepository = Depends(get_tour_repository),
) -> DeleteTourUseCase:
    return DeleteTourUseCase(tour_repo=repo)
