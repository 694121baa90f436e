"""
FastAPI router for the tours bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from app.application.tours.create_tour import CreateTourUseCase
from app.application.tours.delete_tour import DeleteTourUseCase
from app.application.tours.dtos import (
    CreateTourCommand,
    DeleteTourCommand,
    GetTourQuery,
    ListToursQuery,
    UpdateTourCommand,
)
from app.application.tours.get_tour import GetTourUseCase
from app.application.tours.list_tours import ListToursUseCase
from app.application.tours.update_tour import UpdateTourUseCase
from app.domain.tours.entities import Difficulty, Tour
from app.interfaces.tours.dependencies import (
    get_create_tour_use_case,
    get_delete_tour_use_case,
    get_get_tour_use_case,
    get_list_tours_use_case,
    get_update_tour_use_case,
    require_bearer_token,
)
from app.interfaces.tours.schemas import (
    ErrorResponse,
    TourCreateRequest,
    TourData,
    TourItem,
    TourListData,
    TourListResponse,
    TourResponse,
    TourUpdateRequest,
)
from app.shared.security.rate_limiting import enforce_rate_limit

router = APIRouter(
    prefix="/tours", tags=["tours"], dependencies=[Depends(enforce_rate_limit)]
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
}


def _tour_response(tour: Tour) -> TourResponse:
    return TourResponse(data=TourData(tour=TourItem.model_validate(tour)))


@router.get(
    "",
    response_model=TourListResponse,
    responses=ERROR_RESPONSES,
    summary="List tours",
    description="List tours, optionally filtered by exact field values.",
)
def list_tours(
    request: Request,
    duration: Optional[int] = Query(default=None, gt=0),
    difficulty: Optional[Difficulty] = Query(default=None),
    max_group_size: Optional[int] = Query(default=None, gt=0),
    price: Optional[float] = Query(default=None, gt=0),
    use_case: ListToursUseCase = Depends(get_list_tours_use_case),
) -> TourListResponse:
    """List tours matching the given filters."""
    filters = {
        name: value
        for name, value in (
            ("duration", duration),
            ("difficulty", difficulty),
            ("max_group_size", max_group_size),
            ("price", price),
        )
        if value is not None
    }
    tours = use_case.execute(ListToursQuery(filters=filters))
    return TourListResponse(
        requested_at=getattr(request.state, "request_time", None),
        results=len(tours),
        data=TourListData(tours=[TourItem.model_validate(t) for t in tours]),
    )


@router.post(
    "",
    status_code=201,
    response_model=TourResponse,
    responses=ERROR_RESPONSES,
    summary="Create a tour",
)
def create_tour(
    body: TourCreateRequest,
    use_case: CreateTourUseCase = Depends(get_create_tour_use_case),
) -> TourResponse:
    """Create a new tour."""
    tour = use_case.execute(CreateTourCommand(fields=body.model_dump()))
    return _tour_response(tour)


@router.get(
    "/{tour_id}",
    response_model=TourResponse,
    responses=ERROR_RESPONSES,
    summary="Get a tour",
)
def get_tour(
    tour_id: str,
    use_case: GetTourUseCase = Depends(get_get_tour_use_case),
) -> TourResponse:
    """Return a single tour."""
    return _tour_response(use_case.execute(GetTourQuery(tour_id=tour_id)))


@router.patch(
    "/{tour_id}",
    response_model=TourResponse,
    responses=ERROR_RESPONSES,
    summary="Update a tour",
)
def update_tour(
    tour_id: str,
    body: TourUpdateRequest,
    use_case: UpdateTourUseCase = Depends(get_update_tour_use_case),
) -> TourResponse:
    """Apply a partial update to a tour."""
    command = UpdateTourCommand(
        tour_id=tour_id, changes=body.model_dump(exclude_unset=True)
    )
    return _tour_response(use_case.execute(command))


@router.delete(
    "/{tour_id}",
    status_code=204,
    response_class=Response,
    responses={**ERROR_RESPONSES, 401: {"model": ErrorResponse}},
    summary="Delete a tour",
)
def delete_tour(
    tour_id: str,
    _claims: Optional[dict] = Depends(require_bearer_token),
    use_case: DeleteTourUseCase = Depends(get_delete_tour_use_case),
) -> Response:
    """Delete a tour."""
    use_case.execute(DeleteTourCommand(tour_id=tour_id))
    return Response(status_code=204)
