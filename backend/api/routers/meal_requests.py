"""Meal request endpoints: member requests and admin fulfilment."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import Capability, Caller, get_repositories, requires
from application.meal_request.commands import (
    DeleteMealRequestCommand,
    DeleteMealRequestCommandHandler,
    ServeMealRequestCommand,
    ServeMealRequestCommandHandler,
)
from application.meal_request.queries import ListMealRequestsQuery
from infrastructure.persistence.factory import Repositories

router = APIRouter(prefix="/meal-requests", tags=["meal-requests"])


@router.get("")
async def list_meal_requests(
    search: Optional[str] = None,
    page: int = Query(1),
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
):
    """All requests, filtered by requester name or email."""
    result = await ListMealRequestsQuery(repositories.meal_requests).all(search or "", page)
    return result.to_dict()


@router.get("/me")
async def list_my_requests(
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    requests = await ListMealRequestsQuery(repositories.meal_requests).for_user(caller.email)
    return [item.to_dict() for item in requests]


@router.patch("/{request_id}/serve")
async def serve_meal_request(
    request_id: str,
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
):
    served = await ServeMealRequestCommandHandler(repositories.meal_requests).handle(
        ServeMealRequestCommand(request_id=request_id)
    )
    return served.to_dict()


@router.delete("/{request_id}", status_code=204)
async def delete_meal_request(
    request_id: str,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    await DeleteMealRequestCommandHandler(repositories.meal_requests).handle(
        DeleteMealRequestCommand(request_id=request_id, verified_email=caller.email)
    )
    return Response(status_code=204)
