"""Upcoming meal endpoints: community voting and promotion to the catalog."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import (
    Capability,
    Caller,
    get_event_bus,
    get_promotion_threshold,
    get_repositories,
    requires,
)
from api.schemas import IdentityRequest, MealDetailsRequest
from application.upcoming_meal.commands import (
    PublishUpcomingMealCommand,
    PublishUpcomingMealCommandHandler,
    SubmitUpcomingMealCommand,
    SubmitUpcomingMealCommandHandler,
    ToggleUpcomingLikeCommand,
    ToggleUpcomingLikeCommandHandler,
)
from application.upcoming_meal.queries import ListUpcomingMealsQueryHandler
from domain.shared.ports.event_bus import IEventBus
from infrastructure.persistence.factory import Repositories

router = APIRouter(prefix="/upcoming-meals", tags=["upcoming-meals"])


def _publisher(repositories: Repositories, event_bus: IEventBus) -> PublishUpcomingMealCommandHandler:
    return PublishUpcomingMealCommandHandler(
        repositories.upcoming_meals,
        repositories.meals,
        repositories.likes,
        repositories.users,
        event_bus,
    )


@router.get("")
async def list_upcoming_meals(
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    """Candidates ordered by likes, most liked first."""
    upcoming = await ListUpcomingMealsQueryHandler(repositories.upcoming_meals).handle()
    return [item.to_dict() for item in upcoming]


@router.get("/{upcoming_id}")
async def get_upcoming_meal(
    upcoming_id: str,
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    upcoming = await ListUpcomingMealsQueryHandler(repositories.upcoming_meals).get(upcoming_id)
    return upcoming.to_dict()


@router.post("")
async def submit_upcoming_meal(
    body: MealDetailsRequest,
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
):
    upcoming = await SubmitUpcomingMealCommandHandler(repositories.upcoming_meals).handle(
        SubmitUpcomingMealCommand(
            distributor_email=caller.email,
            title=body.title,
            category=body.category,
            price=body.price,
            description=body.description,
            ingredients=body.ingredients,
            image=body.image,
            distributor_name=body.distributor_name or caller.user.name,
        )
    )
    return JSONResponse(
        status_code=201,
        content={"insertedId": upcoming.id, "upcomingMeal": upcoming.to_dict()},
    )


@router.post("/{upcoming_id}/like")
async def toggle_upcoming_like(
    upcoming_id: str,
    body: IdentityRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
    event_bus: IEventBus = Depends(get_event_bus),
    threshold: int = Depends(get_promotion_threshold),
):
    """Toggle a vote; reaching the threshold publishes the meal."""
    handler = ToggleUpcomingLikeCommandHandler(
        repositories.upcoming_meals,
        repositories.likes,
        _publisher(repositories, event_bus),
        threshold=threshold,
    )
    result = await handler.handle(
        ToggleUpcomingLikeCommand(
            upcoming_id=upcoming_id, verified_email=caller.email, email=body.email
        )
    )
    return result.to_dict()


@router.post("/{upcoming_id}/publish")
async def publish_upcoming_meal(
    upcoming_id: str,
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
    event_bus: IEventBus = Depends(get_event_bus),
):
    meal = await _publisher(repositories, event_bus).handle(
        PublishUpcomingMealCommand(upcoming_id=upcoming_id)
    )
    return JSONResponse(
        status_code=201,
        content={"message": "Meal published", "insertedId": meal.id, "meal": meal.to_dict()},
    )
