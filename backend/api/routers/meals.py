"""Catalog endpoints: browse, manage, like, rate, review, request."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from api.dependencies import Capability, Caller, get_repositories, requires
from api.schemas import (
    CreateReviewRequest,
    IdentityRequest,
    MealDetailsRequest,
    RateMealRequest,
    UpdateMealRequest,
)
from application.meal.commands import (
    AddMealCommand,
    AddMealCommandHandler,
    DeleteMealCommand,
    DeleteMealCommandHandler,
    RateMealCommand,
    RateMealCommandHandler,
    ToggleMealLikeCommand,
    ToggleMealLikeCommandHandler,
    UpdateMealCommand,
    UpdateMealCommandHandler,
)
from application.meal.queries import (
    DistributorMealsQuery,
    GetMealQuery,
    GetMealQueryHandler,
    ListCategoriesQueryHandler,
    SearchCatalogQueryHandler,
)
from application.meal_request.commands import (
    CreateMealRequestCommand,
    CreateMealRequestCommandHandler,
)
from application.review.commands import CreateReviewCommand, CreateReviewCommandHandler
from application.review.queries import ListReviewsQuery
from domain.meal.core.value_objects.catalog_query import CatalogQuery
from infrastructure.persistence.factory import Repositories

router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("")
async def search_meals(
    page: int = Query(1),
    search: Optional[str] = None,
    category: Optional[str] = None,
    price_range: Optional[str] = Query(None, alias="priceRange"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = None,
    has_reviews: bool = Query(False, alias="hasReviews"),
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    """Paginated catalog, relevance ranked when search is set."""
    query = CatalogQuery.from_params(
        page=page,
        search=search,
        category=category,
        price_range=price_range,
        sort_by=sort_by,
        order=order,
        has_reviews=has_reviews,
    )
    result = await SearchCatalogQueryHandler(repositories.meals).handle(query)
    return result.to_dict()


# Fixed paths are declared before /{meal_id} so they are not captured by it.
@router.get("/categories")
async def list_categories(
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    return await ListCategoriesQueryHandler(repositories.meals).handle()


@router.get("/count/{email}")
async def count_distributor_meals(
    email: str,
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    return {"count": await DistributorMealsQuery(repositories.meals).count(email)}


@router.get("/distributor/{email}")
async def list_distributor_meals(
    email: str,
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    meals = await DistributorMealsQuery(repositories.meals).list(email)
    return [meal.to_dict() for meal in meals]


@router.post("")
async def add_meal(
    body: MealDetailsRequest,
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
):
    handler = AddMealCommandHandler(repositories.meals, repositories.users)
    meal = await handler.handle(
        AddMealCommand(
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
        content={
            "message": "Meal added successfully",
            "insertedId": meal.id,
            "meal": meal.to_dict(),
        },
    )


@router.get("/{meal_id}")
async def get_meal(
    meal_id: str,
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    """Meal with its reviews (newest first), review count and likers."""
    handler = GetMealQueryHandler(repositories.meals, repositories.reviews, repositories.likes)
    detail = await handler.handle(GetMealQuery(meal_id=meal_id))
    return detail.to_dict()


@router.patch("/{meal_id}")
async def update_meal(
    meal_id: str,
    body: UpdateMealRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    meal = await UpdateMealCommandHandler(repositories.meals).handle(
        UpdateMealCommand(
            meal_id=meal_id,
            requester_email=caller.email,
            requester_is_admin=caller.is_admin,
            changes=body.changes(),
        )
    )
    return meal.to_dict()


@router.delete("/{meal_id}", status_code=204)
async def delete_meal(
    meal_id: str,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    handler = DeleteMealCommandHandler(repositories.meals, repositories.likes, repositories.users)
    await handler.handle(
        DeleteMealCommand(
            meal_id=meal_id,
            requester_email=caller.email,
            requester_is_admin=caller.is_admin,
        )
    )
    return Response(status_code=204)


@router.post("/{meal_id}/like")
async def toggle_like(
    meal_id: str,
    body: IdentityRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    state = await ToggleMealLikeCommandHandler(repositories.meals, repositories.likes).handle(
        ToggleMealLikeCommand(meal_id=meal_id, verified_email=caller.email, email=body.email)
    )
    return {"likes": state.likes, "liked": state.liked}


@router.post("/{meal_id}/rate")
async def rate_meal(
    meal_id: str,
    body: RateMealRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    meal = await RateMealCommandHandler(repositories.meals).handle(
        RateMealCommand(
            meal_id=meal_id,
            verified_email=caller.email,
            rating=body.rating,
            email=body.email,
        )
    )
    return {"rating": meal.average_rating, "ratings": meal.to_dict()["ratings"]}


@router.get("/{meal_id}/reviews")
async def list_meal_reviews(
    meal_id: str,
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    reviews = await ListReviewsQuery(repositories.reviews, repositories.meals).for_meal(meal_id)
    return [review.to_dict() for review in reviews]


@router.post("/{meal_id}/reviews")
async def create_review(
    meal_id: str,
    body: CreateReviewRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    handler = CreateReviewCommandHandler(repositories.reviews, repositories.meals)
    review = await handler.handle(
        CreateReviewCommand(
            meal_id=meal_id,
            verified_email=caller.email,
            text=body.text,
            email=body.email,
            username=body.username,
            photo_url=body.photo_url,
        )
    )
    return JSONResponse(
        status_code=201,
        content={"message": "Review added", "insertedId": review.id, "review": review.to_dict()},
    )


@router.post("/{meal_id}/request")
async def request_meal(
    meal_id: str,
    body: IdentityRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    """Request a meal (members only, one pending request per meal)."""
    handler = CreateMealRequestCommandHandler(
        repositories.meal_requests, repositories.meals, repositories.users
    )
    meal_request = await handler.handle(
        CreateMealRequestCommand(meal_id=meal_id, verified_email=caller.email, email=body.email)
    )
    return JSONResponse(
        status_code=201,
        content={
            "message": "Meal request sent",
            "status": meal_request.status.value,
            "request": meal_request.to_dict(),
        },
    )
