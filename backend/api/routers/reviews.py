"""Review endpoints outside a single meal's scope."""

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import Capability, Caller, get_repositories, requires
from api.schemas import UpdateReviewRequest
from application.review.commands import (
    DeleteReviewCommand,
    DeleteReviewCommandHandler,
    UpdateReviewCommand,
    UpdateReviewCommandHandler,
)
from application.review.queries import ListReviewsQuery
from infrastructure.persistence.factory import Repositories

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("")
async def list_all_reviews(
    page: int = Query(1),
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
):
    result = await ListReviewsQuery(repositories.reviews, repositories.meals).all(page)
    return result.to_dict()


@router.get("/me")
async def list_my_reviews(
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    reviews = await ListReviewsQuery(repositories.reviews, repositories.meals).by_author(caller.email)
    return [review.to_dict() for review in reviews]


@router.patch("/{review_id}")
async def update_review(
    review_id: str,
    body: UpdateReviewRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    review = await UpdateReviewCommandHandler(repositories.reviews).handle(
        UpdateReviewCommand(review_id=review_id, verified_email=caller.email, text=body.text)
    )
    return review.to_dict()


@router.delete("/{review_id}", status_code=204)
async def delete_review(
    review_id: str,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    await DeleteReviewCommandHandler(repositories.reviews, repositories.meals).handle(
        DeleteReviewCommand(review_id=review_id, verified_email=caller.email)
    )
    return Response(status_code=204)
