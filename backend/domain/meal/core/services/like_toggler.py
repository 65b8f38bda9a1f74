"""Like toggle domain service.

Shared by catalog meals and upcoming meals. The like record is the source of
truth for the toggle state; the counter on the entity follows it through
atomic increments.
"""

import logging
from typing import Callable

from domain.meal.core.entities.like import Like, LikeState, LikeTarget
from domain.meal.core.ports.like_repository import ILikeCounter, ILikeRepository
from domain.shared.errors import NotFoundError

logger = logging.getLogger(__name__)


class LikeToggler:
    """Toggle a user's like on one kind of entity.

    Flow:
    1. Try to remove the like record (atomic lookup + delete)
    2. Removed -> decrement counter (floored at 0), liked=False
    3. Not present -> insert record, increment counter, liked=True

    A concurrent duplicate insert by the same user loses on the unique key
    and leaves the counter untouched. If a promotion re-keys the new record
    before the increment, the cleanup below finds nothing to remove; the
    promotion sets the catalog counter from the records it moved, so the
    like is kept and counted there.

    Example:
        >>> toggler = LikeToggler(like_repo, meal_repo, LikeTarget.MEAL, MealNotFoundError)
        >>> state = await toggler.toggle("meal-1", "jane@example.com")
        >>> state.liked
        True
    """

    def __init__(
        self,
        like_repository: ILikeRepository,
        counter: ILikeCounter,
        target: LikeTarget,
        not_found: Callable[[str], NotFoundError],
    ):
        self._likes = like_repository
        self._counter = counter
        self._target = target
        self._not_found = not_found

    async def toggle(self, entity_id: str, email: str) -> LikeState:
        removed = await self._likes.remove(self._target, entity_id, email)
        if removed:
            likes = await self._counter.increment_likes(entity_id, -1)
            if likes is None:
                raise self._not_found(entity_id)
            logger.info(
                "like.removed",
                extra={"target": self._target.value, "entity_id": entity_id, "likes": likes},
            )
            return LikeState(likes=likes, liked=False)

        added = await self._likes.add(Like.create(self._target, entity_id, email))
        delta = 1 if added else 0
        likes = await self._counter.increment_likes(entity_id, delta)
        if likes is None:
            # Entity vanished between lookup and increment (deleted or promoted)
            if added and not await self._likes.remove(self._target, entity_id, email):
                logger.info(
                    "like.moved_by_promotion",
                    extra={"target": self._target.value, "entity_id": entity_id},
                )
            raise self._not_found(entity_id)

        logger.info(
            "like.added",
            extra={"target": self._target.value, "entity_id": entity_id, "likes": likes},
        )
        return LikeState(likes=likes, liked=True)
