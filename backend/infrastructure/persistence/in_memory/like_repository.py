"""In-memory likes join collection."""

from typing import Dict, List, Tuple

from domain.meal.core.entities.like import Like, LikeTarget
from domain.meal.core.ports.like_repository import ILikeRepository
from domain.shared.identity import normalize_email

LikeKey = Tuple[LikeTarget, str, str]


class InMemoryLikeRepository(ILikeRepository):
    """Likes keyed by (target, entity_id, email); the dict key is the unique index."""

    def __init__(self) -> None:
        self._storage: Dict[LikeKey, Like] = {}

    async def add(self, like: Like) -> bool:
        key = (like.target, like.entity_id, like.email)
        if key in self._storage:
            return False
        self._storage[key] = like
        return True

    async def remove(self, target: LikeTarget, entity_id: str, email: str) -> bool:
        return self._storage.pop((target, entity_id, normalize_email(email)), None) is not None

    async def exists(self, target: LikeTarget, entity_id: str, email: str) -> bool:
        return (target, entity_id, normalize_email(email)) in self._storage

    async def liked_by(self, target: LikeTarget, entity_id: str) -> List[str]:
        likes = [
            like
            for (like_target, like_entity, _), like in self._storage.items()
            if like_target == target and like_entity == entity_id
        ]
        return [like.email for like in sorted(likes, key=lambda like: like.liked_at)]

    async def transfer(
        self,
        source: LikeTarget,
        source_id: str,
        destination: LikeTarget,
        destination_id: str,
    ) -> int:
        keys = [key for key in self._storage if key[0] == source and key[1] == source_id]
        for key in keys:
            like = self._storage.pop(key)
            moved = Like(
                id=like.id,
                target=destination,
                entity_id=destination_id,
                email=like.email,
                liked_at=like.liked_at,
            )
            self._storage[(destination, destination_id, like.email)] = moved
        return len(keys)

    async def delete_for(self, target: LikeTarget, entity_id: str) -> int:
        keys = [key for key in self._storage if key[0] == target and key[1] == entity_id]
        for key in keys:
            del self._storage[key]
        return len(keys)

    def clear(self) -> None:
        self._storage.clear()
