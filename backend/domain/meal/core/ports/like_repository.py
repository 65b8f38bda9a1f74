"""Like repository port (interface)."""

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol

from domain.meal.core.entities.like import Like, LikeTarget


class ILikeCounter(Protocol):
    """Entity repository exposing an atomic like counter."""

    async def increment_likes(self, entity_id: str, delta: int) -> Optional[int]:
        ...


class ILikeRepository(ABC):
    """Join collection of likes keyed by (target, entity_id, email).

    Presence of a record is the toggle state. Implementations must enforce
    uniqueness of the key.
    """

    @abstractmethod
    async def add(self, like: Like) -> bool:
        """Insert like, False if the key already exists."""
        pass

    @abstractmethod
    async def remove(self, target: LikeTarget, entity_id: str, email: str) -> bool:
        """Delete like, True if a record was removed."""
        pass

    @abstractmethod
    async def exists(self, target: LikeTarget, entity_id: str, email: str) -> bool:
        pass

    @abstractmethod
    async def liked_by(self, target: LikeTarget, entity_id: str) -> List[str]:
        """Emails of users liking the entity."""
        pass

    @abstractmethod
    async def transfer(
        self,
        source: LikeTarget,
        source_id: str,
        destination: LikeTarget,
        destination_id: str,
    ) -> int:
        """Re-key all likes of one entity to another; returns count moved."""
        pass

    @abstractmethod
    async def delete_for(self, target: LikeTarget, entity_id: str) -> int:
        """Drop all likes of an entity; returns count deleted."""
        pass
