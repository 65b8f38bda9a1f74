"""Membership package repository port (interface)."""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.membership.core.entities.membership_package import MembershipPackage


class IMembershipRepository(ABC):
    @abstractmethod
    async def list_packages(self) -> List[MembershipPackage]:
        """Packages ordered by level ascending."""
        pass

    @abstractmethod
    async def find_by_id(self, package_id: str) -> Optional[MembershipPackage]:
        pass
