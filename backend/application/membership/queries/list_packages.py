"""Membership package queries."""

from dataclasses import dataclass
from typing import List

from domain.membership.core.entities.membership_package import MembershipPackage
from domain.membership.core.exceptions.membership_errors import PackageNotFoundError
from domain.membership.core.ports.membership_repository import IMembershipRepository


@dataclass
class MembershipPackagesQuery:
    repository: IMembershipRepository

    async def list(self) -> List[MembershipPackage]:
        """Packages ordered by level ascending."""
        return await self.repository.list_packages()

    async def get(self, package_id: str) -> MembershipPackage:
        package = await self.repository.find_by_id(package_id)
        if package is None:
            raise PackageNotFoundError(package_id)
        return package
