"""In-memory membership package repository."""

from typing import Dict, Iterable, List, Optional

from domain.membership.core.entities.membership_package import MembershipPackage
from domain.membership.core.ports.membership_repository import IMembershipRepository

DEFAULT_PACKAGES = (
    MembershipPackage(
        id="silver",
        name="Silver",
        level=1,
        price=9.99,
        perks=["Request meals", "Priority support"],
    ),
    MembershipPackage(
        id="gold",
        name="Gold",
        level=2,
        price=19.99,
        perks=["Request meals", "Priority support", "Free delivery"],
    ),
    MembershipPackage(
        id="platinum",
        name="Platinum",
        level=3,
        price=29.99,
        perks=["Request meals", "Priority support", "Free delivery", "Chef specials"],
    ),
)


class InMemoryMembershipRepository(IMembershipRepository):
    """Read-only package catalog, seeded with DEFAULT_PACKAGES unless told otherwise."""

    def __init__(self, packages: Optional[Iterable[MembershipPackage]] = None) -> None:
        seed = DEFAULT_PACKAGES if packages is None else packages
        self._storage: Dict[str, MembershipPackage] = {package.id: package for package in seed}

    async def list_packages(self) -> List[MembershipPackage]:
        return sorted(self._storage.values(), key=lambda p: p.level)

    async def find_by_id(self, package_id: str) -> Optional[MembershipPackage]:
        return self._storage.get(package_id)
