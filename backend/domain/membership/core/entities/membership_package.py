"""MembershipPackage entity (read-only reference data)."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class MembershipPackage:
    """A purchasable membership tier.

    name doubles as the badge granted to the buyer.
    """

    id: str
    name: str
    level: int
    price: float
    perks: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "level": self.level,
            "price": self.price,
            "perks": list(self.perks),
        }
