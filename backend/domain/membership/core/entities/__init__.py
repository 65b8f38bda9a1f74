from .membership_package import MembershipPackage
from .payment import Payment

__all__ = ["MembershipPackage", "Payment"]
