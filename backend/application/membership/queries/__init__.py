from .list_packages import MembershipPackagesQuery
from .list_payments import ListPaymentsQuery

__all__ = ["MembershipPackagesQuery", "ListPaymentsQuery"]
