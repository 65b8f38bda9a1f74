"""Membership package catalog."""

from fastapi import APIRouter, Depends

from api.dependencies import Capability, Caller, get_repositories, requires
from application.membership.queries import MembershipPackagesQuery
from infrastructure.persistence.factory import Repositories

router = APIRouter(prefix="/membership", tags=["membership"])


@router.get("/packages")
async def list_packages(
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    packages = await MembershipPackagesQuery(repositories.memberships).list()
    return [package.to_dict() for package in packages]


@router.get("/packages/{package_id}")
async def get_package(
    package_id: str,
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    package = await MembershipPackagesQuery(repositories.memberships).get(package_id)
    return package.to_dict()
