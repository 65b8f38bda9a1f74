"""User endpoints: bootstrap on sign-in, profile, roles."""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import Capability, Caller, get_event_bus, get_repositories, requires
from api.schemas import RegisterUserRequest
from application.user.commands.promote_user import PromoteUserCommand
from application.user.commands.register_user import RegisterUserCommand
from application.user.queries.get_user import GetUserQuery
from domain.shared.ports.event_bus import IEventBus
from domain.user.core.entities.user import Role
from infrastructure.persistence.factory import Repositories

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(
    search: Optional[str] = None,
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
):
    """Regular users matching search on name or email (admin only)."""
    users = await GetUserQuery(repositories.users).search(search or "", role=Role.USER)
    return [user.to_dict() for user in users]


@router.post("")
async def register_user(
    body: RegisterUserRequest,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
    event_bus: IEventBus = Depends(get_event_bus),
):
    user, created = await RegisterUserCommand(repositories.users, event_bus).execute(
        caller.email, body.email, name=body.name, photo=body.photo
    )
    if not created:
        return {"message": "User already exists", "inserted": False, "user": user.to_dict()}
    return JSONResponse(
        status_code=201,
        content={"message": "User created", "inserted": True, "user": user.to_dict()},
    )


@router.get("/{email}")
async def get_profile(
    email: str,
    caller: Caller = Depends(requires(Capability.AUTHENTICATED)),
    repositories: Repositories = Depends(get_repositories),
):
    user = await GetUserQuery(repositories.users).profile(email, caller.email, caller.is_admin)
    return user.to_dict()


@router.get("/{email}/role")
async def get_role(
    email: str,
    caller: Caller = Depends(requires(Capability.PUBLIC)),
    repositories: Repositories = Depends(get_repositories),
):
    role = await GetUserQuery(repositories.users).role(email)
    return {"email": email, "role": role.value}


@router.patch("/{email}/admin")
async def promote_user(
    email: str,
    caller: Caller = Depends(requires(Capability.ADMIN)),
    repositories: Repositories = Depends(get_repositories),
):
    user = await PromoteUserCommand(repositories.users).execute(email)
    return user.to_dict()
