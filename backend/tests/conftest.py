"""Shared test fixtures.

API tests run the real application against in-memory repositories and a
fake identity verifier mapping bearer tokens to emails.
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Dict, Optional

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.application import create_app
from domain.membership.core.ports.payment_gateway import IPaymentGateway
from domain.user.auth.ports.identity_verifier import IIdentityVerifier, InvalidTokenError
from domain.user.core.entities.user import Role, User
from infrastructure.persistence.factory import Repositories, create_in_memory_repositories

# .env.test may hold overrides for local runs; nothing here requires it
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)


class FakeIdentityVerifier(IIdentityVerifier):
    """Accepts tokens of the form "token-<email>"."""

    async def verify_token(self, token: str) -> str:
        if not token.startswith("token-"):
            raise InvalidTokenError("signature verification failed")
        return token[len("token-"):].lower()


class FakePaymentGateway(IPaymentGateway):
    def __init__(self) -> None:
        self.amounts: list[int] = []

    async def create_payment_intent(self, amount_in_cents: int) -> str:
        self.amounts.append(amount_in_cents)
        return f"pi_test_{amount_in_cents}_secret"


def auth(email: str) -> Dict[str, str]:
    """Authorization header for email."""
    return {"Authorization": f"Bearer token-{email}"}


@pytest.fixture
def repositories() -> Repositories:
    return create_in_memory_repositories()


@pytest.fixture
def payment_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def app(repositories: Repositories, payment_gateway: FakePaymentGateway) -> FastAPI:
    return create_app(
        repositories=repositories,
        identity_verifier=FakeIdentityVerifier(),
        payment_gateway=payment_gateway,
        promotion_threshold=3,
    )


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


async def seed_user(
    repositories: Repositories,
    email: str,
    role: Role = Role.USER,
    badge: Optional[str] = None,
    name: Optional[str] = None,
) -> User:
    """Store a user directly, bypassing the registration endpoint."""
    user = User.create(email, name=name or email.split("@")[0].title())
    await repositories.users.insert_if_absent(user)
    if role != Role.USER:
        await repositories.users.set_role(user.email, role)
    if badge:
        await repositories.users.set_badge(user.email, badge)
    stored = await repositories.users.find_by_email(user.email)
    assert stored is not None
    return stored


@pytest_asyncio.fixture
async def admin(repositories: Repositories) -> User:
    return await seed_user(repositories, "chef@bitelog.io", role=Role.ADMIN, name="Chef")


@pytest_asyncio.fixture
async def member(repositories: Repositories) -> User:
    return await seed_user(repositories, "gold@example.com", badge="Gold")


@pytest_asyncio.fixture
async def user(repositories: Repositories) -> User:
    return await seed_user(repositories, "jane@example.com", name="Jane")


@pytest.fixture
def headers_for():
    """Factory for Authorization headers."""
    return auth


@pytest.fixture
def make_user(repositories: Repositories):
    """Factory storing extra users: await make_user(email, role=..., badge=...)."""

    async def factory(email: str, role: Role = Role.USER, badge: Optional[str] = None) -> User:
        return await seed_user(repositories, email, role=role, badge=badge)

    return factory
