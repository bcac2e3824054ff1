"""
tests.conftest

Shared fixtures: a test-mode app on a throwaway SQLite file, an in-process
HTTP client, and a helper that creates a user and returns its bearer headers.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from decimal import Decimal
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from invest_portal.api.app import create_app
from invest_portal.auth.jwt import JwtConfig, issue_token
from invest_portal.db.repositories.investment_projects import InvestmentProjectRepo
from invest_portal.db.repositories.regions import RegionRepo
from invest_portal.db.repositories.roles import RoleRepo
from invest_portal.db.repositories.users import UserRepo
from invest_portal.settings import Settings

Login = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx.ASGITransport does not drive lifespan; run it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def login(app: FastAPI, settings: Settings) -> Login:
    async def _login(
        *,
        role_name: str | None = None,
        role_label: str | None = None,
        display_name: str | None = None,
        region_id: int | None = None,
        baskarma_type: str | None = None,
    ) -> dict[str, str]:
        async with app.state.sessionmaker() as session:
            role_id = None
            if role_name is not None:
                roles = RoleRepo(session)
                role = await roles.get_by_name(role_name)
                if role is None:
                    role = await roles.create(name=role_name, display_name=display_name or role_name)
                role_id = role.id
            user = await UserRepo(session).create(
                full_name="Test User",
                email=f"{uuid.uuid4().hex}@test.kz",
                role=role_label,
                role_id=role_id,
                region_id=region_id,
                baskarma_type=baskarma_type,
            )
            await session.commit()

        token = issue_token(cfg=JwtConfig.from_settings(settings), subject=str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest_asyncio.fixture
async def region_id(app: FastAPI) -> int:
    async with app.state.sessionmaker() as session:
        region = await RegionRepo(session).create(name="Абайская область", color="#1f77b4")
        await session.commit()
        return region.id


@pytest_asyncio.fixture
async def other_region_id(app: FastAPI, region_id: int) -> int:
    async with app.state.sessionmaker() as session:
        region = await RegionRepo(session).create(name="Жетысуская область", color="#ff7f0e")
        await session.commit()
        return region.id


@pytest_asyncio.fixture
async def project_id(app: FastAPI, region_id: int) -> int:
    async with app.state.sessionmaker() as session:
        admin = await UserRepo(session).get_by_email(app.state.settings.bootstrap_admin_email)
        assert admin is not None
        project = await InvestmentProjectRepo(session).create(
            name="Завод ферросплавов",
            region_id=region_id,
            total_investment=Decimal("1500000.00"),
            created_by=admin.id,
        )
        await session.commit()
        return project.id
