from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from invest_portal.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[User]:
        stmt = (
            select(User)
            .options(selectinload(User.role_model))
            .order_by(desc(User.created_at), desc(User.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, user_id: int) -> User | None:
        return await self.get_with_role(user_id)

    async def get_with_role(self, user_id: int) -> User | None:
        # Principal resolution reads role_model outside a lazy-load context; load it eagerly.
        stmt = select(User).options(selectinload(User.role_model)).where(User.id == user_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(
        self,
        *,
        full_name: str,
        email: str,
        role: str | None = None,
        role_id: int | None = None,
        region_id: int | None = None,
        baskarma_type: str | None = None,
    ) -> User:
        user = User(
            full_name=full_name,
            email=email,
            role=role,
            role_id=role_id,
            region_id=region_id,
            baskarma_type=baskarma_type,
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def update(
        self,
        user: User,
        *,
        full_name: str,
        email: str,
        role: str | None,
        role_id: int | None,
        region_id: int | None,
        baskarma_type: str | None = None,
    ) -> User:
        user.full_name = full_name
        user.email = email
        user.role = role
        user.role_id = role_id
        user.region_id = region_id
        user.baskarma_type = baskarma_type
        await self._session.flush()
        return user

    async def delete(self, user: User) -> None:
        await self._session.delete(user)
        await self._session.flush()
