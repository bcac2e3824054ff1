"""
invest_portal.db.seed

Idempotent dev/test seed data: baseline roles and the bootstrap administrator.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invest_portal.db.repositories.roles import RoleRepo
from invest_portal.db.repositories.users import UserRepo
from invest_portal.observability.logging import get_logger

log = get_logger(__name__)

BASELINE_ROLES: tuple[tuple[str, str, str], ...] = (
    ("superadmin", "Суперадмин", "Полный доступ ко всей системе"),
    ("admin", "Администратор", "Управление справочниками и пользователями"),
    ("akim", "Аким", "Просмотр данных по области"),
    ("zamakim", "Заместитель акима", "Просмотр данных по области"),
    ("ispolnitel", "Исполнитель", "Ведение проектов района"),
    ("baskarma", "Басқарма", "Ведение проектов управления"),
)


async def seed(session_factory: async_sessionmaker[AsyncSession], *, admin_email: str) -> None:
    async with session_factory() as session:
        roles = RoleRepo(session)
        created = 0
        for name, display_name, description in BASELINE_ROLES:
            if await roles.get_by_name(name) is None:
                await roles.create(name=name, display_name=display_name, description=description)
                created += 1

        users = UserRepo(session)
        if await users.get_by_email(admin_email) is None:
            superadmin = await roles.get_by_name("superadmin")
            await users.create(
                full_name="Суперадмин",
                email=admin_email,
                role="admin",
                role_id=superadmin.id if superadmin is not None else None,
            )
            log.info("seed_admin_created", email=admin_email)

        await session.commit()
        log.info("seed_complete", roles_created=created)
