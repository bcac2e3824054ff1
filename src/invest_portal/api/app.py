"""
invest_portal.api.app

FastAPI app factory.

Responsibilities:
- Build the application and register routers/middleware.
- Build the request gate around the immutable route policy (once per process).
- Own the DB engine lifecycle and dev/test bootstrap (tables + seed data).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from invest_portal import __version__
from invest_portal.access.gate import RequestGate
from invest_portal.access.policy import DEFAULT_POLICY, RoutePolicy
from invest_portal.api.routers.dev_auth import router as dev_auth_router
from invest_portal.api.routers.health import router as health_router
from invest_portal.api.routers.industrial_zones import router as industrial_zones_router
from invest_portal.api.routers.investment_projects import router as investment_projects_router
from invest_portal.api.routers.project_tasks import router as project_tasks_router
from invest_portal.api.routers.project_types import router as project_types_router
from invest_portal.api.routers.regions import router as regions_router
from invest_portal.api.routers.roles import router as roles_router
from invest_portal.api.routers.sezs import router as sezs_router
from invest_portal.api.routers.shared import router as shared_router
from invest_portal.api.routers.subsoil_users import router as subsoil_users_router
from invest_portal.api.routers.users import router as users_router
from invest_portal.db.init_db import init_db
from invest_portal.db.seed import seed
from invest_portal.db.session import create_engine, create_sessionmaker
from invest_portal.observability.logging import configure_logging, get_logger
from invest_portal.observability.middleware import RequestContextMiddleware
from invest_portal.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, policy: RoutePolicy = DEFAULT_POLICY) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schema comes from Alembic migrations.
            await init_db(engine)
            await seed(app.state.sessionmaker, admin_email=settings.bootstrap_admin_email)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Invest Portal",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.route_policy = policy
    app.state.request_gate = RequestGate(policy)

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(shared_router)
    app.include_router(regions_router)
    app.include_router(project_types_router)
    app.include_router(roles_router)
    app.include_router(users_router)
    app.include_router(investment_projects_router)
    app.include_router(project_tasks_router)
    app.include_router(sezs_router)
    app.include_router(industrial_zones_router)
    app.include_router(subsoil_users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Resource routers attach `access.deps.enforce_role_access` themselves; health, dev
# token and shared-props routes are intentionally outside the gate.
