"""
tests.test_auth

Bearer-token handling: how callers become (or fail to become) a Principal.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import httpx
import pytest

from invest_portal.api.app import create_app
from invest_portal.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, issue_token
from invest_portal.settings import Settings


def test_token_round_trip_and_tampering(settings: Settings) -> None:
    cfg = JwtConfig.from_settings(settings)
    token = issue_token(cfg=cfg, subject="5")
    assert decode_and_validate(cfg=cfg, token=token)["sub"] == "5"

    other = JwtConfig(alg=cfg.alg, issuer=cfg.issuer, audience="someone-else", secret=cfg.secret)
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=other, token=token)

    expired = issue_token(cfg=cfg, subject="5", ttl=timedelta(seconds=-5))
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=cfg, token=expired)


@pytest.mark.asyncio
async def test_invalid_or_unknown_tokens_are_rejected(
    client: httpx.AsyncClient, settings: Settings
) -> None:
    r = await client.get("/v1/shared", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

    ghost = issue_token(cfg=JwtConfig.from_settings(settings), subject="424242")
    r = await client.get("/v1/investment-projects", headers={"Authorization": f"Bearer {ghost}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Unknown user"

    bad_subject = issue_token(cfg=JwtConfig.from_settings(settings), subject="admin")
    r = await client.get("/v1/shared", headers={"Authorization": f"Bearer {bad_subject}"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_dev_token_for_seeded_admin(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/dev/token", json={"user_id": 1})
    assert r.status_code == 200
    token = r.json()["access_token"]

    r = await client.get("/v1/shared", headers={"Authorization": f"Bearer {token}"})
    user = r.json()["auth"]["user"]
    assert user["email"] == "admin@invest.kz"
    assert user["role_model"]["name"] == "superadmin"
    assert r.json()["canModify"] is True

    r = await client.post("/v1/dev/token", json={"user_id": 999})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_dev_token_disabled_in_prod(tmp_path: Path) -> None:
    settings = Settings(env="prod", database_url=f"sqlite+aiosqlite:///{tmp_path / 'prod.db'}")
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.post("/v1/dev/token", json={"user_id": 1})
            assert r.status_code == 404
