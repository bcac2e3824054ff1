from __future__ import annotations

from invest_portal.access.projection import can_modify, shared_props
from invest_portal.auth.models import Principal, Role


def test_can_modify_for_anonymous_and_unrestricted() -> None:
    assert can_modify(None)
    assert can_modify(Principal(subject="1", role=Role(name="superadmin", display_name="Суперадмин")))


def test_limited_roles_can_modify() -> None:
    assert can_modify(Principal(subject="1", role=Role(name="ispolnitel", display_name="Исполнитель")))
    assert can_modify(Principal(subject="2", role=Role(name="baskarma", display_name="Басқарма")))


def test_legacy_label_without_role_is_read_only() -> None:
    assert not can_modify(Principal(subject="1", role_label="Заместитель акима"))


def test_any_candidate_field_can_make_principal_read_only() -> None:
    assert not can_modify(Principal(subject="1", role=Role(name="akim")))
    assert not can_modify(Principal(subject="2", role=Role(name="viewer", display_name="Zam Akim")))
    assert not can_modify(Principal(subject="3", role_label="admin", role=Role(name="zamakim")))


def test_shared_props_for_anonymous() -> None:
    props = shared_props(None, app_name="Invest Portal")
    assert props == {
        "name": "Invest Portal",
        "auth": {"user": None},
        "canModify": True,
        "sidebarOpen": True,
    }


def test_shared_props_sidebar_cookie() -> None:
    assert shared_props(None, app_name="x", sidebar_cookie="true")["sidebarOpen"] is True
    assert shared_props(None, app_name="x", sidebar_cookie="false")["sidebarOpen"] is False


def test_shared_props_serializes_principal() -> None:
    principal = Principal(
        subject="7",
        role_label="akim",
        role=Role(name="akim", display_name="Аким"),
        full_name="Иванов И.",
        email="akim@invest.kz",
        region_id=4,
    )
    props = shared_props(principal, app_name="x")
    assert props["canModify"] is False
    assert props["auth"]["user"] == {
        "id": "7",
        "full_name": "Иванов И.",
        "email": "akim@invest.kz",
        "role": "akim",
        "region_id": 4,
        "baskarma_type": None,
        "role_model": {"name": "akim", "display_name": "Аким"},
    }
