"""Tests for admin stats and user role management."""

from __future__ import annotations

from uuid import uuid4

from tests.conftest import make_supabase, payloads, use_supabase


def test_stats_counts_and_cache(client, login_as, admin_user):
    login_as(admin_user)
    mock = make_supabase({
        "profiles": ([], 12),
        "properties": ([], 30),
        "inquiries": ([], 7),
    })
    with use_supabase(mock):
        first = client.get("/api/admin/stats")
        second = client.get("/api/admin/stats")

    assert first.status_code == 200
    data = first.json()["data"]
    assert data["total_users"] == 12
    assert data["pending_approvals"] == 30
    assert data["total_inquiries"] == 7
    assert second.json()["data"] == data
    assert len(mock.calls["profiles"]) == 4
    assert len(mock.calls["properties"]) == 3

    verified = mock.calls["profiles"][2]
    verified.eq.assert_any_call("user_role", "agent")
    verified.eq.assert_any_call("verification_status", "verified")


def test_stats_admin_only(client, login_as, customer_user):
    login_as(customer_user)
    response = client.get("/api/admin/stats")
    assert response.status_code == 403
    assert response.json() == {"error": "Insufficient permissions. Admin access required."}


def test_list_users_filters(client, login_as, admin_user, sample_agent):
    login_as(admin_user)
    mock = make_supabase({"profiles": ([sample_agent], 1)})
    with use_supabase(mock):
        response = client.get("/api/admin/users?role=agent&search=mensah&limit=5")

    assert response.status_code == 200
    assert response.json()["pagination"] == {"page": 1, "limit": 5, "total": 1, "totalPages": 1}
    chain = mock.calls["profiles"][0]
    chain.eq.assert_called_once_with("user_role", "agent")
    chain.or_.assert_called_once_with("full_name.ilike.%mensah%,email.ilike.%mensah%")
    chain.range.assert_called_once_with(0, 4)


def test_change_role(client, login_as, admin_user, sample_agent):
    login_as(admin_user)
    promoted = {**sample_agent, "user_role": "admin"}
    mock = make_supabase({"profiles": [([sample_agent], 1), ([promoted], 1)]})
    with use_supabase(mock):
        response = client.patch(f"/api/admin/users/{sample_agent['id']}", json={"user_role": "admin"})

    assert response.status_code == 200
    assert response.json()["data"]["user_role"] == "admin"
    assert payloads(mock, "profiles", "update")[0]["user_role"] == "admin"
    log = payloads(mock, "admin_logs", "insert")[0]
    assert log["action"] == "change_user_role"
    assert log["metadata"] == {"from": "agent", "to": "admin"}


def test_admin_cannot_demote_self(client, login_as, admin_user):
    login_as(admin_user)
    me = {"id": admin_user.profile_id, "user_id": admin_user.user_id, "user_role": "admin"}
    mock = make_supabase({"profiles": ([me], 1)})
    with use_supabase(mock):
        response = client.patch(f"/api/admin/users/{me['id']}", json={"user_role": "customer"})

    assert response.status_code == 403
    assert response.json() == {"error": "Admins cannot remove their own admin role"}
    assert payloads(mock, "profiles", "update") == []


def test_change_role_unknown_user(client, login_as, admin_user):
    login_as(admin_user)
    response = client.patch(f"/api/admin/users/{uuid4()}", json={"user_role": "agent"})
    assert response.status_code == 404


def test_change_role_invalid_value(client, login_as, admin_user):
    login_as(admin_user)
    response = client.patch(f"/api/admin/users/{uuid4()}", json={"user_role": "owner"})
    assert response.status_code == 400
