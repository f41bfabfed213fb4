"""Tests for admin listing moderation."""

from __future__ import annotations

from uuid import uuid4

import pytest

from akwaaba_shared.constants import Role
from tests.conftest import make_supabase, make_user, payloads, use_supabase


@pytest.fixture()
def pending_property(sample_property):
    return {**sample_property, "status": "pending", "approval_status": "pending"}


def test_approve_listing_goes_live(client, login_as, admin_user, pending_property):
    login_as(admin_user)
    mock = make_supabase({"properties": ([pending_property], 1)})
    with use_supabase(mock):
        response = client.post(
            "/api/admin/properties/approve",
            json={"propertyId": pending_property["id"], "action": "approve"},
        )

    assert response.status_code == 200
    assert response.json()["message"] == "Property approved successfully"
    update = payloads(mock, "properties", "update")[0]
    assert update["status"] == "active"
    assert update["approval_status"] == "approved"
    assert update["approved_by"] == admin_user.user_id
    assert "approved_at" in update


def test_reject_listing_archives_it(client, login_as, admin_user, pending_property):
    login_as(admin_user)
    mock = make_supabase({"properties": ([pending_property], 1)})
    with use_supabase(mock):
        response = client.post(
            "/api/admin/properties/approve",
            json={"propertyId": pending_property["id"], "action": "reject", "reason": "Photos missing"},
        )

    assert response.status_code == 200
    update = payloads(mock, "properties", "update")[0]
    assert update["status"] == "archived"
    assert update["approval_status"] == "rejected"
    assert update["rejection_reason"] == "Photos missing"


def test_approve_twice_is_rejected(client, login_as, admin_user, sample_property):
    login_as(admin_user)
    mock = make_supabase({"properties": ([sample_property], 1)})
    with use_supabase(mock):
        response = client.post(
            "/api/admin/properties/approve",
            json={"propertyId": sample_property["id"], "action": "approve"},
        )

    assert response.status_code == 400
    assert response.json()["details"] == {
        "kind": "approval", "current": "approved", "target": "approved",
    }
    assert payloads(mock, "properties", "update") == []


def test_approve_archived_listing_is_rejected(client, login_as, admin_user, pending_property):
    archived = {**pending_property, "status": "archived"}
    login_as(admin_user)
    mock = make_supabase({"properties": ([archived], 1)})
    with use_supabase(mock):
        response = client.post(
            "/api/admin/properties/approve",
            json={"propertyId": archived["id"], "action": "approve"},
        )

    assert response.status_code == 400
    assert response.json()["details"] == {
        "kind": "property", "current": "archived", "target": "active",
    }
    assert payloads(mock, "properties", "update") == []


def test_approve_unknown_listing(client, login_as, admin_user):
    login_as(admin_user)
    response = client.post(
        "/api/admin/properties/approve",
        json={"propertyId": str(uuid4()), "action": "approve"},
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Property not found"}


@pytest.mark.parametrize("role", [Role.CUSTOMER, Role.AGENT])
def test_moderation_is_admin_only(client, login_as, role):
    login_as(make_user(role))
    response = client.get("/api/admin/properties")
    assert response.status_code == 403
    assert response.json() == {"error": "Insufficient permissions. Admin access required."}


def test_list_all_statuses(client, login_as, admin_user, sample_property):
    login_as(admin_user)
    mock = make_supabase({"properties": ([sample_property], 1)})
    with use_supabase(mock):
        response = client.get("/api/admin/properties?status=pending&search=Legon")

    assert response.status_code == 200
    chain = mock.calls["properties"][0]
    chain.eq.assert_called_once_with("status", "pending")
    chain.or_.assert_called_once()
    assert "title.ilike.%Legon%" in chain.or_.call_args.args[0]


def test_list_properties_csv(client, login_as, admin_user, sample_property):
    login_as(admin_user)
    mock = make_supabase({"properties": ([sample_property], 1)})
    with use_supabase(mock):
        response = client.get("/api/admin/properties?format=csv")

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="properties.csv"'
    assert "property_images" not in response.text.splitlines()[0]


def test_property_detail_includes_seller_and_inquiries(client, login_as, admin_user, sample_property):
    login_as(admin_user)
    seller = {"id": str(uuid4()), "user_id": sample_property["seller_id"], "email": "s@example.com"}
    inquiry = {"id": str(uuid4()), "property_id": sample_property["id"], "status": "pending"}
    mock = make_supabase({
        "properties": ([sample_property], 1),
        "profiles": ([seller], 1),
        "inquiries": ([inquiry], 1),
    })
    with use_supabase(mock):
        response = client.get(f"/api/admin/properties/{sample_property['id']}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["seller"]["email"] == "s@example.com"
    assert data["inquiries"] == [inquiry]


def test_property_detail_not_found(client, login_as, admin_user):
    login_as(admin_user)
    response = client.get(f"/api/admin/properties/{uuid4()}")
    assert response.status_code == 404


def test_admin_update_marks_sold(client, login_as, admin_user, sample_property):
    login_as(admin_user)
    mock = make_supabase({"properties": ([sample_property], 1)})
    with use_supabase(mock):
        response = client.put(
            f"/api/admin/properties/{sample_property['id']}",
            json={"mark_sold": True, "is_featured": False},
        )

    assert response.status_code == 200
    update = payloads(mock, "properties", "update")[0]
    assert update["status"] == "sold"
    assert update["is_featured"] is False
    assert "mark_sold" not in update
    assert payloads(mock, "analytics", "insert")[0]["event_type"] == "admin_property_update"


def test_admin_update_cannot_clear_bedrooms_on_house(client, login_as, admin_user, sample_property):
    login_as(admin_user)
    mock = make_supabase({"properties": ([sample_property], 1)})
    with use_supabase(mock):
        response = client.put(
            f"/api/admin/properties/{sample_property['id']}",
            json={"bedrooms": 0},
        )

    assert response.status_code == 400
    assert payloads(mock, "properties", "update") == []


def test_admin_archive(client, login_as, admin_user, sample_property):
    login_as(admin_user)
    mock = make_supabase({"properties": ([sample_property], 1)})
    with use_supabase(mock):
        response = client.delete(f"/api/admin/properties/{sample_property['id']}")

    assert response.status_code == 200
    update = payloads(mock, "properties", "update")[0]
    assert update["status"] == "archived"
    assert update["archived_by"] == admin_user.user_id


def test_admin_archive_sold_listing_rejected(client, login_as, admin_user, sample_property):
    login_as(admin_user)
    sold = {**sample_property, "status": "sold"}
    mock = make_supabase({"properties": ([sold], 1)})
    with use_supabase(mock):
        response = client.delete(f"/api/admin/properties/{sold['id']}")

    assert response.status_code == 400
    assert payloads(mock, "properties", "update") == []
