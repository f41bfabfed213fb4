"""Tests for buyer inquiries and the seller inbox."""

from __future__ import annotations

from uuid import uuid4

import pytest

from akwaaba_shared.constants import Role
from tests.conftest import make_supabase, make_user, payloads, use_supabase


@pytest.fixture()
def inquiry_body(sample_property):
    return {
        "property_id": sample_property["id"],
        "buyer_name": "Ama Owusu",
        "buyer_email": "ama@example.com",
        "message": "Is the house still available for a viewing this weekend?",
        "inquiry_type": "viewing",
    }


@pytest.fixture()
def sample_inquiry(sample_property):
    return {
        "id": str(uuid4()),
        "property_id": sample_property["id"],
        "buyer_name": "Ama Owusu",
        "buyer_email": "ama@example.com",
        "message": "Is the house still available?",
        "status": "pending",
        "properties": {"id": sample_property["id"], "title": sample_property["title"],
                       "seller_id": sample_property["seller_id"]},
    }


def test_anonymous_inquiry(client, sample_property, inquiry_body):
    mock = make_supabase({"properties": ([sample_property], 1)})
    with use_supabase(mock):
        response = client.post(
            "/api/inquiries",
            json=inquiry_body,
            headers={"x-forwarded-for": "41.66.1.2, 10.0.0.1", "user-agent": "pytest"},
        )

    assert response.status_code == 201
    row = payloads(mock, "inquiries", "insert")[0]
    assert row["profile_id"] is None
    assert row["is_anonymous"] is True
    assert row["status"] == "pending"
    assert row["ip_address"] == "41.66.1.2"
    assert row["user_agent"] == "pytest"


def test_signed_in_inquiry_links_profile(client, login_as, customer_user, sample_property, inquiry_body):
    login_as(customer_user)
    mock = make_supabase({"properties": ([sample_property], 1)})
    with use_supabase(mock):
        response = client.post("/api/inquiries", json=inquiry_body)

    assert response.status_code == 201
    row = payloads(mock, "inquiries", "insert")[0]
    assert row["profile_id"] == customer_user.profile_id
    assert row["is_anonymous"] is False


def test_inquiry_on_inactive_listing(client, sample_property, inquiry_body):
    mock = make_supabase({"properties": ([{**sample_property, "status": "sold"}], 1)})
    with use_supabase(mock):
        response = client.post("/api/inquiries", json=inquiry_body)

    assert response.status_code == 404
    assert payloads(mock, "inquiries", "insert") == []


def test_inquiry_validation(client, inquiry_body):
    response = client.post("/api/inquiries", json={**inquiry_body, "buyer_email": "not-an-email"})
    assert response.status_code == 400


def test_seller_inbox_scoped_to_own_listings(client, login_as, agent_user, sample_inquiry):
    login_as(agent_user)
    owned = [{"id": str(uuid4())}, {"id": str(uuid4())}]
    mock = make_supabase({
        "properties": (owned, 2),
        "inquiries": ([sample_inquiry], 1),
    })
    with use_supabase(mock):
        response = client.get("/api/seller/inquiries?status=pending")

    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 1
    chain = mock.calls["inquiries"][0]
    chain.in_.assert_called_once_with("property_id", [o["id"] for o in owned])
    chain.eq.assert_called_once_with("status", "pending")


def test_seller_inbox_without_listings(client, login_as, agent_user):
    login_as(agent_user)
    mock = make_supabase()
    with use_supabase(mock):
        response = client.get("/api/seller/inquiries")

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == []
    assert body["pagination"]["totalPages"] == 0
    assert mock.calls["inquiries"] == []


def test_seller_inbox_customer_forbidden(client, login_as, customer_user):
    login_as(customer_user)
    assert client.get("/api/seller/inquiries").status_code == 403


def test_get_inquiry_other_seller(client, login_as, agent_user, sample_inquiry):
    login_as(agent_user)
    mock = make_supabase({"inquiries": ([sample_inquiry], 1)})
    with use_supabase(mock):
        response = client.get(f"/api/seller/inquiries/{sample_inquiry['id']}")

    assert response.status_code == 403
    assert response.json() == {"error": "Access denied - Property ownership verification failed"}


def test_respond_to_inquiry(client, login_as, sample_property, sample_inquiry):
    login_as(make_user(Role.AGENT, user_id=sample_property["seller_id"]))
    mock = make_supabase({"inquiries": ([sample_inquiry], 1)})
    with use_supabase(mock):
        response = client.put(
            f"/api/seller/inquiries/{sample_inquiry['id']}",
            json={"status": "responded", "response_message": "Yes, Saturday at 10am works."},
        )

    assert response.status_code == 200
    update = payloads(mock, "inquiries", "update")[0]
    assert update["status"] == "responded"
    assert update["response_message"] == "Yes, Saturday at 10am works."
    assert "responded_at" in update


def test_close_inquiry_does_not_stamp_response(client, login_as, sample_property, sample_inquiry):
    login_as(make_user(Role.AGENT, user_id=sample_property["seller_id"]))
    mock = make_supabase({"inquiries": ([sample_inquiry], 1)})
    with use_supabase(mock):
        response = client.put(
            f"/api/seller/inquiries/{sample_inquiry['id']}",
            json={"status": "closed"},
        )

    assert response.status_code == 200
    assert "responded_at" not in payloads(mock, "inquiries", "update")[0]


def test_seller_dashboard(client, login_as, agent_user):
    login_as(agent_user)
    listings = [
        {"id": "p1", "status": "active", "views_count": 10},
        {"id": "p2", "status": "active", "views_count": 5},
        {"id": "p3", "status": "pending", "views_count": None},
    ]
    inquiries = [
        {"id": "i1", "property_id": "p1", "status": "pending"},
        {"id": "i2", "property_id": "p1", "status": "responded"},
        {"id": "i3", "property_id": "p2", "status": "pending"},
    ]
    mock = make_supabase({"properties": (listings, 3), "inquiries": (inquiries, 3)})
    with use_supabase(mock):
        response = client.get("/api/seller/dashboard")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["properties"] == {"active": 2, "pending": 1, "archived": 0, "sold": 0, "total": 3}
    assert data["total_views"] == 15
    assert data["inquiries"]["pending"] == 2
    assert data["inquiries"]["responded"] == 1
    assert data["inquiries"]["total"] == 3
