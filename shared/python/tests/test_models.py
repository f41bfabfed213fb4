"""Tests for table models."""

from __future__ import annotations

import json
from uuid import uuid4

from akwaaba_shared.models import Inquiry, Property, SystemConfig


def test_system_config_value_json_encoded():
    entry = SystemConfig(category="features", key="limits", value={"max_images": 20})
    row = entry.to_insert_dict()
    assert json.loads(row["value"]) == {"max_images": 20}
    assert SystemConfig.from_db_row(row).value == {"max_images": 20}


def test_system_config_plain_text_value():
    row = {"category": "general", "key": "site_name", "value": "not json"}
    assert SystemConfig.from_db_row(row).value == "not json"


def test_inquiry_anonymous_flag():
    base = {
        "property_id": uuid4(),
        "buyer_name": "Ama Owusu",
        "buyer_email": "ama@example.com",
        "message": "Still available?",
    }
    assert Inquiry(**base).to_insert_dict()["is_anonymous"] is True
    linked = Inquiry(**base, profile_id=uuid4()).to_insert_dict()
    assert linked["is_anonymous"] is False
    assert linked["status"] == "pending"


def test_property_defaults():
    prop = Property.from_db_row({
        "seller_id": str(uuid4()),
        "title": "Plot at Oyarifa",
        "description": "Half plot with documents, close to the main road.",
        "property_type": "land",
        "listing_type": "sale",
        "price": "85000.50",
        "address": "Oyarifa",
        "city": "Accra",
        "region": "Greater Accra",
        "features": None,
    })
    row = prop.to_insert_dict()
    assert row["price"] == 85000.5
    assert row["currency"] == "GHS"
    assert row["features"] == []
    assert row["status"] == "pending"
    assert row["approval_status"] == "pending"
    assert row["is_featured"] is False
