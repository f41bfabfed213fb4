"""Tests for placeholder text detection."""

from __future__ import annotations

import pytest

from akwaaba_shared.placeholders import find_placeholder_fields, is_placeholder, placeholder_message


@pytest.mark.parametrize(
    "value",
    ["aaa", "QQQQ", "test", "My Test house", "placeholder title", "Lorem ipsum dolor", "ab", "   "],
)
def test_placeholder_values(value):
    assert is_placeholder(value)


@pytest.mark.parametrize(
    "value",
    ["Three bedroom house in East Legon", "Contest winners villa", "Spintex Road", None],
)
def test_real_values(value):
    assert not is_placeholder(value)


def test_message_names_field():
    assert placeholder_message("aaaa", "title") == (
        "title contains placeholder data. Please provide a real title."
    )
    assert placeholder_message("Cantonments townhouse", "title") is None


def test_find_placeholder_fields():
    row = {
        "title": "test",
        "description": "Spacious four bedroom home with a pool.",
        "address": "xx",
        "city": "aaa",
    }
    assert find_placeholder_fields(row) == ["title", "address"]


def test_find_placeholder_fields_skips_missing():
    assert find_placeholder_fields({"title": None}) == []
