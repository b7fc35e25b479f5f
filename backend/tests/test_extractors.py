import pytest

from payrelay.utils.extractors import (
    extract_account_name,
    extract_collection_status,
    extract_token,
    is_collection_successful,
    lookup_path,
)


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"result": "r-1", "token": "t-1"}, "r-1"),
        ({"token": "t-1", "accessToken": "a-1"}, "t-1"),
        ({"Token": "T-1"}, "T-1"),
        ({"access_token": "a_t"}, "a_t"),
        ({"data": {"token": "nested"}}, "nested"),
        ({"data": {"Token": "Nested"}}, "Nested"),
        ({"result": "", "token": "fallback"}, "fallback"),
    ],
)
def test_token_is_taken_from_first_present_field(payload, expected):
    assert extract_token(payload) == expected


def test_token_missing_returns_none():
    assert extract_token({"status": "ok", "data": "not-a-mapping"}) is None
    assert extract_token("plain text body") is None


def test_account_name_prefers_nested_nametocredit():
    payload = {
        "data": {"nametocredit": "KOFI BOATENG"},
        "accountName": "Someone Else",
        "name": "Ignored",
    }
    assert extract_account_name(payload) == "KOFI BOATENG"


def test_account_name_falls_through_to_top_level_fields():
    assert extract_account_name({"data": {}, "AccountName": "ESI OWUSU"}) == "ESI OWUSU"
    assert extract_account_name({"Name": "YAW DARKO"}) == "YAW DARKO"
    assert extract_account_name({"data": {"NameToCredit": "  ABENA  "}}) == "ABENA"


def test_account_name_absent():
    assert extract_account_name({"data": {"nametocredit": None}}) is None


def test_lookup_path_skips_non_mapping_hops():
    assert lookup_path({"message": "Success"}, ("message", "status")) is None
    assert lookup_path({"message": {"status": "000"}}, ("message", "status")) == "000"


def test_collection_status_checks_message_before_data():
    payload = {"message": {"status": "000"}, "data": {"status": "99"}}
    assert extract_collection_status(payload) == "000"
    assert extract_collection_status({"data": {"status": "0"}}) == "0"


@pytest.mark.parametrize(
    "payload, succeeded",
    [
        ({"message": {"status": "000"}}, True),
        ({"data": {"status": "0"}}, True),
        ({"message": {"status": "01"}}, False),
        ({"data": {"status": 0}}, False),
        ({"message": "Successful"}, False),
        ({"message": {"status": 0}, "data": {"status": "000"}}, True),
        ({"message": {"status": False}, "data": {"status": "0"}}, True),
        ({}, False),
    ],
)
def test_collection_success_requires_exact_code(payload, succeeded):
    assert is_collection_successful(payload) is succeeded


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"result": False, "token": "abc"}, "abc"),
        ({"result": 0, "Token": "T-2"}, "T-2"),
        ({"result": {}, "data": {"token": "nested"}}, "nested"),
        ({"result": False, "message": "Invalid credentials"}, None),
        ({"token": [], "access_token": ""}, None),
    ],
)
def test_falsy_values_do_not_count_as_token(payload, expected):
    assert extract_token(payload) == expected


def test_falsy_account_name_falls_through():
    assert extract_account_name({"data": {"nametocredit": False}, "accountName": "AKUA"}) == "AKUA"
