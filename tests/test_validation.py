"""Tests for JSON schema validation of identity API responses."""

from app.schemas.identity import DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA
from app.services.validation import validate_against_schema
from conftest import make_patient


def test_valid_response():
    payload = {"result": [make_patient("111"), {"mrn": "222", "birthDate": None}]}
    assert validate_against_schema(payload, DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA) == []


def test_missing_result():
    errors = validate_against_schema({"results": []}, DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA)
    assert errors == ["<root>: 'result' is a required property"]


def test_errors_carry_their_location():
    payload = {"result": [make_patient("111"), {"firstName": "A"}, {"mrn": 3, "gender": 1}]}
    errors = validate_against_schema(payload, DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA)
    assert len(errors) == 2
    assert errors[0].startswith("result/1: ")
    assert "'mrn' is a required property" in errors[0]
    assert errors[1].startswith("result/2/mrn: ")


def test_non_object_document():
    errors = validate_against_schema([], DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA)
    assert len(errors) == 1


def test_demographic_values_are_not_constrained():
    payload = {"result": [{"mrn": "111", "gender": 1, "birthDate": {"y": 1990}, "zip": 94305}]}
    assert validate_against_schema(payload, DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA) == []
