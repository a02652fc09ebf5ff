"""
Field normalization for demographics returned by the identity API.

FIELD_MAPPING is the one table translating downstream field names into the
names callers receive; its order is the order of fields in the output.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from app.schemas.api import SubjectResult

FIELD_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        # downstream field     # output field
        "mrn": "mrn",
        "birthDate": "birthDate",
        "firstName": "firstName",
        "lastName": "lastName",
        "gender": "gender",
        "canonicalEthnicity": "ethnicity",
        "canonicalRace": "race",
    }
)


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def build_result(
    mrn: str,
    batch: Mapping[str, Mapping[str, Any]],
    want_demographics: bool,
    mapping: Mapping[str, str] = FIELD_MAPPING,
) -> SubjectResult:
    """
    Build the result for one requested MRN.
    Demographics are attached only for a recognised MRN when they were asked for;
    a field missing from the downstream record comes through as None, and
    non-string values are rendered as strings.
    """
    valid = mrn in batch
    if not (valid and want_demographics):
        return SubjectResult(mrn=mrn, valid=valid)

    record = batch[mrn]
    demographics = {
        output_field: _as_text(record.get(source_field))
        for source_field, output_field in mapping.items()
    }
    return SubjectResult(mrn=mrn, valid=True, demographics=demographics)
