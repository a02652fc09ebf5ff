"""
JSON Schema validation for payloads exchanged with the identity API.

All errors are collected rather than stopping at the first one, so a
malformed downstream response is logged with everything that is wrong.
"""

from typing import Any

import jsonschema


def validate_against_schema(data: Any, schema: dict[str, Any]) -> list[str]:
    """
    Validate a decoded JSON document against a schema.
    Returns a list of error messages prefixed with their location
    (empty list = valid).
    """
    validator = jsonschema.Draft7Validator(schema)
    messages = []
    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path]):
        location = "/".join(str(part) for part in error.path) or "<root>"
        messages.append(f"{location}: {error.message}")
    return messages
