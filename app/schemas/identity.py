"""
JSON schemas for the downstream identity/demographics API.

Only the parts the service relies on are constrained: a `result` array
whose elements carry a string `mrn`. Demographic fields and extras such
as `zip` pass through untouched.
"""

DEMOGRAPHICS_BATCH_RESPONSE_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Demographics batch response",
    "type": "object",
    "required": ["result"],
    "properties": {
        "result": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["mrn"],
                "properties": {
                    "mrn": {
                        "type": "string",
                        "description": "Medical Record Number – the re-keying field.",
                    },
                },
            },
        },
    },
}
