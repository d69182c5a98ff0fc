"""
Minimal request body checks for mocked operations.
"""

from __future__ import annotations

from typing import Any

from oam.core.document import OperationSpec
from oam.core.schema import ObjectSchema


def validate_request_body(operation: OperationSpec, body: Any) -> str | None:
    """Check a parsed request body against the operation's declaration.

    Only two things are checked: a required body must be present and
    non-empty, and a JSON object body must carry every name listed in the
    body schema's ``required``.

    Args:
        operation: The matched operation.
        body: Parsed JSON body, or None if the request had no (valid) body.

    Returns:
        A user-facing problem description, or None if the body is acceptable.
    """
    request_body = operation.request_body
    if request_body is None:
        return None

    if request_body.required and not body:
        return "Request body is required"

    # An optional body that was not sent has nothing to check
    if body is None:
        return None

    schema = request_body.body_schema
    if isinstance(schema, ObjectSchema) and schema.required:
        for name in schema.required:
            if not isinstance(body, dict) or name not in body:
                return f"Missing required field: {name}"

    return None
