"""
Response schema selection.

Picks which declared response of an operation to mock for a target status
code.
"""

from __future__ import annotations

from oam.core.document import OperationSpec, ResponseSpec
from oam.core.schema import SchemaNode

# Tried in order when a 200 is requested but not declared
SUCCESS_FALLBACK_CODES = ("201", "202", "203", "204")


def _with_json_body(operation: OperationSpec, status: str) -> ResponseSpec | None:
    response = operation.responses.get(status)
    if response is not None and response.body_schema is not None:
        return response
    return None


def select_response(operation: OperationSpec, status_code: int = 200) -> ResponseSpec | None:
    """Select the declared response to mock for ``status_code``.

    Resolution order:
        1. Exact match with a JSON body schema.
        2. For 200 only: the first of 201, 202, 203, 204 with a JSON body schema.
        3. The ``default`` response, if it has a JSON body schema.

    Returns:
        The selected response, or None if nothing representable is declared.
    """
    response = _with_json_body(operation, str(status_code))
    if response is not None:
        return response

    if status_code == 200:
        for code in SUCCESS_FALLBACK_CODES:
            response = _with_json_body(operation, code)
            if response is not None:
                return response

    return _with_json_body(operation, "default")


def select_response_schema(operation: OperationSpec, status_code: int = 200) -> SchemaNode | None:
    """Schema of the response chosen by :func:`select_response`, or None."""
    response = select_response(operation, status_code)
    return response.body_schema if response is not None else None
