"""
Mock server generator. Creates FastAPI apps from OpenAPI documents.

Registers one route per compiled operation. Each request is answered with
mock data generated from the selected response schema, keyed by
``"<METHOD> <route-template>"`` so that every concrete request to the same
template returns the same body.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from oam.core.document import ApiDocument, OperationSpec
from oam.mock.data_generators import MockDataGenerator
from oam.mock.responses import select_response_schema
from oam.mock.seed import DEFAULT_SEED
from oam.mock.validation import validate_request_body

logger = logging.getLogger(__name__)

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

_TEMPLATE_PARAM = re.compile(r"\{([^}]+)\}")


def create_mock_server(document: ApiDocument, *, seed: int = DEFAULT_SEED) -> FastAPI:
    """Create a mock FastAPI server for a loaded API document.

    Args:
        document: Compiled API document.
        seed: Base seed for deterministic data generation.

    Returns:
        A FastAPI application with a route for every document operation.
    """
    generator = MockDataGenerator(seed=seed)

    # Built-in docs routes would shadow document paths such as /docs
    app = FastAPI(
        title=f"Mock: {document.title}",
        description=document.description or f"Auto-generated mock for {document.title}",
        version=document.version or "0.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Attach document and generator to the app for test access
    app.state.document = document
    app.state.generator = generator

    if document.find_operation("GET", "/") is None:

        @app.get("/")
        async def index() -> dict[str, Any]:
            return {
                "message": "OAM Mock Server is running!",
                "spec": {
                    "title": document.title,
                    "version": document.version,
                    "description": document.description,
                },
                "endpoints": document.endpoints,
            }

    for op in _registration_order(document.operations):
        _register_operation(app, op, generator)

    return app


def _path_to_fastapi(path: str) -> str:
    """Convert an OpenAPI route template to a Starlette path pattern.

    ``{param}`` segments are already Starlette captures; names that are not
    valid identifiers are rewritten so they still capture.

    Examples:
        /users/{id} -> /users/{id}
        /files/{file-name} -> /files/{file_name}
        /v1/{2fa} -> /v1/{_2fa}
    """

    def capture(match: re.Match[str]) -> str:
        name = re.sub(r"\W", "_", match.group(1))
        if name[0].isdigit():
            name = f"_{name}"
        return f"{{{name}}}"

    return _TEMPLATE_PARAM.sub(capture, path)


def _registration_order(operations: tuple[OperationSpec, ...]) -> list[OperationSpec]:
    """Order operations so literal segments win over captures.

    Starlette matches routes first-come, so ``/users/me`` must be registered
    before ``/users/{id}``. The sort is stable; unrelated routes keep
    document order.
    """

    def specificity(op: OperationSpec) -> tuple[int, ...]:
        return tuple(1 if _TEMPLATE_PARAM.search(segment) else 0 for segment in op.path.split("/"))

    return sorted(operations, key=specificity)


async def _read_json_body(request: Request) -> Any:
    """Parse the request body as JSON; empty or invalid bodies give None."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _register_operation(app: FastAPI, op: OperationSpec, generator: MockDataGenerator) -> None:
    """Register a single operation as a FastAPI route."""
    key = op.key

    async def handler(request: Request) -> JSONResponse:
        """Generic handler for a mocked operation."""
        try:
            if op.method in BODY_METHODS:
                body = await _read_json_body(request)
                problem = validate_request_body(op, body)
                if problem:
                    logger.info("Rejected %s: %s", key, problem)
                    error_schema = select_response_schema(op, 400)
                    if error_schema is not None:
                        return JSONResponse(generator.generate(error_schema, key), status_code=400)
                    return JSONResponse(
                        {"error": "Bad Request", "message": problem},
                        status_code=400,
                    )

            schema = select_response_schema(op, 200)
            if schema is None:
                return JSONResponse({})
            return JSONResponse(generator.generate(schema, key))
        except Exception:
            logger.exception("Error generating mock data for %s", key)
            return JSONResponse({"error": "Internal server error"}, status_code=500)

    route_kwargs = {
        "path": _path_to_fastapi(op.path),
        "name": op.operation_id or key,
        "summary": op.summary or None,
        "include_in_schema": False,
    }
    app.api_route(**route_kwargs, methods=[op.method])(handler)
    logger.info("Registered route: %s", key)
