"""
Compiled OpenAPI operations.

Turns the ``paths`` section of a dereferenced OpenAPI document into an
explicit, ordered route table of OperationSpec entries before any request is
served.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from oam.core.schema import SchemaNode, parse_schema

HTTP_METHODS = ("get", "post", "put", "delete", "patch")
JSON_MEDIA_TYPE = "application/json"


def _json_schema(content: Any) -> SchemaNode | None:
    """Extract the ``application/json`` schema from a content map."""
    if not isinstance(content, dict):
        return None
    media = content.get(JSON_MEDIA_TYPE)
    if not isinstance(media, dict):
        return None
    return parse_schema(media.get("schema"))


class ParameterSpec(BaseModel):
    """A declared path, query, header or cookie parameter."""

    name: str
    location: str
    required: bool = False
    schema_node: SchemaNode | None = None

    model_config = ConfigDict(frozen=True)


class RequestBodySpec(BaseModel):
    """Declared request body; ``body_schema`` is the JSON schema, if any."""

    required: bool = False
    body_schema: SchemaNode | None = None

    model_config = ConfigDict(frozen=True)


class ResponseSpec(BaseModel):
    """One declared response, keyed by status code or ``default``."""

    status: str
    description: str = ""
    body_schema: SchemaNode | None = None

    model_config = ConfigDict(frozen=True)


class OperationSpec(BaseModel):
    """A single method + route template pair from the document."""

    method: str
    path: str
    operation_id: str | None = None
    summary: str = ""
    parameters: tuple[ParameterSpec, ...] = ()
    request_body: RequestBodySpec | None = None
    responses: dict[str, ResponseSpec] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        """Path key used to seed mock data: ``"<METHOD> <route-template>"``."""
        return f"{self.method} {self.path}"


class ApiDocument(BaseModel):
    """Loaded API description with its compiled route table."""

    title: str = "API"
    version: str = ""
    description: str = ""
    operations: tuple[OperationSpec, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def endpoints(self) -> list[str]:
        """All operations as ``"METHOD /route"`` strings, in document order."""
        return [op.key for op in self.operations]

    def find_operation(self, method: str, path: str) -> OperationSpec | None:
        """Look up an operation by method and route template."""
        method = method.upper()
        for op in self.operations:
            if op.method == method and op.path == path:
                return op
        return None


def _compile_parameters(raw_params: Any) -> list[ParameterSpec]:
    params: list[ParameterSpec] = []
    if not isinstance(raw_params, list):
        return params
    for raw in raw_params:
        if not isinstance(raw, dict) or "name" not in raw:
            continue
        params.append(
            ParameterSpec(
                name=str(raw["name"]),
                location=str(raw.get("in", "query")),
                required=bool(raw.get("required", False)),
                schema_node=parse_schema(raw.get("schema")),
            )
        )
    return params


def compile_operation(
    method: str,
    path: str,
    raw: dict[str, Any],
    shared_parameters: Any = None,
) -> OperationSpec:
    """Compile one raw operation object.

    Args:
        method: HTTP method (any case).
        path: Route template, e.g. ``/users/{id}``.
        raw: The operation object from ``paths[path][method]``.
        shared_parameters: Path-level ``parameters`` inherited by the operation.

    Returns:
        The compiled OperationSpec.
    """
    # Operation-level parameters override path-level ones with the same name+location
    params = {(p.name, p.location): p for p in _compile_parameters(shared_parameters)}
    for p in _compile_parameters(raw.get("parameters")):
        params[(p.name, p.location)] = p

    request_body = None
    raw_body = raw.get("requestBody")
    if isinstance(raw_body, dict):
        request_body = RequestBodySpec(
            required=bool(raw_body.get("required", False)),
            body_schema=_json_schema(raw_body.get("content")),
        )

    responses: dict[str, ResponseSpec] = {}
    raw_responses = raw.get("responses")
    if isinstance(raw_responses, dict):
        for status, response in raw_responses.items():
            # YAML loads unquoted status codes as ints
            code = str(status)
            if not isinstance(response, dict):
                continue
            responses[code] = ResponseSpec(
                status=code,
                description=str(response.get("description", "")),
                body_schema=_json_schema(response.get("content")),
            )

    return OperationSpec(
        method=method.upper(),
        path=path,
        operation_id=raw.get("operationId"),
        summary=str(raw.get("summary") or raw.get("description") or ""),
        parameters=tuple(params.values()),
        request_body=request_body,
        responses=responses,
    )


def compile_document(raw: dict[str, Any]) -> ApiDocument:
    """Compile a dereferenced OpenAPI document into an ApiDocument.

    Operations are emitted in document order: paths as declared, and within a
    path the methods get, post, put, delete, patch.
    """
    info = raw.get("info") if isinstance(raw.get("info"), dict) else {}
    operations: list[OperationSpec] = []

    paths = raw.get("paths") or {}
    for path, item in paths.items():
        if not isinstance(item, dict):
            continue
        for method in HTTP_METHODS:
            op = item.get(method)
            if isinstance(op, dict):
                operations.append(
                    compile_operation(method, str(path), op, item.get("parameters"))
                )

    return ApiDocument(
        title=str(info.get("title", "API")),
        version=str(info.get("version", "")),
        description=str(info.get("description") or ""),
        operations=tuple(operations),
    )
