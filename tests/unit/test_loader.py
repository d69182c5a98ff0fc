"""Tests for OpenAPI document loading and compilation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from oam.core.document import ApiDocument, compile_document
from oam.core.errors import DocumentLoadError
from oam.core.loader import dereference, load_document, read_document
from oam.core.schema import ArraySchema, NumberSchema, ObjectSchema, UnconstrainedSchema


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadDocument:
    """Test reading YAML and JSON documents."""

    def test_petstore(self, petstore: ApiDocument) -> None:
        assert petstore.title == "Petstore"
        assert petstore.version == "1.0.0"
        assert petstore.description == "Sample document for mock server tests"
        assert petstore.endpoints == [
            "GET /users",
            "POST /users",
            "GET /users/{id}",
            "DELETE /users/{id}",
            "GET /users/me",
            "PUT /posts",
            "POST /sessions",
            "GET /files/{file-name}",
        ]

    def test_json_document(self, tmp_path: Path) -> None:
        raw = {
            "openapi": "3.0.0",
            "info": {"title": "Tiny", "version": "2"},
            "paths": {"/ping": {"get": {"responses": {"200": {"description": "ok"}}}}},
        }
        document = load_document(_write(tmp_path, "tiny.json", json.dumps(raw)))
        assert document.title == "Tiny"
        assert document.endpoints == ["GET /ping"]

    def test_swagger_marker_accepted(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "old.yaml", "swagger: '2.0'\npaths: {}\n")
        assert load_document(path).operations == ()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError, match="Cannot read document"):
            load_document(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "bad.yaml", "openapi: [unclosed\n")
        with pytest.raises(DocumentLoadError, match="Invalid document syntax"):
            load_document(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "bad.json", "{not json")
        with pytest.raises(DocumentLoadError, match="Invalid document syntax"):
            load_document(path)

    def test_root_must_be_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError, match="root must be a mapping"):
            load_document(_write(tmp_path, "list.yaml", "- a\n- b\n"))

    def test_missing_version_marker(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError, match="Missing 'openapi'"):
            load_document(_write(tmp_path, "plain.yaml", "paths: {}\n"))

    def test_missing_paths(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError, match="'paths'"):
            load_document(_write(tmp_path, "nopaths.yaml", "openapi: 3.0.0\n"))

    def test_error_carries_file_context(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "plain.yaml", "paths: {}\n")
        with pytest.raises(DocumentLoadError) as exc_info:
            load_document(path)
        assert exc_info.value.context is not None
        assert exc_info.value.context.file == path
        assert str(path) in str(exc_info.value)


class TestDereference:
    """Test internal $ref inlining."""

    def test_inlines_component(self) -> None:
        raw = {
            "a": {"$ref": "#/components/schemas/Id"},
            "components": {"schemas": {"Id": {"type": "integer"}}},
        }
        assert dereference(raw)["a"] == {"type": "integer"}

    def test_escaped_pointer_tokens(self) -> None:
        raw = {"a": {"$ref": "#/paths/~1users~0x"}, "paths": {"/users~x": {"type": "string"}}}
        assert dereference(raw)["a"] == {"type": "string"}

    def test_inlines_list_entries(self) -> None:
        raw = {"a": [{"$ref": "#/b"}], "b": {"type": "boolean"}}
        assert dereference(raw)["a"] == [{"type": "boolean"}]

    def test_recursive_reference_is_cut(self) -> None:
        raw = {
            "components": {
                "schemas": {
                    "Node": {
                        "type": "object",
                        "properties": {"next": {"$ref": "#/components/schemas/Node"}},
                    }
                }
            },
            "root": {"$ref": "#/components/schemas/Node"},
        }
        resolved = dereference(raw)["root"]
        assert resolved["properties"]["next"] == {}

    def test_unresolvable_reference(self) -> None:
        with pytest.raises(DocumentLoadError, match="Unresolvable"):
            dereference({"a": {"$ref": "#/nowhere"}})

    def test_external_reference(self) -> None:
        with pytest.raises(DocumentLoadError, match="External"):
            dereference({"a": {"$ref": "other.yaml#/X"}})

    def test_source_is_not_modified(self) -> None:
        raw = {"a": {"$ref": "#/b"}, "b": {"type": "string"}}
        dereference(raw)
        assert raw["a"] == {"$ref": "#/b"}

    def test_petstore_manager_is_unconstrained(self, petstore: ApiDocument) -> None:
        user = petstore.find_operation("GET", "/users/{id}").responses["200"].body_schema
        assert isinstance(user, ObjectSchema)
        assert isinstance(user.properties["manager"], UnconstrainedSchema)

    def test_read_document_returns_dereferenced_mapping(self, petstore_path: Path) -> None:
        raw = read_document(petstore_path)
        schema = raw["paths"]["/users"]["get"]["responses"]["200"]["content"]["application/json"]
        assert "$ref" not in schema["schema"]["items"]


class TestCompileDocument:
    """Test the compiled route table."""

    def test_method_order_within_path(self) -> None:
        raw = {
            "paths": {
                "/x": {
                    "patch": {"responses": {}},
                    "get": {"responses": {}},
                    "options": {"responses": {}},
                    "delete": {"responses": {}},
                }
            }
        }
        assert compile_document(raw).endpoints == ["GET /x", "DELETE /x", "PATCH /x"]

    def test_path_level_parameters_are_merged(self, petstore: ApiDocument) -> None:
        op = petstore.find_operation("get", "/users/{id}")
        assert op is not None
        assert [(p.name, p.location, p.required) for p in op.parameters] == [("id", "path", True)]
        assert isinstance(op.parameters[0].schema_node, NumberSchema)

    def test_operation_parameter_overrides_path_parameter(self) -> None:
        raw = {
            "paths": {
                "/x/{id}": {
                    "parameters": [{"name": "id", "in": "path", "schema": {"type": "string"}}],
                    "get": {
                        "parameters": [
                            {"name": "id", "in": "path", "required": True},
                            {"name": "q", "in": "query"},
                        ],
                        "responses": {},
                    },
                }
            }
        }
        op = compile_document(raw).operations[0]
        assert [(p.name, p.required) for p in op.parameters] == [("id", True), ("q", False)]

    def test_request_body(self, petstore: ApiDocument) -> None:
        create = petstore.find_operation("POST", "/users")
        assert create.request_body is not None
        assert create.request_body.required
        assert isinstance(create.request_body.body_schema, ObjectSchema)
        assert create.request_body.body_schema.required == ("name",)

        replace = petstore.find_operation("PUT", "/posts")
        assert not replace.request_body.required

    def test_operation_metadata(self, petstore: ApiDocument) -> None:
        op = petstore.find_operation("GET", "/users")
        assert op.operation_id == "listUsers"
        assert op.key == "GET /users"
        assert isinstance(op.responses["200"].body_schema, ArraySchema)
        assert op.responses["200"].description == "All users"

    def test_unknown_operation(self, petstore: ApiDocument) -> None:
        assert petstore.find_operation("PATCH", "/users") is None
        assert petstore.find_operation("GET", "/users/42") is None

    def test_missing_info_defaults(self) -> None:
        document = compile_document({"paths": {}})
        assert document.title == "API"
        assert document.version == ""


class TestYamlTimestamps:
    """Test that YAML timestamps are loaded as ISO strings."""

    def test_dates_and_datetimes(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "dates.yaml",
            "openapi: 3.0.0\n"
            "paths: {}\n"
            "x-values:\n"
            "  day: 2024-01-01\n"
            "  utc: 2024-05-01T12:30:00Z\n"
            "  offset: 2024-05-01T14:30:00+02:00\n"
            "  naive: 2024-05-01 12:30:00.5\n"
            "  quoted: '2024-01-01'\n"
            "  listed: [2024-06-30]\n",
        )
        values = read_document(path)["x-values"]
        assert values == {
            "day": "2024-01-01",
            "utc": "2024-05-01T12:30:00.000Z",
            "offset": "2024-05-01T12:30:00.000Z",
            "naive": "2024-05-01T12:30:00.500Z",
            "quoted": "2024-01-01",
            "listed": ["2024-06-30"],
        }

    def test_date_example_compiles_to_string(self, fixtures_dir: Path) -> None:
        document = load_document(fixtures_dir / "events.yaml")
        schema = document.operations[0].responses["200"].body_schema
        assert isinstance(schema, ObjectSchema)
        assert schema.properties["when"].example == "2024-01-01"
        assert schema.properties["kind"].enum == ("2024-01-01", "2024-06-30")
