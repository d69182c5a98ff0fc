"""Core OAM functionality: schema nodes, compiled operations, document loading, errors."""

from .document import (
    ApiDocument,
    OperationSpec,
    ParameterSpec,
    RequestBodySpec,
    ResponseSpec,
    compile_document,
    compile_operation,
)
from .errors import ConfigError, DocumentLoadError, ErrorContext, OamError
from .loader import dereference, load_document, read_document
from .schema import SchemaKind, SchemaNode, parse_schema

__all__ = [
    "ApiDocument",
    "OperationSpec",
    "ParameterSpec",
    "RequestBodySpec",
    "ResponseSpec",
    "compile_document",
    "compile_operation",
    "OamError",
    "DocumentLoadError",
    "ConfigError",
    "ErrorContext",
    "dereference",
    "load_document",
    "read_document",
    "SchemaKind",
    "SchemaNode",
    "parse_schema",
]
