"""
OAM - OpenAPI Auto Mock.

Serves deterministic mock responses for every endpoint of an OpenAPI
document, without a real backend.
"""

from __future__ import annotations

from ._version import get_version
from .core.document import ApiDocument, OperationSpec
from .core.errors import ConfigError, DocumentLoadError, OamError
from .core.loader import load_document
from .core.schema import SchemaNode, parse_schema
from .mock.data_generators import MockDataGenerator
from .mock.responses import select_response_schema
from .mock.server import create_mock_server

__version__ = get_version()

__all__ = [
    "__version__",
    "ApiDocument",
    "OperationSpec",
    "SchemaNode",
    "parse_schema",
    "load_document",
    "MockDataGenerator",
    "select_response_schema",
    "create_mock_server",
    "OamError",
    "DocumentLoadError",
    "ConfigError",
]
