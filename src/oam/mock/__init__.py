"""
Mock engine: deterministic mock responses from OpenAPI documents.

Generates mock data from response schemas, keyed by route so repeated
requests return identical data, and serves it from a FastAPI app.
"""

from __future__ import annotations

from oam.mock.data_generators import MockDataGenerator, generate_mock_data
from oam.mock.responses import select_response, select_response_schema
from oam.mock.seed import DEFAULT_SEED, derive_seed
from oam.mock.server import create_mock_server
from oam.mock.validation import validate_request_body

__all__ = [
    "DEFAULT_SEED",
    "MockDataGenerator",
    "create_mock_server",
    "derive_seed",
    "generate_mock_data",
    "select_response",
    "select_response_schema",
    "validate_request_body",
]
