"""
Pytest fixtures for OAM mock servers.

Register as a pytest plugin via pyproject.toml entry point::

    [project.entry-points."pytest11"]
    oam_mock = "oam.mock.fixtures"

Then define an ``oam_document`` fixture (a path or an ApiDocument) and use
the ``mock_server`` fixture to talk to the mock through a TestClient. Override
``oam_seed`` to change the base seed.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from oam.core.document import ApiDocument
from oam.core.loader import load_document
from oam.mock.seed import DEFAULT_SEED

if TYPE_CHECKING:
    from collections.abc import Generator


def mock_client(document: ApiDocument | str | Path, *, seed: int = DEFAULT_SEED) -> Any:
    """Create a TestClient wrapping a mock server for ``document``.

    Args:
        document: A compiled ApiDocument, or a path to a YAML/JSON document.
        seed: Base seed for deterministic data generation.

    Returns:
        TestClient wrapping the mock's FastAPI app.

    Example::

        def test_user_lookup():
            client = mock_client("openapi.yaml")
            resp = client.get("/users/42")
            assert resp.status_code == 200
    """
    from fastapi.testclient import TestClient

    from oam.mock.server import create_mock_server

    if not isinstance(document, ApiDocument):
        document = load_document(document)
    app = create_mock_server(document, seed=seed)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def oam_seed() -> int:
    """Base seed for ``mock_server``; override in a test module or conftest."""
    return DEFAULT_SEED


@pytest.fixture()
def mock_server(oam_document: ApiDocument | str | Path, oam_seed: int) -> Generator[Any, None, None]:
    """TestClient for a mock built from the ``oam_document`` fixture.

    Requires an ``oam_document`` fixture (path or ApiDocument) in the test
    module or a conftest.

    Yields:
        TestClient for the mock server.
    """
    with mock_client(oam_document, seed=oam_seed) as client:
        yield client
