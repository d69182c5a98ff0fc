"""Shared pytest fixtures for OAM tests."""

from pathlib import Path

import pytest

from oam.core.document import ApiDocument
from oam.core.loader import load_document

# Re-exported so the mock fixtures resolve even without the installed plugin
from oam.mock.fixtures import mock_server, oam_seed  # noqa: F401


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def petstore_path(fixtures_dir: Path) -> Path:
    """Return path to the sample petstore document."""
    return fixtures_dir / "petstore.yaml"


@pytest.fixture
def petstore(petstore_path: Path) -> ApiDocument:
    """Return the compiled petstore document."""
    return load_document(petstore_path)
