"""
OAM CLI Package.

- app.py: Top-level ``oam`` app and entry point
- mock.py: ``oam mock`` commands
- utils.py: Shared utilities
"""

from oam.cli.app import app, main
from oam.cli.mock import mock_app
from oam.cli.utils import version_callback

__all__ = [
    "app",
    "main",
    "mock_app",
    "version_callback",
]
