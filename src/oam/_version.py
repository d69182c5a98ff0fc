"""Version lookup for OAM."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _installed_version
from pathlib import Path

DISTRIBUTION = "oam-mock"

# src/oam/_version.py -> repository root in a source checkout
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Return the project version.

    A source checkout reads ``[project].version`` from pyproject.toml so that
    editable installs report the working-tree version; otherwise the installed
    distribution metadata is used.
    """
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == DISTRIBUTION and "version" in project:
            return str(project["version"])
    try:
        return _installed_version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
