"""
OpenAPI document loader.

Reads a YAML or JSON OpenAPI document, inlines internal ``$ref`` pointers and
compiles the result into an ApiDocument.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

import yaml

from oam.core.document import ApiDocument, compile_document
from oam.core.errors import make_load_error

logger = logging.getLogger(__name__)


def _decode_pointer_token(token: str) -> str:
    # JSON Pointer escaping per RFC 6901
    return token.replace("~1", "/").replace("~0", "~")


def _pointer_get(root: Any, pointer: str, file: Path | None) -> Any:
    """Resolve a JSON pointer (without the leading ``#``) against ``root``."""
    if pointer == "":
        return root
    if not pointer.startswith("/"):
        raise make_load_error(f"Unsupported $ref pointer '#{pointer}'", file)

    current = root
    for raw_token in pointer[1:].split("/"):
        token = _decode_pointer_token(raw_token)
        if isinstance(current, dict) and token in current:
            current = current[token]
        elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
            current = current[int(token)]
        else:
            raise make_load_error(f"Unresolvable $ref '#{pointer}'", file, pointer)
    return current


def dereference(document: dict[str, Any], file: Path | None = None) -> dict[str, Any]:
    """Return a copy of ``document`` with internal ``$ref`` pointers inlined.

    Sibling keys next to a ``$ref`` are ignored. A reference that points back
    into its own expansion is replaced by an empty schema, which mocks as an
    unconstrained value.

    Raises:
        DocumentLoadError: On external or unresolvable references.
    """

    def resolve(node: Any, active: tuple[str, ...]) -> Any:
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str):
                if not ref.startswith("#"):
                    raise make_load_error(f"External $ref '{ref}' is not supported", file)
                if ref in active:
                    logger.debug("Cutting recursive $ref %s", ref)
                    return {}
                target = _pointer_get(document, ref[1:], file)
                return resolve(target, (*active, ref))
            return {key: resolve(value, active) for key, value in node.items()}
        if isinstance(node, list):
            return [resolve(item, active) for item in node]
        return node

    return resolve(document, ())


def _stringify_timestamps(node: Any) -> Any:
    """Replace YAML timestamps with ISO 8601 strings so every value is JSON-serialisable.

    Dates keep their ``YYYY-MM-DD`` form; datetimes are rendered in UTC as
    ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (naive values are taken to be UTC).
    """
    if isinstance(node, datetime):
        if node.tzinfo is None:
            node = node.replace(tzinfo=UTC)
        return node.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    if isinstance(node, date):
        return node.isoformat()
    if isinstance(node, dict):
        return {
            _stringify_timestamps(key): _stringify_timestamps(value) for key, value in node.items()
        }
    if isinstance(node, list):
        return [_stringify_timestamps(item) for item in node]
    return node


def read_document(path: str | Path) -> dict[str, Any]:
    """Read and dereference an OpenAPI document without compiling it.

    Raises:
        DocumentLoadError: If the file is unreadable, unparseable or not an
            OpenAPI document.
    """
    file = Path(path)
    try:
        content = file.read_text(encoding="utf-8")
    except OSError as e:
        raise make_load_error(f"Cannot read document: {e.strerror or e}", file) from e

    try:
        if file.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = _stringify_timestamps(yaml.safe_load(content))
    except (ValueError, yaml.YAMLError) as e:
        raise make_load_error(f"Invalid document syntax: {e}", file) from e

    if not isinstance(data, dict):
        raise make_load_error("Document root must be a mapping", file)
    if "openapi" not in data and "swagger" not in data:
        raise make_load_error("Missing 'openapi' version field", file)
    if not isinstance(data.get("paths"), dict):
        raise make_load_error("Missing or invalid 'paths' mapping", file)

    return dereference(data, file)


def load_document(path: str | Path) -> ApiDocument:
    """Load an OpenAPI document and compile its route table.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` document.

    Returns:
        The compiled ApiDocument.
    """
    document = compile_document(read_document(path))
    logger.info(
        "Loaded %s v%s (%d endpoints) from %s",
        document.title,
        document.version,
        len(document.operations),
        path,
    )
    return document
