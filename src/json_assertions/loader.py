"""Loading stored JSON documents for replay against host values."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import JsonValue, TypeAdapter, ValidationError

from .json_types import JSONValue

logger = logging.getLogger(__name__)

_SUPPORTED_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")
_DOCUMENT_ADAPTER: TypeAdapter[JsonValue] = TypeAdapter(JsonValue)


class DocumentLoadError(RuntimeError):
    """Raised when a stored document cannot be loaded."""


def load_document(path: Path) -> JSONValue:
    """Load a JSON or YAML document and check it only holds JSON values.

    ``.json`` files are parsed as JSON; YAML 1.1 is not a superset of JSON
    (``1e5`` would load as a string), so only ``.yaml`` and ``.yml`` files go
    through the YAML loader.

    Args:
        path (Path): Path to a ``.json``, ``.yaml`` or ``.yml`` file.

    Returns:
        JSONValue: The parsed document.
    """
    if path.suffix.lower() not in _SUPPORTED_SUFFIXES:
        raise DocumentLoadError(
            f"Unsupported document type {path.suffix!r} for {path}; "
            f"expected one of {', '.join(_SUPPORTED_SUFFIXES)}"
        )

    if path.suffix.lower() == ".json":
        document = _load_json(path)
    else:
        document = _load_yaml(path)

    logger.debug("Loaded document %s", path)
    return document


def _load_json(path: Path) -> JSONValue:
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read document {path}: {exc}") from exc

    try:
        return _DOCUMENT_ADAPTER.validate_json(content, strict=True)
    except ValidationError as exc:
        raise DocumentLoadError(f"Failed to parse JSON document {path}: {exc}") from exc


def _load_yaml(path: Path) -> JSONValue:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read document {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise DocumentLoadError(f"Failed to parse YAML document {path}: {exc}") from exc

    try:
        return _DOCUMENT_ADAPTER.validate_python(payload, strict=True)
    except ValidationError as exc:
        raise DocumentLoadError(f"Document {path} is not plain JSON data: {exc}") from exc
