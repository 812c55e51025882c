"""Helpers for loading programs and host values from Python files."""

from __future__ import annotations

import importlib.util
import itertools
from pathlib import Path
import sys
from types import ModuleType
from typing import Any, Optional


class ModuleLoadError(RuntimeError):
    """Raised when a referenced module or attribute cannot be loaded."""


def load_module_from_path(*, module_name: str, module_path: Path) -> ModuleType:
    """Load a module from file path and register it in ``sys.modules``.

    Args:
        module_name (str): Temporary import name for the module.
        module_path (Path): File system path to the Python module.

    Returns:
        ModuleType: Imported Python module object.
    """
    if not module_path.is_file():
        raise ModuleLoadError(f"Module not found: {module_path}")

    spec = importlib.util.spec_from_file_location(module_name, module_path)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(f"Unable to import module from: {module_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise
    return module


def load_attribute(reference: str, *, loaded: Optional[dict[Path, ModuleType]] = None) -> Any:
    """Resolve a ``path/to/file.py:ATTRIBUTE`` reference.

    Files are imported under a unique module name. Passing the same ``loaded``
    mapping to several calls imports each file only once, so the attributes
    share one set of class objects.

    Args:
        reference (str): File path and attribute name separated by a colon.
        loaded (Optional[dict[Path, ModuleType]]): Modules already imported,
            keyed by resolved path; updated in place.

    Returns:
        Any: The attribute value.
    """
    path_text, separator, attribute = reference.rpartition(":")
    if not separator or not path_text or not attribute:
        raise ModuleLoadError(f"Expected FILE.py:ATTRIBUTE, got {reference!r}")

    module_path = Path(path_text).resolve()
    cache: dict[Path, ModuleType] = {} if loaded is None else loaded
    module = cache.get(module_path)
    if module is None:
        module = load_module_from_path(
            module_name=f"json_assertions_loaded_{module_path.stem}_{next(_COUNTER)}",
            module_path=module_path,
        )
        cache[module_path] = module
    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise ModuleLoadError(f"{module_path} has no attribute {attribute!r}") from exc


_COUNTER = itertools.count(1)
