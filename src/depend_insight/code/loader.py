"""Build a CodeRegistry from a JSON graph document.

Document shape::

    {
      "packages": [
        {
          "name": "library",
          "functions": ["helper"],
          "types": [
            {"name": "Base", "kind": "class", "methods": ["run"]},
            {"name": "Child", "kind": "class", "parent": "Base",
             "interfaces": ["Runnable"],
             "methods": [{"name": "run"}, {"name": "stop", "abstract": true}]},
            {"name": "Runnable", "kind": "interface", "extends": []}
          ]
        }
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..exceptions import DuplicateTypeError, InvalidGraphError, InvalidPathError
from ..exceptions.taxonomy import ErrorCode, ModelError
from ..logging_config import get_logger
from .models import NodeKind, Type
from .registry import CodeRegistry

logger = get_logger(__name__)


def load_registry_file(path: Path) -> CodeRegistry:
    """Read a JSON graph document from *path*."""
    path = Path(path)
    if not path.is_file():
        raise InvalidPathError(path, "graph file does not exist")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidGraphError(f"not valid JSON: {e.msg}", location=f"{path}:{e.lineno}") from e
    except UnicodeDecodeError as e:
        raise InvalidGraphError(
            f"not valid UTF-8: {e.reason}", location=f"{path}:byte {e.start}"
        ) from e
    except OSError as e:
        raise InvalidGraphError(f"cannot read graph file: {e.strerror}", location=str(path)) from e
    return load_registry(data)


def load_registry(data: Any) -> CodeRegistry:
    """Build and link a registry from an already-decoded graph document."""
    if not isinstance(data, dict) or not isinstance(data.get("packages"), list):
        raise InvalidGraphError("expected an object with a 'packages' list")

    registry = CodeRegistry()
    for p_index, pkg in enumerate(data["packages"]):
        where = f"packages[{p_index}]"
        if not isinstance(pkg, dict) or not isinstance(pkg.get("name"), str):
            raise InvalidGraphError("package needs a string 'name'", location=where)

        package = registry.add_package(pkg["name"])
        for function in pkg.get("functions", []):
            registry.add_function(package, _method_entry(function, where)[0])

        for t_index, entry in enumerate(pkg.get("types", [])):
            _add_type(registry, package, entry, f"{where}.types[{t_index}]")

    unresolved = registry.link()
    logger.debug(
        f"Loaded {len(registry.packages)} packages, {len(registry)} types "
        f"({unresolved} unresolved references)"
    )
    return registry


def _add_type(registry: CodeRegistry, package, entry: Any, where: str) -> Type:
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        raise InvalidGraphError("type needs a string 'name'", location=where)

    try:
        kind = NodeKind(entry.get("kind", "class"))
    except ValueError:
        raise InvalidGraphError(f"unknown kind {entry.get('kind')!r}", location=where)

    try:
        if kind is NodeKind.CLASS:
            node = registry.add_class(
                package,
                entry["name"],
                parent=entry.get("parent"),
                interfaces=_names(entry.get("interfaces", []), where),
            )
        else:
            if entry.get("parent") is not None:
                raise InvalidGraphError("interfaces use 'extends', not 'parent'", location=where)
            node = registry.add_interface(
                package, entry["name"], extends=_names(entry.get("extends", []), where)
            )
    except DuplicateTypeError as e:
        logger.debug(
            ModelError(message=str(e), code=ErrorCode.DI100, context={"location": where}).to_json()
        )
        raise InvalidGraphError(str(e), location=where) from e

    for method in entry.get("methods", []):
        name, is_abstract = _method_entry(method, where)
        registry.add_method(node, name, is_abstract=is_abstract)
    return node


def _names(values: Any, where: str) -> list[str]:
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise InvalidGraphError("expected a list of type names", location=where)
    return values


def _method_entry(value: Any, where: str) -> tuple[str, bool]:
    if isinstance(value, str):
        return value, False
    if isinstance(value, dict) and isinstance(value.get("name"), str):
        return value["name"], bool(value.get("abstract", False))
    raise InvalidGraphError(f"bad method entry {value!r}", location=where)
