from __future__ import annotations

from typing import Any, Dict, Optional

from ..errors import UnsupportedDialect
from .base import SQLDialect

_REGISTRY: Dict[str, SQLDialect] = {}


def register(dialect: SQLDialect) -> None:
    name = getattr(dialect, "name", None)
    if not name or not isinstance(name, str):
        raise ValueError("Dialect must define a non-empty .name")
    _REGISTRY[name.lower()] = dialect


def get(name: Any, operation: Optional[Any] = None) -> SQLDialect:
    """
    Look up a registered dialect by name (case-insensitive).

    `operation` is only used to name the failing call in the error.
    """
    k = str(getattr(name, "value", name) or "").strip().lower()
    if k not in _REGISTRY:
        raise UnsupportedDialect(name, operation or "any operation", supported=_REGISTRY.keys())
    return _REGISTRY[k]


def available() -> Dict[str, SQLDialect]:
    return dict(_REGISTRY)
