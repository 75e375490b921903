from __future__ import annotations

from typing import Dict

from ..errors import SqlFragProblem, UnknownDialectError
from .base import Dialect

_REGISTRY: Dict[str, Dialect] = {}


def register(dialect: Dialect, *, replace: bool = False) -> None:
    """
    Register ``dialect`` under its lower-cased ``.name``.

    A name that is already taken is rejected unless ``replace=True``, so a
    driver-specific dialect cannot silently shadow a built-in one.
    """
    name = getattr(dialect, "name", None)
    if not name or not isinstance(name, str):
        raise ValueError("Dialect must define a non-empty .name")
    k = name.lower()
    if k in _REGISTRY and not replace:
        raise ValueError(f"Dialect '{name}' is already registered; pass replace=True to override it")
    _REGISTRY[k] = dialect


def get(name: str) -> Dialect:
    k = (name or "").lower()
    try:
        return _REGISTRY[k]
    except KeyError:
        available = sorted(_REGISTRY)
        raise UnknownDialectError(
            SqlFragProblem(
                code="SQLFRAG_UNKNOWN_DIALECT",
                category="dialect",
                message=f"Unknown dialect '{name}'. Available: {', '.join(available)}",
                details={"dialect": name, "available": available},
                remediation="Pick one of the available dialects or register() your own.",
            )
        ) from None


def available() -> Dict[str, Dialect]:
    return dict(_REGISTRY)
