from __future__ import annotations

from typing import Any, Protocol

from ..errors import SqlFragProblem, UncompiledFragmentError
from ..fragment import CompiledSql


class Dialect(Protocol):
    name: str
    paramstyle: str  # "inline" | "numeric_dollar" | "qmark" etc.

    def render(self, compiled: CompiledSql) -> Any: ...


def require_compiled(obj: Any, dialect: str) -> CompiledSql:
    if not isinstance(obj, CompiledSql):
        raise UncompiledFragmentError(
            SqlFragProblem(
                code="SQLFRAG_NOT_COMPILED",
                category="dialect",
                message=f"Dialect '{dialect}' requires a CompiledSql, got {type(obj).__name__}",
                details={"dialect": dialect, "type": type(obj).__name__},
                remediation="Pass the fragment through compile_fragment() before rendering.",
            )
        )
    return obj
