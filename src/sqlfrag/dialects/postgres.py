from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from ..fragment import CompiledSql
from .base import require_compiled
from .registry import register


@dataclass(frozen=True)
class PostgresQuery:
    text: str
    values: Tuple[Any, ...]


def _join_with_placeholders(strings: Sequence[str]) -> str:
    # $1..$n, numbered left to right
    parts = [strings[0]]
    for i, s in enumerate(strings[1:], start=1):
        parts.append(f"${i}")
        parts.append(s)
    return "".join(parts)


def to_postgres_query(compiled: CompiledSql) -> PostgresQuery:
    c = require_compiled(compiled, PostgresDialect.name)
    return PostgresQuery(text=_join_with_placeholders(c.strings), values=c.values)


class PostgresDialect:
    name = "postgres"
    paramstyle = "numeric_dollar"

    def render(self, compiled: CompiledSql) -> PostgresQuery:
        return to_postgres_query(compiled)


register(PostgresDialect())
