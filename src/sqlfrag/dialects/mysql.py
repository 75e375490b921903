from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from ..fragment import CompiledSql
from .base import require_compiled
from .registry import register


@dataclass(frozen=True)
class MySqlQuery:
    sql: str
    values: Tuple[Any, ...]


def to_mysql_query(compiled: CompiledSql, placeholder: str = "?") -> MySqlQuery:
    c = require_compiled(compiled, MySqlDialect.name)
    return MySqlQuery(sql=placeholder.join(c.strings), values=c.values)


class MySqlDialect:
    """
    Single-placeholder dialect. The token defaults to ``?``; drivers using the
    DB-API "format" style can build ``MySqlDialect(placeholder="%s")``.
    """

    name = "mysql"

    def __init__(self, placeholder: str = "?", name: str = "mysql") -> None:
        if not placeholder:
            raise ValueError("placeholder must be a non-empty string")
        self.placeholder = placeholder
        self.name = name
        self.paramstyle = "qmark" if placeholder == "?" else "format"

    def render(self, compiled: CompiledSql) -> MySqlQuery:
        return to_mysql_query(compiled, self.placeholder)


register(MySqlDialect())
