"""
Inline-values dialect.

Values are spliced into the text with ``str()``, with no quoting or escaping.
The output is for people reading logs and test failures; never send it to a
database.
"""

from __future__ import annotations

from ..fragment import CompiledSql
from .base import require_compiled
from .registry import register


def to_unsafe_string(compiled: CompiledSql) -> str:
    c = require_compiled(compiled, UnsafeDialect.name)
    parts = [c.strings[0]]
    for value, s in zip(c.values, c.strings[1:]):
        parts.append(str(value))
        parts.append(s)
    return "".join(parts)


class UnsafeDialect:
    name = "unsafe"
    paramstyle = "inline"

    def render(self, compiled: CompiledSql) -> str:
        return to_unsafe_string(compiled)


register(UnsafeDialect())
