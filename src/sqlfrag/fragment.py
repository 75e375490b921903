"""
Fragment data model.

An SQL fragment is a pair of sequences: literal text segments and the
parameter values that sit between them. ``strings[0] + v0 + strings[1] + v1 ...
+ strings[n]`` is the text it stands for, so there is always exactly one more
string than there are values.

Two states exist as two types:

- SqlFragment: raw, as written by the caller. Values may be fragments.
- CompiledSql: flattened by ``compile_fragment``. Values are never fragments,
  and only CompiledSql is accepted by dialects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Tuple

from .errors import FragmentArityError, SqlFragProblem, UncompiledFragmentError


def _check_arity(kind: str, strings: Tuple[str, ...], values: Tuple[Any, ...]) -> None:
    if len(strings) != len(values) + 1:
        raise FragmentArityError(
            SqlFragProblem(
                code="SQLFRAG_ARITY_MISMATCH",
                category="fragment",
                message=(
                    f"{kind} needs exactly one more string than values, "
                    f"got {len(strings)} strings and {len(values)} values"
                ),
                details={"strings": len(strings), "values": len(values)},
                remediation="Pass n+1 literal segments for n values; use '' for empty segments.",
            )
        )


@dataclass(frozen=True)
class SqlFragment:
    """Raw fragment. Values may hold nested fragments of either state."""

    strings: Tuple[str, ...]
    values: Tuple[Any, ...]

    def __init__(self, strings: Iterable[str], values: Iterable[Any] = ()) -> None:
        s = tuple(strings)
        v = tuple(values)
        _check_arity("SqlFragment", s, v)
        object.__setattr__(self, "strings", s)
        object.__setattr__(self, "values", v)


@dataclass(frozen=True)
class CompiledSql:
    """Flattened fragment, the only input dialects accept."""

    strings: Tuple[str, ...]
    values: Tuple[Any, ...]

    def __init__(self, strings: Iterable[str], values: Iterable[Any] = ()) -> None:
        s = tuple(strings)
        v = tuple(values)
        _check_arity("CompiledSql", s, v)
        nested = [i for i, x in enumerate(v) if is_fragment(x)]
        if nested:
            raise UncompiledFragmentError(
                SqlFragProblem(
                    code="SQLFRAG_NESTED_IN_COMPILED",
                    category="fragment",
                    message="CompiledSql values must not contain fragments",
                    details={"positions": nested},
                    remediation="Build an SqlFragment and pass it through compile_fragment().",
                )
            )
        object.__setattr__(self, "strings", s)
        object.__setattr__(self, "values", v)


def is_fragment(value: Any) -> bool:
    return isinstance(value, (SqlFragment, CompiledSql))


def sql(strings: Sequence[str], *values: Any) -> SqlFragment:
    """
    Build a raw fragment from literal segments and the values between them.

    ``sql(["select * from t where id = ", ""], 42)`` is the fragment for
    ``select * from t where id = <42>``. A value may be another fragment, in
    which case its text is spliced into that slot when compiled.
    """
    return SqlFragment(strings, values)


def from_template(template: Any) -> SqlFragment:
    """
    Build a raw fragment from a template string (``t"..."``, Python 3.14+).

    Only ``template.strings`` and ``template.interpolations[i].value`` are
    read; conversions and format specs are ignored since values are bound,
    not formatted.
    """
    return SqlFragment(template.strings, (i.value for i in template.interpolations))
