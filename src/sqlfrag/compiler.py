"""
Flattening of nested fragments.

``compile_fragment`` walks a fragment's values left to right and, for every
value that is itself a fragment, compiles it first and splices its strings and
values into working copies of the parent's sequences. Text on either side of a
nested fragment is joined directly onto the nested fragment's first and last
strings, so no separator or placeholder appears at the join.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, List, Optional, Sequence, Union

from .errors import FragmentDepthError, SqlFragProblem
from .fragment import CompiledSql, SqlFragment, is_fragment

logger = logging.getLogger(__name__)

Fragment = Union[SqlFragment, CompiledSql]


def _depth_error(message: str, details: Dict[str, Any], *, cause: Optional[BaseException] = None) -> FragmentDepthError:
    return FragmentDepthError(
        SqlFragProblem(
            code="SQLFRAG_MAX_DEPTH_EXCEEDED",
            category="fragment",
            message=message,
            details=details,
            remediation="Raise max_depth or flatten the fragment tree before nesting it further.",
        ),
        cause=cause,
    )


def splice_strings(index: int, src: Sequence[str], dst: List[str]) -> None:
    """
    Splice (in place) the template strings ``src`` into ``dst`` at the slot
    following ``dst[index]``.

    ``dst[index]`` and ``dst[index + 1]`` are the strings on either side of
    the value being replaced. The first string of ``src`` joins the left one,
    the last joins the right one and the interior strings go in between. A
    one-string ``src`` (no values) collapses all three into ``dst[index]``.
    """
    run = [dst[index] + src[0], *src[1:]]
    run[-1] = run[-1] + dst[index + 1]
    dst[index:index + 2] = run


def compile_fragment(fragment: Fragment, *, max_depth: Optional[int] = None) -> CompiledSql:
    """
    Flatten ``fragment`` into a CompiledSql with no nested fragments.

    Recurses once per nesting level. ``max_depth`` bounds that recursion and
    raises FragmentDepthError past it. Left as None, hitting the interpreter's
    recursion limit raises FragmentDepthError as well.
    """
    try:
        compiled = _compile(fragment, 0, max_depth)
    except RecursionError as e:
        raise _depth_error(
            "Fragment nesting exceeds the interpreter recursion limit",
            {"recursion_limit": sys.getrecursionlimit()},
            cause=e,
        )
    logger.debug("compiled fragment: %d strings, %d values", len(compiled.strings), len(compiled.values))
    return compiled


def _compile(fragment: Fragment, depth: int, max_depth: Optional[int]) -> CompiledSql:
    if isinstance(fragment, CompiledSql):
        return CompiledSql(fragment.strings, fragment.values)
    if max_depth is not None and depth > max_depth:
        raise _depth_error(f"Fragment nesting deeper than max_depth={max_depth}", {"max_depth": max_depth})

    strings: List[str] = list(fragment.strings)
    values: List[Any] = list(fragment.values)

    # strings[pos] always precedes values[pos] in the working copies
    pos = 0
    for v in fragment.values:
        if is_fragment(v):
            child = _compile(v, depth + 1, max_depth)
            splice_strings(pos, child.strings, strings)
            values[pos:pos + 1] = child.values
            pos += len(child.values)
        else:
            pos += 1

    return CompiledSql(strings, values)
