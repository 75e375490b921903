from typing import Any, List

import pytest

from sqlfrag import (
    CompiledSql,
    FragmentDepthError,
    SqlFragment,
    compile_fragment,
    is_fragment,
    splice_strings,
    sql,
)
from sqlfrag.dialects import to_unsafe_string


def _substitute(f: Any) -> str:
    """Render a fragment tree by direct textual substitution, no splicing."""
    out = [f.strings[0]]
    for v, s in zip(f.values, f.strings[1:]):
        out.append(_substitute(v) if is_fragment(v) else str(v))
        out.append(s)
    return "".join(out)


def _scalars(f: Any) -> List[Any]:
    out: List[Any] = []
    for v in f.values:
        out.extend(_scalars(v) if is_fragment(v) else [v])
    return out


def _tree() -> SqlFragment:
    empty = sql(["now()"])
    name = sql(["name = ", ""], "bob")
    cond = sql(["(", " or ", " or age > ", ")"], name, sql([""]), 30)
    nested = sql(["id in (select id from u where ", " and ", ")"], cond, sql(["x = ", ""], sql(["", ""], 3)))
    return sql(["select ", ", ", " from t where ", " limit ", ""], empty, 1, nested, 10)


def test_scalar_only():
    c = compile_fragment(sql(["a", "b"], 1))
    assert c == CompiledSql(["a", "b"], [1])


def test_single_nested_fragment():
    inner = sql(["p", "q"], 5)
    c = compile_fragment(sql(["x", "y"], inner))
    assert c.strings == ("xp", "qy")
    assert c.values == (5,)


def test_nested_then_scalar_sibling():
    inner = sql(["1", "2"], 10)
    f = sql(["a", "b", "c"], inner, 20)
    c = compile_fragment(f)
    assert c.strings == ("a1", "2b", "c")
    assert c.values == (10, 20)
    assert to_unsafe_string(c) == _substitute(f) == "a1102b20c"


def test_scalar_then_nested_sibling():
    f = sql(["a", "b", "c"], 20, sql(["1", "2"], 10))
    c = compile_fragment(f)
    assert c.strings == ("a", "b1", "2c")
    assert c.values == (20, 10)


def test_zero_parameter_child_merges_both_sides():
    f = sql(["select ", " from t"], sql(["literal-only"]))
    c = compile_fragment(f)
    assert c.strings == ("select literal-only from t",)
    assert c.values == ()


def test_zero_parameter_child_between_scalars():
    f = sql(["", " + ", " + ", ""], 1, sql(["0"]), 2)
    c = compile_fragment(f)
    assert c.strings == ("", " + 0 + ", "")
    assert c.values == (1, 2)
    assert to_unsafe_string(c) == "1 + 0 + 2"


def test_adjacent_nested_fragments():
    f = sql(["[", "", "]"], sql(["a", "b"], 1), sql(["c", "d"], 2))
    c = compile_fragment(f)
    assert c.strings == ("[a", "bc", "d]")
    assert c.values == (1, 2)


def test_multi_value_child():
    f = sql(["<", ">"], sql(["a", "b", "c", "d"], 1, 2, 3))
    c = compile_fragment(f)
    assert c.strings == ("<a", "b", "c", "d>")
    assert c.values == (1, 2, 3)


def test_deep_tree_matches_direct_substitution():
    f = _tree()
    c = compile_fragment(f)
    assert to_unsafe_string(c) == _substitute(f)
    assert list(c.values) == _scalars(f) == [1, "bob", 30, 3, 10]
    assert len(c.strings) == len(c.values) + 1
    assert not any(is_fragment(v) for v in c.values)


def test_compiled_child_is_spliced():
    child = compile_fragment(sql(["p", "q"], sql(["[", "]"], 5)))
    c = compile_fragment(sql(["x", "y"], child))
    assert c.strings == ("xp[", "]qy")
    assert c.values == (5,)


def test_idempotent():
    once = compile_fragment(_tree())
    twice = compile_fragment(once)
    assert twice == once
    assert twice is not once


def test_input_not_mutated():
    f = _tree()
    before = (f.strings, f.values)
    compile_fragment(f)
    assert (f.strings, f.values) == before


def test_fragment_value_may_be_reused():
    shared = sql(["id = ", ""], 1)
    c = compile_fragment(sql(["", " or ", ""], shared, shared))
    assert c.strings == ("id = ", " or id = ", "")
    assert c.values == (1, 1)


def test_max_depth_allows_exact_depth():
    f = sql(["", ""], sql(["", ""], sql(["x"])))
    assert compile_fragment(f, max_depth=2).strings == ("x",)


def test_max_depth_exceeded_raises():
    f = sql(["", ""], sql(["", ""], sql(["x"])))
    with pytest.raises(FragmentDepthError, match="max_depth=1"):
        compile_fragment(f, max_depth=1)


def test_splice_strings_joins_boundaries():
    dst = ["a", "b", "c"]
    splice_strings(1, ["x", "y", "z"], dst)
    assert dst == ["a", "bx", "y", "zc"]


def test_splice_strings_single_string_source():
    dst = ["a", "b", "c"]
    splice_strings(0, ["-"], dst)
    assert dst == ["a-b", "c"]


def test_nesting_past_recursion_limit_raises_depth_error():
    f = sql(["x"])
    for _ in range(5000):
        f = sql(["(", ")"], f)
    with pytest.raises(FragmentDepthError, match="recursion limit") as exc:
        compile_fragment(f)
    assert exc.value.problem.code == "SQLFRAG_MAX_DEPTH_EXCEEDED"
