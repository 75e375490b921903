import pytest

from sqlfrag import CompiledSql, UncompiledFragmentError, UnknownDialectError, compile_fragment, sql
from sqlfrag.dialects import (
    MySqlDialect,
    MySqlQuery,
    PostgresQuery,
    available,
    emit_sql,
    get,
    register,
    to_mysql_query,
    to_postgres_query,
    to_unsafe_string,
)


def _compiled() -> CompiledSql:
    return CompiledSql(["select ", "", "from t"], [1, 2])


def test_postgres_numbered_placeholders():
    q = to_postgres_query(_compiled())
    assert q == PostgresQuery(text="select $1$2from t", values=(1, 2))


def test_postgres_numbering_follows_values():
    c = compile_fragment(sql(["a = ", " and b in (", ")"], "x", sql(["", ", ", ""], 1, 2)))
    q = to_postgres_query(c)
    assert q.text == "a = $1 and b in ($2, $3)"
    assert q.values == ("x", 1, 2)


def test_postgres_no_values():
    assert to_postgres_query(CompiledSql(["select 1"])).text == "select 1"


def test_mysql_single_placeholder():
    q = to_mysql_query(_compiled())
    assert q == MySqlQuery(sql="select ??from t", values=(1, 2))


def test_mysql_custom_placeholder():
    q = MySqlDialect(placeholder="%s").render(_compiled())
    assert q.sql == "select %s%sfrom t"


def test_mysql_empty_placeholder_rejected():
    with pytest.raises(ValueError):
        MySqlDialect(placeholder="")


def test_unsafe_inlines_values():
    assert to_unsafe_string(_compiled()) == "select 12from t"


@pytest.mark.parametrize("render", [to_unsafe_string, to_postgres_query, to_mysql_query])
def test_renderers_reject_raw_fragment(render):
    with pytest.raises(UncompiledFragmentError, match="requires a CompiledSql"):
        render(sql(["a", "b"], 1))


def test_registry_has_builtin_dialects():
    assert {"unsafe", "postgres", "mysql"} <= set(available())


def test_registry_lookup_is_case_insensitive():
    assert get("PostGres").name == "postgres"


def test_unknown_dialect():
    with pytest.raises(UnknownDialectError, match="Unknown dialect 'oracle'"):
        get("oracle")


def test_register_requires_name():
    class Nameless:
        name = ""

    with pytest.raises(ValueError, match="non-empty .name"):
        register(Nameless())


def test_register_custom_dialect():
    register(MySqlDialect(placeholder="%s", name="pymysql-test"))
    assert get("pymysql-test").render(_compiled()).sql == "select %s%sfrom t"


def test_emit_sql_compiles_and_renders():
    f = sql(["select * from t where ", ""], sql(["id = ", ""], 42))
    assert emit_sql(f, "postgres") == PostgresQuery(text="select * from t where id = $1", values=(42,))
    assert emit_sql(f, "unsafe") == "select * from t where id = 42"


def test_register_rejects_taken_name():
    with pytest.raises(ValueError, match="already registered"):
        register(MySqlDialect(placeholder="%s"))
    assert get("mysql").placeholder == "?"


def test_register_replace_overrides():
    register(MySqlDialect(name="replace-test"))
    register(MySqlDialect(placeholder="%s", name="Replace-Test"), replace=True)
    assert get("replace-test").placeholder == "%s"
