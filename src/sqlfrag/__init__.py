"""
sqlfrag: compose parameterized SQL from nested fragments and render it for a
database driver.

    >>> from sqlfrag import sql, compile_fragment
    >>> from sqlfrag.dialects import to_postgres_query
    >>> where = sql(["id = ", ""], 42)
    >>> to_postgres_query(compile_fragment(sql(["select * from t where ", ""], where)))
    PostgresQuery(text='select * from t where id = $1', values=(42,))
"""

from .compiler import compile_fragment, splice_strings
from .config import SqlFragConfig, load_config
from .errors import (
    ConfigError,
    ExitCode,
    FragmentArityError,
    FragmentDepthError,
    SqlFragException,
    SqlFragProblem,
    UncompiledFragmentError,
    UnknownDialectError,
)
from .fragment import CompiledSql, SqlFragment, from_template, is_fragment, sql

__all__ = [
    "compile_fragment",
    "splice_strings",
    "SqlFragConfig",
    "load_config",
    "ConfigError",
    "ExitCode",
    "FragmentArityError",
    "FragmentDepthError",
    "SqlFragException",
    "SqlFragProblem",
    "UncompiledFragmentError",
    "UnknownDialectError",
    "CompiledSql",
    "SqlFragment",
    "from_template",
    "is_fragment",
    "sql",
]
