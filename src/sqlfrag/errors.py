from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class ExitCode(int, Enum):
    OK = 0
    CONFIG_INVALID = 10
    FRAGMENT_INVALID = 20
    RUNTIME_ERROR = 30
    INTERNAL_ERROR = 50


@dataclass(frozen=True)
class SqlFragProblem:
    code: str                 # stable machine code, e.g. "SQLFRAG_ARITY_MISMATCH"
    category: str             # "fragment" | "dialect" | "config" | "internal"
    message: str              # short human message
    details: Dict[str, Any]   # structured details for debugging
    remediation: Optional[str] = None  # actionable next step


class SqlFragException(Exception):
    exit_code = ExitCode.INTERNAL_ERROR

    def __init__(
        self,
        problem: SqlFragProblem,
        exit_code: Optional[ExitCode] = None,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(problem.message)
        self.problem = problem
        if exit_code is not None:
            self.exit_code = exit_code
        if cause is not None:
            self.__cause__ = cause


class FragmentArityError(SqlFragException):
    """strings/values lengths violate len(strings) == len(values) + 1."""

    exit_code = ExitCode.FRAGMENT_INVALID


class UncompiledFragmentError(SqlFragException):
    """A renderer was handed something other than a CompiledSql."""

    exit_code = ExitCode.FRAGMENT_INVALID


class FragmentDepthError(SqlFragException):
    exit_code = ExitCode.FRAGMENT_INVALID


class UnknownDialectError(SqlFragException):
    exit_code = ExitCode.CONFIG_INVALID


class ConfigError(SqlFragException):
    exit_code = ExitCode.CONFIG_INVALID


def problem_to_dict(p: SqlFragProblem) -> Dict[str, Any]:
    d = asdict(p)
    if d.get("remediation") is None:
        d.pop("remediation", None)
    return d
