# src/sqlfrag/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .compiler import compile_fragment
from .config import SqlFragConfig, load_config
from .dialects import MySqlDialect, available, get as get_dialect
from .dialects.base import Dialect
from .errors import ExitCode, FragmentDepthError, SqlFragException, SqlFragProblem, problem_to_dict
from .fragment import SqlFragment


# =============================================================================
# Helpers: document IO + formatting
# =============================================================================

def _print_payload(payload: Dict[str, Any], fmt: str) -> None:
    if fmt == "json":
        print(json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True, default=str))
    elif fmt == "jsonl":
        print(json.dumps(payload, ensure_ascii=False, sort_keys=True, default=str))
    else:
        # "text": caller prints human-friendly output
        pass


def _document_error(message: str, *, details: Dict[str, Any]) -> SqlFragException:
    return SqlFragException(
        SqlFragProblem(
            code="SQLFRAG_DOCUMENT_INVALID",
            category="fragment",
            message=message,
            details=details,
            remediation=(
                "A fragment document is a mapping with 'strings' (list of text) and "
                "'values' (list); nest fragments as mappings with their own 'strings'."
            ),
        ),
        ExitCode.FRAGMENT_INVALID,
    )


def _load_document(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise _document_error(f"Fragment document not found: {path}", details={"path": path})
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SqlFragException(
            SqlFragProblem(
                code="SQLFRAG_DOCUMENT_PARSE_ERROR",
                category="fragment",
                message=f"Failed to parse fragment document: {path}",
                details={"path": path, "error": repr(e)},
                remediation="Ensure the file is valid YAML or JSON encoded in UTF-8.",
            ),
            ExitCode.FRAGMENT_INVALID,
            cause=e,
        )
    if not isinstance(obj, dict):
        raise _document_error(
            f"Fragment document must be an object at top-level: {path}",
            details={"path": path, "type": type(obj).__name__},
        )
    return obj


def _to_fragment(obj: Dict[str, Any], where: str = "$") -> SqlFragment:
    """
    Build an SqlFragment from a parsed document.

    {
      "strings": ["select * from t where ", ""],
      "values": [{"strings": ["id = ", ""], "values": [42]}]
    }
    """
    strings = obj.get("strings")
    if not isinstance(strings, list) or not all(isinstance(s, str) for s in strings):
        raise _document_error(f"{where}.strings must be a list of strings", details={"path": where})
    values = obj.get("values", []) or []
    if not isinstance(values, list):
        raise _document_error(f"{where}.values must be a list", details={"path": where})

    out: List[Any] = []
    for i, v in enumerate(values):
        if isinstance(v, dict) and "strings" in v:
            out.append(_to_fragment(v, f"{where}.values[{i}]"))
        else:
            out.append(v)
    return SqlFragment(strings, out)


def _resolve_dialect(name: str, cfg: SqlFragConfig) -> Dialect:
    dialect = get_dialect(name)
    if (
        isinstance(dialect, MySqlDialect)
        and cfg.placeholder is not None
        and dialect.placeholder != cfg.placeholder
    ):
        return MySqlDialect(placeholder=cfg.placeholder, name=dialect.name)
    return dialect


def _result_to_dict(result: Any) -> Any:
    if is_dataclass(result):
        d = asdict(result)
        d["values"] = list(d["values"])
        return d
    return result


# =============================================================================
# Commands
# =============================================================================

def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config(args.config) if args.config else SqlFragConfig()
    dialect = _resolve_dialect(args.dialect or cfg.dialect, cfg)

    try:
        fragment = _to_fragment(_load_document(args.fragment))
    except RecursionError as e:
        raise FragmentDepthError(
            SqlFragProblem(
                code="SQLFRAG_MAX_DEPTH_EXCEEDED",
                category="fragment",
                message=f"Fragment document nests too deeply to load: {args.fragment}",
                details={"path": args.fragment, "recursion_limit": sys.getrecursionlimit()},
                remediation="Flatten part of the document into fewer nesting levels.",
            ),
            cause=e,
        )
    compiled = compile_fragment(fragment, max_depth=cfg.max_depth)
    result = dialect.render(compiled)

    if args.format in ("json", "jsonl"):
        _print_payload({"ok": True, "dialect": dialect.name, "result": _result_to_dict(result)}, args.format)
    elif isinstance(result, str):
        print(result)
    else:
        d = _result_to_dict(result)
        values = d.pop("values")
        for text in d.values():
            print(text)
        print(f"-- values: {json.dumps(values, ensure_ascii=False, default=str)}")
    return 0


def cmd_dialects(args: argparse.Namespace) -> int:
    rows = {name: getattr(d, "paramstyle", "") for name, d in sorted(available().items())}
    if args.format in ("json", "jsonl"):
        _print_payload({"ok": True, "dialects": rows}, args.format)
    else:
        for name, style in rows.items():
            print(f"{name}\t{style}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sqlfrag", description="Compile and render nested SQL fragments.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd")

    def _add_format(p: argparse.ArgumentParser) -> None:
        p.add_argument("--format", choices=["text", "json", "jsonl"], default="text")

    p_render = sub.add_parser("render", help="Compile a fragment document and render it")
    p_render.add_argument("--fragment", required=True, help="YAML/JSON fragment document")
    p_render.add_argument("--dialect", default=None, help="Dialect name (overrides config)")
    p_render.add_argument("--config", default=None, help="YAML/JSON config file")
    _add_format(p_render)
    p_render.set_defaults(func=cmd_render)

    p_dialects = sub.add_parser("dialects", help="List registered dialects")
    _add_format(p_dialects)
    p_dialects.set_defaults(func=cmd_dialects)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point used by the console script: `from sqlfrag.cli import main`."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "cmd", None):
        parser.print_help()
        return 2

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        return int(args.func(args))
    except SqlFragException as e:
        payload = {"ok": False, "error": problem_to_dict(e.problem), "exit_code": int(e.exit_code)}
        fmt = getattr(args, "format", "text")
        if fmt in ("json", "jsonl"):
            _print_payload(payload, fmt)
        else:
            err = payload["error"]
            print(f"ERROR[{err.get('code', 'SQLFRAG_ERROR')}]: {err.get('message')}", file=sys.stderr)
            if err.get("remediation"):
                print(f"REMEDIATION: {err['remediation']}", file=sys.stderr)
            print(f"DETAILS: {err.get('details', {})}", file=sys.stderr)
        return int(e.exit_code)


if __name__ == "__main__":
    raise SystemExit(main())
