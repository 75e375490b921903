"""
Configuration loading for sqlfrag.

Loads YAML/JSON config files and returns a typed config object.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError, SqlFragProblem


def _config_error(message: str, details: Dict[str, Any], remediation: str) -> ConfigError:
    return ConfigError(
        SqlFragProblem(
            code="SQLFRAG_CONFIG_INVALID",
            category="config",
            message=message,
            details=details,
            remediation=remediation,
        )
    )


@dataclass(frozen=True)
class SqlFragConfig:
    """Rendering defaults."""

    dialect: str = "postgres"
    placeholder: Optional[str] = None  # None keeps the dialect's own token
    max_depth: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> SqlFragConfig:
        dialect = str(d.get("dialect", "postgres") or "").strip()
        if not dialect:
            raise _config_error(
                "dialect must be a non-empty string",
                {"dialect": d.get("dialect")},
                "Set 'dialect' to one of: unsafe, postgres, mysql.",
            )

        placeholder = d.get("placeholder")
        if placeholder is not None and (not isinstance(placeholder, str) or not placeholder):
            raise _config_error(
                "placeholder must be a non-empty string or null",
                {"placeholder": placeholder},
                "Set 'placeholder' to the driver's token, e.g. '?' or '%s'.",
            )

        max_depth = d.get("max_depth")
        if max_depth is not None:
            if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
                raise _config_error(
                    "max_depth must be a non-negative integer or null",
                    {"max_depth": max_depth},
                    "Remove 'max_depth' or set it to an integer >= 0.",
                )

        return cls(dialect=dialect, placeholder=placeholder, max_depth=max_depth)


def load_config(path: str) -> SqlFragConfig:
    """
    Load a configuration from a YAML or JSON file.

    The file must contain a mapping; missing keys take the defaults of
    SqlFragConfig.
    """
    p = Path(path)
    if not p.exists():
        raise _config_error(
            f"Config not found: {path}",
            {"path": path},
            "Verify the path is correct and the file exists.",
        )
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(
            SqlFragProblem(
                code="SQLFRAG_CONFIG_PARSE_ERROR",
                category="config",
                message=f"Failed to parse config: {path}",
                details={"path": path, "error": repr(e)},
                remediation="Ensure the file is valid YAML or JSON encoded in UTF-8.",
            ),
            cause=e,
        )
    if obj is None:
        obj = {}
    if not isinstance(obj, dict):
        raise _config_error(
            f"Config file must be a YAML/JSON object, got {type(obj).__name__}",
            {"path": path, "type": type(obj).__name__},
            "Wrap the config in a mapping at the top-level.",
        )
    return SqlFragConfig.from_dict(obj)
