from __future__ import annotations

import logging
from typing import Any, Optional

from ..compiler import Fragment, compile_fragment
from .registry import get as get_dialect

logger = logging.getLogger(__name__)


def emit_sql(fragment: Fragment, dialect_name: str, *, max_depth: Optional[int] = None) -> Any:
    """Compile ``fragment`` and render it with the dialect registered as ``dialect_name``."""
    dialect = get_dialect(dialect_name)
    compiled = compile_fragment(fragment, max_depth=max_depth)
    logger.debug("rendering %d values with dialect %s", len(compiled.values), dialect.name)
    return dialect.render(compiled)
