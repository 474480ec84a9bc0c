"""Thin SQL client over a SQLAlchemy engine.

Statements are written with positional ``$1..$n`` placeholders and bound from
an ordered value sequence, so an ``AssignmentClause`` can be passed straight in.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


def to_named_binds(statement: str, values: Sequence[Any]) -> tuple[str, dict[str, Any]]:
    """Rewrite ``$n`` placeholders as ``:pn`` binds and key the values to match."""
    used = {int(match) for match in _PLACEHOLDER.findall(statement)}
    if used and (min(used) < 1 or max(used) > len(values)):
        raise ValueError(f"statement uses placeholders {sorted(used)} but {len(values)} values were given")
    params = {f"p{index}": value for index, value in enumerate(values, start=1)}
    return _PLACEHOLDER.sub(lambda match: f":p{match.group(1)}", statement), params


class StorageClient:
    def __init__(self, engine: Engine):
        self.engine = engine

    def execute(self, statement: str, values: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Run one statement in its own transaction and return any result rows."""
        sql, params = to_named_binds(statement, values)
        logger.debug("execute %s with %d values", " ".join(sql.split()), len(params))
        with self.engine.begin() as conn:
            result = conn.execute(text(sql), params)
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]
