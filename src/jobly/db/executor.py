"""Parameterized SQL execution over an async SQLAlchemy session.

Repositories write SQL with PostgreSQL-style positional placeholders
(``$1``, ``$2``, ...) and hand the values over separately. The executor
maps each ``$n`` onto a named bind ``:pn`` so the same statement text runs
through SQLAlchemy on both asyncpg and aiosqlite.
"""

import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

_PLACEHOLDER = re.compile(r"\$(\d+)")
_ILIKE = re.compile(r"\bILIKE\b", re.IGNORECASE)


def to_named_binds(sql: str, params: Sequence[Any]) -> tuple[str, dict[str, Any]]:
    """Rewrite ``$n`` placeholders to ``:pn`` and key the values accordingly.

    Raises:
        ValueError: If a placeholder points past the end of ``params``.
    """
    def _replace(match: re.Match) -> str:
        position = int(match.group(1))
        if position < 1 or position > len(params):
            raise ValueError(
                f"Placeholder ${position} has no value ({len(params)} parameter(s) given)"
            )
        return f":p{position}"

    named_sql = _PLACEHOLDER.sub(_replace, sql)
    binds = {f"p{i}": value for i, value in enumerate(params, start=1)}
    return named_sql, binds


class QueryExecutor:
    """Runs parameterized statements and returns rows as plain dicts."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def dialect(self) -> str:
        return self.session.get_bind().dialect.name

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        named_sql, binds = to_named_binds(sql, params)
        if self.dialect == "sqlite":
            # SQLite's LIKE is case-insensitive for ASCII and has no ILIKE
            named_sql = _ILIKE.sub("LIKE", named_sql)
        result = await self.session.execute(text(named_sql), binds)
        if not result.returns_rows:
            return []
        return [dict(row) for row in result.mappings().all()]
