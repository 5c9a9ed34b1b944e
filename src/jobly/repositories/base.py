"""Base repository over the parameterized query executor."""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.db.executor import QueryExecutor
from jobly.errors.exceptions import ValidationError, WriteRejectedError

logger = logging.getLogger(__name__)

# A predicate contributor looks at the criteria, may append one value to the
# running parameter list, and returns its clause (or None to contribute nothing).
Predicate = Callable[[Mapping[str, Any], list[Any]], str | None]


StoreError = SQLAlchemyError | OverflowError


def write_failure_reason(exc: StoreError) -> str:
    """Classify a store error raised during a write.

    OverflowError comes from the driver when an int does not fit the column.
    """
    if isinstance(exc, IntegrityError):
        return "constraint_violation"
    if isinstance(exc, (DataError, OverflowError)):
        return "invalid_value"
    return "unknown"


def build_where(
    predicates: Sequence[Predicate],
    criteria: Mapping[str, Any],
    params: list[Any],
) -> str:
    """Run each contributor in order and AND together whatever they add.

    Returns an empty string when no contributor added a clause.
    """
    clauses = []
    for predicate in predicates:
        clause = predicate(criteria, params)
        if clause:
            clauses.append(clause)
    if not clauses:
        return ""
    return " WHERE " + " AND ".join(clauses)


def check_criteria(criteria: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = sorted(set(criteria) - allowed)
    if unknown:
        raise ValidationError(
            f"Unsupported search criteria: {', '.join(unknown)}",
            details={"allowed": sorted(allowed)},
        )


class BaseRepository:
    """Generic async repository issuing raw parameterized SQL."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.executor = QueryExecutor(session)

    async def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        return await self.executor.execute(sql, params)

    async def reject_write(self, exc: StoreError, message: str) -> WriteRejectedError:
        """Roll back after a failed write and build the error to raise."""
        await self.session.rollback()
        reason = write_failure_reason(exc)
        logger.warning("%s (%s): %s", message, reason, getattr(exc, "orig", exc))
        return WriteRejectedError(message, reason=reason)

    async def reject_input(self, exc: StoreError, message: str) -> ValidationError:
        """Roll back after a failed statement and report it as bad input."""
        await self.session.rollback()
        cause = getattr(exc, "orig", exc)
        logger.info("%s: %s", message, cause)
        return ValidationError(f"{message}. {cause}")
