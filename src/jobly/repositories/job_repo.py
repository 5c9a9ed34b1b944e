"""Job repository.

Every statement is raw SQL with positional parameters. Read operations join
``companies`` to attach ``companyName``; write operations return the job row
alone.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import DataError, SQLAlchemyError

from jobly.db.models.job import JobRow
from jobly.errors.exceptions import NotFoundError, ValidationError, WriteRejectedError
from jobly.repositories.base import BaseRepository, Predicate, build_where, check_criteria
from jobly.repositories.sql import check_rename_map, sql_for_partial_update

logger = logging.getLogger(__name__)

# title, salary and equity share their column names, so the map stays empty.
JOB_UPDATE_FIELDS = ("title", "salary", "equity")
JOB_JS_TO_SQL: dict[str, str] = {}

check_rename_map("jobs", JOB_UPDATE_FIELDS, JOB_JS_TO_SQL, JobRow.__table__.columns.keys())

FIND_CRITERIA = frozenset({"minSalary", "hasEquity", "title", "companyHandle"})

_RETURNING = 'RETURNING id, title, salary, equity, company_handle AS "companyHandle"'

_SELECT_WITH_COMPANY = """SELECT j.id,
                 j.title,
                 j.salary,
                 j.equity,
                 j.company_handle AS "companyHandle",
                 c.name AS "companyName"
          FROM jobs j
          LEFT JOIN companies AS c ON c.handle = j.company_handle"""


def _min_salary(criteria: Mapping[str, Any], params: list[Any]) -> str | None:
    if criteria.get("minSalary") is None:
        return None
    params.append(criteria["minSalary"])
    return f"salary >= ${len(params)}"


def _has_equity(criteria: Mapping[str, Any], params: list[Any]) -> str | None:
    # hasEquity=False means "don't filter", not "equity = 0"
    if criteria.get("hasEquity") is True:
        return "equity > 0"
    return None


def _title_like(criteria: Mapping[str, Any], params: list[Any]) -> str | None:
    if criteria.get("title") is None:
        return None
    params.append(f"%{criteria['title']}%")
    return f"title ILIKE ${len(params)}"


def _company_handle(criteria: Mapping[str, Any], params: list[Any]) -> str | None:
    if criteria.get("companyHandle") is None:
        return None
    params.append(criteria["companyHandle"])
    return f"company_handle = ${len(params)}"


# Order fixes the parameter numbering.
FIND_PREDICATES: tuple[Predicate, ...] = (
    _min_salary,
    _has_equity,
    _title_like,
    _company_handle,
)


def build_find_query(criteria: Mapping[str, Any] | None = None) -> tuple[str, list[Any]]:
    """Compose the job search statement and its parameters."""
    criteria = criteria or {}
    check_criteria(criteria, FIND_CRITERIA)
    params: list[Any] = []
    sql = _SELECT_WITH_COMPANY + build_where(FIND_PREDICATES, criteria, params)
    return sql + " ORDER BY title", params


# jobs.id is a 32-bit SERIAL
ID_MIN, ID_MAX = -(2**31), 2**31 - 1
_ID_DIGITS = re.compile(r"-?[0-9]+")


def parse_job_id(job_id: Any) -> int:
    """Coerce a job id to an int.

    Integers, integral floats and ASCII digit strings are accepted. Ids that
    cannot name a stored job (fractional, non-numeric or outside the id
    column's range) raise NotFoundError. Other types and the empty string
    raise ValidationError.
    """
    if isinstance(job_id, bool) or not isinstance(job_id, (int, float, str)):
        raise ValidationError(f"Invalid job id: {job_id!r}")
    if isinstance(job_id, float):
        if not job_id.is_integer():
            raise NotFoundError("Job", job_id)
        parsed = int(job_id)
    elif isinstance(job_id, str):
        if not job_id.strip():
            raise ValidationError("Invalid job id: empty string")
        if not _ID_DIGITS.fullmatch(job_id):
            raise NotFoundError("Job", job_id)
        parsed = int(job_id)
    else:
        parsed = job_id
    if not ID_MIN <= parsed <= ID_MAX:
        raise NotFoundError("Job", job_id)
    return parsed


def job_record(row: dict[str, Any]) -> dict[str, Any]:
    """Shape a result row as the canonical job record."""
    equity = row.get("equity")
    if equity is not None and not isinstance(equity, str):
        row["equity"] = str(equity)
    return row


class JobRepository(BaseRepository):
    """CRUD gateway for the ``jobs`` table."""

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a job.

        ``data`` holds ``title``, ``salary``, ``equity`` and ``companyHandle``.
        Returns ``{id, title, salary, equity, companyHandle}``.

        Raises:
            WriteRejectedError: For an empty title or any store failure
                (constraint violation, unknown company, bad value).
        """
        if not data.get("title"):
            logger.warning("Job insert rejected: empty title")
            raise WriteRejectedError("Create job failed", reason="invalid_title")

        try:
            rows = await self.query(
                f"""INSERT INTO jobs (title, salary, equity, company_handle)
                    VALUES ($1, $2, $3, $4)
                    {_RETURNING}""",
                [data["title"], data.get("salary"), data.get("equity"), data.get("companyHandle")],
            )
        except (SQLAlchemyError, OverflowError) as exc:
            raise await self.reject_write(exc, "Create job failed") from exc
        return job_record(rows[0])

    async def get(self, job_id: Any) -> dict[str, Any]:
        """Fetch one job with its company name.

        Accepts ``1``, ``1.0`` or ``"1"``.
        """
        parsed = parse_job_id(job_id)
        try:
            rows = await self.query(_SELECT_WITH_COMPANY + " WHERE id = $1", [parsed])
        except DataError as exc:
            # the store refused the id value itself
            await self.session.rollback()
            raise NotFoundError("Job", job_id) from exc
        except (SQLAlchemyError, OverflowError) as exc:
            raise await self.reject_input(exc, "Job lookup failed") from exc
        if not rows:
            raise NotFoundError("Job", job_id)
        return job_record(rows[0])

    async def find(self, criteria: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Search jobs, ordered by title.

        Criteria (all optional, ANDed):
            minSalary: salary >= value
            hasEquity: only True filters, to equity > 0
            title: case-insensitive substring
            companyHandle: exact match
        """
        sql, params = build_find_query(criteria)
        try:
            rows = await self.query(sql, params)
        except (SQLAlchemyError, OverflowError) as exc:
            raise await self.reject_input(exc, "Job search failed") from exc
        return [job_record(row) for row in rows]

    async def update(self, job_id: Any, data: Mapping[str, Any]) -> dict[str, Any]:
        """Partial update of title, salary and/or equity.

        ``data`` is checked before ``job_id``, so an empty or unknown-field
        payload is InvalidInput whatever the id.

        Returns ``{id, title, salary, equity, companyHandle}``.

        Raises:
            ValidationError: If ``data`` is empty or names another field.
            NotFoundError: If no job has this id.
        """
        unknown = sorted(set(data) - set(JOB_UPDATE_FIELDS))
        if unknown:
            raise ValidationError(
                f"Cannot update job fields: {', '.join(unknown)}",
                details={"allowed": list(JOB_UPDATE_FIELDS)},
            )
        set_cols, values = sql_for_partial_update(data, JOB_JS_TO_SQL)

        parsed = parse_job_id(job_id)
        id_var_idx = f"${len(values) + 1}"
        sql = f"""UPDATE jobs
                  SET {set_cols}
                  WHERE id = {id_var_idx}
                  {_RETURNING}"""
        try:
            rows = await self.query(sql, [*values, parsed])
        except (SQLAlchemyError, OverflowError) as exc:
            raise await self.reject_input(exc, "Update failed") from exc
        if not rows:
            raise NotFoundError("Job", job_id)
        return job_record(rows[0])

    async def delete(self, job_id: Any) -> dict[str, Any]:
        """Delete a job and return ``{id, title}`` of the removed row."""
        parsed = parse_job_id(job_id)
        try:
            rows = await self.query("DELETE FROM jobs WHERE id = $1 RETURNING id, title", [parsed])
        except (SQLAlchemyError, OverflowError) as exc:
            raise await self.reject_input(exc, "Deletion failed") from exc
        if not rows:
            raise NotFoundError("Job", job_id)
        return rows[0]
