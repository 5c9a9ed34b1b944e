"""Company repository."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from jobly.db.models.company import CompanyRow
from jobly.errors.exceptions import ConflictError, NotFoundError, ValidationError
from jobly.repositories.base import BaseRepository, Predicate, build_where, check_criteria
from jobly.repositories.job_repo import job_record
from jobly.repositories.sql import check_rename_map, sql_for_partial_update

COMPANY_UPDATE_FIELDS = ("name", "description", "numEmployees", "logoUrl")
COMPANY_JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

check_rename_map(
    "companies", COMPANY_UPDATE_FIELDS, COMPANY_JS_TO_SQL, CompanyRow.__table__.columns.keys()
)

FIND_CRITERIA = frozenset({"nameLike", "minEmployees", "maxEmployees"})

_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


def _name_like(criteria: Mapping[str, Any], params: list[Any]) -> str | None:
    if criteria.get("nameLike") is None:
        return None
    params.append(f"%{criteria['nameLike']}%")
    return f"name ILIKE ${len(params)}"


def _min_employees(criteria: Mapping[str, Any], params: list[Any]) -> str | None:
    if criteria.get("minEmployees") is None:
        return None
    params.append(criteria["minEmployees"])
    return f"num_employees >= ${len(params)}"


def _max_employees(criteria: Mapping[str, Any], params: list[Any]) -> str | None:
    if criteria.get("maxEmployees") is None:
        return None
    params.append(criteria["maxEmployees"])
    return f"num_employees <= ${len(params)}"


FIND_PREDICATES: tuple[Predicate, ...] = (_name_like, _min_employees, _max_employees)


def build_find_query(criteria: Mapping[str, Any] | None = None) -> tuple[str, list[Any]]:
    """Compose the company search statement and its parameters."""
    criteria = criteria or {}
    check_criteria(criteria, FIND_CRITERIA)
    low, high = criteria.get("minEmployees"), criteria.get("maxEmployees")
    if low is not None and high is not None and low > high:
        raise ValidationError("minEmployees cannot be greater than maxEmployees")
    params: list[Any] = []
    sql = f"SELECT {_COLUMNS} FROM companies" + build_where(FIND_PREDICATES, criteria, params)
    return sql + " ORDER BY name", params


class CompanyRepository(BaseRepository):
    """CRUD gateway for the ``companies`` table."""

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a company; returns ``{handle, name, description, numEmployees, logoUrl}``.

        Raises:
            ConflictError: If the handle is already taken, including when a
                concurrent insert claims it between the check and the write.
            WriteRejectedError: For any other store failure.
        """
        handle = data["handle"]
        if await self._handle_taken(handle):
            raise ConflictError(f"Duplicate company: {handle}")

        try:
            rows = await self.query(
                f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                    VALUES ($1, $2, $3, $4, $5)
                    RETURNING {_COLUMNS}""",
                [
                    handle,
                    data.get("name"),
                    data.get("description", ""),
                    data.get("numEmployees"),
                    data.get("logoUrl"),
                ],
            )
        except IntegrityError as exc:
            rejected = await self.reject_write(exc, "Create company failed")
            if await self._handle_taken(handle):
                raise ConflictError(f"Duplicate company: {handle}") from exc
            raise rejected from exc
        except (SQLAlchemyError, OverflowError) as exc:
            raise await self.reject_write(exc, "Create company failed") from exc
        return rows[0]

    async def _handle_taken(self, handle: str) -> bool:
        rows = await self.query("SELECT handle FROM companies WHERE handle = $1", [handle])
        return bool(rows)

    async def find(self, criteria: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        sql, params = build_find_query(criteria)
        try:
            return await self.query(sql, params)
        except (SQLAlchemyError, OverflowError) as exc:
            raise await self.reject_input(exc, "Company search failed") from exc

    async def get(self, handle: str) -> dict[str, Any]:
        """Fetch a company along with its jobs, ordered by id."""
        try:
            rows = await self.query(f"SELECT {_COLUMNS} FROM companies WHERE handle = $1", [handle])
            if not rows:
                raise NotFoundError("Company", handle)
            jobs = await self.query(
                """SELECT id, title, salary, equity
                   FROM jobs
                   WHERE company_handle = $1
                   ORDER BY id""",
                [handle],
            )
        except SQLAlchemyError as exc:
            raise await self.reject_input(exc, "Company lookup failed") from exc

        company = rows[0]
        company["jobs"] = [job_record(job) for job in jobs]
        return company

    async def update(self, handle: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Partial update of name, description, numEmployees and/or logoUrl."""
        unknown = sorted(set(data) - set(COMPANY_UPDATE_FIELDS))
        if unknown:
            raise ValidationError(
                f"Cannot update company fields: {', '.join(unknown)}",
                details={"allowed": list(COMPANY_UPDATE_FIELDS)},
            )

        set_cols, values = sql_for_partial_update(data, COMPANY_JS_TO_SQL)
        handle_var_idx = f"${len(values) + 1}"
        sql = f"""UPDATE companies
                  SET {set_cols}
                  WHERE handle = {handle_var_idx}
                  RETURNING {_COLUMNS}"""
        try:
            rows = await self.query(sql, [*values, handle])
        except (SQLAlchemyError, OverflowError) as exc:
            raise await self.reject_input(exc, "Update failed") from exc
        if not rows:
            raise NotFoundError("Company", handle)
        return rows[0]

    async def remove(self, handle: str) -> None:
        """Delete a company; its jobs go with it."""
        try:
            rows = await self.query("DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
        except SQLAlchemyError as exc:
            raise await self.reject_input(exc, "Deletion failed") from exc
        if not rows:
            raise NotFoundError("Company", handle)
