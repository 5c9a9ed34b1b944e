"""Job routes.

Reads are public; creating, updating and deleting require an admin token.
"""

import math

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.dependencies import EnsureLoggedIn, RequireAdmin, get_db
from jobly.repositories.job_repo import JobRepository
from jobly.schemas.validator import validator

router = APIRouter(tags=["Jobs"])


def _number(value: str) -> int | float | str:
    """Coerce a query-string number, leaving junk for the schema to reject."""
    try:
        number = float(value)
    except ValueError:
        return value
    if not math.isfinite(number):
        return value
    return int(number) if number.is_integer() else number


@router.post("/jobs", status_code=201, dependencies=[RequireAdmin])
async def create_job(body: dict, db: AsyncSession = Depends(get_db)) -> dict:
    """Create a job from { title, salary, equity, companyHandle }."""
    validator.validate(body, "job-new")
    job = await JobRepository(db).create(body)
    await db.commit()
    return {"job": job}


@router.get("/jobs")
async def list_jobs(request: Request, db: AsyncSession = Depends(get_db)) -> dict:
    """Search jobs by minSalary, hasEquity, title and companyHandle.

    hasEquity filters only when it is the string "true".
    """
    criteria: dict = dict(request.query_params)
    if "hasEquity" in criteria:
        criteria["hasEquity"] = criteria["hasEquity"] == "true"
    if "minSalary" in criteria:
        criteria["minSalary"] = _number(criteria["minSalary"])

    validator.validate(criteria, "job-search")
    jobs = await JobRepository(db).find(criteria)
    return {"jobs": jobs}


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, db: AsyncSession = Depends(get_db)) -> dict:
    job = await JobRepository(db).get(job_id)
    return {"job": job}


@router.patch("/jobs/{job_id}", dependencies=[RequireAdmin])
async def update_job(job_id: str, body: dict, db: AsyncSession = Depends(get_db)) -> dict:
    """Partially update title, salary and/or equity."""
    validator.validate(body, "job-update")
    job = await JobRepository(db).update(job_id, body)
    await db.commit()
    return {"job": job}


@router.delete("/jobs/{job_id}", dependencies=[EnsureLoggedIn, RequireAdmin])
async def delete_job(job_id: str, db: AsyncSession = Depends(get_db)) -> dict:
    deleted = await JobRepository(db).delete(job_id)
    await db.commit()
    return {"deleted": deleted}
