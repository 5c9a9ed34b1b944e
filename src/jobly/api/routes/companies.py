"""Company routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.dependencies import RequireAdmin, get_db
from jobly.repositories.company_repo import CompanyRepository
from jobly.schemas.validator import validator

router = APIRouter(tags=["Companies"])


@router.post("/companies", status_code=201, dependencies=[RequireAdmin])
async def create_company(body: dict, db: AsyncSession = Depends(get_db)) -> dict:
    validator.validate(body, "company-new")
    company = await CompanyRepository(db).create(body)
    await db.commit()
    return {"company": company}


@router.get("/companies")
async def list_companies(request: Request, db: AsyncSession = Depends(get_db)) -> dict:
    """Search companies by nameLike, minEmployees and maxEmployees."""
    criteria: dict = dict(request.query_params)
    for key in ("minEmployees", "maxEmployees"):
        if key in criteria and criteria[key].isdigit():
            criteria[key] = int(criteria[key])

    validator.validate(criteria, "company-search")
    companies = await CompanyRepository(db).find(criteria)
    return {"companies": companies}


@router.get("/companies/{handle}")
async def get_company(handle: str, db: AsyncSession = Depends(get_db)) -> dict:
    company = await CompanyRepository(db).get(handle)
    return {"company": company}


@router.patch("/companies/{handle}", dependencies=[RequireAdmin])
async def update_company(handle: str, body: dict, db: AsyncSession = Depends(get_db)) -> dict:
    validator.validate(body, "company-update")
    company = await CompanyRepository(db).update(handle, body)
    await db.commit()
    return {"company": company}


@router.delete("/companies/{handle}", dependencies=[RequireAdmin])
async def delete_company(handle: str, db: AsyncSession = Depends(get_db)) -> dict:
    await CompanyRepository(db).remove(handle)
    await db.commit()
    return {"deleted": handle}
