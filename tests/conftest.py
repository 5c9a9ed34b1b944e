"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobly.db.base import Base
from jobly.db.engine import create_db_engine
from jobly.repositories.company_repo import CompanyRepository
from jobly.repositories.job_repo import JobRepository
from jobly.services.tokens import create_token
# Import all models to register with Base.metadata
import jobly.db.models  # noqa: F401

COMPANIES = [
    {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"},
    {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"},
    {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": None},
]

JOBS = [
    {"title": "j1", "salary": 100000, "equity": "0.1", "companyHandle": "c1"},
    {"title": "j2", "salary": 90000, "equity": "0", "companyHandle": "c2"},
    {"title": "j3", "salary": 50000, "equity": None, "companyHandle": "c1"},
    {"title": "senior dev", "salary": None, "equity": "0.05", "companyHandle": "c3"},
]


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_db_engine("sqlite+aiosqlite:///")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def job_ids(db_session) -> dict[str, int]:
    """Seed companies c1-c3 and four jobs; map job title -> id."""
    for company in COMPANIES:
        await CompanyRepository(db_session).create(company)
    ids = {}
    for job in JOBS:
        created = await JobRepository(db_session).create(job)
        ids[created["title"]] = created["id"]
    await db_session.commit()
    return ids


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB."""
    from jobly.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {create_token('admin', is_admin=True)}"}


@pytest.fixture
def user_headers() -> dict:
    return {"Authorization": f"Bearer {create_token('u1')}"}
