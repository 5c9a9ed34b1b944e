"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from jobly.db.models.company import CompanyRow
from jobly.db.models.job import JobRow

__all__ = [
    "CompanyRow",
    "JobRow",
]
