"""Request schemas bundled with the package."""

import pytest

from jobly.errors.exceptions import ValidationError
from jobly.schemas.registry import SCHEMA_REGISTRY
from jobly.schemas.validator import SchemaValidator


@pytest.fixture
def validator():
    return SchemaValidator()


@pytest.mark.parametrize("schema_name", sorted(SCHEMA_REGISTRY))
def test_every_registered_schema_loads(validator, schema_name):
    # Empty object is valid for searches and invalid for creates/updates; either way no crash
    assert isinstance(validator.errors({}, schema_name), list)


def test_new_job_valid(validator):
    validator.validate({"title": "t", "companyHandle": "c1", "salary": 5, "equity": "0.25"}, "job-new")


@pytest.mark.parametrize("equity", ["1.5", "-0.1", "abc"])
def test_new_job_equity_out_of_range(validator, equity):
    errs = validator.errors({"title": "t", "companyHandle": "c1", "equity": equity}, "job-new")
    assert errs and errs[0].startswith("equity:")


def test_new_job_requires_title_and_company(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate({}, "job-new")
    assert len(exc_info.value.details) == 2


def test_job_update_rejects_company_handle(validator):
    assert validator.errors({"companyHandle": "c2"}, "job-update")


def test_job_search_types(validator):
    assert validator.errors({"hasEquity": True, "minSalary": 10, "title": "a"}, "job-search") == []
    assert validator.errors({"minSalary": "ten"}, "job-search")
