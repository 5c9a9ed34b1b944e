"""Partial-update builder and placeholder rewriting."""

import pytest

from jobly.db.executor import to_named_binds
from jobly.errors.exceptions import ConfigurationError, ValidationError
from jobly.repositories.sql import check_rename_map, sql_for_partial_update


def test_partial_update_renames_mapped_key():
    result = sql_for_partial_update({"numEmployees": 106}, {"numEmployees": "num_employees"})
    assert result.set_cols == '"num_employees"=$1'
    assert result.values == [106]


def test_partial_update_unmapped_key_passes_through_quoted():
    set_cols, values = sql_for_partial_update(
        {"firstName": "Jessie", "age": 32},
        {"firstName": "first_name"},
    )
    assert set_cols == '"first_name"=$1, "age"=$2'
    assert values == ["Jessie", 32]


def test_partial_update_keeps_key_order_and_positions():
    data = {"title": "New", "salary": None, "equity": "0.5"}
    set_cols, values = sql_for_partial_update(data, {})

    assert len(values) == len(data)
    assert set_cols.split(", ") == ['"title"=$1', '"salary"=$2', '"equity"=$3']
    for position, key in enumerate(data, start=1):
        assert values[position - 1] == data[key]


def test_partial_update_empty_data_fails_fast():
    with pytest.raises(ValidationError) as exc_info:
        sql_for_partial_update({}, {"numEmployees": "num_employees"})
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "No data"


def test_check_rename_map_accepts_matching_columns():
    check_rename_map(
        "companies",
        ("name", "numEmployees"),
        {"numEmployees": "num_employees"},
        ["handle", "name", "num_employees"],
    )


def test_check_rename_map_flags_unmapped_camelcase_field():
    with pytest.raises(ConfigurationError) as exc_info:
        check_rename_map("companies", ("logoUrl",), {}, ["handle", "logo_url"])
    assert exc_info.value.details["unmapped"] == {"logoUrl": "logoUrl"}


def test_check_rename_map_flags_entry_for_undeclared_field():
    with pytest.raises(ConfigurationError) as exc_info:
        check_rename_map("jobs", ("title",), {"companyHandle": "company_handle"}, ["title"])
    assert exc_info.value.details["unused"] == ["companyHandle"]


def test_named_binds_rewrite():
    sql, binds = to_named_binds(
        'UPDATE jobs SET "title"=$1, "salary"=$2 WHERE id = $3', ["x", 10, 7]
    )
    assert sql == 'UPDATE jobs SET "title"=:p1, "salary"=:p2 WHERE id = :p3'
    assert binds == {"p1": "x", "p2": 10, "p3": 7}


def test_named_binds_multi_digit_positions():
    params = list(range(1, 12))
    sql, binds = to_named_binds("SELECT $1, $11", params)
    assert sql == "SELECT :p1, :p11"
    assert binds["p11"] == 11


def test_named_binds_rejects_missing_value():
    with pytest.raises(ValueError):
        to_named_binds("SELECT $2", ["only one"])
