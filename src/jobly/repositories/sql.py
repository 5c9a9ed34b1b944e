"""Helpers for building parameterized SQL fragments."""

from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from jobly.errors.exceptions import ConfigurationError, ValidationError


class PartialUpdate(NamedTuple):
    set_cols: str
    values: list[Any]


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
) -> PartialUpdate:
    """Convert a subset of fields into a ``SET`` fragment and its values.

    Args:
        data_to_update: Field name -> new value, e.g.
            ``{"firstName": "Jessie", "age": 32}``.
        js_to_sql: Field name -> column name for fields whose column is
            spelled differently, e.g. ``{"firstName": "first_name"}``.
            Fields missing from the map are used as column names verbatim.

    Returns:
        ``PartialUpdate('"first_name"=$1, "age"=$2', ["Jessie", 32])``.
        Placeholder ``$n`` refers to ``values[n - 1]``.

    Raises:
        ValidationError: If ``data_to_update`` is empty.
    """
    keys = list(data_to_update)
    if not keys:
        raise ValidationError("No data")

    cols = [
        f'"{js_to_sql.get(key, key)}"=${idx}'
        for idx, key in enumerate(keys, start=1)
    ]
    return PartialUpdate(", ".join(cols), [data_to_update[key] for key in keys])


def check_rename_map(
    table: str,
    fields: Iterable[str],
    js_to_sql: Mapping[str, str],
    columns: Iterable[str],
) -> None:
    """Fail unless every updatable field resolves to a real column of ``table``.

    Raises:
        ConfigurationError: Listing each field whose resolved column is unknown.
    """
    known = set(columns)
    bad = {
        field: js_to_sql.get(field, field)
        for field in fields
        if js_to_sql.get(field, field) not in known
    }
    stale = sorted(set(js_to_sql) - set(fields))
    if bad or stale:
        raise ConfigurationError(
            f"Field mapping for table '{table}' does not match its columns",
            details={"unmapped": bad, "unused": stale},
        )
