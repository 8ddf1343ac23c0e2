"""Mapping of SQLite column types to Go types."""

from __future__ import annotations

import logging
from typing import Any

from gosqlcgen.catalog import Column, GenerateRequest, data_type

_log = logging.getLogger(__name__)

_INTEGERS = frozenset(
    {"int", "integer", "tinyint", "smallint", "mediumint", "bigint", "unsignedbigint", "int2", "int8"}
)
_FLOATS = frozenset({"real", "double", "doubleprecision", "float"})
_BOOLS = frozenset({"boolean", "bool"})
_TIMES = frozenset({"date", "datetime", "timestamp"})
_TEXT_PREFIXES = (
    "character",
    "varchar",
    "varyingcharacter",
    "nchar",
    "nativecharacter",
    "nvarchar",
)


def _nullable(base: str, null_type: str, not_null: bool, pointers: bool) -> str:
    if not_null:
        return base
    if pointers:
        return "*" + base
    return null_type


def sqlite_type(req: GenerateRequest, options: Any, col: Column) -> str:
    """Return the Go type for a SQLite column."""
    dt = data_type(col.type).lower()
    not_null = col.not_null or col.is_array
    pointers = options.emit_pointers_for_null_types

    if dt in _INTEGERS:
        return _nullable("int64", "sql.NullInt64", not_null, pointers)
    if dt == "blob":
        return "[]byte"
    if dt in _FLOATS:
        return _nullable("float64", "sql.NullFloat64", not_null, pointers)
    if dt in _BOOLS:
        return _nullable("bool", "sql.NullBool", not_null, pointers)
    if dt in _TIMES:
        return _nullable("time.Time", "sql.NullTime", not_null, pointers)
    if dt in ("json", "jsonb"):
        return "json.RawMessage"
    if dt == "any":
        return "interface{}"

    if dt.startswith(_TEXT_PREFIXES) or dt in ("text", "clob"):
        return _nullable("string", "sql.NullString", not_null, pointers)
    if dt.startswith("decimal") or dt == "numeric":
        return _nullable("float64", "sql.NullFloat64", not_null, pointers)

    _log.debug("unknown SQLite type: %s", dt)
    return "interface{}"