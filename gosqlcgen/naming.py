"""Names given to result columns and query parameters in generated code."""

from __future__ import annotations

from gosqlcgen.catalog import Column, Parameter, Query
from gosqlcgen.query import CMD_BATCH_MANY, CMD_BATCH_ONE, CMD_MANY, CMD_ONE

_RETURNS_DATA = frozenset({CMD_BATCH_MANY, CMD_BATCH_ONE, CMD_MANY, CMD_ONE})


def _is_separator(ch: str) -> bool:
    if ch.isascii():
        if ch.isalnum() or ch == "_":
            return False
        return True
    if ch.isalpha() or ch.isdecimal():
        return False
    return ch.isspace()


def _title(word: str) -> str:
    """Upper-case the first letter of each word, leaving the rest unchanged."""
    out = []
    prev = " "
    for ch in word:
        out.append(ch.upper() if _is_separator(prev) else ch)
        prev = ch
    return "".join(out)


def column_name(column: Column, pos: int) -> str:
    """Return the column's name, or a positional name if it has none."""
    if column.name:
        return column.name
    return f"column_{pos + 1}"


def param_name(param: Parameter) -> str:
    """Return the argument name for a query parameter."""
    if param.column.name:
        return arg_name(param.column.name)
    return f"dollar_{param.number}"


def arg_name(name: str) -> str:
    """Turn a snake_case name into a lowerCamelCase argument name."""
    first, *rest = name.split("_")
    return first.lower() + "".join("ID" if part == "id" else _title(part) for part in rest)


def put_out_columns(query: Query) -> bool:
    """Return True if the query's command returns rows."""
    return query.cmd in _RETURNS_DATA