"""Go structs generated from tables and queries, and Go names for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gosqlcgen.catalog import Column, Identifier


@dataclass
class Field:
    """One field of a generated Go struct."""

    name: str = ""
    db_name: str = ""
    type: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    comment: str = ""
    column: Column | None = None
    embed_fields: list[Field] = field(default_factory=list)

    def has_sqlc_slice(self) -> bool:
        """Return True if the field comes from a sqlc.slice() parameter."""
        return self.column is not None and self.column.is_sqlc_slice


@dataclass
class Struct:
    """A generated Go struct, optionally backed by a table."""

    table: Identifier | None = None
    name: str = ""
    fields: list[Field] = field(default_factory=list)
    comment: str = ""


def _title(part: str) -> str:
    return part[:1].upper() + part[1:]


def struct_name(name: str, options: Any) -> str:
    """Turn a database name into an exported Go identifier."""
    rename = (options.rename or {}).get(name, "")
    if rename:
        return rename

    cleaned = "".join(ch if ch.isalpha() or ch.isdecimal() else "_" for ch in name)
    initialisms = options.initialisms_map or set()
    out = "".join(
        part.upper() if part in initialisms else _title(part)
        for part in cleaned.split("_")
    )

    # A Go identifier cannot start with a digit.
    if out[:1].isdecimal():
        return "_" + out
    return out